from typing import Iterable, List, Optional

from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlmodel import Session, col, delete, func, select

from core.exceptions import DuplicateKeyError, StoreUnavailableError
from core.logger import get_logger
from models import SwiftCode
from services.normalizer import institution_prefix

logger = get_logger(__name__)

class SwiftCodeStore:
    """
    Persistent collection of SwiftCode records, keyed by code.

    Wraps a session handed in by the caller (a request dependency or a
    script); it never opens connections of its own.
    """

    def __init__(self, session: Session):
        self.session = session

    # --- queries ---

    def find_by_code(self, code: str) -> Optional[SwiftCode]:
        try:
            return self.session.get(SwiftCode, code)
        except DBAPIError as e:
            raise StoreUnavailableError(f"Lookup failed for {code}: {e}") from e

    def find_by_country(self, iso2: str) -> List[SwiftCode]:
        stmt = (
            select(SwiftCode)
            .where(SwiftCode.country_iso2 == iso2)
            .order_by(SwiftCode.swift_code)
        )
        return self._all(stmt)

    def find_by_prefix(
        self,
        prefix: str,
        exclude_code: Optional[str] = None,
        is_headquarter: Optional[bool] = None,
    ) -> List[SwiftCode]:
        stmt = select(SwiftCode).where(col(SwiftCode.swift_code).startswith(prefix, autoescape=True))
        if exclude_code is not None:
            stmt = stmt.where(SwiftCode.swift_code != exclude_code)
        if is_headquarter is not None:
            stmt = stmt.where(SwiftCode.is_headquarter == is_headquarter)
        return self._all(stmt.order_by(SwiftCode.swift_code))

    def count(self) -> int:
        try:
            return self.session.exec(select(func.count()).select_from(SwiftCode)).one()
        except DBAPIError as e:
            raise StoreUnavailableError(f"Count failed: {e}") from e

    # --- mutations ---

    def insert_unique(self, record: SwiftCode) -> SwiftCode:
        if self.find_by_code(record.swift_code):
            raise DuplicateKeyError(f"SWIFT code {record.swift_code} already exists")

        if record.is_headquarter:
            existing_hq = self.find_by_prefix(institution_prefix(record.swift_code), is_headquarter=True)
            if existing_hq:
                raise DuplicateKeyError(
                    f"Headquarters {existing_hq[0].swift_code} already exists for "
                    f"institution {institution_prefix(record.swift_code)}"
                )

        self.session.add(record)
        try:
            self.session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent insert (same code or same institution headquarters)
            self.session.rollback()
            raise DuplicateKeyError(f"SWIFT code {record.swift_code} conflicts with an existing record") from e
        except DBAPIError as e:
            self.session.rollback()
            raise StoreUnavailableError(f"Insert failed for {record.swift_code}: {e}") from e

        self.session.refresh(record)
        logger.info(f"SWIFT code created: {record.swift_code}")
        return record

    def delete_by_code(self, code: str) -> int:
        record = self.find_by_code(code)
        if not record:
            return 0
        self.session.delete(record)
        try:
            self.session.commit()
        except DBAPIError as e:
            self.session.rollback()
            raise StoreUnavailableError(f"Delete failed for {code}: {e}") from e
        logger.info(f"SWIFT code deleted: {code}")
        return 1

    def replace_all(self, records: Iterable[SwiftCode]) -> int:
        """
        Clears the table and bulk-inserts records in a single transaction.

        On SQL backends readers see either the old or the new contents, but
        ingestion is still expected to run while the API is not serving.
        """
        records = list(records)
        try:
            self.session.exec(delete(SwiftCode))
            self.session.add_all(records)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateKeyError(f"Bulk insert rejected duplicate codes: {e.orig}") from e
        except DBAPIError as e:
            self.session.rollback()
            raise StoreUnavailableError(f"Bulk replace failed: {e}") from e
        logger.info(f"Replaced SWIFT code store contents with {len(records)} records")
        return len(records)

    def _all(self, stmt) -> List[SwiftCode]:
        try:
            return list(self.session.exec(stmt).all())
        except DBAPIError as e:
            raise StoreUnavailableError(f"Query failed: {e}") from e
