"""
One-shot bulk loader: replaces every stored SWIFT code with the contents
of a CSV or Excel file.

Run while the API is not serving traffic:
    python -m scripts.load_swift_codes data/swift_codes.csv
"""
import argparse
import sys
import os

# Add project root to sys.path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from sqlmodel import Session

from core.config import settings
from core.database import engine, create_db_and_tables
from core.exceptions import SwiftCodeServiceError
from core.logger import get_logger
from services.ingestion import ingest
from services.swift_code_store import SwiftCodeStore

logger = get_logger(__name__)

def load_swift_codes(file_path: str, bind=None) -> int:
    bind = bind or engine
    create_db_and_tables(bind)

    with Session(bind) as session:
        store = SwiftCodeStore(session)
        result = ingest(store, file_path)
        logger.info(
            f"Read {result.rows_read} rows from {file_path}: "
            f"{result.inserted} inserted, {result.skipped} skipped, {store.count()} in store"
        )
    return result.inserted

def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Replace the SWIFT code store with the contents of a CSV/Excel file.")
    parser.add_argument("path", nargs="?", default=settings.SWIFT_CODES_FILE, help="CSV or Excel source file")
    args = parser.parse_args(argv)

    try:
        load_swift_codes(args.path)
    except SwiftCodeServiceError as e:
        logger.error(f"Error loading SWIFT codes: {e.message}")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
