from typing import List, Optional
from sqlalchemy import Index
from sqlmodel import Field, SQLModel, func

class SwiftCode(SQLModel, table=True):
    __tablename__ = "swift_codes"
    swift_code: str = Field(primary_key=True)
    bank_name: str = ""
    address: str = ""
    country_iso2: str = Field(index=True)
    country_name: str = ""

    # Derived from the code suffix; never set independently
    is_headquarter: bool = Field(default=False, index=True)

# At most one headquarters per institution prefix (first 8 characters)
Index(
    "uq_swift_codes_headquarter_prefix",
    func.substr(SwiftCode.swift_code, 1, 8),
    unique=True,
    sqlite_where=SwiftCode.is_headquarter == True,  # noqa: E712
    postgresql_where=SwiftCode.is_headquarter == True,  # noqa: E712
)

class SwiftCodeBranchRead(SQLModel):
    address: str
    bankName: str
    countryISO2: str
    isHeadquarter: bool
    swiftCode: str

    @classmethod
    def from_record(cls, record: SwiftCode) -> "SwiftCodeBranchRead":
        return cls(
            address=record.address,
            bankName=record.bank_name,
            countryISO2=record.country_iso2,
            isHeadquarter=record.is_headquarter,
            swiftCode=record.swift_code,
        )

class SwiftCodeDetailRead(SQLModel):
    address: str
    bankName: str
    countryISO2: str
    countryName: str
    isHeadquarter: bool
    swiftCode: str
    # Only present for headquarters
    branches: Optional[List[SwiftCodeBranchRead]] = None

    @classmethod
    def from_record(cls, record: SwiftCode, branches: Optional[List[SwiftCode]] = None) -> "SwiftCodeDetailRead":
        return cls(
            address=record.address,
            bankName=record.bank_name,
            countryISO2=record.country_iso2,
            countryName=record.country_name,
            isHeadquarter=record.is_headquarter,
            swiftCode=record.swift_code,
            branches=None if branches is None else [SwiftCodeBranchRead.from_record(b) for b in branches],
        )

class CountrySwiftCodesRead(SQLModel):
    countryISO2: str
    countryName: str
    swiftCodes: List[SwiftCodeBranchRead]
