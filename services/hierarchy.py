"""
Read-time hierarchy resolution.

Branches are never linked to their headquarters in storage; they are found
by scanning for codes that share the headquarters' institution prefix.
"""
from core.exceptions import NotFoundError, SwiftCodeValidationError
from models import CountrySwiftCodesRead, SwiftCode, SwiftCodeBranchRead, SwiftCodeDetailRead
from schemas.schemas import SwiftCodeCreate
from services.normalizer import (
    derive_is_headquarter,
    institution_prefix,
    normalize_code,
    normalize_country,
    normalize_text,
)
from services.swift_code_store import SwiftCodeStore

def find_branches(store: SwiftCodeStore, headquarter: SwiftCode) -> list[SwiftCode]:
    """Non-headquarters records under the same institution prefix, ordered by code."""
    return store.find_by_prefix(
        institution_prefix(headquarter.swift_code),
        exclude_code=headquarter.swift_code,
        is_headquarter=False,
    )

def resolve_detail(store: SwiftCodeStore, code: str) -> SwiftCodeDetailRead:
    record = store.find_by_code(normalize_code(code))
    if not record:
        raise NotFoundError("SWIFT code not found")

    if not record.is_headquarter:
        return SwiftCodeDetailRead.from_record(record)

    # One level only: branches are non-headquarters by construction
    return SwiftCodeDetailRead.from_record(record, branches=find_branches(store, record))

def resolve_country(store: SwiftCodeStore, iso2: str) -> CountrySwiftCodesRead:
    country_iso2, _ = normalize_country(iso2, "")
    records = store.find_by_country(country_iso2)

    # No rows and an unknown country are the same outcome
    if not records:
        raise NotFoundError("Country not found")

    return CountrySwiftCodesRead(
        countryISO2=country_iso2,
        countryName=records[0].country_name,
        swiftCodes=[SwiftCodeBranchRead.from_record(r) for r in records],
    )

def build_record(payload: SwiftCodeCreate) -> SwiftCode:
    """Normalizes a create request into a record, deriving the headquarters flag."""
    code = normalize_code(payload.swiftCode)
    is_headquarter = derive_is_headquarter(code)
    if payload.isHeadquarter != is_headquarter:
        raise SwiftCodeValidationError(
            f"isHeadquarter must be {str(is_headquarter).lower()} for code {code}"
        )

    country_iso2, country_name = normalize_country(payload.countryISO2, payload.countryName)
    return SwiftCode(
        swift_code=code,
        bank_name=normalize_text(payload.bankName),
        address=normalize_text(payload.address),
        country_iso2=country_iso2,
        country_name=country_name,
        is_headquarter=is_headquarter,
    )
