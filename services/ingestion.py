import io
import os
from dataclasses import dataclass
from typing import Optional, Union

import pandas as pd

from core.exceptions import IngestionError
from core.logger import get_logger
from models import SwiftCode
from services.normalizer import (
    derive_is_headquarter,
    institution_prefix,
    normalize_code,
    normalize_country,
    normalize_text,
)
from services.swift_code_store import SwiftCodeStore

logger = get_logger(__name__)

# Accepted header spellings per record field, matched case-insensitively
COLUMN_VARIANTS = {
    "swift_code": ["SWIFT", "swift_code"],
    "bank_name": ["BANK_NAME", "bank_name"],
    "address": ["ADDRESS", "address"],
    "country_iso2": ["COUNTRY_ISO", "country_iso"],
    "country_name": ["COUNTRY_NAME", "country_name"],
}

EXCEL_EXTENSIONS = (".xlsx", ".xls")

@dataclass
class IngestionResult:
    rows_read: int
    inserted: int
    skipped: int

def read_source(source: Union[str, bytes], filename: Optional[str] = None) -> pd.DataFrame:
    """
    Reads a CSV or Excel file into a frame of strings.

    `source` is a path or raw file content; for content, `filename` decides the
    format. The whole file is read here so nothing is written on a bad source.
    """
    name = filename or (source if isinstance(source, str) else "")
    is_excel = name.lower().endswith(EXCEL_EXTENSIONS)
    handle = io.BytesIO(source) if isinstance(source, bytes) else source

    if isinstance(source, str) and not os.path.exists(source):
        raise IngestionError(f"File not found: {source}")

    try:
        if is_excel:
            df = pd.read_excel(handle, dtype=str, keep_default_na=False, engine="openpyxl")
        else:
            df = pd.read_csv(handle, dtype=str, keep_default_na=False)
    except pd.errors.EmptyDataError:
        # Empty file: still a valid, zero-row source
        return pd.DataFrame()
    except Exception as e:
        raise IngestionError(f"Failed to parse {name or 'source'}: {e}") from e

    # Normalize columns
    df.columns = [str(c).strip() for c in df.columns]
    return df

def _resolve_columns(columns) -> dict[str, list[str]]:
    """Maps each record field to the frame columns that may hold it, in preference order."""
    by_lower = {}
    for c in columns:
        by_lower.setdefault(c.lower(), []).append(c)

    resolved = {}
    for field, variants in COLUMN_VARIANTS.items():
        matches = []
        for v in variants:
            for c in by_lower.get(v.lower(), []):
                if c not in matches:
                    matches.append(c)
        resolved[field] = matches
    return resolved

def _first_value(row, candidates: list[str]) -> str:
    for c in candidates:
        value = normalize_text(row.get(c))
        if value:
            return value
    return ""

def transform_rows(df: pd.DataFrame) -> tuple[list[SwiftCode], int]:
    """
    Builds normalized records from the frame.

    Returns the records plus the number of rows skipped: rows without a
    code, repeated codes, and extra headquarters for an institution that
    already has one. The first occurrence wins.
    """
    columns = _resolve_columns(df.columns)
    missing = [f for f, cols in columns.items() if not cols]
    if missing and len(df):
        logger.warning(f"Source has no column for {missing}; defaulting to empty values")

    records = []
    seen_codes = set()
    seen_headquarters = set()
    skipped = 0

    for index, row in df.iterrows():
        code = normalize_code(_first_value(row, columns["swift_code"]))
        if not code:
            logger.warning(f"Skipping row {index}: missing SWIFT code")
            skipped += 1
            continue
        if code in seen_codes:
            logger.warning(f"Skipping row {index}: duplicate SWIFT code {code}")
            skipped += 1
            continue

        is_headquarter = derive_is_headquarter(code)
        if is_headquarter:
            prefix = institution_prefix(code)
            if prefix in seen_headquarters:
                logger.warning(f"Skipping row {index}: second headquarters {code} for institution {prefix}")
                skipped += 1
                continue
            seen_headquarters.add(prefix)

        country_iso2, country_name = normalize_country(
            _first_value(row, columns["country_iso2"]),
            _first_value(row, columns["country_name"]),
        )
        records.append(SwiftCode(
            swift_code=code,
            bank_name=_first_value(row, columns["bank_name"]),
            address=_first_value(row, columns["address"]),
            country_iso2=country_iso2,
            country_name=country_name,
            is_headquarter=is_headquarter,
        ))
        seen_codes.add(code)

    return records, skipped

def ingest(store: SwiftCodeStore, source: Union[str, bytes], filename: Optional[str] = None) -> IngestionResult:
    """
    Fully replaces the store with the records in `source`.

    An empty source clears the store and reports zero inserted. Run this
    while the API is not serving traffic.
    """
    df = read_source(source, filename)
    records, skipped = transform_rows(df)

    inserted = store.replace_all(records)
    if inserted:
        logger.info(f"Successfully imported {inserted} SWIFT code records ({skipped} skipped)")
    else:
        logger.info("No data found to import; store cleared")

    return IngestionResult(rows_read=len(df), inserted=inserted, skipped=skipped)
