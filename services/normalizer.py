"""Canonical forms for SWIFT codes and country fields.

All functions here are pure. Codes are stored uppercase and trimmed; the
headquarters flag is never taken from input, it is read off the code suffix.
"""
import pandas as pd

HEADQUARTER_SUFFIX = "XXX"
INSTITUTION_PREFIX_LENGTH = 8

def normalize_text(value) -> str:
    """Trims free text. None and NaN cells become an empty string."""
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    return str(value).strip()

def normalize_code(raw: str) -> str:
    return normalize_text(raw).upper()

def derive_is_headquarter(code: str) -> bool:
    return code.endswith(HEADQUARTER_SUFFIX)

def institution_prefix(code: str) -> str:
    """First 8 characters, shared by a headquarters and its branches."""
    return code[:INSTITUTION_PREFIX_LENGTH]

def normalize_country(iso2: str, name: str) -> tuple[str, str]:
    return normalize_text(iso2).upper(), normalize_text(name).upper()
