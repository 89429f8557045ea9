from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from core.config import settings
from core.database import get_session
from core.exceptions import NotFoundError
from core.logger import get_logger
from models import CountrySwiftCodesRead, SwiftCodeDetailRead
from schemas.schemas import MessageResponse, SwiftCodeCreate
from services.hierarchy import build_record, resolve_country, resolve_detail
from services.normalizer import normalize_code
from services.swift_code_store import SwiftCodeStore

logger = get_logger(__name__)

router = APIRouter(prefix=settings.API_PREFIX, tags=["swift-codes"])

# --- dependencies ---

def get_store(session: Session = Depends(get_session)) -> SwiftCodeStore:
    return SwiftCodeStore(session)

# --- endpoints ---

@router.get("/country/{country_iso2}", response_model=CountrySwiftCodesRead)
async def get_swift_codes_by_country(
    country_iso2: str,
    store: SwiftCodeStore = Depends(get_store)
):
    return resolve_country(store, country_iso2)

@router.get("/{swift_code}", response_model=SwiftCodeDetailRead, response_model_exclude_none=True)
async def get_swift_code_details(
    swift_code: str,
    store: SwiftCodeStore = Depends(get_store)
):
    return resolve_detail(store, swift_code)

@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def add_swift_code(
    swift_code_in: SwiftCodeCreate,
    store: SwiftCodeStore = Depends(get_store)
):
    record = build_record(swift_code_in)
    store.insert_unique(record)
    return {"message": "SWIFT code added successfully"}

@router.delete("/{swift_code}", response_model=MessageResponse)
async def delete_swift_code(
    swift_code: str,
    store: SwiftCodeStore = Depends(get_store)
):
    deleted = store.delete_by_code(normalize_code(swift_code))
    if deleted == 0:
        logger.warning(f"Attempt to delete non-existent SWIFT code: {swift_code}")
        raise NotFoundError("SWIFT code not found")
    return {"message": "SWIFT code deleted successfully"}
