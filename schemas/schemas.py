from pydantic import BaseModel, ConfigDict, Field

# --- SWIFT code request schemas ---
class SwiftCodeCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    swiftCode: str = Field(min_length=1)
    bankName: str = Field(min_length=1)
    address: str = Field(min_length=1)
    countryISO2: str = Field(min_length=1)
    countryName: str = Field(min_length=1)
    isHeadquarter: bool

class MessageResponse(BaseModel):
    message: str
