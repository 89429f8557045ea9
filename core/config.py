from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./swift_codes.db"
    DATABASE_ECHO: bool = False

    API_PREFIX: str = "/v1/swift-codes"
    CORS_ORIGINS: list[str] = ["*"]

    LOG_LEVEL: str = "INFO"

    # Source file for the one-shot bulk loader (CSV or Excel)
    SWIFT_CODES_FILE: str = "data/swift_codes.csv"

    model_config = SettingsConfigDict(env_file=".env")

settings = Settings()
