from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # Storage mode: "mongodb" or "local"
    STORAGE_MODE: str = "local"
    
    # MongoDB Configuration (only needed if STORAGE_MODE=mongodb)
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB_NAME: str = "family_places_db"

    # Local JSON storage (only used if STORAGE_MODE=local)
    LOCAL_DATA_DIR: str = "data"
    
    LOGGER: int = 20
    LOG_DIRECTORY: str = "logs"

    # Overpass (geodata) Configuration
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"
    OVERPASS_TIMEOUT: int = 90  # server-side [timeout:...] directive, seconds
    DEFAULT_BBOX: str = "30.25,-97.80,30.35,-97.70"  # central Austin (south,west,north,east)

    # OSRM (routing) Configuration
    OSRM_URL: str = "https://router.project-osrm.org"

    # Client-side timeout for outbound requests
    HTTP_TIMEOUT_SECONDS: float = 100.0

    # Auth Configuration
    SECRET_KEY: str = "dev-only-insecure-secret"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALLOW_DEV_LOGIN: bool = True

    model_config = SettingsConfigDict(
        # Look for .env in the current folder OR the parent folder
        env_file=(".env", "../.env"), 
        env_file_encoding="utf-8",
        extra="ignore"
    )

settings = Settings()
