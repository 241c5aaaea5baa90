from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    # If DEV and you hit SSL cert issues on Windows, set DB_SSL_VERIFY=false in .env
    DB_SSL_VERIFY: bool = True

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    ENV: str = "dev"  # "dev" or "prod"

    # --- ACCESS SCOPE ---
    # Upper bound for the directory lookups a single scope resolution performs
    SCOPE_LOOKUP_TIMEOUT_SECONDS: float = 5.0
    # Only used when the system_settings row is created for the first time
    REGISTRY_CAN_VIEW_RISK_SCORES_DEFAULT: bool = False

    # --- STARTUP ---
    SEED_ORGANIZATION: bool = False

    # --- RATE LIMITING ---
    LOGIN_RATE_LIMIT: str = "10/minute"
    RATE_LIMIT_ENABLED: bool = True
    # e.g. redis://localhost:6379/0, in-memory when unset
    RATE_LIMIT_STORAGE_URI: str | None = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
