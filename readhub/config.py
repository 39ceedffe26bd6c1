from pydantic_settings import BaseSettings
from typing import Optional
from pathlib import Path

# Get the project directory (parent of the readhub package)
BACKEND_DIR = Path(__file__).parent.parent
ENV_FILE = BACKEND_DIR / ".env"

class Settings(BaseSettings):
    # Server settings
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # HTTPS/SSL settings for uvicorn
    ssl_enabled: bool = False
    ssl_certfile: Optional[str] = None
    ssl_keyfile: Optional[str] = None

    # Full SQLAlchemy URL, takes precedence over the db_* parts below
    database_url: Optional[str] = None

    # Database settings
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "readhub"
    db_user: str = "readhub"
    db_password: str = ""  # Confidential, set in .env

    # Database SSL settings
    db_ssl_mode: str = "prefer"  # Options: disable, allow, prefer, require, verify-ca, verify-full
    db_ssl_cert: Optional[str] = None
    db_ssl_key: Optional[str] = None
    db_ssl_root_cert: Optional[str] = None

    # JWT settings
    jwt_secret_key: str  # Required from .env (confidential - no default)
    jwt_algorithm: str = "HS256"
    jwt_access_token_expire_minutes: int = 1440

    # Lending rules
    loan_period_days: int = 14
    timezone: str = "UTC"

    # Bootstrap administrator, created at startup when both are set
    admin_email: Optional[str] = None
    admin_password: Optional[str] = None
    admin_first_name: str = "Library"
    admin_last_name: str = "Admin"

    class Config:
        env_file = str(ENV_FILE) if ENV_FILE.exists() else ".env"
        case_sensitive = False

settings = Settings()
