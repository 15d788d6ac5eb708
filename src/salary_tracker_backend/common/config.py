'''
Holds all the configurations
'''
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Manages application configuration using environment variables.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Application Metadata
    APP_NAME: str = "Salary Tracker Backend"
    APP_VERSION: str = "1.0.0"
    APP_DESCRIPTION: str = "Tracks tutoring classes and monthly salary payments per student."
    TEST_MODE: bool = False

    # Database URL
    DATABASE_URL_PROD: str = "sqlite+aiosqlite:///./salary_tracker.db"
    DATABASE_URL_TEST: str = "sqlite+aiosqlite:///./salary_tracker_test.db"
    @property
    def database_url(self) -> str:
        """
        Dynamically returns the correct database URL based on the test_mode flag.
        """
        if self.TEST_MODE:
            return self.DATABASE_URL_TEST
        return self.DATABASE_URL_PROD

    # Create missing tables on startup (local SQLite runs and tests)
    AUTO_CREATE_TABLES: bool = False

    # CORS
    BACKEND_CORS_ORIGINS: list[str] = []

    # JWT Settings
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Password hashing
    BCRYPT_ROUNDS: int = 10

    # Logging
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 5000

# Create a single, importable instance of the settings
settings = Settings()
