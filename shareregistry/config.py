
from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    app_name: str = "Company Structure Registry"
    app_env: str = Field("dev", alias="APP_ENV")
    secret_key: str | None = Field(default=None, alias="JWT_SECRET")
    access_token_expire_minutes: int = Field(8 * 60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    database_url: str = Field("sqlite:///./company-structure.db", alias="DATABASE_URL")
    auto_create_schema: bool = Field(True, alias="AUTO_CREATE_SCHEMA")

    static_dir: str | None = Field(default=None, alias="STATIC_DIR")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
