from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Comma-separated allowed origins, or "*" to allow all.
    # Example: "https://outreach.myco.vn,https://admin.myco.vn"
    CORS_ORIGINS: str = "*"

    # Which tabular source backs the service: "sql", "sheets" or "bigquery".
    DATA_BACKEND: str = "sql"
    DATABASE_URL: str = "sqlite:///./outreach.db"
    SPREADSHEET_ID: str = ""
    GOOGLE_CREDENTIALS_FILE: str = "credentials.json"
    BIGQUERY_PROJECT: str = ""
    BIGQUERY_DATASET: str = ""

    GATEWAY_TIMEOUT_SECONDS: float = 30.0
    GATEWAY_MAX_WORKERS: int = 8

    CACHE_TTL_SECONDS: int = 3600

    # False: a PIC with no decentralization row gets Member scope by raw picCode.
    STRICT_AUTHORIZATION: bool = True
    # "lenient" (bad date -> epoch, logged) or "strict" (bad date -> error).
    DATE_PARSE_POLICY: str = "lenient"

    @property
    def cors_origins_list(self) -> list[str]:
        if self.CORS_ORIGINS.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()
