from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Application
    APP_NAME: str = "Certificate Generator Accessor"
    APP_ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # Remote certificate generator
    CERTGEN_AGENT_NAME: str = "fty-certificate-generator"
    CERTGEN_REQUEST_TIMEOUT_SECONDS: float = 30.0

    # Observability
    CERTGEN_PROMETHEUS_ENABLED: bool = False


settings = Settings()
