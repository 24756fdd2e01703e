from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Forum Hooks"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Hook settings
    hook_prefix: str = "forum_"
    reference_checkpoint: str = "after_setup_theme"
    text_domain: str = "forum"
    locale: str = "en_US"
    warn_on_deprecated: bool = True

    # Extension settings
    extensions_config_file: str = "data/extensions_config.json"

    model_config = SettingsConfigDict(
        env_prefix="FORUM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
