from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="POKEDEX_", case_sensitive=False
    )

    # PokeAPI
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    http_timeout: int = 30

    # Response cache
    cache_interval_seconds: float = 5.0
    cache_ttl_seconds: Optional[float] = None  # None: expire after one interval

    # REPL
    prompt: str = "Pokedex > "
    catch_seed: Optional[int] = None  # fixed seed makes catch attempts repeatable

    # General
    log_level: str = "WARN"


settings = Settings()
