from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="DICEBAG_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    environment: str = "local"
    debug: bool = True

    # Fixed seed for every request's sampler. Leave unset to reseed from the
    # wall clock on each top-level roll.
    sampler_seed: int | None = None

    # Optional caps on numeric literals; larger values are rejected as invalid
    # expressions. Unset means only literals int() cannot parse are rejected.
    max_dice: int | None = None
    max_sides: int | None = None

    # Upper bound on {{expr}} replacements performed per rendered string.
    max_substitutions: int = 99


settings = Settings()
