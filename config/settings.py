"""
Centralized configuration using pydantic-settings.

How it works:
- Reads environment variables automatically (e.g., WATERMARK_ASSET_KEY env var → Settings.WATERMARK_ASSET_KEY)
- Falls back to defaults defined here if env vars are not set
- Can also read from a .env file in the project root

Settings are frozen: they are read once at startup and never mutated.
Only the entry point (worker/main.py) reads the `settings` singleton.
Everything below it (dispatcher, engine, asset providers) receives the
values it needs through its constructor, so tests can build their own.
"""

from pydantic_settings import BaseSettings

from models.enums import Environment


class Settings(BaseSettings):
    # ── Environment ─────────────────────────────────────────────
    ENVIRONMENT: Environment = Environment.DEV  # selects the asset provider

    # ── Assets ──────────────────────────────────────────────────
    ASSETS_DIR: str = "../assets"        # dev: directory holding watermark/backdrop files
    ASSETS_PACKAGE: str = "assets"       # prod: package the assets are bundled in
    ASSETS_SUBDIR: str = "static"        # prod: resource directory inside that package
    WATERMARK_ASSET_KEY: str = "watermark.png"  # per-format key is "<key>:<format name>"
    BACKDROP_ASSET_KEY: str = "backdrop.jpg"

    # ── Dispatcher ──────────────────────────────────────────────
    ADMISSION_QUEUE_SIZE: int = 10     # pending admissions before add() blocks
    WORKER_POOL_SIZE: int = 4          # number of threads rendering variants

    # ── App ─────────────────────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "frozen": True}


# Singleton, read by the entry point only
settings = Settings()
