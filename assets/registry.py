"""
Asset provider factory — maps the configured Environment to a provider.

Called once at startup by the entry point. The engine receives the
provider instance, so no code path below this ever branches on the
environment again.
"""

from assets.base import AbstractAssetProvider
from assets.local import LocalAssetProvider
from assets.packaged import PackagedAssetProvider
from config.settings import Settings
from models.enums import Environment


def create_asset_provider(settings: Settings) -> AbstractAssetProvider:
    """Build the provider for settings.ENVIRONMENT. Raises ValueError if unknown."""
    if settings.ENVIRONMENT == Environment.DEV:
        return LocalAssetProvider(settings.ASSETS_DIR)
    if settings.ENVIRONMENT == Environment.PROD:
        return PackagedAssetProvider(settings.ASSETS_PACKAGE, settings.ASSETS_SUBDIR)
    raise ValueError(f"Unknown environment: {settings.ENVIRONMENT}")
