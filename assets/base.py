"""
Abstract base class for asset providers.

The transform engine needs two kinds of static assets (watermarks and
backdrops) but it should not care WHERE they come from. In development
they sit in a directory next to the project; in production they ship
inside an installed package. Each source implements this interface and
the engine just calls provider.load_image(key).

Strategy pattern:
- AbstractAssetProvider = interface
- LocalAssetProvider, PackagedAssetProvider = implementations
- registry.py = factory lookup by Environment

To add a new asset source:
1. Create a class that inherits AbstractAssetProvider
2. Implement open() and source_name
3. Add it to the registry
"""

import logging
from abc import ABC, abstractmethod
from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from models.errors import AssetLoadError

logger = logging.getLogger(__name__)


class AbstractAssetProvider(ABC):

    @abstractmethod
    def open(self, key: str) -> BinaryIO:
        """
        Open the asset stored under `key` for binary reading.

        The returned handle is a context manager; callers must close it.

        Raises:
            OSError (usually FileNotFoundError) if the key does not exist.
        """
        ...

    @property
    @abstractmethod
    def source_name(self) -> str:
        """Short description used in log messages (e.g., 'local:/srv/assets')."""
        ...

    def load_image(self, key: str) -> Image.Image:
        """
        Open, fully decode and release an asset image.

        The handle is closed on every path, including decode failures,
        and pixel data is loaded before it closes so the returned image
        does not depend on the handle.

        Raises:
            AssetLoadError for any failure: missing key, unreadable file,
            or bytes that are not an image.
        """
        try:
            with self.open(key) as fh:
                img = Image.open(fh)
                img.load()
        except (OSError, UnidentifiedImageError, ValueError) as e:
            logger.debug(f"Asset {key} unavailable from {self.source_name}: {e}")
            raise AssetLoadError(key, str(e)) from e
        return img
