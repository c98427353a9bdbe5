"""
Local-filesystem asset provider — used in development.

Keys are file names relative to a root directory. Watermark keys look
like "watermark.png:thumb", so the directory holds one file per format:

    ../assets/
        backdrop.jpg
        watermark.png:thumb
        watermark.png:banner
"""

from pathlib import Path
from typing import BinaryIO

from assets.base import AbstractAssetProvider


class LocalAssetProvider(AbstractAssetProvider):

    def __init__(self, root: str | Path):
        self._root = Path(root)

    def open(self, key: str) -> BinaryIO:
        return open(self._root / key, "rb")

    @property
    def source_name(self) -> str:
        return f"local:{self._root}"
