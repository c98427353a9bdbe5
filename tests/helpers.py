"""Helpers shared by test modules (importable because tests/ is on pythonpath)."""

import io

from PIL import Image

from assets.base import AbstractAssetProvider


def image_bytes(size, color=(255, 0, 0), fmt="PNG", mode="RGB") -> bytes:
    """Encode a solid image in memory."""
    img = Image.new(mode, size, color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


class _TrackedBytesIO(io.BytesIO):
    def __init__(self, data: bytes, provider: "MemoryAssetProvider"):
        super().__init__(data)
        self._provider = provider

    def close(self):
        if not self.closed:
            self._provider.closed += 1
        super().close()


class MemoryAssetProvider(AbstractAssetProvider):
    """Serves assets from a dict; counts handles so tests can check they are released."""

    def __init__(self, assets: dict[str, bytes] | None = None):
        self.assets = dict(assets or {})
        self.requested: list[str] = []
        self.opened = 0
        self.closed = 0

    def open(self, key: str):
        self.requested.append(key)
        if key not in self.assets:
            raise FileNotFoundError(key)
        self.opened += 1
        return _TrackedBytesIO(self.assets[key], self)

    @property
    def source_name(self) -> str:
        return "memory"
