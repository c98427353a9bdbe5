"""
Shared test fixtures.

These replace real infrastructure with lightweight in-memory alternatives:
- Uploads → small Pillow images written to pytest's tmp_path
- Asset provider → a dict of key → bytes that records every open/close
- Failing provider → every key is missing

This means tests:
- Need no asset directory or installed asset package
- Run in milliseconds
- Are fully isolated (each test gets a fresh tmp_path)
"""

import pytest
from PIL import Image

from helpers import MemoryAssetProvider


@pytest.fixture
def make_image(tmp_path):
    """
    Factory that writes an image file and returns its path as a string.

        path = make_image("up.png", (200, 100), color=(0, 255, 0))
    """
    def _make(name="upload.png", size=(200, 100), color=(255, 0, 0), mode="RGB"):
        path = tmp_path / name
        img = Image.new(mode, size, color=color)
        img.save(path, format=Image.registered_extensions()[path.suffix.lower()])
        return str(path)

    return _make


@pytest.fixture
def memory_assets():
    return MemoryAssetProvider()


@pytest.fixture
def failing_assets():
    """A provider with no assets at all, so every load fails."""
    return MemoryAssetProvider({})
