"""
Packaged asset provider — used in production.

Assets are bundled as resources inside an installed package, so they
travel with the wheel and no deployment-specific path has to be configured.

The resource directory is looked up in every location the package is
imported from (its __path__). The default anchor "assets" has no
__init__.py, which makes it a namespace package; under an editable install
its __path__ can include entries that are not directories, and those are
skipped.

By default the resources live in assets/static/ of this project; see
scripts/generate_sample_assets.py for how to populate it.
"""

import importlib
from pathlib import Path
from typing import BinaryIO

from assets.base import AbstractAssetProvider


class PackagedAssetProvider(AbstractAssetProvider):

    def __init__(self, anchor: str = "assets", subdir: str = "static"):
        self._anchor = anchor
        self._subdir = subdir

    def resource_dirs(self) -> list[Path]:
        """Existing <package location>/<subdir> directories, in import order."""
        try:
            package = importlib.import_module(self._anchor)
        except ModuleNotFoundError as e:
            # Surface as OSError so load_image() treats it like a missing file
            raise FileNotFoundError(f"package '{self._anchor}' not installed") from e

        dirs = []
        for entry in getattr(package, "__path__", []):
            candidate = Path(entry) / self._subdir
            if candidate.is_dir():
                dirs.append(candidate)
        return dirs

    def open(self, key: str) -> BinaryIO:
        for directory in self.resource_dirs():
            path = directory / key
            if path.is_file():
                return open(path, "rb")
        raise FileNotFoundError(f"'{key}' not found in {self.source_name}")

    @property
    def source_name(self) -> str:
        return f"package:{self._anchor}/{self._subdir}"
