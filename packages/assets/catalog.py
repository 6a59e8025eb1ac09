"""
Asset catalog for the bundled gifs.

The catalog is read once into memory: every non-sidecar file under the asset
root becomes an Asset holding its bytes and its (optional) sidecar options.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Iterator, Optional, Sequence, Tuple

from packages.render.errors import AssetCatalogError, NoAssetsFound
from packages.render.schemas import SidecarOptions, parse_sidecar
from packages.utils.logging import get_logger

BUNDLED_ROOT = Path(__file__).resolve().parent / "gifs"
SIDECAR_SUFFIX = ".json"

_log = get_logger("skill_issue.assets")


@dataclass(frozen=True)
class Asset:
    path: str
    data: bytes
    sidecar: Optional[SidecarOptions] = None

    @property
    def name(self) -> str:
        return Path(self.path).name


@dataclass(frozen=True)
class AssetCatalog:
    root: Path
    assets: Tuple[Asset, ...]

    def __iter__(self) -> Iterator[Asset]:
        return iter(self.assets)

    def __len__(self) -> int:
        return len(self.assets)

    def filter(self, substring: str = "") -> Tuple[Asset, ...]:
        """Return assets whose file name contains substring, ignoring case."""
        if not substring:
            return self.assets
        needle = substring.lower()
        return tuple(a for a in self.assets if needle in a.name.lower())


def _read_sidecar(asset_file: Path) -> Optional[SidecarOptions]:
    sidecar_file = asset_file.with_suffix(SIDECAR_SUFFIX)
    try:
        content = sidecar_file.read_bytes()
    except OSError:
        return None
    return parse_sidecar(content)


def load_catalog(root: Path) -> AssetCatalog:
    """Walk root and load every asset with its sidecar.

    Raises AssetCatalogError when root is not a readable directory.
    """
    if not root.is_dir():
        raise AssetCatalogError(f"asset directory not found: {root}")

    assets = []
    try:
        for file in sorted(p for p in root.rglob("*") if p.is_file()):
            if file.suffix.lower() == SIDECAR_SUFFIX:
                continue
            rel = file.relative_to(root).as_posix()
            assets.append(Asset(path=rel, data=file.read_bytes(), sidecar=_read_sidecar(file)))
    except OSError as exc:
        raise AssetCatalogError(f"failed to read assets under {root}: {exc}") from exc

    _log.debug("catalog.loaded", extra={"data": {"root": str(root), "count": len(assets)}})
    return AssetCatalog(root=root, assets=tuple(assets))


@lru_cache(maxsize=None)
def bundled_catalog(root: Optional[Path] = None) -> AssetCatalog:
    """Process-wide catalog of the bundled (or configured) asset tree."""
    return load_catalog(root or BUNDLED_ROOT)


def select_asset(assets: Sequence[Asset], rng: Optional[random.Random] = None, filter_text: str = "") -> Asset:
    """Pick one asset uniformly at random.

    rng defaults to a fresh time-seeded generator so picks differ between runs.
    """
    if not assets:
        raise NoAssetsFound(filter_text)
    rng = rng or random.Random()
    asset = assets[rng.randrange(len(assets))]
    _log.info("asset.selected", extra={"data": {"asset": asset.path, "candidates": len(assets)}})
    return asset


__all__ = ["Asset", "AssetCatalog", "BUNDLED_ROOT", "load_catalog", "bundled_catalog", "select_asset"]
