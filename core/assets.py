import logging
from pathlib import Path
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

# Bundled copies of the asset sets, shipped with the distribution
BUNDLED_ROOT = Path(__file__).resolve().parents[1] / "assets"
ASSET_SETS = ("web_app", "admin_app", "static")


class AssetSourceError(ValueError):
    pass


class AssetSources:
    """Resolves mount sources to existing directories.

    A source is either a directory path (relative paths are taken from the
    asset root) or ``@name`` for one of the named asset sets. Named sets come
    from the bundled ``assets`` package in embedded mode and from
    ``<root>/<name>`` otherwise.
    """

    def __init__(self, embedded: bool = True, root: Optional[Path] = None):
        self.embedded = embedded
        self.root = Path(root) if root else Path.cwd()

    def asset_set(self, name: str) -> Path:
        if name not in ASSET_SETS:
            raise AssetSourceError(f"Unknown asset set: {name}")
        base = BUNDLED_ROOT if self.embedded else self.root
        return base / name

    def resolve_one(self, source: str) -> Path:
        source = str(source).strip()
        if source.startswith("@"):
            return self.asset_set(source[1:])
        path = Path(source)
        if not path.is_absolute():
            path = self.root / path
        return path

    def resolve(self, sources: Iterable[str]) -> List[Path]:
        sources = list(sources)
        directories = []
        for source in sources:
            path = self.resolve_one(source)
            if not path.is_dir():
                logger.debug(f"Skipping missing asset source {source} ({path})")
                continue
            directories.append(path)
        if not directories:
            raise AssetSourceError(f"No asset source found among {sources}")
        return directories


def find_file(directories: Iterable[Path], relative_path: str) -> Optional[Path]:
    """Первый найденный файл по приоритету источников."""
    relative_path = relative_path.strip().lstrip("/")
    if not relative_path or Path(relative_path).is_absolute():
        return None
    for directory in directories:
        base = Path(directory).resolve()
        candidate = (base / relative_path).resolve()
        if base != candidate and base not in candidate.parents:
            return None
        if candidate.is_file():
            return candidate
    return None
