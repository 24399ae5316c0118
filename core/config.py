import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from envyaml import EnvYAML

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "configs" / "app.yaml"
DEFAULT_PORT = "8080"

_app_config = None


class AppConfig:
    """Typed view over configs/app.yaml."""

    def __init__(self, raw: EnvYAML):
        self._raw = raw

    def get(self, key: str, default: Any = None) -> Any:
        return self._raw.get(key, default)

    @property
    def name(self) -> str:
        return self.get("app.name", "htmx-demo")

    @property
    def title(self) -> str:
        return self.get("app.title", "HTMX Pages with Layout Example")

    @property
    def version(self) -> str:
        return str(self.get("app.version", "1.0.0"))

    @property
    def host(self) -> str:
        return self.get("server.host", "0.0.0.0")

    @property
    def port(self) -> int:
        return int(os.getenv("PORT") or DEFAULT_PORT)

    @property
    def log_level(self) -> str:
        return str(self.get("logging.level", "INFO")).upper()

    @property
    def embedded_assets(self) -> bool:
        return bool(self.get("assets.embedded", True))

    @property
    def asset_root(self) -> Path:
        root = Path(self.get("assets.root", "."))
        if not root.is_absolute():
            root = Path.cwd() / root
        return root

    @property
    def htmx_mounts(self) -> List[Dict[str, Any]]:
        return list(self.get("htmx", []) or [])

    @property
    def static_mounts(self) -> List[Dict[str, Any]]:
        return list(self.get("static", []) or [])


def load_app_config(path: Optional[Path] = None) -> AppConfig:
    config_path = Path(path or os.getenv("APP_CONFIG") or DEFAULT_CONFIG_PATH)
    logger.info(f"Loading config from {config_path}")
    return AppConfig(EnvYAML(str(config_path)))


def get_app_config() -> AppConfig:
    """Кэшированный конфиг приложения"""
    global _app_config
    if _app_config is None:
        _app_config = load_app_config()
    return _app_config


def reset_app_config() -> None:
    global _app_config
    _app_config = None
