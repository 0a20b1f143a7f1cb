"""Load config from YAML and .env."""

import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from dotenv import load_dotenv

from exception.custom_exception import CustomException
from logger.custom_logger import CustomLogger

logger = CustomLogger().get_logger(__file__)

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_CONFIG_DIR = _PROJECT_ROOT / "config"
_CONFIG_PATH = _CONFIG_DIR / "config.yaml"

CONFIG_ENV_VAR = "FASTEMBED_ADAPTER_CONFIG"


def _load_env() -> None:
    env_path = _PROJECT_ROOT / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        logger.info("Loaded .env", path=str(env_path))


def _resolve_config_path(path: Optional[Union[Path, str]]) -> Path:
    if path is not None:
        return Path(path)
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return _CONFIG_PATH


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        logger.info("Config not found, using defaults", path=str(path))
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CustomException(f"Invalid config {path}: {e}") from e
    if data is not None and not isinstance(data, dict):
        raise CustomException(f"Config {path} must be a mapping, got {type(data).__name__}")
    return data or {}


class Config:
    """Config holder from YAML + .env."""

    def __init__(self, path: Optional[Union[Path, str]] = None) -> None:
        _load_env()
        self._path = _resolve_config_path(path)
        self._raw = _load_yaml(self._path)
        self._project_root = _PROJECT_ROOT

    @property
    def path(self) -> Path:
        return self._path

    @property
    def project_root(self) -> Path:
        return self._project_root

    def get(self, key: str, default: Any = None) -> Any:
        keys = key.split(".")
        v: Any = self._raw
        for k in keys:
            if isinstance(v, dict) and k in v:
                v = v[k]
            else:
                return default
        return v

    def get_path(self, key: str, default: Optional[Path] = None) -> Optional[Path]:
        v = self.get(key)
        if v is None:
            return default
        p = Path(v).expanduser()
        if not p.is_absolute():
            p = self._project_root / p
        return p

    def _get_int(self, key: str, default: Optional[int]) -> Optional[int]:
        v = self.get(key, default)
        if v is None:
            return None
        try:
            return int(v)
        except (TypeError, ValueError) as e:
            raise CustomException(f"Config {key} must be an integer, got {v!r}") from e

    @property
    def embedding_model(self) -> str:
        return str(self.get("embedding.model", "BGESmallENV15"))

    @property
    def show_download_progress(self) -> bool:
        return bool(self.get("embedding.show_download_progress", True))

    @property
    def cache_dir(self) -> Optional[Path]:
        return self.get_path("embedding.cache_dir")

    @property
    def threads(self) -> Optional[int]:
        return self._get_int("embedding.threads", None)

    @property
    def batch_size(self) -> int:
        return self._get_int("embedding.batch_size", 256)


_config: Optional[Config] = None


def get_config() -> Config:
    global _config
    if _config is None:
        _config = Config()
    return _config
