import json
import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from .errors import PersistenceError

logger = logging.getLogger(__name__)

DEFAULT_EMPLOYEE_NAME = "Joël Grimberg"
DEFAULT_MANAGER_NAME = "Rob van der Pouw Kraan"
DEFAULT_SIGNATURE_HINT = "~/.config/hours-signer/signature.png"

LOG_LEVEL = os.getenv("HOURS_SIGNER_LOG_LEVEL", "WARNING")
LOG_FILE = os.getenv("HOURS_SIGNER_LOG_FILE")


class Configuration(BaseModel):
    signature_path: str = ""
    employee_name: str = DEFAULT_EMPLOYEE_NAME
    manager_name: str = DEFAULT_MANAGER_NAME


def config_path() -> Optional[Path]:
    override = os.getenv("HOURS_SIGNER_CONFIG")
    if override:
        return Path(override).expanduser()
    try:
        home = Path.home()
    except RuntimeError:
        return None
    return home / ".config" / "hours-signer" / "config.json"


def config_exists(path: Optional[Path] = None) -> bool:
    path = path or config_path()
    return path is not None and path.is_file()


def load_config(path: Optional[Path] = None) -> Configuration:
    path = path or config_path()
    if path is None:
        return Configuration()
    try:
        raw = path.read_bytes()
    except OSError:
        return Configuration()
    try:
        # bytes input lets pydantic report invalid UTF-8 as a validation error
        return Configuration.model_validate_json(raw)
    except (ValidationError, UnicodeDecodeError):
        logger.warning("ignoring malformed config file %s", path)
        return Configuration()


def save_config(cfg: Configuration, path: Optional[Path] = None) -> Path:
    path = path or config_path()
    if path is None:
        raise PersistenceError("could not determine config path")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PersistenceError(f"failed to create config directory: {exc}") from exc
    data = json.dumps(cfg.model_dump(), indent=2, ensure_ascii=False)
    try:
        path.write_text(data, encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"failed to write config: {exc}") from exc
    logger.info("saved config to %s", path)
    return path
