"""
Загрузчик конфигурации раскрытия из YAML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import AbbrexUserError
from .model import ExpansionConfig

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")
CONFIG_FILE = "abbrex.yaml"


class ConfigError(AbbrexUserError):
    """Ошибка чтения или проверки конфигурации."""
    pass


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    if not path.is_file():
        return {}
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"YAML must be a mapping: {path}")
    return raw


def load_config(path: Path) -> ExpansionConfig:
    """
    Загружает конфигурацию из файла.

    Отсутствующий файл означает конфигурацию по умолчанию.

    Raises:
        ConfigError: Если файл не является корректным YAML-словарём
    """
    raw = _read_yaml_map(path)
    try:
        cfg = ExpansionConfig.from_dict(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{path}: {e}") from e
    logger.debug(f"Loaded config from {path}: dialect={cfg.dialect.value}, filters={cfg.filters}")
    return cfg


def find_config(root: Path) -> Optional[Path]:
    """Ищет abbrex.yaml в каталоге и его родителях."""
    for directory in (root, *root.parents):
        candidate = directory / CONFIG_FILE
        if candidate.is_file():
            return candidate
    return None


__all__ = ["CONFIG_FILE", "ConfigError", "load_config", "find_config"]
