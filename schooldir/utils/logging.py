from __future__ import annotations

import logging.config
from importlib import resources
from typing import Any, Dict

import yaml

from schooldir.config import Settings


def load_logging_config() -> Dict[str, Any]:
    """Читает logging.yaml из пакета schooldir."""
    text = resources.files("schooldir").joinpath("logging.yaml").read_text(encoding="utf-8")
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError("logging.yaml must contain a mapping")
    return data


def configure_logging(settings: Settings) -> None:
    config = load_logging_config()

    level = settings.log_level.upper()
    config.setdefault("root", {})["level"] = level
    for handler in config.get("handlers", {}).values():
        if isinstance(handler, dict) and "level" in handler:
            handler["level"] = level

    logging.config.dictConfig(config)
