"""
Configuration settings for the product_info_processor project.
Loads environment variables from a .env file via python-dotenv.
Expose a single `settings` object for the rest of the codebase to import.
"""

from __future__ import annotations


import os
from pathlib import Path
from dataclasses import dataclass


from dotenv import load_dotenv


# Load .env from project root (caller should ensure working dir is project root)
load_dotenv()


@dataclass(frozen=True)
class Settings:
    # Logging / output
    LOGS_DIR: str = "logs"
    DATA_DIR: str = "data"
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # Rendering
    ESCAPE_HTML: bool = True
    DOCUMENT_TITLE: str = "Product Information"

    # Name resolution placeholders
    DEFAULT_PRODUCT_NOUN: str = "收纳桶"
    SINGLE_PRODUCT_LABEL: str = "商品信息"
    POSITIONAL_NAME_TEMPLATE: str = "商品{index}"


def _env_flag(key: str, default: str) -> bool:
    return os.getenv(key, default).strip().lower() in ("1", "true", "yes")


def _load_settings_from_env() -> Settings:
    template = os.getenv("POSITIONAL_NAME_TEMPLATE", "商品{index}")
    if "{index}" not in template:
        raise RuntimeError(
            "POSITIONAL_NAME_TEMPLATE must contain the '{index}' placeholder."
        )

    return Settings(
        LOGS_DIR=os.getenv("LOGS_DIR", "logs"),
        DATA_DIR=os.getenv("DATA_DIR", "data"),
        LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        LOG_JSON=_env_flag("LOG_JSON", "false"),
        ESCAPE_HTML=_env_flag("ESCAPE_HTML", "true"),
        DOCUMENT_TITLE=os.getenv("DOCUMENT_TITLE", "Product Information"),
        DEFAULT_PRODUCT_NOUN=os.getenv("DEFAULT_PRODUCT_NOUN", "收纳桶"),
        SINGLE_PRODUCT_LABEL=os.getenv("SINGLE_PRODUCT_LABEL", "商品信息"),
        POSITIONAL_NAME_TEMPLATE=template,
    )


# Singleton settings object importable across the codebase
settings = _load_settings_from_env()
Path(settings.DATA_DIR).mkdir(parents=True, exist_ok=True)
Path(settings.LOGS_DIR).mkdir(parents=True, exist_ok=True)
