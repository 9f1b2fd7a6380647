"""Configuration loader with Pydantic validation."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

CONFIG_DIR = Path(__file__).parent.parent / "config"

DEFAULT_HOST = "api.huobi.pro"


class HuobiConfig(BaseModel):
    api_key: str = ""
    secret_key: str = Field(default="", repr=False)
    host: str = DEFAULT_HOST
    timeout: float = 30.0
    user_agent: str = "huobiapi-python"


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    huobi: HuobiConfig = Field(default_factory=HuobiConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from YAML file, override with env vars."""
    path = config_path or CONFIG_DIR / "default.yaml"

    raw: dict = {}
    if path.exists():
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

    config = AppConfig(**raw)

    # Override API keys from env
    config.huobi.api_key = os.getenv("HUOBI_API_KEY", config.huobi.api_key)
    config.huobi.secret_key = os.getenv("HUOBI_SECRET_KEY", config.huobi.secret_key)
    config.huobi.host = os.getenv("HUOBI_API_HOST", config.huobi.host)

    timeout_env = os.getenv("HUOBI_TIMEOUT")
    if timeout_env:
        config.huobi.timeout = float(timeout_env)

    return config
