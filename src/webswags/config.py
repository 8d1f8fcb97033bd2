"""Runtime settings, read from WEBSWAGS_* environment variables (and .env)."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

ENV_PREFIX = "WEBSWAGS_"


class Settings(BaseModel):
    """Server and discovery settings."""

    root_dir: str = ".."
    host: str = "0.0.0.0"
    port: int = Field(8085, ge=1, le=65535)
    proxy_timeout: float = Field(30.0, gt=0)
    proxy_chunk_size: int = Field(32 * 1024, gt=0)
    swagger_ui_version: str = "5.9.0"
    redoc_version: str = "2.1.5"
    workers: int = Field(1, ge=1)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: dict[str, str] | None = None, **overrides) -> "Settings":
        """Build settings from the environment; explicit overrides win.

        Overrides set to None are ignored so unset CLI options fall through
        to the environment and then the defaults.
        """
        if env is None:
            load_dotenv()
            env = dict(os.environ)
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in env and env[key] != "":
                values[name] = env[key]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
