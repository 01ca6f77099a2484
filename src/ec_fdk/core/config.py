from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from .errors import UnknownEnvironmentError
from .sdk import Fdk, fdk
from .storage import DEFAULT_AUTH_FILE, FileTokenStore
from .util import ENVS


@dataclass(frozen=True)
class EnvConfig:
    env: str = "stage"
    token: Optional[str] = None
    auth_file: Path = DEFAULT_AUTH_FILE
    log_level: str = "INFO"


def load_env_config(*, use_dotenv: bool = True) -> EnvConfig:
    """Load FDK_* settings from the environment (optional .env)."""
    if use_dotenv:
        load_dotenv()
    env = os.getenv("FDK_ENV", "").strip() or "stage"
    if env not in ENVS:
        raise UnknownEnvironmentError(
            f'FDK_ENV "{env}" not found. Try one of {", ".join(ENVS)}'
        )
    auth_file = os.getenv("FDK_AUTH_FILE", "").strip()
    return EnvConfig(
        env=env,
        token=os.getenv("FDK_TOKEN", "").strip() or None,
        auth_file=Path(auth_file).expanduser() if auth_file else DEFAULT_AUTH_FILE,
        log_level=os.getenv("FDK_LOG_LEVEL", "").strip() or "INFO",
    )


def fdk_from_env(*, use_dotenv: bool = True, **overrides: Any) -> Fdk:
    """Root builder backed by the shared token file."""
    settings = load_env_config(use_dotenv=use_dotenv)
    config: dict = {"storage_adapter": FileTokenStore(settings.auth_file)}
    if settings.token:
        config["token"] = settings.token
    config.update(overrides)
    env = config.pop("env", None) or settings.env
    return fdk(env, **config)


__all__ = ["EnvConfig", "load_env_config", "fdk_from_env"]
