# SPDX-License-Identifier: MIT

import os
from pathlib import Path
from typing import Any

from yaml import YAMLError, load

try:
    from yaml import CLoader as Loader
except ImportError:
    from yaml import Loader  # type: ignore[assignment]
import platformdirs
from pydantic import Field, ValidationError
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from punchcard.errors import ConfigError

APP_NAME = "punchcard"
ENV_PREFIX = "PUNCHCARD_"

CONFIG_PATH: Path = Path(
    os.environ.get(f"{ENV_PREFIX}CONFIG_DIR", platformdirs.user_config_path(APP_NAME))
)
APP_CONFIG_PATH: Path = CONFIG_PATH / "config.yaml"
SETTINGS_PATH: Path = CONFIG_PATH / "settings.yaml"

CACHE_PATH: Path = platformdirs.user_cache_path(APP_NAME)
TASK_CACHE_PATH: Path = CACHE_PATH / "tasks.yaml"

LOG_PATH: Path = platformdirs.user_log_path(APP_NAME)
LOG_FILE_PATH: Path = LOG_PATH / f"{APP_NAME}.log"

DEFAULT_TIMEOUT = 30.0


class Credentials(BaseSettings):
    """
    Service credentials.

    Values come from config.yaml, and every field can be overridden with a
    PUNCHCARD_<FIELD> environment variable, which also allows running
    without a config file at all.
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_ignore_empty=True,
        extra="ignore",
        case_sensitive=False,
        coerce_numbers_to_str=True,
    )

    subdomain: str = Field(min_length=1)
    login: str = Field(min_length=1)
    password: str = Field(min_length=1)
    ssl: bool = True
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # The file contents arrive as init values, the environment wins.
        return env_settings, init_settings


def load_credentials(path: Path | None = None) -> Credentials:
    path = path or APP_CONFIG_PATH

    raw: dict[str, Any] = {}
    if path.is_file():
        try:
            loaded = load(path.read_text(), Loader=Loader)
        except (OSError, YAMLError) as e:
            raise ConfigError(f"Unable to read {path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigError(f"{path} must contain a mapping")
        raw = {str(key): value for key, value in (loaded or {}).items()}

    try:
        return Credentials(**raw)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ConfigError(
            f"Invalid credentials in {path} or {ENV_PREFIX}* variables: {problems}"
        ) from e
