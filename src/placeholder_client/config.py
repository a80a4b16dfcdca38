import math
import os
from typing import ClassVar, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .logging import resolve_level


class ClientConfig(BaseModel):
    """Connection settings for the resource service."""

    base_url: str = "https://jsonplaceholder.typicode.com"
    users_path: str = "/users"
    timeout: float = 30
    log_level: Union[int, str] = "INFO"

    ENV_VARS: ClassVar[Dict[str, str]] = {
        "base_url": "PLACEHOLDER_BASE_URL",
        "timeout": "PLACEHOLDER_TIMEOUT",
        "log_level": "PLACEHOLDER_LOG_LEVEL",
    }

    model_config = ConfigDict(frozen=True)

    @field_validator("base_url")
    @classmethod
    def _strip_base_url(cls, value: str) -> str:
        value = value.strip().rstrip("/")
        if not value:
            raise ValueError("Base URL must not be empty")
        return value

    @field_validator("users_path")
    @classmethod
    def _normalize_users_path(cls, value: str) -> str:
        return "/" + value.strip("/")

    @field_validator("timeout", mode="before")
    @classmethod
    def _validate_timeout(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError("Timeout must be a positive number")
        try:
            value = float(value)
        except ValueError:
            raise ValueError("Timeout must be a positive number") from None
        if not math.isfinite(value) or value <= 0:
            raise ValueError("Timeout must be a positive number")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value):
        resolve_level(value)
        return value

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides
    ) -> "ClientConfig":
        """Build a config from ``PLACEHOLDER_*`` environment variables.

        Args:
            environ: Mapping to read instead of ``os.environ``
            **overrides: Values that take precedence over the environment;
                ``None`` values are ignored

        Returns:
            A validated ClientConfig
        """
        environ = os.environ if environ is None else environ
        values = {
            field: environ[var] for field, var in cls.ENV_VARS.items() if environ.get(var)
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def users_url(self) -> str:
        return f"{self.base_url}{self.users_path}"

    def url_for(self, *parts) -> str:
        """Join path segments onto the base URL, e.g. ``url_for("posts", 3, "comments")``."""
        path = "/".join(str(part).strip("/") for part in parts)
        return f"{self.base_url}/{path}" if path else self.base_url
