"""Engine configuration."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from ..dom.geometry import VisibilityPolicy
from .errors import ConfigurationError

ENV_PREFIX = "WEBVIEW_QUERY_"


class EngineConfig(BaseModel):
    """Settings for one QueryEngine."""
    # first half of the "<tool>-finished" sentinel the native driver waits for
    tool_name: str = Field(default="robotium", min_length=1)
    visibility: VisibilityPolicy = VisibilityPolicy.INCLUSIVE
    verbose: int = Field(default=0, ge=0, le=3)

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> 'EngineConfig':
        """
        Load settings from the environment (and a .env file, if present).

        Reads WEBVIEW_QUERY_TOOL_NAME, WEBVIEW_QUERY_VISIBILITY and
        WEBVIEW_QUERY_VERBOSE; unset variables keep their defaults.

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        load_dotenv(dotenv_path)

        values = {}
        for field in ("tool_name", "visibility", "verbose"):
            raw = os.getenv(ENV_PREFIX + field.upper())
            if raw is not None:
                values[field] = raw.strip()

        try:
            return cls.model_validate(values)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(part) for part in error["loc"])
            raise ConfigurationError(f"{ENV_PREFIX}{field.upper()}: {error['msg']}") from e
