"""Build configuration: settings schema and environment loader."""

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from schemas.content import ContentSource

ENV_PREFIX = "CONTENT_PRESS_"
BASE_URL_ENV = f"{ENV_PREFIX}BASE_URL"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class Settings(BaseModel):
    base_url:           str | None = Field(default=None, description="Content source base address")
    collection:         str   = Field(default="blogs", min_length=1, description="Collection name in storage")
    base_path:          str   = Field(default="/",     description="Deployment path prefix folded into links")
    site_title:         str   = Field(default="Blog",  description="Title shown in page templates")
    item_label:         str   = Field(default="post",  min_length=1, description="Noun for one item in page wording")
    item_label_plural:  str | None = Field(default=None, description="Plural noun; defaults to item_label + 's'")
    output_dir:         str   = Field(default="dist",  description="Directory for generated pages")
    max_workers:        int   = Field(default=8,   ge=1, description="Max concurrent item fetches")
    timeout:            float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    retry_attempts:     int   = Field(default=1,   ge=1, description="Attempts on connection errors and timeouts")
    include_categories: bool  = Field(default=False, description="Render the categories page")

    def client_config(self) -> dict[str, Any]:
        """Config dict for ContentClient."""
        return {
            "timeout": self.timeout,
            "retry_attempts": self.retry_attempts,
            "headers": {"User-Agent": "content-press/1.0"},
        }


def load_config(
    overrides: dict[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Load Settings from defaults, then CONTENT_PRESS_<FIELD> env vars, then non-None overrides."""
    environ = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    for name in Settings.model_fields:
        if val := environ.get(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return Settings(**data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def resolve_base(settings: Settings | None = None) -> ContentSource:
    """Build the ContentSource from configuration.

    Args:
        settings: Loaded settings; loaded from the environment if omitted

    Returns:
        ContentSource with a normalized base address

    Raises:
        ConfigurationError: If the base address is absent or empty
    """
    settings = settings or load_config()
    if not settings.base_url or not settings.base_url.strip():
        raise ConfigurationError(f"{BASE_URL_ENV} environment variable is not set")
    try:
        return ContentSource(base_url=settings.base_url)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid {BASE_URL_ENV}: {settings.base_url!r}") from e
