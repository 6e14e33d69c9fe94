"""
Centralized configuration management

All configuration values are read from environment variables (or a .env
file), with defaults matching the CI workflow that drives the two commands.
Settings objects are frozen: build them once at startup, validate, then use.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings


class ConfigError(Exception):
    """Raised when required configuration is missing or malformed."""


class CaptureSettings(BaseSettings):
    """Preview capture settings, read from DOCSHOT_* environment variables."""

    preview_url: str = "https://registry.terraform.io/tools/doc-preview"
    output_dir: str = "screenshots"
    log_level: str = "info"

    # --- Browser ---
    headless: bool = True
    viewport_width: int = 1280
    viewport_height: int = 720
    locale: str = "en-US"
    accept_language: str = "en-US,en;q=0.9"
    default_timeout_ms: int = 60000

    # --- Waits ---
    overlay_timeout_ms: int = 3000
    overlay_settle_ms: int = 500
    render_timeout_ms: int = 5000
    render_settle_ms: int = 1000
    fallback_wait_ms: int = 3000

    model_config = {
        "env_prefix": "DOCSHOT_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_ignore_empty": True,
        "extra": "ignore",
        "frozen": True,
    }


# Checked in this order; the first missing one is reported.
_REQUIRED_PUBLISH_VARS = (
    ("bucket", "BUCKET"),
    ("prefix", "PREFIX"),
    ("github_repository", "GITHUB_REPOSITORY"),
    ("github_run_id", "GITHUB_RUN_ID"),
)

_PUBLISH_MODEL_CONFIG = {
    "env_file": ".env",
    "env_file_encoding": "utf-8",
    "env_ignore_empty": True,
    "extra": "ignore",
    "frozen": True,
}


class UploadTarget(BaseSettings):
    """
    The required part of the publisher settings: where objects are stored.

    Plain strings only, so it can always be built and checked before the
    optional values are parsed.
    """

    bucket: str = ""
    prefix: str = ""
    github_repository: str = ""
    github_run_id: str = ""

    model_config = _PUBLISH_MODEL_CONFIG

    def check_required(self) -> None:
        """Raise ConfigError naming the first required variable that is unset."""
        for field_name, env_name in _REQUIRED_PUBLISH_VARS:
            if not getattr(self, field_name):
                raise ConfigError(f"{env_name} environment variable is required")


class PublishSettings(UploadTarget):
    """
    Screenshot publisher settings.

    Variable names are unprefixed so the GitHub Actions environment
    (GITHUB_REPOSITORY, GITHUB_RUN_ID, AWS_REGION ...) is picked up as-is.
    """

    expires_in: int = Field(default=3600, ge=1, le=604800)  # S3 presign limit is 7 days
    screenshots_dir: str = "screenshots"
    use_public_url: bool = False
    aws_region: str = Field(
        default="us-east-1",
        validation_alias=AliasChoices("aws_region", "aws_default_region"),
    )
    log_level: str = "info"

    model_config = _PUBLISH_MODEL_CONFIG

    @field_validator("use_public_url", mode="before")
    @classmethod
    def _only_true_enables_public(cls, value):
        if isinstance(value, str):
            return value.strip().lower() == "true"
        return value

    @property
    def url_mode(self) -> str:
        return "public" if self.use_public_url else "presigned"


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    name = ".".join(str(part) for part in first.get("loc", ())) or "value"
    return f"Invalid {name.upper()}: {first.get('msg', 'invalid value')}"


def load_publish_settings(**overrides) -> PublishSettings:
    """
    Build and fully validate publisher settings.

    Missing required variables are reported before any optional value is
    parsed.

    Raises:
        ConfigError: a required variable is missing or a value cannot be parsed.
    """
    target_overrides = {k: v for k, v in overrides.items() if k in UploadTarget.model_fields}
    UploadTarget(**target_overrides).check_required()
    try:
        return PublishSettings(**overrides)
    except ValidationError as e:
        raise ConfigError(_describe_validation_error(e)) from e


@lru_cache()
def get_capture_settings() -> CaptureSettings:
    """Return cached CaptureSettings instance (singleton)."""
    try:
        return CaptureSettings()
    except ValidationError as e:
        raise ConfigError(_describe_validation_error(e)) from e
