"""Configuration resolution with precedence handling.

Values are merged in the documented precedence order:
Programmatic > Environment (including an optional .env file) > Defaults
"""

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from gemini_interview.exceptions import ConfigurationError

from .schema import InterviewSettings
from .types import ConfigOrigin, ResolvedConfig


def _load_settings(
    env_file: str | Path | None, overrides: dict[str, Any]
) -> InterviewSettings:
    if env_file is not None and not Path(env_file).exists():
        raise ConfigurationError(f"Environment file not found: {env_file}")
    try:
        return InterviewSettings(_env_file=env_file, **overrides)  # type: ignore[call-arg]
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


def resolve_config(
    programmatic: dict[str, Any] | None = None,
    *,
    use_env_file: str | Path | None = None,
) -> ResolvedConfig:
    """Resolve configuration from all sources with proper precedence.

    Args:
        programmatic: Overrides with the highest precedence. Unknown fields
            are ignored.
        use_env_file: Optional .env file read together with the environment.

    Returns:
        ResolvedConfig with merged values and the origin of every field.

    Raises:
        ConfigurationError: If a value fails validation or the .env file is
            missing.

    Example:
        config = resolve_config({"model": "gemini-2.5-pro"})
        service = InterviewService(config.to_frozen())
    """
    known_fields = InterviewSettings.model_fields
    overrides = {
        name: value
        for name, value in (programmatic or {}).items()
        if name in known_fields
    }

    # Fields set by environment sources appear in model_fields_set
    from_env = _load_settings(use_env_file, {}).model_fields_set
    settings = _load_settings(use_env_file, overrides)

    origin: dict[str, ConfigOrigin] = {}
    for name in known_fields:
        if name in overrides:
            origin[name] = "programmatic"
        elif name in from_env:
            origin[name] = "env"
        else:
            origin[name] = "default"

    return ResolvedConfig(**settings.to_dict(), origin=origin)
