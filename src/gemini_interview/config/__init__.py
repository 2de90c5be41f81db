"""Configuration management for the Gemini interview toolkit.

Key components:
- InterviewSettings: Pydantic settings schema (GEMINI_* environment variables)
- ResolvedConfig: Post-resolution configuration with audit metadata
- FrozenConfig: Immutable configuration consumed by the service
"""

from .resolver import resolve_config
from .schema import InterviewSettings
from .types import ConfigOrigin, FrozenConfig, ResolvedConfig, SourceMap

__all__ = [
    "ConfigOrigin",
    "FrozenConfig",
    "InterviewSettings",
    "ResolvedConfig",
    "SourceMap",
    "resolve_config",
]
