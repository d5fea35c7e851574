"""Application configuration helpers."""

from __future__ import annotations

from .ardoq import (
    DEFAULT_COMPONENT_TYPES,
    DEFAULT_REFERENCE_TYPES,
    ArdoqConfig,
    default_resilience_config,
    get_ardoq_config,
)
from .env import optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging

__all__ = [
    "DEFAULT_COMPONENT_TYPES",
    "DEFAULT_REFERENCE_TYPES",
    "ArdoqConfig",
    "ConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "default_resilience_config",
    "get_ardoq_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
