"""Utility functions for the Cubist Games client."""

from .config_utils import (
    read_client_config,
    read_env_overrides,
    resolve_client_config,
)

__all__ = [
    "read_client_config",
    "read_env_overrides",
    "resolve_client_config",
]
