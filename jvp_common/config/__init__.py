"""Configuration helpers for jvp_common."""

from .env import parse_bool_env

__all__ = [
    "parse_bool_env",
]
