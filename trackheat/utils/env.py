"""
Environment variable helpers.

Only two settings come from the environment: TRACKHEAT_VERBOSE (default for
--verbose) and TRACKHEAT_USER_AGENT (sent to the geocoder).
"""
import os

_TRUTHY = {"1", "true", "t", "yes", "y", "on"}

VERBOSE_ENV = "TRACKHEAT_VERBOSE"
USER_AGENT_ENV = "TRACKHEAT_USER_AGENT"


def env_bool(name: str, default: bool = False) -> bool:
    """True for 1/true/yes/on (any case); default when unset."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_str(name: str, default: str = "") -> str:
    """Value of name, or default when unset or blank."""
    raw = os.getenv(name, "")
    return raw if raw.strip() else default


def verbose_default() -> bool:
    return env_bool(VERBOSE_ENV, False)
