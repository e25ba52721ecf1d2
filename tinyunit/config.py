"""
Run configuration defaults and environment lookups.
"""

import os
from typing import Mapping

from tinyunit.errors import ConfigurationError

DEFAULT_VERBOSITY: int = 1

# Environment variable selecting the reporter (NIL, TAP, JUNIT or TEXT)
OUTPUT_TYPE_ENV_VAR: str = "TINYUNIT_OUTPUT"

# Environment variable overriding DEFAULT_VERBOSITY
VERBOSITY_ENV_VAR: str = "TINYUNIT_VERBOSITY"


def output_type_from_env(environ: Mapping[str, str] | None = None) -> str | None:
    """
    Returns the reporter name set in the environment, if any.

    Parameters
    ----------
    environ : Mapping[str, str] | None, optional
        Environment to read, by default os.environ

    Returns
    -------
    str | None
        Raw reporter name, or None when unset or empty
    """
    environ = os.environ if environ is None else environ
    value: str = environ.get(OUTPUT_TYPE_ENV_VAR, "").strip()
    return value or None


def verbosity_from_env(environ: Mapping[str, str] | None = None) -> int:
    """
    Returns the verbosity set in the environment or DEFAULT_VERBOSITY.

    Raises
    ------
    ConfigurationError
        If the variable is set to something other than an integer
    """
    environ = os.environ if environ is None else environ
    value: str = environ.get(VERBOSITY_ENV_VAR, "").strip()
    if not value:
        return DEFAULT_VERBOSITY
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(
            f"{VERBOSITY_ENV_VAR} must be an integer, not {value!r}"
        ) from None
