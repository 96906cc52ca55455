from __future__ import annotations

import os
import warnings
from enum import StrEnum
from functools import cache


class Env(StrEnum):
    LOCAL = "local"
    DEV = "dev"
    TEST = "test"
    PROD = "prod"


_ALIASES: dict[str, Env] = {
    "development": Env.DEV,
    "staging": Env.DEV,
    "testing": Env.TEST,
    "ci": Env.TEST,
    "production": Env.PROD,
}


def parse_env(raw: str | None) -> Env | None:
    """Map a raw environment name (or a common alias) onto Env; None if unknown."""
    if not raw:
        return None
    val = raw.strip().lower()
    try:
        return Env(val)
    except ValueError:
        return _ALIASES.get(val)


@cache
def get_env() -> Env:
    """
    Resolve the running environment from APP_ENV, once per process.

    Unknown values fall back to LOCAL with a warning.
    """
    raw = os.getenv("APP_ENV")
    env = parse_env(raw)
    if env is None:
        if raw:
            warnings.warn(
                f"Unrecognized APP_ENV '{raw}', defaulting to 'local'.",
                RuntimeWarning,
                stacklevel=2,
            )
        env = Env.LOCAL
    return env


ENV: Env = get_env()


def pick(*, prod, nonprod, test=None):
    """
    Choose a value for the active environment.

    Example:
        level = pick(prod="INFO", nonprod="DEBUG")
    """
    e = get_env()
    if e is Env.PROD:
        return prod
    if e is Env.TEST and test is not None:
        return test
    return nonprod
