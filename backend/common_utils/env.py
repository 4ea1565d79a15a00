"""Typed accessors for environment variables, evaluated at call time."""
import os
from typing import Optional, Union

Number = Union[int, float]


class EnvironmentVariableError(ValueError):
    def __init__(self, key: str, reason: str = "is required but not set") -> None:
        super().__init__(f"Environment variable {key} {reason}.")
        self.key = key


def get_string_env(key: str) -> Optional[str]:
    return os.environ.get(key)


def get_number_env(key: str) -> Optional[Number]:
    value = os.environ.get(key)
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    if number != number:  # NaN
        return None
    return int(number) if number.is_integer() else number


def get_boolean_env(key: str) -> Optional[bool]:
    value = os.environ.get(key)
    if value is None:
        return None
    lowered = value.strip().lower()
    if lowered not in ("true", "false"):
        return None
    return lowered == "true"


def require_string_env(key: str) -> str:
    value = get_string_env(key)
    if value is None:
        raise EnvironmentVariableError(key)
    return value


def require_number_env(key: str) -> Number:
    value = get_number_env(key)
    if value is None:
        raise EnvironmentVariableError(key, "is required but not set or not a valid number")
    return value


def require_boolean_env(key: str) -> bool:
    value = get_boolean_env(key)
    if value is None:
        raise EnvironmentVariableError(key, "is required but not set or not a valid boolean")
    return value


def get_string_env_or_default(key: str, default: str) -> str:
    value = get_string_env(key)
    return default if value is None else value


def get_number_env_or_default(key: str, default: Number) -> Number:
    value = get_number_env(key)
    return default if value is None else value


def get_boolean_env_or_default(key: str, default: bool) -> bool:
    value = get_boolean_env(key)
    return default if value is None else value


__all__ = [
    "EnvironmentVariableError",
    "get_string_env",
    "get_number_env",
    "get_boolean_env",
    "require_string_env",
    "require_number_env",
    "require_boolean_env",
    "get_string_env_or_default",
    "get_number_env_or_default",
    "get_boolean_env_or_default",
]
