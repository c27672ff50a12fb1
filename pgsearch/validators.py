"""
Option validation for search builders

Every option is resolved here before any SQL fragment is built, so a bad
option never leaves a half-built query behind.
"""

import enum
import numbers
import re
from typing import Any, Collection, Iterable, Mapping, Optional, Type, Union

from pgsearch import settings


class SearchError(Exception):
    """Base exception for search query compilation errors"""

    pass


class InvalidOption(SearchError, ValueError):
    """Raised when an option value is outside of its allowed domain"""

    pass


class ShapeMismatch(InvalidOption, TypeError):
    """Raised when the shape of an argument doesn't match what the builder expects"""

    pass


class UnsupportedCombination(SearchError):
    """Raised for option/argument combinations a builder refuses to compile"""

    pass


_LANGUAGE_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_.]*$")
_NONE_VALUES = (None, "none")

Allowed = Union[Type[enum.Enum], Collection[Any]]


def _allowed_values(allowed: Allowed) -> list:
    if isinstance(allowed, type) and issubclass(allowed, enum.Enum):
        return [member.value for member in allowed]
    return list(allowed)


def get_arg(options: Mapping[str, Any], key: str, default: Any, allowed: Allowed) -> Any:
    """
    Resolves `key` from `options` against a set of allowed values

    If `allowed` is an Enum class, both members and their (case insensitive) values
    are accepted and the member is returned.
    """
    value = options.get(key, default)

    if isinstance(allowed, type) and issubclass(allowed, enum.Enum):
        try:
            return allowed(value)
        except (ValueError, TypeError):
            pass
    elif value in allowed:
        return value

    raise InvalidOption(f"The value of `{key}` should be one of: {_allowed_values(allowed)}, got {value!r}")


def get_bool(options: Mapping[str, Any], key: str, default: bool) -> bool:
    value = options.get(key, default)
    if value is True or value is False:
        return value
    raise InvalidOption(f"The value of `{key}` should be one of: [True, False], got {value!r}")


def get_positive_int(options: Mapping[str, Any], key: str, default: Optional[int] = None) -> Optional[int]:
    value = options.get(key, default)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidOption(f"The value of `{key}` should be a positive integer, got {value!r}")
    return value


def get_bitmask(options: Mapping[str, Any], key: str, default: int, max_value: int) -> int:
    value = options.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= max_value:
        raise InvalidOption(f"The value of `{key}` should be an integer bit mask between 0 and {max_value}, got {value!r}")
    return value


def get_threshold(options: Mapping[str, Any], key: str) -> Optional[float]:
    """Returns None for `"none"` (the default), otherwise a positive float"""
    value = options.get(key)
    if value in _NONE_VALUES:
        return None
    if isinstance(value, bool) or not isinstance(value, numbers.Real) or value <= 0:
        raise InvalidOption(f"The value of `{key}` should be either 'none' or a positive float, got {value!r}")
    return float(value)


def get_optional_name(options: Mapping[str, Any], key: str) -> Optional[str]:
    value = options.get(key)
    if value in _NONE_VALUES:
        return None
    if not isinstance(value, str) or not value.strip():
        raise InvalidOption(f"The value of `{key}` should be either 'none' or a non-empty string, got {value!r}")
    return value


def get_language(options: Mapping[str, Any]) -> str:
    """Returns the text search configuration name quoted as a SQL literal"""
    language = options.get("language", settings.DEFAULT_LANGUAGE)
    if not isinstance(language, str) or not _LANGUAGE_RE.match(language):
        raise InvalidOption(f"The value of `language` should be a text search configuration name, got {language!r}")
    return f"'{language}'"


def check_known_options(options: Mapping[str, Any], known: Iterable[str]) -> None:
    unknown = sorted(set(options) - set(known))
    if unknown:
        raise InvalidOption(f"Unsupported options: {unknown}. Supported options are: {sorted(known)}")
