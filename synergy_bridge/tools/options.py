"""Parameter coercion for operation handlers.

Parameters arrive either as JSON-ish values from a transport or as plain
strings from the command line, so every reader here accepts both.
"""

from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)

_TRUTHY = {"true", "yes", "1", "on"}


class InvalidParameter(ValueError):
    """A parameter value that cannot be read as the expected type."""

    def __init__(self, name: str, expected: str, value: Any) -> None:
        super().__init__(f"{name} must be {expected}. Current value: {value!r}")
        self.name = name
        self.value = value


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def text(params: Mapping[str, Any], name: str) -> Optional[str]:
    """Read a free-text parameter. Blank values read as None."""
    value = params.get(name)
    if is_blank(value):
        return None
    return value if isinstance(value, str) else str(value)


def integer(params: Mapping[str, Any], name: str) -> Optional[int]:
    """Read an integer parameter.

    Raises:
        InvalidParameter: If the value is present but not an integer
    """
    value = params.get(name)
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise InvalidParameter(name, "an integer", value)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidParameter(name, "an integer", value)


def number(params: Mapping[str, Any], name: str) -> Optional[float]:
    """Read a numeric parameter.

    Raises:
        InvalidParameter: If the value is present but not a number
    """
    value = params.get(name)
    if is_blank(value):
        return None
    if isinstance(value, bool):
        raise InvalidParameter(name, "a number", value)
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise InvalidParameter(name, "a number", value)


def flag(params: Mapping[str, Any], name: str) -> bool:
    """Read a boolean switch. Only explicit truthy values switch it on."""
    value = params.get(name)
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def parse_option(enum_cls: Type[E], value: Any, default: E) -> E:
    """Resolve an enumerated option by name, case-insensitively.

    Blank and unrecognized values resolve to ``default``; this never raises.
    """
    if is_blank(value):
        return default
    try:
        return enum_cls[str(value).strip().upper()]
    except KeyError:
        return default
