"""Input validation utilities for tool-call arguments.

Tool calls arrive as loosely-typed argument bags decoded from JSON. The helpers
here pull typed values out of those bags and fail with a message naming the
offending key, so the agent can correct its call.
"""

import math
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Any

import structlog

logger = structlog.get_logger(__name__)


class ValidationError(Exception):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        self.message = message
        self.field = field
        super().__init__(message)


_TRUE_STRINGS = {"1", "t", "true"}
_FALSE_STRINGS = {"0", "f", "false"}


def get_required_string(args: Mapping[str, Any], key: str) -> str:
    """Get a non-blank string argument.

    Args:
        args: Tool-call arguments
        key: Argument name

    Returns:
        The trimmed value

    Raises:
        ValidationError: If the key is missing, not a string, or blank
    """
    if key not in args:
        raise ValidationError(f"{key} is required", field=key)

    value = args[key]
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{key} must be a non-empty string", field=key)

    return value.strip()


def get_optional_string(args: Mapping[str, Any], key: str) -> str:
    """Get an optional string argument, returning "" when absent."""
    value = args.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string", field=key)
    return value.strip()


def get_optional_bool(args: Mapping[str, Any], key: str) -> bool | None:
    """Get an optional boolean argument.

    Literal booleans are accepted as is. Strings such as "true", "False", "1"
    or "f" are parsed. A missing or null value returns None so callers can
    tell "not supplied" apart from False.
    """
    value = args.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUE_STRINGS:
            return True
        if text in _FALSE_STRINGS:
            return False
    raise ValidationError(f"{key} must be a boolean", field=key)


def get_optional_int(args: Mapping[str, Any], key: str) -> int | None:
    """Get an optional integer argument.

    JSON numbers often arrive as floats, so finite floats are truncated toward
    zero. Numeric strings are parsed as base-10 integers. Booleans are
    rejected even though Python treats them as ints.
    """
    value = args.get(key)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{key} must be an integer", field=key)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValidationError(f"{key} must be an integer", field=key)
        return int(value)
    if isinstance(value, str) and "_" not in value:
        try:
            return int(value.strip(), 10)
        except ValueError:
            pass
    raise ValidationError(f"{key} must be an integer", field=key)


def get_required_array(args: Mapping[str, Any], key: str) -> list[Any]:
    """Get a required array argument."""
    if key not in args:
        raise ValidationError(f"{key} is required", field=key)

    value = args[key]
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{key} must be an array", field=key)

    return list(value)


def get_optional_string_array(args: Mapping[str, Any], key: str) -> list[str]:
    """Get an optional array of strings.

    Blank elements are dropped. Any non-string element fails the whole call.
    """
    value = args.get(key)
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{key} must be an array of strings", field=key)

    items = []
    for index, item in enumerate(value):
        if not isinstance(item, str):
            raise ValidationError(f"{key}[{index}] must be a string", field=key)
        text = item.strip()
        if text:
            items.append(text)

    return items


def iter_required_objects(
    args: Mapping[str, Any],
    key: str,
) -> Iterator[tuple[int, Mapping[str, Any]]]:
    """Iterate over a required array of objects.

    Yields:
        (index, element) pairs

    Raises:
        ValidationError: If the array is missing, empty, or has a non-object element
    """
    items = get_required_array(args, key)
    if not items:
        raise ValidationError(f"{key} must not be empty", field=key)

    for index, item in enumerate(items):
        if not isinstance(item, Mapping):
            raise ValidationError(f"{key}[{index}] must be an object", field=key)
        yield index, item


@contextmanager
def indexed(key: str, index: int) -> Iterator[None]:
    """Prefix validation errors raised inside the block with ``key[index]``."""
    try:
        yield
    except ValidationError as e:
        logger.debug("Invalid array element", key=key, index=index, error=e.message)
        raise ValidationError(f"{key}[{index}]: {e.message}", field=key) from e
