from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass

from platforms import Platform

logger = logging.getLogger(__name__)


class FixError(ValueError):
    """Raised when a descriptor is malformed beyond repair."""


class _Undefined:
    def __repr__(self) -> str:
        return "UNDEFINED"


# Stands in for a key that is absent from its record.
UNDEFINED = _Undefined()


@dataclass
class FixContext:
    platform: Platform
    log_callback: Callable[[str], None] | None = None

    def log(self, message: str) -> None:
        logger.info(message)
        if self.log_callback is not None:
            self.log_callback(message)


def is_object(value: object) -> bool:
    return isinstance(value, dict)


def is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_finite_number(value: object) -> bool:
    if isinstance(value, int):
        return not isinstance(value, bool)
    return isinstance(value, float) and math.isfinite(value)


def is_scratch_value(value: object) -> bool:
    return isinstance(value, (str, bool)) or is_number(value)


def is_truthy(value: object) -> bool:
    if value is None or value is False or value is UNDEFINED:
        return False
    if isinstance(value, str):
        return value != ""
    if is_number(value):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    return True


def format_number(value: int | float) -> str:
    """Format a number the way JavaScript's Number::toString does."""
    if isinstance(value, int):
        if abs(value) < 10**21:
            return str(value)
        try:
            value = float(value)
        except OverflowError:
            return "Infinity" if value > 0 else "-Infinity"
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    digits, point = _shortest_digits(abs(value))
    count = len(digits)
    if count <= point <= 21:
        return sign + digits + "0" * (point - count)
    if 0 < point <= 21:
        return sign + digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return sign + "0." + "0" * -point + digits
    exponent = point - 1
    exponent_text = f"e{'+' if exponent >= 0 else '-'}{abs(exponent)}"
    if count == 1:
        return sign + digits + exponent_text
    return sign + digits[0] + "." + digits[1:] + exponent_text


def _shortest_digits(value: float) -> tuple[str, int]:
    # repr gives the shortest round-tripping digits; the point index counts from the first digit.
    mantissa, _, exponent = repr(value).partition("e")
    whole, _, fraction = mantissa.partition(".")
    digits = whole + fraction
    stripped = digits.lstrip("0")
    point = len(whole) + int(exponent or 0) - (len(digits) - len(stripped))
    return stripped.rstrip("0"), point


def stringify(value: object) -> str:
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if is_number(value):
        return format_number(value)
    if isinstance(value, list):
        return ",".join("" if item is None else stringify(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def to_number(value: object) -> int | float:
    if is_finite_number(value):
        return value
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, str):
        stripped = value.strip()
        if stripped == "":
            return 0
        try:
            number = float(stripped)
        except ValueError:
            return 0
        if not math.isfinite(number):
            return 0
        return int(number) if number.is_integer() else number
    return 0


def ensure_string(ctx: FixContext, container: dict | list, key: str | int, message: str) -> None:
    value = _get(container, key)
    if not isinstance(value, str):
        ctx.log(message)
        container[key] = stringify(value)


def ensure_scratch_value(ctx: FixContext, container: dict | list, key: str | int, message: str) -> None:
    value = _get(container, key)
    if not is_scratch_value(value):
        ctx.log(message)
        container[key] = stringify(value)


def _get(container: dict | list, key: str | int) -> object:
    if isinstance(container, dict):
        return container.get(key, UNDEFINED)
    return container[key]
