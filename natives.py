from __future__ import annotations

import re
from enum import IntEnum

from validators import FixContext, FixError, is_number, stringify


class NativeType(IntEnum):
    MATH_NUMBER = 4
    POSITIVE_NUMBER = 5
    WHOLE_NUMBER = 6
    INTEGER_NUMBER = 7
    ANGLE = 8
    COLOR = 9
    TEXT = 10
    BROADCAST = 11
    VARIABLE = 12
    LIST = 13


NUMERIC_TYPES = frozenset(
    {
        NativeType.MATH_NUMBER,
        NativeType.POSITIVE_NUMBER,
        NativeType.WHOLE_NUMBER,
        NativeType.INTEGER_NUMBER,
        NativeType.ANGLE,
    }
)

COLOR_PATTERN = re.compile(r"^#[0-9a-f]{6}$", re.IGNORECASE)
DEFAULT_COLOR = "#000000"


def decode_native_type(native: list) -> NativeType | None:
    """Return the tag of a compact block, or None for tags this fixer does not know.

    A missing or non-numeric tag is fatal since nothing about the payload can be trusted.
    """
    if not native:
        raise FixError("native is empty")
    tag = native[0]
    if not is_number(tag):
        raise FixError("native type is not a number")
    try:
        return NativeType(tag)
    except ValueError:
        return None


def fix_native(ctx: FixContext, native: object) -> None:
    if not isinstance(native, list):
        raise FixError("native is not an array")

    native_type = decode_native_type(native)
    if native_type is None or native_type == NativeType.BROADCAST:
        return

    if native_type in NUMERIC_TYPES:
        _expect_length(native, native_type, 2)
        if not _is_literal(native[1]):
            ctx.log(f"number native had invalid value: {stringify(native[1])}")
            native[1] = stringify(native[1])
    elif native_type == NativeType.COLOR:
        _expect_length(native, native_type, 2)
        color = native[1]
        if not isinstance(color, str) or not COLOR_PATTERN.match(color):
            ctx.log(f"color native had invalid value: {stringify(color)}")
            native[1] = DEFAULT_COLOR
    elif native_type == NativeType.TEXT:
        _expect_length(native, native_type, 2)
        if not _is_literal(native[1]):
            ctx.log(f"text native had invalid value: {stringify(native[1])}")
            native[1] = stringify(native[1])
    elif native_type in (NativeType.VARIABLE, NativeType.LIST):
        # [12 or 13, name, id] plus x and y when the reporter sits directly on the workspace.
        _expect_length(native, native_type, 3, 5)
        if not isinstance(native[1], str):
            ctx.log("variable or list native name was not a string")
            native[1] = stringify(native[1])


def _expect_length(native: list, native_type: NativeType, *lengths: int) -> None:
    if len(native) not in lengths:
        raise FixError(f"{native_type.name.lower()} native is of unexpected length: {len(native)}")


def _is_literal(value: object) -> bool:
    return isinstance(value, str) or is_number(value)
