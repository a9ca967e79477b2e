from __future__ import annotations

from natives import fix_native
from validators import FixContext, FixError, is_object


def fix_block(ctx: FixContext, block_id: str, block: object) -> None:
    if isinstance(block, list):
        fix_native(ctx, block)
    elif is_object(block):
        _fix_block_object(ctx, block_id, block)
    else:
        raise FixError(f"block {block_id} is not an object")


def _fix_block_object(ctx: FixContext, block_id: str, block: dict) -> None:
    inputs = block.get("inputs")
    if not is_object(inputs):
        raise FixError(f"block {block_id} inputs is not an object")
    for input_name, block_input in inputs.items():
        if not isinstance(block_input, list):
            raise FixError(f"block {block_id} input {input_name} is not an array")
        # Index 0 is the shadow state; anything after it may be an inlined native.
        for item in block_input[1:]:
            if isinstance(item, list):
                fix_native(ctx, item)

    fields = block.get("fields")
    if not is_object(fields):
        raise FixError(f"block {block_id} fields is not an object")
    for field_name, block_field in fields.items():
        if not isinstance(block_field, list):
            raise FixError(f"block {block_id} field {field_name} is not an array")
