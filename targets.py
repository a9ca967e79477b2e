from __future__ import annotations

from blocks import fix_block
from entities import fix_comment, fix_costumes, fix_list, fix_sounds, fix_variable
from validators import (
    UNDEFINED,
    FixContext,
    FixError,
    ensure_string,
    is_finite_number,
    is_number,
    is_object,
    is_truthy,
    stringify,
    to_number,
)

ROTATION_STYLES = frozenset({"all around", "left-right", "don't rotate"})
DEFAULT_ROTATION_STYLE = "all around"


def fix_target(ctx: FixContext, target: dict) -> None:
    if "name" in target:
        ensure_string(ctx, target, "name", "target name was not a string")
    if "isStage" in target and not isinstance(target["isStage"], bool):
        ctx.log(f"target isStage was not a boolean: {stringify(target['isStage'])}")
        target["isStage"] = is_truthy(target["isStage"])

    fix_costumes(ctx, target.get("costumes"))
    fix_sounds(ctx, target.get("sounds"))

    blocks = _require_object(target, "blocks")
    for block_id, block in blocks.items():
        fix_block(ctx, block_id, block)

    if "comments" in target:
        comments = _require_object(target, "comments")
        for comment_id, comment in comments.items():
            fix_comment(ctx, comment_id, comment)

    variables = _require_object(target, "variables")
    for variable_id, variable in variables.items():
        fix_variable(ctx, variable_id, variable)

    lists = _require_object(target, "lists")
    for list_id, scratch_list in lists.items():
        fix_list(ctx, list_id, scratch_list)

    if is_truthy(target.get("isStage")):
        _fix_stage_layer(ctx, target)
    else:
        _fix_sprite(ctx, target)


def _require_object(target: dict, key: str) -> dict:
    value = target.get(key)
    if not is_object(value):
        raise FixError(f"{key} is not an object")
    return value


def _fix_stage_layer(ctx: FixContext, stage: dict) -> None:
    layer_order = stage.get("layerOrder", UNDEFINED)
    if not is_number(layer_order) or layer_order != 0:
        ctx.log(f"stage had invalid layerOrder {stringify(layer_order)}")
        stage["layerOrder"] = 0


def _fix_sprite(ctx: FixContext, sprite: dict) -> None:
    if "layerOrder" in sprite:
        layer_order = sprite["layerOrder"]
        if not is_finite_number(layer_order) or layer_order < 1:
            ctx.log(f"sprite had invalid layerOrder {stringify(layer_order)}")
            sprite["layerOrder"] = 1

    rotation_style = sprite.get("rotationStyle", UNDEFINED)
    if not isinstance(rotation_style, str) or rotation_style not in ROTATION_STYLES:
        ctx.log(f"sprite had invalid rotationStyle {stringify(rotation_style)}")
        sprite["rotationStyle"] = DEFAULT_ROTATION_STYLE

    for axis in ("x", "y"):
        value = sprite.get(axis, UNDEFINED)
        if not is_finite_number(value):
            fixed = to_number(value)
            ctx.log(f"sprite {axis} was not a number: {stringify(value)}, set to {stringify(fixed)}")
            sprite[axis] = fixed
