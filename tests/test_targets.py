from __future__ import annotations

import pytest

from conftest import make_sprite, make_stage
from targets import DEFAULT_ROTATION_STYLE, fix_target
from validators import FixError


def test_valid_sprite_is_untouched(ctx_logs):
    ctx, logs = ctx_logs
    sprite = make_sprite()
    expected = make_sprite()
    fix_target(ctx, sprite)
    assert sprite == expected
    assert logs == []


def test_stage_layer_order_forced_to_zero(ctx_logs):
    ctx, logs = ctx_logs
    stage = make_stage(layerOrder=3)
    fix_target(ctx, stage)
    assert stage["layerOrder"] == 0
    assert logs == ["stage had invalid layerOrder 3"]


def test_stage_without_layer_order_gets_zero(ctx_logs):
    ctx, _ = ctx_logs
    stage = make_stage()
    del stage["layerOrder"]
    fix_target(ctx, stage)
    assert stage["layerOrder"] == 0


@pytest.mark.parametrize("layer_order", [0, -4, "2", None])
def test_sprite_layer_order_at_least_one(ctx_logs, layer_order):
    ctx, logs = ctx_logs
    sprite = make_sprite(layerOrder=layer_order)
    fix_target(ctx, sprite)
    assert sprite["layerOrder"] == 1
    assert len(logs) == 1


def test_sprite_without_layer_order_left_alone(ctx_logs):
    ctx, logs = ctx_logs
    sprite = make_sprite()
    del sprite["layerOrder"]
    fix_target(ctx, sprite)
    assert "layerOrder" not in sprite
    assert logs == []


def test_sprite_rotation_style_reset(ctx_logs):
    ctx, logs = ctx_logs
    sprite = make_sprite(rotationStyle="upside down")
    fix_target(ctx, sprite)
    assert sprite["rotationStyle"] == DEFAULT_ROTATION_STYLE
    assert logs == ["sprite had invalid rotationStyle upside down"]


@pytest.mark.parametrize("style", ["all around", "left-right", "don't rotate"])
def test_sprite_rotation_styles_accepted(ctx_logs, style):
    ctx, logs = ctx_logs
    fix_target(ctx, make_sprite(rotationStyle=style))
    assert logs == []


def test_sprite_position_parsed_as_numbers(ctx_logs):
    ctx, logs = ctx_logs
    sprite = make_sprite(x="12.5", y="left")
    fix_target(ctx, sprite)
    assert sprite["x"] == 12.5
    assert sprite["y"] == 0
    assert logs == ["sprite x was not a number: 12.5, set to 12.5", "sprite y was not a number: left, set to 0"]


def test_stage_does_not_get_sprite_fields(ctx_logs):
    ctx, logs = ctx_logs
    stage = make_stage()
    fix_target(ctx, stage)
    assert "rotationStyle" not in stage
    assert "x" not in stage
    assert logs == []


def test_non_boolean_is_stage_is_normalized(ctx_logs):
    ctx, logs = ctx_logs
    stage = make_stage(isStage=1)
    fix_target(ctx, stage)
    assert stage["isStage"] is True
    assert logs == ["target isStage was not a boolean: 1"]


def test_target_name_coerced(ctx_logs):
    ctx, logs = ctx_logs
    sprite = make_sprite(name=7)
    fix_target(ctx, sprite)
    assert sprite["name"] == "7"
    assert logs == ["target name was not a string"]


def test_entities_fixed_in_fixed_order(ctx_logs):
    ctx, logs = ctx_logs
    sprite = make_sprite(
        costumes=[],
        blocks={"b": [10, None]},
        comments={"c": {"text": None}},
        variables={"v": ["v", None]},
        lists={"l": ["l", None]},
    )
    fix_target(ctx, sprite)
    assert logs == [
        "costumes was empty, adding empty costume",
        "text native had invalid value: null",
        "comment c text was not a string",
        "variable v value was not a Scratch-compatible value",
        "list l value was not an array",
    ]


def test_comments_are_optional(ctx_logs):
    ctx, logs = ctx_logs
    sprite = make_sprite()
    del sprite["comments"]
    fix_target(ctx, sprite)
    assert logs == []


@pytest.mark.parametrize("key", ["blocks", "variables", "lists"])
def test_required_mappings(ctx_logs, key):
    ctx, _ = ctx_logs
    sprite = make_sprite()
    sprite[key] = []
    with pytest.raises(FixError, match=f"{key} is not an object"):
        fix_target(ctx, sprite)


def test_comments_when_present_must_be_mapping(ctx_logs):
    ctx, _ = ctx_logs
    with pytest.raises(FixError, match="comments is not an object"):
        fix_target(ctx, make_sprite(comments=[]))


def test_missing_sprite_fields_logged_as_undefined(ctx_logs):
    ctx, logs = ctx_logs
    sprite = make_sprite()
    del sprite["x"]
    del sprite["rotationStyle"]
    fix_target(ctx, sprite)
    assert sprite["x"] == 0
    assert sprite["rotationStyle"] == DEFAULT_ROTATION_STYLE
    assert logs == [
        "sprite had invalid rotationStyle undefined",
        "sprite x was not a number: undefined, set to 0",
    ]


def test_missing_stage_layer_order_logged_as_undefined(ctx_logs):
    ctx, logs = ctx_logs
    stage = make_stage()
    del stage["layerOrder"]
    fix_target(ctx, stage)
    assert logs == ["stage had invalid layerOrder undefined"]
