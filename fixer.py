from __future__ import annotations

import json
import logging
from collections.abc import Callable

from entities import default_backdrop
from platforms import DEFAULT_PLATFORM, Platform, get_platform
from targets import fix_target
from validators import UNDEFINED, FixContext, FixError, is_object, is_truthy, stringify

logger = logging.getLogger(__name__)

STAGE_NAME = "Stage"


def fix_json(
    data: str | bytes | dict | list,
    platform: str | Platform = DEFAULT_PLATFORM,
    log_callback: Callable[[str], None] | None = None,
) -> dict:
    """Repair a project.json or sprite.json document.

    Parsed input is modified in place and returned; text input is parsed first.
    Every correction is reported through log_callback. Raises FixError when the
    document cannot be repaired.
    """
    ctx = FixContext(platform=get_platform(platform), log_callback=log_callback)
    if isinstance(data, (str, bytes, bytearray)):
        data = parse_json(data)
    elif not isinstance(data, (dict, list)):
        raise FixError("Unable to tell how to interpret input as JSON")
    fix_project(ctx, data)
    return data


def parse_json(text: str | bytes | bytearray) -> object:
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise FixError(f"Invalid JSON: {exc}") from exc
    elif text.startswith("\ufeff"):
        text = text[1:]
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise FixError(f"Invalid JSON: {exc}") from exc


def _reject_constant(name: str) -> object:
    raise FixError(f"Invalid JSON: {name} is not allowed")


def fix_project(ctx: FixContext, project: object) -> None:
    if not is_object(project):
        raise FixError("Root JSON is not an object")
    if "objName" in project:
        raise FixError("Scratch 2 (sb2) projects not supported")

    if "name" in project and "targets" not in project:
        logger.debug("project is a sprite")
        fix_target(ctx, project)
        return

    targets = project.get("targets")
    if not isinstance(targets, list):
        raise FixError("targets is not an array")
    if not targets:
        raise FixError("targets is empty")
    for index, target in enumerate(targets):
        logger.debug("checking target %d", index)
        if not is_object(target):
            raise FixError(f"target {index} is not an object")
        fix_target(ctx, target)

    stage = _fix_stage_position(ctx, targets)
    stage_name = stage.get("name", UNDEFINED)
    if stage_name != STAGE_NAME:
        ctx.log(f"stage had wrong name: {stringify(stage_name)}")
        stage["name"] = STAGE_NAME

    known_extensions = get_known_extensions(ctx, project)
    _fix_monitors(ctx, project, known_extensions)


def _fix_stage_position(ctx: FixContext, targets: list) -> dict:
    stage_indexes = [index for index, target in enumerate(targets) if is_truthy(target.get("isStage"))]
    if not stage_indexes:
        ctx.log("stage is missing; adding an empty one")
        stage = default_stage()
        targets.insert(0, stage)
        return stage

    first_index = stage_indexes[0]
    stage = targets[first_index]
    for index in reversed(stage_indexes[1:]):
        extra_name = targets[index].get("name", UNDEFINED)
        ctx.log(f"discarded extra stage at index {index}: {stringify(extra_name)}")
        del targets[index]
    if first_index != 0:
        ctx.log(f"stage was at wrong index: {first_index}")
        del targets[first_index]
        targets.insert(0, stage)
    return stage


def default_stage() -> dict:
    return {
        "isStage": True,
        "name": STAGE_NAME,
        "variables": {},
        "lists": {},
        "broadcasts": {},
        "blocks": {},
        "currentCostume": 0,
        "costumes": [default_backdrop()],
        "sounds": [],
        "volume": 100,
        "layerOrder": 0,
        "tempo": 60,
        "videoTransparency": 50,
        "videoState": "on",
        "textToSpeechLanguage": None,
    }


def get_known_extensions(ctx: FixContext, project: dict) -> frozenset[str]:
    if "extensions" not in project and not ctx.platform.require_extensions:
        return ctx.platform.builtin_extensions
    extensions = project.get("extensions")
    if not isinstance(extensions, list):
        raise FixError("extensions is not an array")
    for index, extension in enumerate(extensions):
        if not isinstance(extension, str):
            raise FixError(f"extension {index} is not a string")
    return ctx.platform.builtin_extensions | frozenset(extensions)


def _fix_monitors(ctx: FixContext, project: dict, known_extensions: frozenset[str]) -> None:
    if "monitors" not in project:
        return
    monitors = project["monitors"]
    if not isinstance(monitors, list):
        raise FixError("monitors is not an array")

    kept: list[dict] = []
    for index, monitor in enumerate(monitors):
        if not is_object(monitor):
            raise FixError(f"monitor {index} is not an object")
        opcode = monitor.get("opcode")
        if not isinstance(opcode, str):
            raise FixError(f"monitor {index} opcode is not a string")
        extension = opcode.split("_", 1)[0]
        if extension not in known_extensions:
            ctx.log(f"removed monitor {index} from unknown extension {extension}")
            continue
        kept.append(monitor)
    if len(kept) != len(monitors):
        monitors[:] = kept
