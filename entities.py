from __future__ import annotations

from validators import (
    UNDEFINED,
    FixContext,
    FixError,
    ensure_scratch_value,
    ensure_string,
    is_object,
    is_scratch_value,
    stringify,
)

EMPTY_SVG_ASSET_ID = "cd21514d0531fdffb22204e0ec5ed84a"

VECTOR_FORMATS = frozenset({"svg"})
BITMAP_FORMATS = frozenset({"png", "jpg", "jpeg", "bmp", "gif"})
COSTUME_FORMATS = VECTOR_FORMATS | BITMAP_FORMATS
SOUND_FORMATS = frozenset({"wav", "mp3"})
DEFAULT_SOUND_FORMAT = "mp3"


def default_costume() -> dict:
    return {
        "name": "costume1",
        "bitmapResolution": 1,
        "dataFormat": "svg",
        "assetId": EMPTY_SVG_ASSET_ID,
        "md5ext": f"{EMPTY_SVG_ASSET_ID}.svg",
        "rotationCenterX": 0,
        "rotationCenterY": 0,
    }


def default_backdrop() -> dict:
    return {
        "name": "backdrop1",
        "dataFormat": "svg",
        "assetId": EMPTY_SVG_ASSET_ID,
        "md5ext": f"{EMPTY_SVG_ASSET_ID}.svg",
        "rotationCenterX": 240,
        "rotationCenterY": 180,
    }


def fix_variable(ctx: FixContext, variable_id: str, variable: object) -> None:
    if not isinstance(variable, list):
        raise FixError(f"variable object {variable_id} is not an array")
    # A third item marks cloud variables and is kept as is.
    if len(variable) < 2:
        raise FixError(f"variable object {variable_id} is of unexpected length: {len(variable)}")
    ensure_string(ctx, variable, 0, f"variable {variable_id} name was not a string")
    ensure_scratch_value(ctx, variable, 1, f"variable {variable_id} value was not a Scratch-compatible value")


def fix_list(ctx: FixContext, list_id: str, scratch_list: object) -> None:
    if not isinstance(scratch_list, list):
        raise FixError(f"list object {list_id} is not an array")
    if len(scratch_list) < 2:
        raise FixError(f"list object {list_id} is of unexpected length: {len(scratch_list)}")
    ensure_string(ctx, scratch_list, 0, f"list {list_id} name was not a string")

    if not isinstance(scratch_list[1], list):
        ctx.log(f"list {list_id} value was not an array")
        scratch_list[1] = []
    values = scratch_list[1]
    for index, value in enumerate(values):
        if not is_scratch_value(value):
            ctx.log(f"list {list_id} index {index} was not a Scratch-compatible value")
            values[index] = stringify(value)


def fix_comment(ctx: FixContext, comment_id: str, comment: object) -> None:
    if not is_object(comment):
        raise FixError(f"comment {comment_id} is not an object")
    ensure_string(ctx, comment, "text", f"comment {comment_id} text was not a string")

    limit = ctx.platform.max_comment_length
    text = comment["text"]
    if limit is None or len(text) <= limit:
        return
    ctx.log(f"comment {comment_id} text was longer than {limit} characters, moved overflow to extraText")
    overflow = text[limit:]
    existing = comment.get("extraText")
    comment["text"] = text[:limit]
    comment["extraText"] = overflow if existing is None else overflow + stringify(existing)


def fix_costumes(ctx: FixContext, costumes: object) -> None:
    if not isinstance(costumes, list):
        raise FixError("costumes is not an array")
    # Walk backwards so deleting an entry keeps the remaining indexes valid.
    for index in range(len(costumes) - 1, -1, -1):
        costume = costumes[index]
        if not is_object(costume):
            raise FixError(f"costume {index} is not an object")

        ensure_string(ctx, costume, "name", f"costume {index} name was not a string")

        data_format = costume.get("dataFormat", UNDEFINED)
        if not isinstance(data_format, str) or data_format not in COSTUME_FORMATS:
            md5ext = costume.get("md5ext")
            is_vector = isinstance(md5ext, str) and md5ext.lower().endswith(".svg")
            fixed_format = "svg" if is_vector else "png"
            ctx.log(f"costume {index} had invalid dataFormat {stringify(data_format)}, set to {fixed_format}")
            costume["dataFormat"] = fixed_format

        if "assetId" not in costume:
            ctx.log(f"costume {index} was missing assetId, deleted")
            del costumes[index]

    if not costumes:
        ctx.log("costumes was empty, adding empty costume")
        costumes.append(default_costume())


def fix_sounds(ctx: FixContext, sounds: object) -> None:
    if not isinstance(sounds, list):
        raise FixError("sounds is not an array")
    for index in range(len(sounds) - 1, -1, -1):
        sound = sounds[index]
        if not is_object(sound):
            raise FixError(f"sound {index} is not an object")

        ensure_string(ctx, sound, "name", f"sound {index} name was not a string")

        data_format = sound.get("dataFormat", UNDEFINED)
        if not isinstance(data_format, str) or data_format not in SOUND_FORMATS:
            ctx.log(f"sound {index} had invalid dataFormat {stringify(data_format)}, set to {DEFAULT_SOUND_FORMAT}")
            sound["dataFormat"] = DEFAULT_SOUND_FORMAT

        if "assetId" not in sound:
            ctx.log(f"sound {index} was missing assetId, deleted")
            del sounds[index]
