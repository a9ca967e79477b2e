from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from platforms import get_platform  # noqa: E402
from validators import FixContext  # noqa: E402


def make_costume(name: str = "costume1", **overrides) -> dict:
    costume = {
        "name": name,
        "bitmapResolution": 1,
        "dataFormat": "svg",
        "assetId": "0123456789abcdef0123456789abcdef",
        "md5ext": "0123456789abcdef0123456789abcdef.svg",
        "rotationCenterX": 48,
        "rotationCenterY": 50,
    }
    costume.update(overrides)
    return costume


def make_sound(name: str = "pop", **overrides) -> dict:
    sound = {
        "name": name,
        "assetId": "83a9787d4cb6f3b7632b4ddfebf74367",
        "dataFormat": "wav",
        "format": "",
        "rate": 48000,
        "sampleCount": 1123,
        "md5ext": "83a9787d4cb6f3b7632b4ddfebf74367.wav",
    }
    sound.update(overrides)
    return sound


def make_stage(**overrides) -> dict:
    stage = {
        "isStage": True,
        "name": "Stage",
        "variables": {},
        "lists": {},
        "broadcasts": {},
        "blocks": {},
        "comments": {},
        "currentCostume": 0,
        "costumes": [make_costume("backdrop1", rotationCenterX=240, rotationCenterY=180)],
        "sounds": [],
        "volume": 100,
        "layerOrder": 0,
        "tempo": 60,
        "videoTransparency": 50,
        "videoState": "on",
        "textToSpeechLanguage": None,
    }
    stage.update(overrides)
    return stage


def make_sprite(name: str = "Sprite1", **overrides) -> dict:
    sprite = {
        "isStage": False,
        "name": name,
        "variables": {},
        "lists": {},
        "broadcasts": {},
        "blocks": {},
        "comments": {},
        "currentCostume": 0,
        "costumes": [make_costume()],
        "sounds": [make_sound()],
        "volume": 100,
        "layerOrder": 1,
        "visible": True,
        "x": 0,
        "y": 0,
        "size": 100,
        "direction": 90,
        "draggable": False,
        "rotationStyle": "all around",
    }
    sprite.update(overrides)
    return sprite


def make_project(*targets: dict, **overrides) -> dict:
    project = {
        "targets": list(targets) if targets else [make_stage(), make_sprite()],
        "monitors": [],
        "extensions": [],
        "meta": {"semver": "3.0.0", "vm": "0.2.0", "agent": ""},
    }
    project.update(overrides)
    return project


@pytest.fixture
def ctx_logs() -> tuple[FixContext, list[str]]:
    logs: list[str] = []
    return FixContext(platform=get_platform("scratch"), log_callback=logs.append), logs
