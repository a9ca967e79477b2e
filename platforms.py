from __future__ import annotations

from dataclasses import dataclass


class UnknownPlatformError(ValueError):
    """Raised when a rule-set name is not in the platform table."""


SCRATCH_EXTENSIONS = frozenset(
    {
        "control",
        "data",
        "event",
        "looks",
        "motion",
        "operators",
        "procedures",
        # argument_reporter_* blocks are not an extension but show up as opcode prefixes.
        "argument",
        "sensing",
        "sound",
        "pen",
        "wedo2",
        "music",
        "microbit",
        "text2speech",
        "translate",
        "videoSensing",
        "ev3",
        "makeymakey",
        "boost",
        "gdxfor",
    }
)

SCRATCH_COMMENT_LIMIT = 8000


@dataclass(frozen=True)
class Platform:
    key: str
    name: str
    builtin_extensions: frozenset[str]
    require_extensions: bool
    max_comment_length: int | None


PLATFORMS: dict[str, Platform] = {
    "scratch": Platform(
        key="scratch",
        name="Scratch",
        builtin_extensions=SCRATCH_EXTENSIONS,
        require_extensions=True,
        max_comment_length=SCRATCH_COMMENT_LIMIT,
    ),
    "turbowarp": Platform(
        key="turbowarp",
        name="TurboWarp",
        builtin_extensions=SCRATCH_EXTENSIONS | {"tw"},
        require_extensions=False,
        max_comment_length=None,
    ),
}

DEFAULT_PLATFORM = "scratch"


def get_platform(platform: str | Platform) -> Platform:
    if isinstance(platform, Platform):
        return platform
    resolved = PLATFORMS.get(platform)
    if resolved is None:
        known = ", ".join(sorted(PLATFORMS))
        raise UnknownPlatformError(f"Unknown platform '{platform}'. Expected one of: {known}.")
    return resolved
