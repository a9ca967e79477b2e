from __future__ import annotations

import io
import re
import zipfile

DESCRIPTOR_PATTERN = re.compile(r"(?:^|/)(?:project|sprite)\.json$")

# Every entry gets the same timestamp so identical input produces identical bytes.
FIXED_DATE_TIME = (2024, 3, 14, 0, 0, 0)


class ArchiveError(ValueError):
    """Raised when an archive cannot be read or has no descriptor."""


def open_archive(data: bytes) -> zipfile.ZipFile:
    try:
        return zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"Input is not a valid zip archive: {exc}") from exc


def find_descriptor(zf: zipfile.ZipFile) -> zipfile.ZipInfo:
    for info in zf.infolist():
        if not info.is_dir() and DESCRIPTOR_PATTERN.search(info.filename):
            return info
    raise ArchiveError("Could not find project.json or sprite.json.")


def read_descriptor(data: bytes) -> tuple[str, str]:
    with open_archive(data) as zf:
        info = find_descriptor(zf)
        try:
            raw = zf.read(info)
        except zipfile.BadZipFile as exc:
            raise ArchiveError(f"Could not read '{info.filename}': {exc}") from exc
    try:
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ArchiveError(f"'{info.filename}' is not valid UTF-8: {exc}") from exc
    return info.filename, text


def replace_descriptor(
    data: bytes,
    entry_name: str,
    text: str,
    date_time: tuple[int, int, int, int, int, int] = FIXED_DATE_TIME,
) -> bytes:
    output = io.BytesIO()
    with open_archive(data) as source, zipfile.ZipFile(output, "w", compression=zipfile.ZIP_DEFLATED) as target:
        for info in source.infolist():
            if info.filename == entry_name:
                payload = text.encode("utf-8")
            else:
                payload = source.read(info)
            target.writestr(_stamped(info.filename, date_time), payload)
    return output.getvalue()


def _stamped(filename: str, date_time: tuple[int, int, int, int, int, int]) -> zipfile.ZipInfo:
    info = zipfile.ZipInfo(filename=filename, date_time=date_time)
    info.compress_type = zipfile.ZIP_DEFLATED
    if filename.endswith("/"):
        info.external_attr = (0o40755 << 16) | 0x10
    else:
        info.external_attr = 0o644 << 16
    return info
