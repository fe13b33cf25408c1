from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from result import Err, Ok, Result

from bedrock_workspace.models.enums import ReadErrorCode
from bedrock_workspace.models.workspace import PackageInfo, ReadError, ReadResult
from bedrock_workspace.services.fs import DEFAULT_FS, FileSystem


def read_json(path: Path, fs: FileSystem = DEFAULT_FS) -> ReadResult[Any]:
    """Read and decode a JSON document.

    Returns ``Err`` with ``NOT_FOUND`` when the file is absent or unreadable
    and ``PARSE_ERROR`` when it is not valid JSON.
    """
    if not fs.exists(path):
        return Err(ReadError(code=ReadErrorCode.NOT_FOUND, path=str(path), message="File does not exist"))
    try:
        text = fs.read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        return Err(ReadError(code=ReadErrorCode.NOT_FOUND, path=str(path), message=f"Cannot read file: {exc}"))
    try:
        return Ok(json.loads(text))
    # ValueError also covers integers past the interpreter's digit limit.
    except (ValueError, RecursionError) as exc:
        return Err(ReadError(code=ReadErrorCode.PARSE_ERROR, path=str(path), message=f"Invalid JSON: {exc}"))


def _parse_error(path: Path, message: str) -> Err[ReadError]:
    return Err(ReadError(code=ReadErrorCode.PARSE_ERROR, path=str(path), message=message))


def read_package_info(path: Path, fs: FileSystem = DEFAULT_FS) -> ReadResult[PackageInfo]:
    match read_json(path, fs):
        case Ok(payload) if isinstance(payload, dict):
            return Ok(PackageInfo.from_dict(payload))
        case Ok(_):
            return _parse_error(path, "package.json must be a JSON object")
        case Err(error):
            return Err(error)


def _version_triple(value: Any) -> tuple[int, int, int] | None:
    if not isinstance(value, list) or len(value) != 3:
        return None
    if not all(isinstance(part, int) and not isinstance(part, bool) for part in value):
        return None
    return (value[0], value[1], value[2])


def read_manifest_version(path: Path, fs: FileSystem = DEFAULT_FS) -> ReadResult[tuple[int, int, int]]:
    """Read ``header.version`` from a behavior-pack manifest."""
    match read_json(path, fs):
        case Ok(payload):
            header = payload.get("header") if isinstance(payload, dict) else None
            version = _version_triple(header.get("version")) if isinstance(header, dict) else None
            if version is None:
                return _parse_error(path, "header.version is missing or not three integers")
            return Ok(version)
        case Err(error):
            return Err(error)


def manifest_version_or_none(path: Path, fs: FileSystem = DEFAULT_FS) -> tuple[int, int, int] | None:
    # Every failure variant maps to "no version"; manifests never abort a listing.
    result: Result[tuple[int, int, int], ReadError] = read_manifest_version(path, fs)
    return result.ok()
