"""Reading and rewriting the ``version`` field of a JSON manifest.

The rewrite keeps every other field and the key order, uses two-space
indentation and ends with a single newline, so the release diff is the
version line only (for manifests already in that format). The file is
overwritten in place.
"""

from __future__ import annotations

import json
from pathlib import Path

from relflow.core.result import Err, Ok, Result
from relflow.core.structured import StrDict, as_str_dict
from relflow.release.errors import ReleaseError

__all__ = ["read_manifest", "read_manifest_version", "write_manifest_version"]


def read_manifest(path: Path) -> Result[StrDict, ReleaseError]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="manifest_io",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"invalid JSON in {path.name}: {e}",
                hint=str(path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"invalid JSON root in {path.name}",
                hint=str(path),
            )
        )
    return Ok(data)


def _version_field(data: StrDict, path: Path) -> Result[str, ReleaseError]:
    value = data.get("version")
    if not isinstance(value, str):
        return Err(
            ReleaseError(
                kind="manifest_invalid",
                message=f"missing version in {path.name}",
                hint=str(path),
            )
        )
    return Ok(value)


def read_manifest_version(path: Path) -> Result[str, ReleaseError]:
    data = read_manifest(path)
    if isinstance(data, Err):
        return data
    return _version_field(data.value, path)


def write_manifest_version(path: Path, version: str) -> Result[None, ReleaseError]:
    """Set the manifest's ``version`` to ``version`` and rewrite the file."""
    data = read_manifest(path)
    if isinstance(data, Err):
        return data
    current = _version_field(data.value, path)
    if isinstance(current, Err):
        return current

    data.value["version"] = version

    try:
        path.write_text(
            json.dumps(data.value, indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        return Err(
            ReleaseError(
                kind="manifest_io",
                message=f"failed to write {path.name}: {e}",
                hint=str(path),
            )
        )
    return Ok(None)
