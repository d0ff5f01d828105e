"""Load a results document, drop the profile field and store the records."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import orjson
from pydantic import ValidationError

from results_cleaner.config import Settings, get_settings
from results_cleaner.errors import (
    DocumentDepthError,
    DocumentParseError,
    DocumentReadError,
    DocumentShapeError,
    OutputEncodeError,
    OutputWriteError,
)
from results_cleaner.transform.models import CleanReport, ResultsDocument
from results_cleaner.transform.projection import count_carrying, project_records

logger = logging.getLogger(__name__)

INPUT_FILE = "input.json"
OUTPUT_FILE = "output.json"
DROPPED_FIELD = "profile"
SUCCESS_MESSAGE = "Created output.json with results only."

_EXPECTED_BY_ERROR_TYPE = {
    "model_type": "object",
    "dict_type": "object",
    "list_type": "array",
}

LocationPart = Union[str, int]


def _render_location(parts: Sequence[LocationPart]) -> str:
    return "$" + "".join(
        f"[{part}]" if isinstance(part, int) else f".{part}" for part in parts
    )


def _json_type(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _enforce_depth_limit(payload: Any, max_depth: int) -> None:
    stack: List[Tuple[Any, int, Tuple[LocationPart, ...]]] = [(payload, 1, ())]
    while stack:
        node, depth, parts = stack.pop()
        if depth > max_depth:
            raise DocumentDepthError(_render_location(parts), max_depth)
        if isinstance(node, dict):
            for key, child in node.items():
                stack.append((child, depth + 1, parts + (key,)))
        elif isinstance(node, list):
            for index, child in enumerate(node):
                stack.append((child, depth + 1, parts + (index,)))


def load_document(path: str | Path, settings: Settings | None = None) -> Any:
    """
    Read ``path`` and parse it as JSON.

    Raises:
        DocumentReadError: If the file is missing, unreadable or too large
        DocumentParseError: If the content is not valid UTF-8 JSON
        DocumentDepthError: If the JSON nests deeper than ``max_json_depth``
    """
    settings = settings or get_settings()
    source = Path(path)
    try:
        size = source.stat().st_size
    except OSError as exc:
        logger.debug(f"Failed to stat {source}: {exc!r}")
        raise DocumentReadError(f"Cannot read {source}: {exc.strerror or exc}") from exc

    if size > settings.max_input_bytes:
        raise DocumentReadError(
            f"{source} is {size} bytes, over the {settings.max_input_bytes} byte limit"
        )

    try:
        raw = source.read_bytes()
    except OSError as exc:
        logger.debug(f"Failed to read {source}: {exc!r}")
        raise DocumentReadError(f"Cannot read {source}: {exc.strerror or exc}") from exc

    try:
        document = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        logger.debug(f"Failed to parse {source}: {exc!r}")
        raise DocumentParseError(f"{source} is not valid JSON: {exc}") from exc

    _enforce_depth_limit(document, settings.max_json_depth)
    logger.debug(f"Loaded {len(raw)} bytes from {source}")
    return document


def _shape_error(exc: ValidationError) -> DocumentShapeError:
    error = exc.errors()[0]
    location: Sequence[Any] = error.get("loc", ())
    expected = _EXPECTED_BY_ERROR_TYPE.get(error.get("type", ""), error.get("msg", ""))
    found = _json_type(error.get("input"))
    return DocumentShapeError(_render_location(location), expected, found)


def extract_results(document: Any) -> List[Dict[str, Any]]:
    """
    Return the ``results`` records of ``document``.
    An absent or null ``results`` field yields an empty list.
    """
    try:
        parsed = ResultsDocument.model_validate(document)
    except ValidationError as exc:
        shape_error = _shape_error(exc)
        logger.debug(f"Rejected document shape: {exc}")
        raise shape_error from exc
    return parsed.results or []


def serialize_records(records: Sequence[Dict[str, Any]]) -> bytes:
    try:
        return orjson.dumps(list(records), option=orjson.OPT_INDENT_2)
    except orjson.JSONEncodeError as exc:
        logger.debug(f"Failed to encode records: {exc!r}")
        raise OutputEncodeError(f"Records cannot be encoded as JSON: {exc}") from exc


def _new_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def store_output(path: str | Path, payload: bytes) -> int:
    """
    Replace ``path`` with ``payload`` and return the number of bytes written.

    The bytes land in a temporary file beside the destination first and are
    moved into place once fully written, so it is never left half written.
    A symlinked ``path`` is written through to its target, and an existing
    file keeps its permission bits.
    """
    target = Path(os.path.realpath(path))
    try:
        mode = stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        mode = _new_file_mode()
    except OSError as exc:
        raise OutputWriteError(f"Cannot write {path}: {exc.strerror or exc}") from exc

    temp_path: Optional[Path] = None
    try:
        fd, temp_name = tempfile.mkstemp(
            prefix=f".{target.name}.", suffix=".tmp", dir=target.parent
        )
        temp_path = Path(temp_name)
        with os.fdopen(fd, "wb") as handle:
            handle.write(payload)
            handle.flush()
        temp_path.chmod(mode)
        os.replace(temp_path, target)
    except OSError as exc:
        logger.debug(f"Failed to write {target}: {exc!r}")
        if temp_path is not None:
            temp_path.unlink(missing_ok=True)
        raise OutputWriteError(f"Cannot write {path}: {exc.strerror or exc}") from exc

    logger.debug(f"Wrote {len(payload)} bytes to {target}")
    return len(payload)


def clean_results(
    input_path: str | Path = INPUT_FILE,
    output_path: str | Path = OUTPUT_FILE,
    settings: Settings | None = None,
) -> CleanReport:
    """Run Load, Extract, Project, Serialize and Store in order."""
    settings = settings or get_settings()
    document = load_document(input_path, settings)
    records = extract_results(document)
    projected = list(project_records(records, DROPPED_FIELD))
    payload = serialize_records(projected)
    bytes_written = store_output(output_path, payload)

    report = CleanReport(
        input_path=Path(input_path),
        output_path=Path(output_path),
        records=len(projected),
        profiles_removed=count_carrying(records, DROPPED_FIELD),
        bytes_written=bytes_written,
    )
    logger.info(
        f"Cleaned {report.records} records ({report.profiles_removed} with "
        f"{DROPPED_FIELD!r}) into {report.output_path}"
    )
    return report
