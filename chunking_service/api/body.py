"""Request body sniffing for ``POST /chunk``.

Callers send the document in several shapes: a JSON object, a JSON-encoded
string (sometimes wrapping an object), a url-encoded form, or plain text.
Everything is resolved here into one of two explicit variants before the
chunking core sees a value:

* ``JsonBody``    - a mapping of fields (``content``/``text``/``data``,
  ``chunkSize``, ``strategy``)
* ``RawTextBody`` - the whole body is the document
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
import json
from typing import Any, Union
from urllib.parse import parse_qsl

__all__ = [
    "CONTENT_FIELDS",
    "JsonBody",
    "ParsedBody",
    "RawTextBody",
    "parse_body",
    "to_request_fields",
]

CONTENT_FIELDS = ("content", "text", "data")

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class JsonBody:
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class RawTextBody:
    text: str


ParsedBody = Union[JsonBody, RawTextBody]


def _decode_json(text: str) -> tuple[bool, Any]:
    try:
        return True, json.loads(text)
    except ValueError:
        return False, None


def parse_body(raw: bytes, content_type: str | None = None) -> ParsedBody:
    """Classify a raw request body."""
    text = raw.decode("utf-8", errors="replace")

    if content_type and content_type.split(";")[0].strip().lower() == FORM_CONTENT_TYPE:
        return JsonBody(dict(parse_qsl(text, keep_blank_values=True)))

    ok, value = _decode_json(text)
    if not ok:
        return RawTextBody(text)

    if isinstance(value, dict):
        return JsonBody(value)

    if isinstance(value, str):
        # A JSON string may itself carry an encoded object
        ok, inner = _decode_json(value)
        if ok and isinstance(inner, dict):
            return JsonBody(inner)
        return RawTextBody(value)

    # Numbers, arrays, null: treat the original text as the document
    return RawTextBody(text)


def to_request_fields(body: ParsedBody) -> dict[str, Any]:
    """Map a parsed body onto the canonical ``ChunkRequest`` fields."""
    if isinstance(body, RawTextBody):
        return {"content": body.text}

    content = next(
        (body.data[name] for name in CONTENT_FIELDS if body.data.get(name)), None
    )
    fields: dict[str, Any] = {"content": content}
    for name in ("chunkSize", "strategy"):
        if body.data.get(name) not in (None, ""):
            fields[name] = body.data[name]
    return fields
