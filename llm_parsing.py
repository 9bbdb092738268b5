"""Turn free-form model output into validated response objects."""
from __future__ import annotations
import json
import logging
from typing import Optional, TypeVar

from pydantic import BaseModel, ValidationError

from llm_errors import ParseError

logger = logging.getLogger(__name__)

FRAGMENT_LENGTH = 500

T = TypeVar("T", bound=BaseModel)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```)."""
    cleaned = text.strip()
    if cleaned.startswith("```"):
        newline = cleaned.find("\n")
        first_line = cleaned[3:newline] if newline != -1 else cleaned[3:]
        if first_line.strip().isalnum() or not first_line.strip():
            cleaned = cleaned[newline + 1 :] if newline != -1 else ""
        else:
            cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


def _balanced_object_end(text: str, start: int) -> Optional[int]:
    """Index of the brace closing the object opened at ``start``."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
    return None


def extract_json_text(raw: str) -> str:
    """Return the JSON object embedded in ``raw``.

    Commentary before or after the object is dropped. Braces inside string
    values are honoured; when the object never closes the text is sliced
    from the first ``{`` to the last ``}``.
    """
    cleaned = strip_code_fences(raw)
    start = cleaned.find("{")
    if start == -1:
        return cleaned
    end = _balanced_object_end(cleaned, start)
    if end is None:
        end = cleaned.rfind("}")
        if end < start:
            return cleaned[start:]
    return cleaned[start : end + 1]


def decode_response(raw: str, model: type[T]) -> T:
    """Parse ``raw`` model output into ``model`` or raise ``ParseError``."""
    text = extract_json_text(raw)
    fragment = text[:FRAGMENT_LENGTH]
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("JSON decode failed: %s; payload starts %r", e, fragment[:120])
        raise ParseError(f"JSON decode failed: {e.msg} at position {e.pos}", fragment)
    try:
        return model.model_validate(data)
    except ValidationError as e:
        first = e.errors()[0]
        path = ".".join(str(p) for p in first["loc"])
        logger.warning("response failed validation at %s: %s", path or "<root>", first["msg"])
        raise ParseError(f"JSON decode failed: {first['msg']} at {path or '<root>'}", fragment, path)
