"""
Tolerant extractors for model output.

Models wrap payloads in markdown fences, lead with prose ("Here is your
JSON:") and trail with commentary. These helpers recover the payload.
"""

import json
import re
from typing import Any

from .errors import ResponseParseError

JSON_FENCE = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?```")
HTML_FENCE = re.compile(r"```(?:html)?\s*\n?([\s\S]*?)\n?```")
DOCUMENT_START = re.compile(r"<!DOCTYPE|<html", re.IGNORECASE)
DOCUMENT_END = "</html>"

RAW_PREVIEW_CHARS = 500


def parse_json_response(raw: str) -> Any:
    """
    Parse JSON from an LLM response.

    Strips a fenced block if present, then decodes the value starting at the
    first '{' or '['. If that fails, retries on the slice up to the last
    matching closer.

    Raises:
        ResponseParseError: with a prefix of the raw text attached
    """
    text = (raw or "").strip()

    fence = JSON_FENCE.search(text)
    if fence:
        text = fence.group(1).strip()

    obj_start = text.find("{")
    arr_start = text.find("[")
    starts = [i for i in (obj_start, arr_start) if i != -1]

    if starts:
        start = min(starts)
        try:
            # Ends at the payload's own closing bracket
            value, _ = json.JSONDecoder().raw_decode(text, start)
            return value
        except json.JSONDecodeError:
            closer = "]" if start == arr_start else "}"
            text = text[start:]
            end = text.rfind(closer)
            if end != -1:
                text = text[: end + 1]

    try:
        return json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        raise ResponseParseError(
            f"Failed to parse JSON from LLM response. "
            f"Raw (first {RAW_PREVIEW_CHARS} chars): {(raw or '')[:RAW_PREVIEW_CHARS]}",
            raw=raw or "",
        ) from e


def extract_html(text: str) -> str:
    """Extract an HTML document from a response that may carry fences or prose."""
    if not text:
        return text

    full = text.strip()
    html = full

    # A fence is trusted only if it holds the document start, and its end too
    # whenever the full text has one (inner backticks end the fence early)
    fence = HTML_FENCE.search(full)
    if fence:
        fenced = fence.group(1).strip()
        has_end = DOCUMENT_END in fenced.lower() or DOCUMENT_END not in full.lower()
        if DOCUMENT_START.search(fenced) and has_end:
            html = fenced

    if not DOCUMENT_START.match(html):
        start = DOCUMENT_START.search(html)
        if start is None:
            return text
        html = html[start.start():]

    end = html.lower().rfind(DOCUMENT_END)
    if end != -1:
        html = html[: end + len(DOCUMENT_END)]

    return html.strip()


def has_document_marker(html: str) -> bool:
    """True when the text carries a document-start marker anywhere."""
    return bool(html) and DOCUMENT_START.search(html) is not None
