"""
Deterministic auto-fixes for generated documents.

Each fix is inserted only when its marker is absent, so applying the
fixer twice yields the same document.
"""

import logging

from .checks import has_doctype

logger = logging.getLogger(__name__)

DOCTYPE = "<!DOCTYPE html>\n"
VIEWPORT_META = '\n  <meta name="viewport" content="width=device-width, initial-scale=1.0">'
CHARSET_META = '\n  <meta charset="UTF-8">'
SMOOTH_SCROLL_RULE = "\n  html { scroll-behavior: smooth; }"
SMOOTH_SCROLL_STYLE = "  <style>html { scroll-behavior: smooth; }</style>\n"


def auto_fix_html(html: str) -> str:
    """Insert doctype, viewport, charset and smooth scroll where missing."""
    fixed = html or ""
    applied = []

    if not has_doctype(fixed):
        fixed = DOCTYPE + fixed
        applied.append("doctype")

    if "viewport" not in fixed and "<head>" in fixed:
        fixed = fixed.replace("<head>", "<head>" + VIEWPORT_META, 1)
        applied.append("viewport")

    if "charset" not in fixed and "<head>" in fixed:
        fixed = fixed.replace("<head>", "<head>" + CHARSET_META, 1)
        applied.append("charset")

    if "scroll-behavior" not in fixed:
        if "<style>" in fixed:
            fixed = fixed.replace("<style>", "<style>" + SMOOTH_SCROLL_RULE, 1)
            applied.append("smooth-scroll")
        elif "</head>" in fixed:
            fixed = fixed.replace("</head>", SMOOTH_SCROLL_STYLE + "</head>", 1)
            applied.append("smooth-scroll")

    if applied:
        logger.info(f"[quality] Auto-fixed: {', '.join(applied)}")
    return fixed
