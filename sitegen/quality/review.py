"""
Model-backed review pass.

Optional and advisory: asks the model to repair a document given the
static issue list. Callers re-validate the result and discard it when it
collapsed (see `accept_review`).
"""

import logging
from typing import TYPE_CHECKING

from ..gateway import extract_html
from ..models import QualityReport, Severity, StyleSystem

if TYPE_CHECKING:
    from ..gateway import GatewayClient

logger = logging.getLogger(__name__)

# Product tuning choice: reviews run below this score (best tier only)
REVIEW_SCORE_THRESHOLD = 75

REVIEW_MAX_TOKENS = 16000
REVIEW_TEMPERATURE = 0.3

# Reviewed output shorter than this fraction of the input is treated as truncated
MIN_REVIEW_LENGTH_RATIO = 0.5


def build_review_prompt(style: StyleSystem, report: QualityReport) -> str:
    issues = "\n".join(
        f"- [{issue.severity.value}] {issue.category}: {issue.message}"
        for issue in report.issues
        if issue.severity != Severity.INFO
    )

    return f"""Review and fix this HTML page. The automated quality check found these issues:

{issues or 'No major issues found.'}

Quality score: {report.score}/100

Design system reference:
- Primary color: {style.colors.primary}
- Background: {style.colors.background}
- Display font: {style.fonts.display}
- Body font: {style.fonts.body}

RULES:
1. Fix ALL listed issues
2. ALL colors use the design system (no Tailwind defaults)
3. ALL interactive elements have hover states
4. Hero headline is large ({style.typography.hero_size})
5. Content is visible without JavaScript (no opacity:0 defaults)
6. Output the COMPLETE fixed HTML - no explanation, no markdown
7. If the page is already good, output it unchanged

Start with <!DOCTYPE html>."""


async def llm_review_pass(
    html: str,
    style: StyleSystem,
    report: QualityReport,
    gateway: "GatewayClient",
    model: str = None,
) -> str:
    """
    Ask the model to repair `html` in place.

    Returns the extracted document; raises whatever the gateway raises.
    """
    logger.info(f"[quality] Running review pass (score {report.score})...")
    raw = await gateway.call(
        [
            {"role": "system", "content": build_review_prompt(style, report)},
            {"role": "user", "content": html},
        ],
        model=model,
        max_tokens=REVIEW_MAX_TOKENS,
        temperature=REVIEW_TEMPERATURE,
    )
    return extract_html(raw)


def accept_review(original: str, reviewed: str) -> bool:
    """Reviewed output must keep at least half the original length."""
    return bool(reviewed) and len(reviewed) > len(original) * MIN_REVIEW_LENGTH_RATIO
