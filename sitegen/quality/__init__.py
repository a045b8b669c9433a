"""
Quality Validation

Stage 5 of the pipeline. Pure static analysis plus a deterministic fixer;
the model-backed review pass is optional and gated by the orchestrator.

Components:
- DocumentQualityChecker: registered static checks and scoring
- auto_fix_html: idempotent structural fixes
- llm_review_pass: model repair pass (advisory)
"""

from .checks import DocumentCheck, DocumentQualityChecker, validate_html
from .fixes import auto_fix_html
from .review import (
    MIN_REVIEW_LENGTH_RATIO,
    REVIEW_SCORE_THRESHOLD,
    accept_review,
    build_review_prompt,
    llm_review_pass,
)

__all__ = [
    # Checks
    "DocumentQualityChecker",
    "DocumentCheck",
    "validate_html",
    # Fixes
    "auto_fix_html",
    # Review
    "llm_review_pass",
    "build_review_prompt",
    "accept_review",
    "REVIEW_SCORE_THRESHOLD",
    "MIN_REVIEW_LENGTH_RATIO",
]
