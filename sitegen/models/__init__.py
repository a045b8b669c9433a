"""
Site Generation Pipeline - Data Models

Shared data models used across the pipeline. Records produced by a stage
are immutable; the quality report is recomputed after fixes.
"""

from .content import ContentMetadata, ContentPlan, Section
from .intent import (
    DEFAULT_MOOD,
    MOODS,
    SITE_TYPES,
    ClarifyingQuestion,
    ContentHints,
    IntentResult,
)
from .pipeline import (
    STAGE_DESCRIPTIONS,
    PipelineInput,
    PipelineResult,
    PipelineStageResult,
    StageName,
    StageStatus,
    Tier,
)
from .report import (
    QualityIssue,
    QualityMetrics,
    QualityReport,
    Severity,
    issues_pass,
    score_issues,
)
from .style import (
    Animations,
    ColorPalette,
    Effects,
    FontPairing,
    Spacing,
    StyleSystem,
    Typography,
)

__all__ = [
    # Intent
    "IntentResult",
    "ContentHints",
    "ClarifyingQuestion",
    "SITE_TYPES",
    "MOODS",
    "DEFAULT_MOOD",

    # Style
    "StyleSystem",
    "ColorPalette",
    "FontPairing",
    "Typography",
    "Spacing",
    "Effects",
    "Animations",

    # Content
    "ContentPlan",
    "ContentMetadata",
    "Section",

    # Quality
    "QualityReport",
    "QualityIssue",
    "QualityMetrics",
    "Severity",
    "score_issues",
    "issues_pass",

    # Pipeline
    "Tier",
    "StageName",
    "StageStatus",
    "STAGE_DESCRIPTIONS",
    "PipelineInput",
    "PipelineStageResult",
    "PipelineResult",
]
