"""
Quality report models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Severity(Enum):
    """Issue severity. Each level carries a fixed score penalty."""
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


SEVERITY_PENALTY = {
    Severity.CRITICAL: 25,
    Severity.WARNING: 8,
    Severity.INFO: 2,
}

MAX_WARNINGS_TO_PASS = 2


@dataclass
class QualityIssue:
    """A single finding from static analysis."""
    severity: Severity
    category: str
    message: str
    auto_fixable: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "category": self.category,
            "message": self.message,
            "autoFixable": self.auto_fixable,
        }


@dataclass
class QualityMetrics:
    """Snapshot of measurable document properties."""
    html_size: int = 0
    section_count: int = 0
    has_responsive_design: bool = False
    has_animations: bool = False
    has_hover_states: bool = False
    has_smooth_scroll: bool = False
    has_meta_viewport: bool = False
    font_count: int = 0
    image_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "htmlSize": self.html_size,
            "sectionCount": self.section_count,
            "hasResponsiveDesign": self.has_responsive_design,
            "hasAnimations": self.has_animations,
            "hasHoverStates": self.has_hover_states,
            "hasSmoothScroll": self.has_smooth_scroll,
            "hasMetaViewport": self.has_meta_viewport,
            "fontCount": self.font_count,
            "imageCount": self.image_count,
        }


def score_issues(issues: List[QualityIssue]) -> int:
    """score = max(0, 100 - 25*critical - 8*warning - 2*info)"""
    penalty = sum(SEVERITY_PENALTY[issue.severity] for issue in issues)
    return max(0, 100 - penalty)


def issues_pass(issues: List[QualityIssue]) -> bool:
    """No criticals and at most two warnings."""
    critical = sum(1 for i in issues if i.severity == Severity.CRITICAL)
    warnings = sum(1 for i in issues if i.severity == Severity.WARNING)
    return critical == 0 and warnings <= MAX_WARNINGS_TO_PASS


@dataclass
class QualityReport:
    """Score, pass/fail, ordered issues and a metrics snapshot."""
    score: int
    passed: bool
    issues: List[QualityIssue] = field(default_factory=list)
    metrics: QualityMetrics = field(default_factory=QualityMetrics)

    @classmethod
    def from_issues(cls, issues: List[QualityIssue], metrics: QualityMetrics) -> "QualityReport":
        return cls(
            score=score_issues(issues),
            passed=issues_pass(issues),
            issues=list(issues),
            metrics=metrics,
        )

    @classmethod
    def failure(cls, message: str, category: str = "generation") -> "QualityReport":
        """Synthetic zero-score report for a run that produced no document."""
        return cls(
            score=0,
            passed=False,
            issues=[QualityIssue(Severity.CRITICAL, category, message)],
            metrics=QualityMetrics(),
        )

    def count(self, severity: Severity) -> int:
        return sum(1 for i in self.issues if i.severity == severity)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "passed": self.passed,
            "issues": [i.to_dict() for i in self.issues],
            "metrics": self.metrics.to_dict(),
        }
