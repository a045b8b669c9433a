"""
Pipeline models - tiers, per-stage results and the terminal result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .content import ContentPlan
from .intent import IntentResult
from .report import QualityReport
from .style import StyleSystem


class Tier(Enum):
    """Quality tier - selects which stages run and at what network cost."""
    FAST = "fast"
    BALANCED = "balanced"
    BEST = "best"

    @classmethod
    def parse(cls, value: Any, default: "Tier" = None) -> "Tier":
        """Lenient lookup; unknown values fall back to `default` (balanced)."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return default or cls.BALANCED


class StageStatus(Enum):
    SUCCESS = "success"
    ERROR = "error"
    SKIPPED = "skipped"


class StageName:
    """Stage identifiers, in pipeline order."""
    INTENT = "intent"
    DESIGN = "design"
    CONTENT = "content"
    CODEGEN = "codegen"
    QUALITY = "quality"

    ALL = (INTENT, DESIGN, CONTENT, CODEGEN, QUALITY)


STAGE_DESCRIPTIONS = {
    StageName.INTENT: "Analyzing your request",
    StageName.DESIGN: "Creating design system",
    StageName.CONTENT: "Planning content and copy",
    StageName.CODEGEN: "Generating website code",
    StageName.QUALITY: "Running quality checks",
}


def _serialize(value: Any) -> Any:
    if value is None:
        return None
    if hasattr(value, "to_dict"):
        return value.to_dict()
    return value


@dataclass
class PipelineStageResult:
    """Outcome of one stage invocation."""
    stage: str
    status: StageStatus
    duration_ms: int = 0
    data: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == StageStatus.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "stage": self.stage,
            "status": self.status.value,
            "durationMs": self.duration_ms,
        }
        if self.data is not None:
            result["data"] = _serialize(self.data)
        if self.error is not None:
            result["error"] = self.error
        return result


@dataclass(frozen=True)
class PipelineInput:
    """Inbound request to the pipeline."""
    prompt: str
    tier: Tier = Tier.BALANCED
    model: Optional[str] = None


@dataclass(frozen=True)
class PipelineResult:
    """Terminal artifact of a pipeline run."""
    html: str
    style_system: Optional[StyleSystem]
    content_plan: Optional[ContentPlan]
    intent: Optional[IntentResult]
    quality_report: QualityReport
    stages: List[PipelineStageResult] = field(default_factory=list)
    total_duration_ms: int = 0
    model: str = ""
    tier: Tier = Tier.BALANCED

    def stage(self, name: str) -> Optional[PipelineStageResult]:
        for result in self.stages:
            if result.stage == name:
                return result
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "html": self.html,
            "styleSystem": _serialize(self.style_system),
            "contentPlan": _serialize(self.content_plan),
            "intent": _serialize(self.intent),
            "qualityReport": self.quality_report.to_dict(),
            "stages": [s.to_dict() for s in self.stages],
            "totalDurationMs": self.total_duration_ms,
            "model": self.model,
            "tier": self.tier.value,
        }
