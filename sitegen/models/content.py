"""
Content plan models - ordered page sections with literal copy.
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Tuple

from .coerce import as_str, as_str_tuple, pick

DEFAULT_LAYOUT = "three_col_cards"
DEFAULT_MOBILE_LAYOUT = "single_column_stack"
DEFAULT_PRIMARY_CTA = "Get Started"
DEFAULT_SECONDARY_CTA = "Learn More"


@dataclass(frozen=True)
class Section:
    """One page section."""
    id: str
    type: str
    layout: str = DEFAULT_LAYOUT
    content: Dict[str, Any] = field(default_factory=dict, hash=False)
    visual_elements: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any, index: int = 0) -> "Section":
        if not isinstance(data, dict):
            data = {}
        section_type = as_str(pick(data, "type")) or "section"
        content = pick(data, "content", {})
        return cls(
            id=as_str(pick(data, "id")) or f"{section_type}-{index + 1}",
            type=section_type,
            layout=as_str(pick(data, "layout")) or DEFAULT_LAYOUT,
            content=content if isinstance(content, dict) else {"text": content},
            visual_elements=as_str_tuple(pick(data, "visual_elements")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "layout": self.layout,
            "content": self.content,
            "visualElements": list(self.visual_elements),
        }


@dataclass(frozen=True)
class ContentMetadata:
    """Plan-level metadata plus context passed through from the intent."""
    total_sections: int
    estimated_scroll_length: str
    mobile_layout: str = DEFAULT_MOBILE_LAYOUT
    primary_cta: str = DEFAULT_PRIMARY_CTA
    secondary_cta: str = DEFAULT_SECONDARY_CTA

    # Pass-through context from IntentResult
    image_keywords: Tuple[str, ...] = ()
    subject_details: str = ""
    target_audience: str = ""
    primary_action: str = ""
    unique_selling_points: Tuple[str, ...] = ()

    @classmethod
    def default_for(cls, section_count: int) -> "ContentMetadata":
        return cls(
            total_sections=section_count,
            estimated_scroll_length=f"{max(3, section_count - 1)} viewports",
        )

    @classmethod
    def from_dict(cls, data: Any, section_count: int) -> "ContentMetadata":
        defaults = cls.default_for(section_count)
        if not isinstance(data, dict):
            return defaults

        total = pick(data, "total_sections", section_count)
        try:
            total = int(total)
        except (TypeError, ValueError):
            total = section_count

        return cls(
            total_sections=total,
            estimated_scroll_length=as_str(pick(data, "estimated_scroll_length"))
            or defaults.estimated_scroll_length,
            mobile_layout=as_str(pick(data, "mobile_layout")) or defaults.mobile_layout,
            primary_cta=as_str(pick(data, "primary_cta")) or defaults.primary_cta,
            secondary_cta=as_str(pick(data, "secondary_cta")) or defaults.secondary_cta,
            image_keywords=as_str_tuple(pick(data, "image_keywords")),
            subject_details=as_str(pick(data, "subject_details")),
            target_audience=as_str(pick(data, "target_audience")),
            primary_action=as_str(pick(data, "primary_action")),
            unique_selling_points=as_str_tuple(pick(data, "unique_selling_points")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalSections": self.total_sections,
            "estimatedScrollLength": self.estimated_scroll_length,
            "mobileLayout": self.mobile_layout,
            "primaryCta": self.primary_cta,
            "secondaryCta": self.secondary_cta,
            "imageKeywords": list(self.image_keywords),
            "subjectDetails": self.subject_details,
            "targetAudience": self.target_audience,
            "primaryAction": self.primary_action,
            "uniqueSellingPoints": list(self.unique_selling_points),
        }


@dataclass(frozen=True)
class ContentPlan:
    """Ordered sections plus metadata. Sections are never empty."""
    sections: Tuple[Section, ...]
    metadata: ContentMetadata

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentPlan":
        raw_sections = pick(data, "sections", [])
        if not isinstance(raw_sections, list):
            raw_sections = []
        sections = tuple(Section.from_dict(s, i) for i, s in enumerate(raw_sections))
        return cls(
            sections=sections,
            metadata=ContentMetadata.from_dict(pick(data, "metadata"), len(sections)),
        )

    def with_intent_context(self, intent) -> "ContentPlan":
        """Copy subject/audience context from the intent into the metadata.

        Empty intent fields leave the plan's own values in place.
        """
        context = {
            "image_keywords": tuple(intent.image_keywords),
            "subject_details": intent.subject_details,
            "target_audience": intent.target_audience,
            "primary_action": intent.primary_action,
            "unique_selling_points": tuple(intent.unique_selling_points),
        }
        context = {key: value for key, value in context.items() if value}
        return replace(self, metadata=replace(self.metadata, **context))

    @property
    def section_ids(self) -> Tuple[str, ...]:
        return tuple(s.id for s in self.sections)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sections": [s.to_dict() for s in self.sections],
            "metadata": self.metadata.to_dict(),
        }
