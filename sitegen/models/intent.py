"""
Intent models - the structured requirements extracted from a request.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .coerce import as_bool, as_str, as_str_tuple, clamp_unit, pick

SITE_TYPES = (
    "saas_landing",
    "ecommerce",
    "portfolio",
    "restaurant",
    "law_firm",
    "healthcare",
    "real_estate",
    "education",
    "nonprofit",
    "event",
    "blog_magazine",
    "local_business",
    "startup_landing",
    "agency_studio",
    "personal_resume",
)

MOODS = (
    "dark_futuristic",
    "clean_minimal",
    "warm_organic",
    "bold_creative",
    "luxury_editorial",
    "neo_brutalist",
    "playful_rounded",
    "corporate_solid",
    "vintage_warm",
    "tech_dashboard",
)

DEFAULT_SITE_TYPE = "startup_landing"
DEFAULT_MOOD = "dark_futuristic"
DEFAULT_CONFIDENCE = 0.5
DEFAULT_NEEDS_GENERATED = ("headline", "subheadline", "features", "cta")


@dataclass(frozen=True)
class ClarifyingQuestion:
    """A question the classifier would ask before building."""
    question: str
    options: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"question": self.question, "options": list(self.options)}


@dataclass(frozen=True)
class ContentHints:
    """What the requester supplied vs. what must be invented."""
    has_logo: bool = False
    has_copy: bool = False
    has_images: bool = False
    needs_generated: Tuple[str, ...] = DEFAULT_NEEDS_GENERATED

    @classmethod
    def from_dict(cls, data: Any) -> "ContentHints":
        if not isinstance(data, dict):
            return cls()
        needs = pick(data, "needs_generated")
        return cls(
            has_logo=as_bool(pick(data, "has_logo")),
            has_copy=as_bool(pick(data, "has_copy")),
            has_images=as_bool(pick(data, "has_images")),
            needs_generated=as_str_tuple(needs) if needs is not None else DEFAULT_NEEDS_GENERATED,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasLogo": self.has_logo,
            "hasCopy": self.has_copy,
            "hasImages": self.has_images,
            "needsGenerated": list(self.needs_generated),
        }


@dataclass(frozen=True)
class IntentResult:
    """Classification of a site request. Read by every later stage."""
    site_type: str
    mood: str
    industry: str = ""
    business_name: str = ""
    suggested_sections: Tuple[str, ...] = ()
    required_features: Tuple[str, ...] = ()
    content_hints: ContentHints = field(default_factory=ContentHints)
    image_keywords: Tuple[str, ...] = ()
    subject_details: str = ""
    target_audience: str = ""
    primary_action: str = ""
    unique_selling_points: Tuple[str, ...] = ()
    confidence: float = DEFAULT_CONFIDENCE
    clarifying_questions: Optional[Tuple[ClarifyingQuestion, ...]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "IntentResult":
        """
        Build from a provider payload, defaulting every absent field.

        Callers decide whether a payload is acceptable at all; this only
        normalizes shape.
        """
        questions = pick(data, "clarifying_questions")
        parsed_questions = None
        if isinstance(questions, list):
            parsed_questions = tuple(
                ClarifyingQuestion(
                    question=as_str(pick(q, "question")),
                    options=as_str_tuple(pick(q, "options")),
                )
                if isinstance(q, dict)
                else ClarifyingQuestion(question=as_str(q))
                for q in questions
            )

        return cls(
            site_type=as_str(pick(data, "site_type"), DEFAULT_SITE_TYPE) or DEFAULT_SITE_TYPE,
            mood=as_str(pick(data, "mood"), DEFAULT_MOOD) or DEFAULT_MOOD,
            industry=as_str(pick(data, "industry")),
            business_name=as_str(pick(data, "business_name")),
            suggested_sections=as_str_tuple(pick(data, "suggested_sections")),
            required_features=as_str_tuple(pick(data, "required_features")),
            content_hints=ContentHints.from_dict(pick(data, "content_hints")),
            image_keywords=as_str_tuple(pick(data, "image_keywords")),
            subject_details=as_str(pick(data, "subject_details")),
            target_audience=as_str(pick(data, "target_audience")),
            primary_action=as_str(pick(data, "primary_action")),
            unique_selling_points=as_str_tuple(pick(data, "unique_selling_points")),
            confidence=clamp_unit(pick(data, "confidence"), DEFAULT_CONFIDENCE),
            clarifying_questions=parsed_questions,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "siteType": self.site_type,
            "industry": self.industry,
            "businessName": self.business_name,
            "mood": self.mood,
            "suggestedSections": list(self.suggested_sections),
            "requiredFeatures": list(self.required_features),
            "contentHints": self.content_hints.to_dict(),
            "imageKeywords": list(self.image_keywords),
            "subjectDetails": self.subject_details,
            "targetAudience": self.target_audience,
            "primaryAction": self.primary_action,
            "uniqueSellingPoints": list(self.unique_selling_points),
            "confidence": self.confidence,
            "clarifyingQuestions": (
                [q.to_dict() for q in self.clarifying_questions]
                if self.clarifying_questions is not None
                else None
            ),
        }
