"""
Stage 1: Intent Classification

Turns a free-text request into an IntentResult: site type, mood, ordered
sections, subject detail and audience. One low-temperature JSON call.
"""

import logging
import re

from ..models import IntentResult, MOODS, SITE_TYPES
from ..models.coerce import pick
from ..models.intent import DEFAULT_MOOD, DEFAULT_SITE_TYPE, ContentHints
from .base import BaseStage, StageValidationError

logger = logging.getLogger(__name__)

FALLBACK_SECTIONS = ("hero", "features", "testimonials", "cta", "footer")
FALLBACK_FEATURES = ("responsive", "animations")
FALLBACK_CONFIDENCE = 0.3
DEFAULT_BUSINESS_NAME = "Company"

_QUOTED_NAME = re.compile(r"(?<![A-Za-z])[\"'“‘]([^\"'“”‘’]{2,60})[\"'”’]")
_NAMED_AFTER = re.compile(r"(?:for|called|named)\s+([A-Z][a-zA-Z]+(?:\s[A-Z][a-zA-Z]+)?)")
_CAMEL_WORD = re.compile(r"\b([A-Z][a-z]+(?:[A-Z][a-z]+)+)\b")


SYSTEM_PROMPT = f"""You are an expert web design requirements analyst. Given a request for a website, analyze it deeply and output a structured JSON requirements object.

## Analysis (work through all of these before writing JSON)
1. Subject: what EXACTLY is this site about? Extract every noun, adjective and detail.
2. Images: which specific images would make it feel personal? ("Australian Shepherd", not "dog"). Think of 5-8.
3. Tone: what should a visitor feel - playful, professional, luxurious, cozy?
4. Audience: who visits and what do they need to see?
5. Uniqueness: what makes THIS site different from a generic template?
6. Sections: which sections serve this subject? A restaurant needs a menu, a portfolio needs case studies.
7. Action: what should visitors DO after seeing the site?

## Site Type Taxonomy
{", ".join(SITE_TYPES)}

## Mood Types
- dark_futuristic: deep navy/black background, neon accents, glassmorphism
- clean_minimal: white background, subtle shadows, generous whitespace
- warm_organic: cream/sage/terracotta palette, serif display fonts, soft shapes
- bold_creative: bright gradients, oversized type, asymmetric grid
- luxury_editorial: tight letter-spacing, gold/dark palette, full-bleed images
- neo_brutalist: thick borders, 0px radius, mono fonts, hard shadows
- playful_rounded: rounded shapes, pastel colors, bouncy motion
- corporate_solid: blue/gray palette, clean sans-serif
- vintage_warm: earthy tones, serif fonts, texture
- tech_dashboard: dark, data-dense, monospace accents

## Rules
1. Infer as much as possible; ask questions only when truly ambiguous
2. Match mood to context (wellness -> warm_organic, AI startup -> dark_futuristic, law firm -> clean_minimal)
3. If confidence < 0.7, include 1-2 clarifying questions with 3 options each
4. suggestedSections are ordered top to bottom (hero first, footer last)
5. businessName: extract from the request or use "{DEFAULT_BUSINESS_NAME}"

## Output
Return ONLY valid JSON. No markdown fences, no explanation.
{{
  "siteType": "string",
  "industry": "string",
  "businessName": "string",
  "mood": "string",
  "suggestedSections": ["string"],
  "requiredFeatures": ["string"],
  "contentHints": {{"hasLogo": false, "hasCopy": false, "hasImages": false, "needsGenerated": ["string"]}},
  "imageKeywords": ["5-8 specific image search terms"],
  "subjectDetails": "2-3 vivid paragraphs about the specific subject",
  "targetAudience": "who visits, what they want, what they should feel",
  "primaryAction": "the single most important visitor action",
  "uniqueSellingPoints": ["3-5 differentiators"],
  "confidence": 0.0,
  "clarifyingQuestions": null
}}"""


class IntentClassifier(BaseStage):
    """Stage 1 - classify the request into structured requirements."""

    MAX_OUTPUT_TOKENS = 1000
    TEMPERATURE = 0.3

    @property
    def name(self) -> str:
        return "intent"

    @property
    def display_name(self) -> str:
        return "Intent Classifier"

    @property
    def description(self) -> str:
        return "Analyzing your request"

    @property
    def system_prompt(self) -> str:
        return SYSTEM_PROMPT

    async def classify(self, prompt: str) -> IntentResult:
        """
        Classify a request.

        Raises:
            StageValidationError: reply carries neither a site type nor a mood
        """
        data = await self._call_structured(prompt)

        if not pick(data, "site_type") and not pick(data, "mood"):
            raise StageValidationError(
                "Intent classification missing required fields (siteType, mood)",
                payload=data,
            )

        intent = IntentResult.from_dict(data)
        if intent.mood not in MOODS:
            logger.warning(f"[{self.name}] Unknown mood '{intent.mood}', template lookup will use default")

        logger.info(
            f"[{self.name}] {intent.site_type} / {intent.mood} "
            f"(confidence {intent.confidence:.2f})"
        )
        return intent


def extract_business_name(prompt: str) -> str:
    """Best-effort business name: quoted text, 'for/called/named X', CamelCase word."""
    for pattern in (_QUOTED_NAME, _NAMED_AFTER, _CAMEL_WORD):
        match = pattern.search(prompt or "")
        if match:
            return match.group(1).strip()
    return DEFAULT_BUSINESS_NAME


def fallback_intent(prompt: str) -> IntentResult:
    """Low-confidence intent used when classification fails."""
    return IntentResult(
        site_type=DEFAULT_SITE_TYPE,
        industry="technology",
        business_name=extract_business_name(prompt),
        mood=DEFAULT_MOOD,
        suggested_sections=FALLBACK_SECTIONS,
        required_features=FALLBACK_FEATURES,
        content_hints=ContentHints(),
        confidence=FALLBACK_CONFIDENCE,
    )
