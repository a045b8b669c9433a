"""
Stage 3: Content & Structure Planning

Writes all copy and section ordering before any markup exists, so the
document generator only has to lay it out.
"""

import logging
from typing import Optional

from ..models import ContentMetadata, ContentPlan, IntentResult, Section, StyleSystem
from .base import BaseStage, StageValidationError
from .intent import FALLBACK_SECTIONS

logger = logging.getLogger(__name__)

# Default layout per section type when no planner ran
SECTION_LAYOUTS = {
    "hero": "hero_centered",
    "features": "three_col_cards",
    "social_proof": "stats_bar",
    "showcase": "two_col_split",
    "stats": "stats_bar",
    "testimonials": "testimonial_cards",
    "pricing": "pricing_table",
    "cta": "cta_banner",
    "footer": "multi_col_footer",
    "about": "two_col_split",
    "services": "icon_grid",
    "contact": "two_col_split",
    "faq": "alternating_rows",
    "team": "three_col_cards",
    "portfolio": "bento_grid",
    "blog": "three_col_cards",
    "how_it_works": "alternating_rows",
}
DEFAULT_LAYOUT = "three_col_cards"


SYSTEM_PROMPT = """You are an expert content strategist and copywriter for landing pages. Given a website's requirements and design direction, write ALL the content and structure for the page.

## Rules
1. Write compelling, specific copy - never "Lorem ipsum" or generic placeholder text
2. Headlines are punchy (5-8 words), benefit-driven
3. Subheadlines expand with specifics (15-25 words)
4. Feature descriptions are 1-2 sentences each
5. Stats should feel real (realistic numbers)
6. Testimonials feel authentic - specific praise, real-sounding names
7. CTAs are action-oriented ("Start Free Trial", not "Learn More")
8. Every section gets a DIFFERENT layout - never repeat one in adjacent sections
9. Content flows hook -> explain -> prove -> convert

## Section Ordering (recommended)
1. hero: the hook - big headline, one-liner, primary CTA
2. social_proof: quick credibility - logo bar or user count
3. features: what it does - 3-6 features
4. showcase: deep dive - image + detailed content
5. stats: proof - 3-4 numbers
6. testimonials: 2-3 customer quotes
7. pricing: (if applicable) 2-3 tiers
8. cta: strong closing headline + CTA
9. footer: navigation, links, copyright

## Layout Options
- hero_centered: centered headline + subtext + buttons
- hero_split: text left, visual right (or reversed)
- bento_grid: mixed-size cards in a CSS grid
- three_col_cards: equal cards in a row
- two_col_split: visual on one side, text on the other
- stats_bar: horizontal row of big numbers
- testimonial_cards: 2-3 quote cards
- pricing_table: side-by-side tiers
- cta_banner: full-width centered text
- multi_col_footer: 3-4 column footer with link groups
- alternating_rows: content alternates left/right each row
- icon_grid: 2x3 or 3x3 grid of icon + text

## Output Schema
Return ONLY valid JSON. No markdown, no explanation.
{
  "sections": [
    {
      "id": "hero",
      "type": "hero",
      "layout": "hero_centered",
      "content": {
        "badge": "optional badge text or null",
        "headline": "The Main Headline",
        "subheadline": "Supporting text",
        "primaryCta": {"text": "Button Text", "href": "#section"},
        "secondaryCta": {"text": "Alt Button", "href": "#section"}
      },
      "visualElements": ["gradient_mesh_bg", "floating_shapes"]
    }
  ],
  "metadata": {
    "totalSections": 8,
    "estimatedScrollLength": "5-6 viewports",
    "mobileLayout": "single_column_stack",
    "primaryCta": "Start Free Trial",
    "secondaryCta": "Watch Demo"
  }
}"""


def _humanize(value: str) -> str:
    return (value or "").replace("_", " ")


class ContentPlanner(BaseStage):
    """Stage 3 - plan sections and write the copy."""

    MAX_OUTPUT_TOKENS = 4000
    TEMPERATURE = 0.8

    @property
    def name(self) -> str:
        return "content"

    @property
    def display_name(self) -> str:
        return "Content Planner"

    @property
    def description(self) -> str:
        return "Planning content and copy"

    @property
    def system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def build_user_prompt(self, prompt: str, intent: IntentResult, style: StyleSystem) -> str:
        selling_points = "\n".join(f"- {p}" for p in intent.unique_selling_points) or "- To be determined from context"
        image_block = ""
        if intent.image_keywords:
            image_block = (
                "## Image Keywords (reference these in visual element descriptions)\n"
                f"{', '.join(intent.image_keywords)}\n\n"
            )

        return (
            f'## Original Request\n"{prompt}"\n\n'
            f"## Requirements\n"
            f"- Business: {intent.business_name}\n"
            f"- Type: {_humanize(intent.site_type)}\n"
            f"- Industry: {intent.industry}\n"
            f"- Mood: {_humanize(intent.mood)}\n"
            f"- Sections needed: {', '.join(intent.suggested_sections)}\n"
            f"- Content to generate: {', '.join(intent.content_hints.needs_generated)}\n\n"
            f"## Subject Details (use these to make content feel authentic)\n"
            f"{intent.subject_details or 'No additional subject details. Infer from the original request.'}\n\n"
            f"## Target Audience\n"
            f"{intent.target_audience or 'General audience interested in ' + intent.industry}\n\n"
            f"## Primary Action\n{intent.primary_action or 'Contact or learn more'}\n\n"
            f"## Unique Selling Points\n{selling_points}\n\n"
            f"{image_block}"
            f"## Design Direction\n"
            f"- Layout pattern: {style.layout_pattern}\n"
            f"- Color mood: {'Dark theme' if style.is_dark else 'Light theme'}\n"
            f"- Primary accent: {style.colors.primary}\n"
            f"- Display font: {style.fonts.display}\n\n"
            f"## Content Generation Rules\n"
            f'1. EVERY headline is specific to "{intent.business_name}" - no "Welcome to our website"\n'
            f"2. Reference specific details from Subject Details in body copy\n"
            f"3. Testimonials mention specific aspects of the subject\n"
            f"4. Stats are realistic for the {intent.industry} industry\n"
            f"5. CTAs drive the primary action: {intent.primary_action or 'engagement'}\n"
            f"6. Tone matches the mood: {_humanize(intent.mood)}\n\n"
            f"Generate the full content plan."
        )

    async def plan(self, prompt: str, intent: IntentResult, style: StyleSystem) -> ContentPlan:
        """
        Plan the page.

        The style system only frames tone; none of its tokens land in the plan.

        Raises:
            StageValidationError: no sections returned
        """
        data = await self._call_structured(self.build_user_prompt(prompt, intent, style))

        sections = data.get("sections")
        if not isinstance(sections, list) or not sections:
            raise StageValidationError("Content plan has no sections", payload=data)

        plan = ContentPlan.from_dict(data)
        logger.info(f"[{self.name}] {len(plan.sections)} sections: {', '.join(plan.section_ids)}")
        return plan


def default_layout(section_type: str) -> str:
    return SECTION_LAYOUTS.get(section_type, DEFAULT_LAYOUT)


def minimal_content_plan(intent: Optional[IntentResult]) -> ContentPlan:
    """Deterministic plan built from the intent's suggested sections (no network)."""
    names = tuple(intent.suggested_sections) if intent and intent.suggested_sections else FALLBACK_SECTIONS
    sections = tuple(
        Section(id=name, type=name, layout=default_layout(name))
        for name in names
    )
    metadata = ContentMetadata(
        total_sections=len(sections),
        estimated_scroll_length=f"{max(1, len(sections) - 1)} viewports",
    )
    return ContentPlan(sections=sections, metadata=metadata)
