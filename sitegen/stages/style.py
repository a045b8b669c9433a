"""
Stage 2: Style System Generation

Generates a specific, opinionated style system as JSON. Template themes
fill any token the model leaves out, so every color stays concrete.
"""

import logging

from ..models import IntentResult, StyleSystem
from .base import BaseStage, StageValidationError
from .themes import template_style_system

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are a world-class web design architect. Given website requirements, generate a specific, opinionated design system as JSON.

## Rules - CRITICAL
1. Be opinionated. Strong direction beats safe defaults.
2. All colors as exact values ("#06b6d4", never "blue")
3. Pair one DISPLAY font (distinctive) with one BODY font (readable)
4. Hero headlines: clamp(3.5rem, 8vw, 6rem) minimum
5. Section padding: generous (clamp(4rem, 8vw, 8rem) vertical)
6. Never use default Tailwind blue/indigo unless explicitly requested
7. Light OR dark - commit fully
8. Every mood has its own personality. Don't reuse palettes.

## Google Font Options (pick 2-3)
Display: Space Grotesk, Outfit, Plus Jakarta Sans, Sora, Clash Display, Cabinet Grotesk, General Sans
Serif Display: Playfair Display, Cormorant Garamond, DM Serif Display, Fraunces, Libre Baskerville
Body: Inter, DM Sans, Outfit, Source Sans Pro, Nunito Sans, Work Sans
Mono: JetBrains Mono, Fira Code, Space Mono, IBM Plex Mono

## Mood -> Design Direction
- dark_futuristic: deep navy (#0a1628 range), cyan/purple neon accents, glassmorphism, 1px rgba borders
- clean_minimal: pure white, one subtle accent, large whitespace, hairline borders
- warm_organic: cream (#FDFCF9 range), sage/terracotta accents, serif display, soft shadows, 1.5rem radius
- bold_creative: vibrant gradients, 80px+ headlines, mixed weights, asymmetric grid
- luxury_editorial: letter-spacing -0.04em, gold/champagne on dark, thin borders, elegant serif
- neo_brutalist: 0px radius, thick 3px borders, hard shadows (4px 4px 0px), mono fonts, primary colors
- playful_rounded: 2rem+ radius, pastel palette, bouncy transitions, rounded sans-serif
- corporate_solid: navy/slate palette, clean sans-serif, subtle blue accent, 0.5rem radius
- vintage_warm: earthy palette (#8B6F47 range), serif display, warm shadows
- tech_dashboard: near-black (#0f0f13), green/blue data accents, monospace numbers, compact spacing

## Output Schema
Return ONLY valid JSON. No explanation, no markdown.
{
  "colors": {"background": "#hex", "foreground": "#hex", "card": "#hex", "cardForeground": "#hex",
             "primary": "#hex", "primaryGlow": "rgba(...)", "secondary": "#hex", "accent": "#hex",
             "muted": "#hex", "mutedForeground": "#hex", "border": "rgba(...)", "destructive": "#hex"},
  "fonts": {"display": "Font Name", "body": "Font Name", "mono": "Font Name",
            "googleImportUrl": "https://fonts.googleapis.com/css2?family=..."},
  "typography": {"heroSize": "clamp(...)", "heroWeight": "700", "heroLetterSpacing": "-0.03em",
                 "headingSize": "clamp(...)", "bodySize": "1.125rem", "bodyLineHeight": "1.75"},
  "spacing": {"sectionPadding": "clamp(...) clamp(...)", "cardPadding": "2rem", "gap": "1.5rem"},
  "effects": {"borderRadius": "1rem", "cardShadow": "0 4px 24px rgba(...)", "glassBg": "rgba(...)",
              "glassBackdrop": "blur(20px)", "gradientPrimary": "linear-gradient(...)",
              "hoverTransition": "all 0.3s cubic-bezier(0.4, 0, 0.2, 1)"},
  "animations": {"fadeInUp": "fadeInUp 0.6s ease-out", "staggerDelay": "0.1s", "scrollReveal": true,
                 "hoverScale": "1.02", "hoverLift": "-4px"},
  "layoutPattern": "descriptive name",
  "cssFramework": "tailwind_cdn",
  "iconLibrary": "lucide",
  "imageStrategy": "unsplash"
}"""


def _humanize(value: str) -> str:
    return (value or "").replace("_", " ")


class StyleSystemGenerator(BaseStage):
    """Stage 2 - generate a style system tailored to the request."""

    MAX_OUTPUT_TOKENS = 2000
    TEMPERATURE = 0.8

    @property
    def name(self) -> str:
        return "design"

    @property
    def display_name(self) -> str:
        return "Style System Generator"

    @property
    def description(self) -> str:
        return "Creating design system"

    @property
    def system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def build_user_prompt(self, prompt: str, intent: IntentResult) -> str:
        return (
            f'## Website Request\n"{prompt}"\n\n'
            f"## Analyzed Requirements\n"
            f"- Site Type: {intent.site_type}\n"
            f"- Industry: {intent.industry}\n"
            f"- Business: {intent.business_name}\n"
            f"- Mood: {intent.mood}\n"
            f"- Sections needed: {', '.join(intent.suggested_sections)}\n"
            f"- Features: {', '.join(intent.required_features)}\n\n"
            f"Generate a design system that matches this {_humanize(intent.mood)} aesthetic "
            f"for a {intent.industry} {_humanize(intent.site_type)}."
        )

    async def generate(self, prompt: str, intent: IntentResult) -> StyleSystem:
        """
        Generate a style system.

        Raises:
            StageValidationError: background, primary, display or body font missing
        """
        data = await self._call_structured(self.build_user_prompt(prompt, intent))

        colors = data.get("colors") if isinstance(data.get("colors"), dict) else {}
        fonts = data.get("fonts") if isinstance(data.get("fonts"), dict) else {}

        if not colors.get("background") or not colors.get("primary"):
            raise StageValidationError("Design system missing required color fields", payload=data)
        if not fonts.get("display") or not fonts.get("body"):
            raise StageValidationError("Design system missing required font fields", payload=data)

        style = StyleSystem.from_dict(data, defaults=template_style_system(intent.mood))
        logger.info(
            f"[{self.name}] {style.colors.primary} on {style.colors.background}, "
            f"{style.fonts.display} / {style.fonts.body}"
        )
        return style
