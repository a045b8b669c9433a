"""
Stage 4: Document Generation

Generates the complete, standalone HTML page constrained by the style
system (tokens) and the content plan (exact copy). Longest stage, ~16K
output tokens. Buffered and streaming forms share one prompt.
"""

import json
import logging
import re
from typing import Callable, Dict, List, Optional

from ..gateway import extract_html, has_document_marker
from ..models import ContentPlan, IntentResult, StyleSystem
from .base import BaseStage, StageValidationError

logger = logging.getLogger(__name__)

ChunkCallback = Callable[[str, str], None]

BANNER = "=" * 63

GENERATION_RULES = """## HTML Structure
- Start with <!DOCTYPE html>, end with </html>. Output NOTHING else.
- Semantic HTML5: header, main, section[id], footer, nav
- Every section gets the id from the content plan

## Head
- <meta charset="UTF-8">
- <meta name="viewport" content="width=device-width, initial-scale=1.0">
- Google Fonts <link> exactly as specified
- Tailwind CDN: <script src="https://cdn.tailwindcss.com"></script>
- All custom CSS in a single <style> block defining the palette as CSS custom properties

## CSS Rules
- Use the custom properties (var(--bg), var(--primary), ...) for ALL colors
- DO NOT use Tailwind color utilities (no bg-blue-500, no text-gray-300)
- Use Tailwind for layout utilities only (flex, grid, px-6, ...)
- html { scroll-behavior: smooth }

## Interaction
- EVERY interactive element (links, buttons, cards) defines a :hover state with a transition
- Cards: translateY(hover lift) + shadow expansion on hover

## Scroll Animations (content must be VISIBLE by default)
- Elements start at opacity 0.85, translateY(12px); an .active class restores them
- IntersectionObserver (threshold 0.15) adds .active
- Content is ALWAYS readable even if JavaScript never runs
- Never use opacity: 0 as a default state

## Images
- picsum.photos with descriptive, distinct seeds: https://picsum.photos/seed/{seed}/{width}/{height}
- Avatars: https://i.pravatar.cc/80?img={1-70}
- EVERY <img> MUST have a fallback:
  onerror="this.onerror=null;this.src='https://placehold.co/{w}x{h}/{bgHex}/{fgHex}?text=Image'"
- EVERY <img> has descriptive alt text and loading="lazy" (hero image: loading="eager")
- Never use source.unsplash.com or invented photo ids

## Icons
- Lucide: <script src="https://unpkg.com/lucide@latest/dist/umd/lucide.min.js"></script>
- <i data-lucide="icon-name"></i>, then lucide.createIcons() at the end of body

## Layout
- Sticky navigation with brand left and CTA right; hamburger menu below 768px
- Hero at least 90vh with a background that has depth
- Multi-column footer with link groups and copyright
- Grids collapse to one column below 768px

## AVOID
- Repeating the same layout in consecutive sections
- Headlines smaller than 2rem
- Generic text like "Welcome to our website"

Your response must be ONLY the HTML document. Start with <!DOCTYPE html>."""


ITERATION_RULES = """RULES:
1. Output ONLY the complete updated HTML - no explanations, no markdown fences.
2. Start with <!DOCTYPE html>, end with </html>.
3. Preserve the existing design language while applying changes.
4. Keep all animations, hover states and responsive behavior.
5. New sections match the existing design system exactly."""


def _seed(keyword: str) -> str:
    return re.sub(r"\s+", "-", keyword.strip())


def image_seed_lines(keywords) -> List[str]:
    """picsum.photos URLs per keyword; the first one is hero-sized."""
    lines = []
    for i, keyword in enumerate(keywords):
        size = "1200/800" if i == 0 else "800/600"
        seed = _seed(keyword)
        lines.append(f'  - Image {i + 1}: seed="{seed}" -> https://picsum.photos/seed/{seed}/{size}')
    return lines


class DocumentGenerator(BaseStage):
    """Stage 4 - build the final HTML document."""

    MAX_OUTPUT_TOKENS = 16000
    TEMPERATURE = 0.6
    ITERATION_TEMPERATURE = 0.5

    @property
    def name(self) -> str:
        return "codegen"

    @property
    def display_name(self) -> str:
        return "Document Generator"

    @property
    def description(self) -> str:
        return "Generating website code"

    @property
    def system_prompt(self) -> str:
        return GENERATION_RULES

    # =========================================================================
    # PROMPTS
    # =========================================================================

    def build_system_prompt(self, style: StyleSystem, plan: ContentPlan) -> str:
        """Design tokens + content plan + generation rules."""
        c, f, t = style.colors, style.fonts, style.typography
        s, e, a = style.spacing, style.effects, style.animations
        meta = plan.metadata

        context = [meta.subject_details or "No additional subject details provided."]
        if meta.target_audience:
            context.append(f"TARGET AUDIENCE:\n{meta.target_audience}")
        if meta.primary_action:
            context.append(f"PRIMARY GOAL: Get visitors to {meta.primary_action}")
        if meta.unique_selling_points:
            context.append("SELLING POINTS:\n" + "\n".join(f"- {p}" for p in meta.unique_selling_points))
        if meta.image_keywords:
            context.append(
                "RECOMMENDED IMAGE SEEDS (use as picsum.photos seeds):\n"
                + "\n".join(image_seed_lines(meta.image_keywords))
            )

        sections_json = json.dumps([section.to_dict() for section in plan.sections], indent=2)

        return f"""You are an elite frontend engineer building a production-quality standalone HTML website.
You MUST follow the provided design system and content plan EXACTLY.

{BANNER}
DESIGN SYSTEM (follow EXACTLY - do NOT use Tailwind default colors)
{BANNER}

COLORS:
  --bg: {c.background}
  --fg: {c.foreground}
  --card: {c.card}
  --card-fg: {c.card_foreground}
  --primary: {c.primary}
  --primary-glow: {c.primary_glow}
  --secondary: {c.secondary}
  --accent: {c.accent}
  --muted: {c.muted}
  --muted-fg: {c.muted_foreground}
  --border: {c.border}
  --destructive: {c.destructive}

FONTS:
  Display: "{f.display}" (headlines)
  Body: "{f.body}" (text)
  Mono: "{f.mono}" (code/numbers)
  Import: {f.google_import_url}

TYPOGRAPHY:
  Hero headline: {t.hero_size}, weight {t.hero_weight}, letter-spacing {t.hero_letter_spacing}
  Section headlines: {t.heading_size}
  Body: {t.body_size}, line-height {t.body_line_height}

SPACING:
  Section padding: {s.section_padding}
  Card padding: {s.card_padding}
  Gap: {s.gap}

EFFECTS:
  Border radius: {e.border_radius}
  Card shadow: {e.card_shadow}
  Glass bg: {e.glass_bg}
  Glass blur: {e.glass_backdrop}
  Primary gradient: {e.gradient_primary}
  Hover transition: {e.hover_transition}

ANIMATIONS:
  Fade-in: {a.fade_in_up}
  Stagger: {a.stagger_delay}
  Hover scale: {a.hover_scale}
  Hover lift: {a.hover_lift}

LAYOUT PATTERN: {style.layout_pattern}

{BANNER}
CONTENT PLAN (use this EXACT copy)
{BANNER}

{sections_json}

{BANNER}
SUBJECT CONTEXT (use for image selection and tone)
{BANNER}

{chr(10).join(context)}

{BANNER}
GENERATION RULES
{BANNER}

{GENERATION_RULES}"""

    def build_user_prompt(self, prompt: str, intent: IntentResult) -> str:
        return (
            f'Generate the complete HTML page for "{intent.business_name}" - '
            f"a {intent.industry} {intent.site_type.replace('_', ' ')}.\n\n"
            f"ORIGINAL REQUEST (use this for image selection and personalization):\n"
            f'"{prompt}"\n\n'
            f"Follow the design system and content plan exactly. Output ONLY HTML."
        )

    def _codegen_messages(
        self,
        prompt: str,
        intent: IntentResult,
        style: StyleSystem,
        plan: ContentPlan,
    ) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.build_system_prompt(style, plan)},
            {"role": "user", "content": self.build_user_prompt(prompt, intent)},
        ]

    # =========================================================================
    # GENERATION
    # =========================================================================

    async def generate(
        self,
        prompt: str,
        intent: IntentResult,
        style: StyleSystem,
        plan: ContentPlan,
    ) -> str:
        """
        Buffered generation.

        Raises:
            StageValidationError: reply contains no document-start marker
        """
        logger.info(f"[{self.name}] Generating document ({len(plan.sections)} sections)...")
        raw = await self.gateway.call(
            self._codegen_messages(prompt, intent, style, plan),
            model=self.model,
            max_tokens=self.MAX_OUTPUT_TOKENS,
            temperature=self.TEMPERATURE,
        )
        return self._finalize(raw)

    async def generate_stream(
        self,
        prompt: str,
        intent: IntentResult,
        style: StyleSystem,
        plan: ContentPlan,
        on_chunk: ChunkCallback,
    ) -> str:
        """
        Streaming generation. Deltas are relayed to `on_chunk` unmodified.

        Raises:
            StageValidationError: reply contains no document-start marker
        """
        logger.info(f"[{self.name}] Streaming document ({len(plan.sections)} sections)...")
        raw = await self.gateway.call_streaming(
            self._codegen_messages(prompt, intent, style, plan),
            on_chunk=on_chunk,
            model=self.model,
            max_tokens=self.MAX_OUTPUT_TOKENS,
            temperature=self.TEMPERATURE,
        )
        return self._finalize(raw)

    async def iterate(
        self,
        history: List[Dict[str, str]],
        style: StyleSystem,
    ) -> str:
        """
        Regenerate a document from a conversation, keeping the style system.

        Args:
            history: prior turns; the last user turn carries the requested change
            style: style system the document was built with
        """
        system = (
            "You are an elite frontend engineer iterating on an existing website design.\n\n"
            "Apply the requested changes while keeping the existing design system:\n"
            f"- Colors: var(--bg) = {style.colors.background}, var(--primary) = {style.colors.primary}\n"
            f"- Fonts: {style.fonts.display} (display), {style.fonts.body} (body)\n"
            f"- Effects: {style.effects.border_radius} radius, {style.effects.card_shadow} shadows\n\n"
            f"{ITERATION_RULES}"
        )
        turns = [m for m in history if m.get("role") in ("user", "assistant")]
        raw = await self.gateway.call(
            [{"role": "system", "content": system}, *turns],
            model=self.model,
            max_tokens=self.MAX_OUTPUT_TOKENS,
            temperature=self.ITERATION_TEMPERATURE,
        )
        return self._finalize(raw)

    def _finalize(self, raw: str) -> str:
        html = extract_html(raw)
        if not has_document_marker(html):
            raise StageValidationError(
                "Code generation did not produce valid HTML",
                payload=(raw or "")[:500],
            )
        logger.info(f"[{self.name}] Document ready ({len(html):,} chars)")
        return html
