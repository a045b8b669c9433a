"""
Style system models - the visual design tokens for a page.

Every token group serializes to the camelCase wire shape. Groups read from
a provider payload fall back, field by field, to a reference group (the
mood's template theme) so colors stay concrete values.
"""

from dataclasses import MISSING, dataclass, fields
from typing import Any, Dict, Optional

from .coerce import as_bool, as_str, to_camel


class TokenGroup:
    """Mixin for flat groups of design tokens."""

    @classmethod
    def from_dict(cls, data: Any, defaults: Optional["TokenGroup"] = None):
        data = data if isinstance(data, dict) else {}
        values = {}
        for f in fields(cls):
            raw = data.get(to_camel(f.name), data.get(f.name))
            if raw is None or raw == "":
                if defaults is not None:
                    values[f.name] = getattr(defaults, f.name)
                    continue
                raw = f.default if f.default is not MISSING else ""
            values[f.name] = as_bool(raw) if f.type is bool else as_str(raw)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {to_camel(f.name): getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class ColorPalette(TokenGroup):
    background: str = ""
    foreground: str = ""
    card: str = ""
    card_foreground: str = ""
    primary: str = ""
    primary_glow: str = ""
    secondary: str = ""
    accent: str = ""
    muted: str = ""
    muted_foreground: str = ""
    border: str = ""
    destructive: str = ""


@dataclass(frozen=True)
class FontPairing(TokenGroup):
    display: str = ""
    body: str = ""
    mono: str = ""
    google_import_url: str = ""


@dataclass(frozen=True)
class Typography(TokenGroup):
    hero_size: str = ""
    hero_weight: str = ""
    hero_letter_spacing: str = ""
    heading_size: str = ""
    body_size: str = ""
    body_line_height: str = ""


@dataclass(frozen=True)
class Spacing(TokenGroup):
    section_padding: str = ""
    card_padding: str = ""
    gap: str = ""


@dataclass(frozen=True)
class Effects(TokenGroup):
    border_radius: str = ""
    card_shadow: str = ""
    glass_bg: str = ""
    glass_backdrop: str = ""
    gradient_primary: str = ""
    hover_transition: str = ""


@dataclass(frozen=True)
class Animations(TokenGroup):
    fade_in_up: str = "fadeInUp 0.6s ease-out"
    stagger_delay: str = "0.1s"
    scroll_reveal: bool = True
    hover_scale: str = "1.02"
    hover_lift: str = "-4px"


DEFAULT_CSS_FRAMEWORK = "tailwind_cdn"
DEFAULT_ICON_LIBRARY = "lucide"
DEFAULT_IMAGE_STRATEGY = "unsplash"


@dataclass(frozen=True)
class StyleSystem:
    """Complete, internally consistent set of design tokens."""
    colors: ColorPalette
    fonts: FontPairing
    typography: Typography
    spacing: Spacing
    effects: Effects
    animations: Animations = Animations()
    layout_pattern: str = ""
    css_framework: str = DEFAULT_CSS_FRAMEWORK
    icon_library: str = DEFAULT_ICON_LIBRARY
    image_strategy: str = DEFAULT_IMAGE_STRATEGY

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        defaults: Optional["StyleSystem"] = None,
    ) -> "StyleSystem":
        """
        Build from a provider payload.

        Args:
            data: camelCase payload from the model
            defaults: reference system whose tokens fill any gaps

        Missing css framework, icon library and image strategy fall back to
        the fixed house defaults rather than the reference system.
        """
        data = data if isinstance(data, dict) else {}

        def group(group_cls, key):
            ref = getattr(defaults, key) if defaults is not None else None
            return group_cls.from_dict(data.get(key), ref)

        animations_ref = defaults.animations if defaults is not None else None
        return cls(
            colors=group(ColorPalette, "colors"),
            fonts=group(FontPairing, "fonts"),
            typography=group(Typography, "typography"),
            spacing=group(Spacing, "spacing"),
            effects=group(Effects, "effects"),
            animations=Animations.from_dict(data.get("animations"), animations_ref),
            layout_pattern=as_str(data.get("layoutPattern"))
            or (defaults.layout_pattern if defaults is not None else ""),
            css_framework=as_str(data.get("cssFramework")) or DEFAULT_CSS_FRAMEWORK,
            icon_library=as_str(data.get("iconLibrary")) or DEFAULT_ICON_LIBRARY,
            image_strategy=as_str(data.get("imageStrategy")) or DEFAULT_IMAGE_STRATEGY,
        )

    @property
    def is_dark(self) -> bool:
        """Dark themes use a near-black background (#0xxxxx / #1xxxxx)."""
        background = self.colors.background.lower()
        return background.startswith("#0") or background.startswith("#1")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": self.colors.to_dict(),
            "fonts": self.fonts.to_dict(),
            "typography": self.typography.to_dict(),
            "spacing": self.spacing.to_dict(),
            "effects": self.effects.to_dict(),
            "animations": self.animations.to_dict(),
            "layoutPattern": self.layout_pattern,
            "cssFramework": self.css_framework,
            "iconLibrary": self.icon_library,
            "imageStrategy": self.image_strategy,
        }
