"""
Quality Checks for Generated Documents

Static, network-free analysis of generated HTML. Checks are registered
in document order; each one either passes or yields a single issue.

Categories:
- Structure (doctype, charset, title, navigation, footer)
- Responsive (viewport, media queries / Tailwind)
- Typography and style system adherence
- Accessibility and content
- Polish and interactivity

Scoring: 100 - 25 per critical - 8 per warning - 2 per info (floor 0).
Passes with no criticals and at most two warnings.
"""

import re
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..models import QualityIssue, QualityMetrics, QualityReport, Severity, StyleSystem

logger = logging.getLogger(__name__)

TAILWIND_DEFAULT_COLORS = ("bg-blue-", "bg-indigo-", "text-blue-", "text-indigo-", "bg-gray-")
PLACEHOLDER_SERVICES = ("placehold.co", "placeholder.com", "via.placeholder")
MIN_SECTIONS = 3
MAX_HIDDEN_DEFAULTS = 2

_DOCTYPE = re.compile(r"<!doctype html>", re.IGNORECASE)
_IMG_TAG = re.compile(r"<img[^>]*>", re.IGNORECASE)
_SECTION_TAG = re.compile(r"<section", re.IGNORECASE)
_CSS_RULE = re.compile(r"([^{}]*)\{([^{}]*)\}")
_OPACITY_ZERO = re.compile(r"opacity\s*:\s*0\s*(?:;|$|!)")
_LUCIDE_SCRIPT = re.compile(r"<script[^>]*lucide", re.IGNORECASE)


@dataclass
class DocumentCheck:
    """Definition of a single document check."""
    name: str
    severity: Severity
    category: str
    description: str
    check_fn: Callable[[str, Optional[StyleSystem]], Optional[str]]
    auto_fixable: bool = False


# =============================================================================
# SIGNALS (shared by checks and metrics)
# =============================================================================

def has_doctype(html: str) -> bool:
    return _DOCTYPE.search(html) is not None


def has_tailwind(html: str) -> bool:
    return "tailwindcss" in html


def has_animations(html: str) -> bool:
    return "@keyframes" in html or "IntersectionObserver" in html or "transition" in html


def has_hover(html: str) -> bool:
    return ":hover" in html or "hover:" in html


def has_smooth_scroll(html: str) -> bool:
    return "scroll-behavior" in html and "smooth" in html


def image_tags(html: str) -> List[str]:
    return _IMG_TAG.findall(html)


def section_count(html: str) -> int:
    return len(_SECTION_TAG.findall(html))


def hidden_default_rules(html: str) -> int:
    """CSS rules that default to opacity:0, ignoring `.active` reveal states."""
    count = 0
    for selector, body in _CSS_RULE.findall(html):
        if ".active" in selector:
            continue
        if _OPACITY_ZERO.search(body.strip()):
            count += 1
    return count


class DocumentQualityChecker:
    """
    Runs static checks over a generated HTML document.

    Usage:
        checker = DocumentQualityChecker()
        report = checker.validate(html, style_system)
        # report.score, report.passed, report.issues, report.metrics
    """

    def __init__(self):
        """Initialize with all document checks."""
        self.checks: List[DocumentCheck] = []
        self._register_all_checks()

    def _register_all_checks(self):
        """Register all checks, in reporting order."""

        # ===== STRUCTURE =====

        self.checks.append(DocumentCheck(
            name="has_doctype",
            severity=Severity.CRITICAL,
            category="structure",
            description="Document starts with a doctype declaration",
            check_fn=self._check_doctype,
            auto_fixable=True,
        ))

        self.checks.append(DocumentCheck(
            name="has_viewport",
            severity=Severity.CRITICAL,
            category="responsive",
            description="Viewport meta tag present",
            check_fn=self._check_viewport,
            auto_fixable=True,
        ))

        self.checks.append(DocumentCheck(
            name="has_charset",
            severity=Severity.WARNING,
            category="structure",
            description="Charset meta tag present",
            check_fn=self._check_charset,
            auto_fixable=True,
        ))

        self.checks.append(DocumentCheck(
            name="has_title",
            severity=Severity.WARNING,
            category="seo",
            description="Title tag present",
            check_fn=self._check_title,
            auto_fixable=True,
        ))

        # ===== RESPONSIVE =====

        self.checks.append(DocumentCheck(
            name="is_responsive",
            severity=Severity.WARNING,
            category="responsive",
            description="Media queries or Tailwind present",
            check_fn=self._check_responsive,
        ))

        # ===== TYPOGRAPHY & STYLE SYSTEM =====

        self.checks.append(DocumentCheck(
            name="imports_web_fonts",
            severity=Severity.INFO,
            category="typography",
            description="Google Fonts imported",
            check_fn=self._check_web_fonts,
        ))

        self.checks.append(DocumentCheck(
            name="uses_display_font",
            severity=Severity.WARNING,
            category="typography",
            description="Style system display font is referenced",
            check_fn=self._check_display_font,
        ))

        self.checks.append(DocumentCheck(
            name="uses_primary_color",
            severity=Severity.WARNING,
            category="design_system",
            description="Style system primary color is referenced",
            check_fn=self._check_primary_color,
        ))

        self.checks.append(DocumentCheck(
            name="avoids_framework_colors",
            severity=Severity.WARNING,
            category="design_system",
            description="No Tailwind default color utilities",
            check_fn=self._check_framework_colors,
        ))

        # ===== ACCESSIBILITY & CONTENT =====

        self.checks.append(DocumentCheck(
            name="images_have_alt",
            severity=Severity.WARNING,
            category="accessibility",
            description="Every image has alt text",
            check_fn=self._check_image_alt,
        ))

        self.checks.append(DocumentCheck(
            name="no_placeholder_images",
            severity=Severity.INFO,
            category="content",
            description="No placeholder image services",
            check_fn=self._check_placeholder_images,
        ))

        # ===== POLISH & INTERACTIVITY =====

        self.checks.append(DocumentCheck(
            name="has_animations",
            severity=Severity.INFO,
            category="polish",
            description="Keyframes, transitions or scroll reveal present",
            check_fn=self._check_animations,
        ))

        self.checks.append(DocumentCheck(
            name="content_visible_without_js",
            severity=Severity.WARNING,
            category="accessibility",
            description="At most two rules default to opacity:0",
            check_fn=self._check_hidden_defaults,
        ))

        self.checks.append(DocumentCheck(
            name="has_hover_states",
            severity=Severity.WARNING,
            category="interactivity",
            description="Hover states defined",
            check_fn=self._check_hover,
        ))

        self.checks.append(DocumentCheck(
            name="has_smooth_scroll",
            severity=Severity.INFO,
            category="ux",
            description="Smooth scroll behavior set",
            check_fn=self._check_smooth_scroll,
            auto_fixable=True,
        ))

        # ===== PAGE STRUCTURE =====

        self.checks.append(DocumentCheck(
            name="has_enough_sections",
            severity=Severity.WARNING,
            category="content",
            description=f"At least {MIN_SECTIONS} sections",
            check_fn=self._check_section_count,
        ))

        self.checks.append(DocumentCheck(
            name="has_navigation",
            severity=Severity.WARNING,
            category="structure",
            description="Nav or header element present",
            check_fn=self._check_navigation,
        ))

        self.checks.append(DocumentCheck(
            name="has_footer",
            severity=Severity.INFO,
            category="structure",
            description="Footer element present",
            check_fn=self._check_footer,
        ))

        self.checks.append(DocumentCheck(
            name="icon_library_loaded",
            severity=Severity.WARNING,
            category="dependencies",
            description="Icon attributes come with the icon library",
            check_fn=self._check_icon_library,
            auto_fixable=True,
        ))

    # =========================================================================
    # RUNNING
    # =========================================================================

    def run_checks(self, html: str, style: Optional[StyleSystem] = None) -> List[QualityIssue]:
        """Run every registered check, returning issues in registration order."""
        issues = []
        for check in self.checks:
            message = check.check_fn(html, style)
            if message:
                issues.append(QualityIssue(
                    severity=check.severity,
                    category=check.category,
                    message=message,
                    auto_fixable=check.auto_fixable,
                ))
        return issues

    def collect_metrics(self, html: str) -> QualityMetrics:
        return QualityMetrics(
            html_size=len(html),
            section_count=section_count(html),
            has_responsive_design="@media" in html or has_tailwind(html) or "clamp(" in html,
            has_animations=has_animations(html),
            has_hover_states=has_hover(html),
            has_smooth_scroll=has_smooth_scroll(html),
            has_meta_viewport="viewport" in html,
            font_count=1 if "fonts.googleapis.com" in html else 0,
            image_count=len(image_tags(html)),
        )

    def validate(self, html: str, style: Optional[StyleSystem] = None) -> QualityReport:
        html = html or ""
        issues = self.run_checks(html, style)
        report = QualityReport.from_issues(issues, self.collect_metrics(html))
        logger.info(
            f"[quality] Score {report.score}/100 "
            f"({report.count(Severity.CRITICAL)} critical, "
            f"{report.count(Severity.WARNING)} warning, "
            f"{report.count(Severity.INFO)} info) - "
            f"{'PASSED' if report.passed else 'FAILED'}"
        )
        return report

    # =========================================================================
    # CHECK IMPLEMENTATIONS (return an issue message, or None when passing)
    # =========================================================================

    def _check_doctype(self, html: str, style) -> Optional[str]:
        if not has_doctype(html):
            return "Missing <!DOCTYPE html> declaration"
        return None

    def _check_viewport(self, html: str, style) -> Optional[str]:
        if "<meta" not in html or "viewport" not in html:
            return 'Missing <meta name="viewport"> tag'
        return None

    def _check_charset(self, html: str, style) -> Optional[str]:
        if "<meta" not in html or "charset" not in html:
            return "Missing charset meta tag"
        return None

    def _check_title(self, html: str, style) -> Optional[str]:
        if "<title>" not in html and "<title " not in html:
            return "Missing <title> tag"
        return None

    def _check_responsive(self, html: str, style) -> Optional[str]:
        if "@media" not in html and not has_tailwind(html):
            return "No media queries or Tailwind detected - may not be responsive"
        return None

    def _check_web_fonts(self, html: str, style) -> Optional[str]:
        if "fonts.googleapis.com" not in html and "fonts.gstatic.com" not in html:
            return "No Google Fonts imported - using system fonts only"
        return None

    def _check_display_font(self, html: str, style) -> Optional[str]:
        if style and style.fonts.display and style.fonts.display not in html:
            return f'Design system display font "{style.fonts.display}" not found in HTML'
        return None

    def _check_primary_color(self, html: str, style) -> Optional[str]:
        if not style or not style.colors.primary:
            return None
        primary = style.colors.primary.lower()
        if primary not in html.lower() and "var(--primary)" not in html:
            return f"Primary color {primary} not found in HTML"
        return None

    def _check_framework_colors(self, html: str, style) -> Optional[str]:
        if style and any(cls in html for cls in TAILWIND_DEFAULT_COLORS):
            return "Using Tailwind default color classes instead of design system custom properties"
        return None

    def _check_image_alt(self, html: str, style) -> Optional[str]:
        missing = sum(1 for tag in image_tags(html) if "alt=" not in tag and "alt =" not in tag)
        if missing:
            return f"{missing} image(s) missing alt text"
        return None

    def _check_placeholder_images(self, html: str, style) -> Optional[str]:
        if any(service in html for service in PLACEHOLDER_SERVICES):
            return "Placeholder image service detected - replace with real images"
        return None

    def _check_animations(self, html: str, style) -> Optional[str]:
        if not has_animations(html):
            return "No animations or transitions detected"
        return None

    def _check_hidden_defaults(self, html: str, style) -> Optional[str]:
        if hidden_default_rules(html) > MAX_HIDDEN_DEFAULTS:
            return "Multiple elements default to opacity:0 - content may be hidden without JavaScript"
        return None

    def _check_hover(self, html: str, style) -> Optional[str]:
        if not has_hover(html):
            return "No hover states detected on any element"
        return None

    def _check_smooth_scroll(self, html: str, style) -> Optional[str]:
        if not has_smooth_scroll(html):
            return "Missing smooth scroll behavior"
        return None

    def _check_section_count(self, html: str, style) -> Optional[str]:
        count = section_count(html)
        if count < MIN_SECTIONS:
            return f"Only {count} sections found - expected at least 5 for a complete landing page"
        return None

    def _check_navigation(self, html: str, style) -> Optional[str]:
        if "<nav" not in html and "<header" not in html:
            return "No navigation/header element found"
        return None

    def _check_footer(self, html: str, style) -> Optional[str]:
        if "<footer" not in html:
            return "No footer element found"
        return None

    def _check_icon_library(self, html: str, style) -> Optional[str]:
        if "data-lucide" in html and not _LUCIDE_SCRIPT.search(html):
            return "Lucide icon attributes found but library not loaded"
        return None


_default_checker = DocumentQualityChecker()


def validate_html(html: str, style_system: Optional[StyleSystem] = None) -> QualityReport:
    """Validate a document with the default checker."""
    return _default_checker.validate(html, style_system)
