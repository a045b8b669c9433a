"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and configuration for all test modules:
- Sample provider payloads for every stage
- A complete, well-formed HTML document
- FakeGateway: an in-memory stand-in for GatewayClient
"""

import copy
from typing import Any, Dict, List, Optional

import pytest

from sitegen.models import IntentResult
from sitegen.stages import template_style_system


# ============================================================================
# Sample Payloads
# ============================================================================

INTENT_PAYLOAD: Dict[str, Any] = {
    "siteType": "saas_landing",
    "industry": "productivity software",
    "businessName": "FlowSync",
    "mood": "dark_futuristic",
    "suggestedSections": ["hero", "features", "pricing", "testimonials", "cta", "footer"],
    "requiredFeatures": ["responsive", "animations", "contact_form"],
    "contentHints": {
        "hasLogo": False,
        "hasCopy": False,
        "hasImages": False,
        "needsGenerated": ["headline", "features", "testimonials"],
    },
    "imageKeywords": ["team collaboration", "dashboard analytics"],
    "subjectDetails": "Workflow automation for remote teams",
    "targetAudience": "Engineering managers at 20-200 person startups",
    "primaryAction": "start a free trial",
    "uniqueSellingPoints": ["Two-way sync with Jira", "Set up in five minutes"],
    "confidence": 0.92,
    "clarifyingQuestions": None,
}

STYLE_PAYLOAD: Dict[str, Any] = {
    "colors": {
        "background": "#0b1020",
        "foreground": "#f1f5f9",
        "card": "#131a33",
        "cardForeground": "#f1f5f9",
        "primary": "#7c3aed",
        "primaryGlow": "rgba(124, 58, 237, 0.2)",
        "secondary": "#06b6d4",
        "accent": "#f472b6",
        "muted": "#1e253f",
        "mutedForeground": "#94a3b8",
        "border": "rgba(255,255,255,0.08)",
        "destructive": "#ef4444",
    },
    "fonts": {
        "display": "Sora",
        "body": "Inter",
        "mono": "JetBrains Mono",
        "googleImportUrl": "https://fonts.googleapis.com/css2?family=Sora:wght@600;700&family=Inter&display=swap",
    },
    "typography": {"heroSize": "clamp(3rem, 7vw, 5.5rem)"},
    "layoutPattern": "dark_bento_cards",
}

CONTENT_PAYLOAD: Dict[str, Any] = {
    "sections": [
        {
            "id": "hero",
            "type": "hero",
            "layout": "split_left_text_right_visual",
            "content": {"headline": "Ship work, not status updates", "ctaPrimary": "Start free"},
            "visualElements": ["gradient_orb"],
        },
        {
            "id": "features",
            "type": "features",
            "layout": "bento_grid",
            "content": {"headline": "Everything in sync"},
        },
        {
            "id": "cta",
            "type": "cta",
            "layout": "centered_text_bg_gradient",
            "content": {"headline": "Try FlowSync today"},
        },
    ],
    "metadata": {
        "totalSections": 3,
        "estimatedScrollLength": "3 viewports",
        "mobileLayout": "single_column_stack",
        "primaryCta": "Start free",
        "secondaryCta": "See a demo",
    },
}

GOOD_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>FlowSync - Workflow automation</title>
  <script src="https://cdn.tailwindcss.com"></script>
  <link href="https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@700&family=Inter&display=swap" rel="stylesheet">
  <style>
    :root { --primary: #06b6d4; --bg: #0a1628; }
    html { scroll-behavior: smooth; }
    body { font-family: 'Inter', sans-serif; background: var(--bg); }
    h1, h2 { font-family: 'Space Grotesk', sans-serif; }
    .card { transition: all 0.3s ease; }
    .card:hover { transform: translateY(-4px); }
    @media (max-width: 768px) { .grid { grid-template-columns: 1fr; } }
  </style>
</head>
<body>
  <nav><a href="#hero" class="hover:text-white">FlowSync</a></nav>
  <section id="hero"><h1>Ship work, not status updates</h1>
    <img src="https://picsum.photos/seed/team-collaboration/1200/800" alt="Team at work" onerror="this.style.display='none'">
  </section>
  <section id="features"><div class="card">Everything in sync</div></section>
  <section id="cta"><a href="#" class="card">Start free</a></section>
  <footer>&copy; FlowSync</footer>
</body>
</html>"""


# ============================================================================
# Fake Gateway
# ============================================================================

_STAGE_MARKERS = (
    ("requirements analyst", "intent"),
    ("web design architect", "design"),
    ("content strategist", "content"),
    ("Review and fix this HTML page", "review"),
    ("elite frontend engineer", "codegen"),
)


def _stage_of(messages: List[Dict[str, str]]) -> str:
    system = "\n".join(m["content"] for m in messages if m.get("role") == "system")
    for marker, stage in _STAGE_MARKERS:
        if marker in system:
            return stage
    return "unknown"


class FakeGateway:
    """
    In-memory GatewayClient stand-in.

    `responses` maps a stage ("intent", "design", "content", "codegen",
    "review") to a payload, or to an Exception instance to raise.
    Streaming splits the codegen response into `chunk_count` deltas.
    """

    def __init__(self, responses: Optional[Dict[str, Any]] = None, chunk_count: int = 5):
        self.model = "claude-sonnet-4-5-20250929"
        self.responses = {
            "intent": copy.deepcopy(INTENT_PAYLOAD),
            "design": copy.deepcopy(STYLE_PAYLOAD),
            "content": copy.deepcopy(CONTENT_PAYLOAD),
            "codegen": GOOD_HTML,
            "review": GOOD_HTML,
        }
        self.responses.update(responses or {})
        self.chunk_count = chunk_count
        self.calls: List[str] = []
        self.models: List[Optional[str]] = []

    def resolve_model(self, model: Optional[str]) -> str:
        if not model:
            return self.model
        return {"anthropic/claude-sonnet-4-5": self.model}.get(model, model)

    def _respond(self, messages, model) -> Any:
        stage = _stage_of(messages)
        self.calls.append(stage)
        self.models.append(model)
        response = self.responses.get(stage)
        if isinstance(response, Exception):
            raise response
        return response

    async def call(self, messages, model=None, max_tokens=4096, temperature=0.7) -> str:
        return self._respond(messages, model)

    async def call_structured(self, messages, model=None, max_tokens=4096, temperature=0.7) -> Any:
        return self._respond(messages, model)

    async def call_streaming(self, messages, on_chunk=None, model=None, max_tokens=4096, temperature=0.7) -> str:
        text = self._respond(messages, model)
        size = max(1, len(text) // self.chunk_count + 1)
        accumulated = ""
        for i in range(0, len(text), size):
            delta = text[i:i + size]
            accumulated += delta
            if on_chunk:
                on_chunk(delta, accumulated)
        return accumulated

    def count(self, stage: str) -> int:
        return self.calls.count(stage)


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def intent_payload() -> Dict[str, Any]:
    return copy.deepcopy(INTENT_PAYLOAD)


@pytest.fixture
def style_payload() -> Dict[str, Any]:
    return copy.deepcopy(STYLE_PAYLOAD)


@pytest.fixture
def content_payload() -> Dict[str, Any]:
    return copy.deepcopy(CONTENT_PAYLOAD)


@pytest.fixture
def sample_intent() -> IntentResult:
    return IntentResult.from_dict(INTENT_PAYLOAD)


@pytest.fixture
def sample_style():
    """Template style system whose tokens GOOD_HTML uses."""
    return template_style_system("dark_futuristic")


@pytest.fixture
def good_html() -> str:
    return GOOD_HTML


@pytest.fixture
def fake_gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def make_gateway():
    """Factory for FakeGateway with per-stage overrides."""
    def _make(**responses) -> FakeGateway:
        chunk_count = responses.pop("chunk_count", 5)
        return FakeGateway(responses, chunk_count=chunk_count)
    return _make
