"""
Pipeline Stages

Stages 1-4 of the site generation pipeline. Each network-backed stage
inherits from BaseStage and shares one GatewayClient.

Stage 1: IntentClassifier      - request -> IntentResult
Stage 2: StyleSystemGenerator  - request + intent -> StyleSystem
Stage 3: ContentPlanner        - request + intent + style -> ContentPlan
Stage 4: DocumentGenerator     - everything above -> HTML
"""

from typing import Dict, Optional, Type

from .base import BaseStage, StageValidationError
from .content import ContentPlanner, minimal_content_plan, default_layout, SECTION_LAYOUTS
from .document import DocumentGenerator
from .intent import IntentClassifier, extract_business_name, fallback_intent
from .style import StyleSystemGenerator
from .themes import TEMPLATE_THEMES, template_style_system

STAGE_CLASSES: Dict[str, Type[BaseStage]] = {
    "intent": IntentClassifier,
    "design": StyleSystemGenerator,
    "content": ContentPlanner,
    "codegen": DocumentGenerator,
}


def get_stage_by_name(name: str, gateway, model: Optional[str] = None) -> BaseStage:
    """
    Instantiate a stage by name.

    Raises:
        ValueError: unknown stage name
    """
    stage_class = STAGE_CLASSES.get(name)
    if stage_class is None:
        raise ValueError(f"Unknown stage: {name}. Available: {list(STAGE_CLASSES.keys())}")
    return stage_class(gateway, model=model)


def create_stages(gateway, model: Optional[str] = None) -> Dict[str, BaseStage]:
    """Instantiate every network-backed stage against one gateway."""
    return {name: stage_class(gateway, model=model) for name, stage_class in STAGE_CLASSES.items()}


__all__ = [
    # Base
    "BaseStage",
    "StageValidationError",

    # Stages
    "IntentClassifier",
    "StyleSystemGenerator",
    "ContentPlanner",
    "DocumentGenerator",

    # Deterministic substitutes
    "fallback_intent",
    "extract_business_name",
    "template_style_system",
    "TEMPLATE_THEMES",
    "minimal_content_plan",
    "default_layout",
    "SECTION_LAYOUTS",

    # Registry
    "STAGE_CLASSES",
    "get_stage_by_name",
    "create_stages",
]
