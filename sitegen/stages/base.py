"""
Base Stage Class for the Site Generation Pipeline

Every network-backed stage inherits from this base class, which provides:
- Standard identity (name, display name, description)
- System prompt + user prompt message shaping
- Structured (JSON) and raw text calls through the shared gateway
- Boundary validation errors carrying the offending payload

Architecture:
    BaseStage (abstract)
    ├── IntentClassifier        (stage 1)
    ├── StyleSystemGenerator    (stage 2)
    ├── ContentPlanner          (stage 3)
    └── DocumentGenerator       (stage 4)

Stage 5 (quality) is pure static analysis and lives in sitegen.quality.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..gateway import GatewayClient

logger = logging.getLogger(__name__)


class StageValidationError(ValueError):
    """Provider response did not satisfy the stage's schema."""

    def __init__(self, message: str, payload: Any = None):
        super().__init__(message)
        self.payload = payload


class BaseStage(ABC):
    """
    Abstract base class for pipeline stages.

    Each stage must implement:
    - name: Stage identifier used in results and events
    - display_name: Human-readable name
    - description: Progress text shown while the stage runs
    - system_prompt: Instruction block (sent with the prompt cache hint)
    """

    # Default token limits
    MAX_OUTPUT_TOKENS = 4096
    TEMPERATURE = 0.7

    def __init__(self, gateway: "GatewayClient", model: Optional[str] = None):
        """
        Initialize stage with the shared gateway.

        Args:
            gateway: GatewayClient instance for API calls
            model: Model override for this run
        """
        self.gateway = gateway
        self.model = model

    # =========================================================================
    # ABSTRACT PROPERTIES - Must be implemented by each stage
    # =========================================================================

    @property
    @abstractmethod
    def name(self) -> str:
        """Stage identifier (e.g., 'intent')."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name (e.g., 'Intent Classifier')."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Brief description of the stage's purpose."""
        pass

    @property
    @abstractmethod
    def system_prompt(self) -> str:
        """Full system instruction for the model."""
        pass

    # =========================================================================
    # GATEWAY HELPERS
    # =========================================================================

    def _messages(self, user_prompt: str) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": user_prompt},
        ]

    async def _call_structured(self, user_prompt: str) -> Dict[str, Any]:
        """
        Call the model and parse a JSON object from its reply.

        Raises:
            ResponseParseError: reply was not recoverable JSON
            StageValidationError: reply was JSON but not an object
        """
        logger.info(f"[{self.name}] Calling model...")
        data = await self.gateway.call_structured(
            self._messages(user_prompt),
            model=self.model,
            max_tokens=self.MAX_OUTPUT_TOKENS,
            temperature=self.TEMPERATURE,
        )
        if not isinstance(data, dict):
            raise StageValidationError(
                f"{self.display_name} expected a JSON object, got {type(data).__name__}",
                payload=data,
            )
        return data

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
