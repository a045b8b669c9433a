"""
Generation Gateway Client

Single point of contact with the Anthropic Messages API:
- Buffered and streaming calls
- Explicit retry policy (rate limit / overload only)
- Hard wall-clock timeout per attempt
- Prompt caching hint on the system block
- Token and cache usage tracking
"""

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional

import anthropic

from .errors import (
    GatewayError,
    GatewayHTTPError,
    GatewayRetryExhaustedError,
    GatewayTimeoutError,
)
from .parsing import parse_json_response

logger = logging.getLogger(__name__)

Message = Dict[str, str]
ChunkCallback = Callable[[str, str], None]


# =============================================================================
# RETRY POLICY
# =============================================================================


@dataclass
class RetryPolicy:
    """Retry behavior shared by buffered and streaming calls."""

    max_retries: int = 2
    base_delay: float = 10.0
    max_delay: float = 60.0
    jitter: float = 0.0
    retryable_status_codes: tuple = (429, 529)

    def delay_for(self, attempt: int) -> float:
        """Backoff before retry number `attempt` (1-based)."""
        delay = min(self.base_delay * (2 ** (attempt - 1)), self.max_delay)
        if self.jitter:
            delay += random.uniform(0, self.jitter)
        return delay

    def is_retryable(self, status_code: Optional[int], message: str = "") -> bool:
        if status_code in self.retryable_status_codes:
            return True
        return bool(status_code and status_code >= 500 and "overloaded" in message.lower())


# =============================================================================
# USAGE TRACKING
# =============================================================================


@dataclass
class TokenUsage:
    """Token usage, including prompt cache reads and writes."""

    input_tokens: int = 0
    output_tokens: int = 0
    cache_read_input_tokens: int = 0
    cache_creation_input_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def add(self, other: "TokenUsage") -> None:
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens
        self.cache_read_input_tokens += other.cache_read_input_tokens
        self.cache_creation_input_tokens += other.cache_creation_input_tokens

    @classmethod
    def from_response(cls, usage: Any) -> "TokenUsage":
        if usage is None:
            return cls()
        return cls(
            input_tokens=_field(usage, "input_tokens") or 0,
            output_tokens=_field(usage, "output_tokens") or 0,
            cache_read_input_tokens=_field(usage, "cache_read_input_tokens") or 0,
            cache_creation_input_tokens=_field(usage, "cache_creation_input_tokens") or 0,
        )


def _field(obj: Any, name: str) -> Any:
    """Read a field from an SDK model or a plain dict."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


# =============================================================================
# CLIENT
# =============================================================================


class GatewayClient:
    """
    Async gateway to the Anthropic Messages API.

    Usage:
        gateway = GatewayClient(api_key="sk-ant-...")

        text = await gateway.call([
            {"role": "system", "content": "You are..."},
            {"role": "user", "content": "Build a landing page"},
        ])

        await gateway.close()

    Construct once per process and pass the instance to every stage.
    """

    DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
    MAX_TOKENS = 4096
    TEMPERATURE = 0.7

    # Friendly names accepted from callers
    MODEL_MAP = {
        "anthropic/claude-sonnet-4-5": "claude-sonnet-4-5-20250929",
        "claude-sonnet-4-5": "claude-sonnet-4-5-20250929",
        "anthropic/claude-opus-4-5": "claude-opus-4-5",
    }

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        retry_policy: Optional[RetryPolicy] = None,
        buffered_timeout: float = 180.0,
        streaming_timeout: float = 300.0,
        client: Optional[anthropic.AsyncAnthropic] = None,
    ):
        """
        Initialize gateway.

        Args:
            api_key: Anthropic API key (required unless `client` is given)
            model: Default model name or alias
            retry_policy: Retry behavior for transient errors
            buffered_timeout: Wall-clock budget per buffered attempt (seconds)
            streaming_timeout: Wall-clock budget per streaming attempt (seconds)
            client: Pre-built SDK client (tests inject a mock here)
        """
        if client is None:
            if not api_key:
                raise ValueError("ANTHROPIC_API_KEY not provided")
            # Retries are owned by RetryPolicy, not the SDK
            client = anthropic.AsyncAnthropic(api_key=api_key, max_retries=0)

        self.client = client
        self.model = self.resolve_model(model or self.DEFAULT_MODEL)
        self.retry_policy = retry_policy or RetryPolicy()
        self.buffered_timeout = buffered_timeout
        self.streaming_timeout = streaming_timeout

        self.total_usage = TokenUsage()
        self.call_count = 0

    @classmethod
    def from_settings(cls, settings=None) -> "GatewayClient":
        """Build a gateway from application settings."""
        if settings is None:
            from ..utils.config import get_settings

            settings = get_settings()

        return cls(
            api_key=settings.ANTHROPIC_API_KEY,
            model=settings.CLAUDE_MODEL,
            retry_policy=RetryPolicy(
                max_retries=settings.GATEWAY_MAX_RETRIES,
                base_delay=settings.GATEWAY_RETRY_BASE_DELAY,
                max_delay=settings.GATEWAY_RETRY_MAX_DELAY,
                jitter=settings.GATEWAY_RETRY_JITTER,
            ),
            buffered_timeout=settings.BUFFERED_TIMEOUT,
            streaming_timeout=settings.STREAMING_TIMEOUT,
        )

    def resolve_model(self, model: Optional[str]) -> str:
        if not model:
            return self.model
        return self.MODEL_MAP.get(model, model)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def call(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> str:
        """
        Buffered call. Returns the full response text.

        Raises:
            GatewayHTTPError: non-retryable provider response
            GatewayRetryExhaustedError: rate limit / overload persisted
            GatewayTimeoutError: attempt exceeded buffered_timeout
        """
        request = self._build_request(messages, model, max_tokens, temperature)

        async def attempt() -> str:
            response = await self.client.messages.create(**request)
            self._record_usage(TokenUsage.from_response(_field(response, "usage")))

            text = ""
            for block in _field(response, "content") or []:
                if _field(block, "type") in (None, "text") and _field(block, "text"):
                    text += _field(block, "text")
            return text

        return await self._with_retry(attempt, self.buffered_timeout, request["model"])

    async def call_structured(
        self,
        messages: List[Message],
        model: Optional[str] = None,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> Any:
        """
        Buffered call whose output is parsed as JSON.

        Raises:
            ResponseParseError: output was not recoverable JSON
        """
        text = await self.call(messages, model=model, max_tokens=max_tokens, temperature=temperature)
        return parse_json_response(text)

    async def call_streaming(
        self,
        messages: List[Message],
        on_chunk: Optional[ChunkCallback] = None,
        model: Optional[str] = None,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> str:
        """
        Streaming call.

        `on_chunk(delta, accumulated)` is invoked synchronously for every
        text delta, in order. Returns the full text when the stream closes.
        A failed attempt is only retried if no delta was delivered yet.
        """
        request = self._build_request(messages, model, max_tokens, temperature)
        request["stream"] = True
        delivered = False

        async def attempt() -> str:
            nonlocal delivered
            accumulated = ""
            usage = TokenUsage()

            # Stream is closed on every exit, including timeout and cancellation
            async with await self.client.messages.create(**request) as stream:
                async for event in stream:
                    event_type = _field(event, "type")
                    try:
                        if event_type == "content_block_delta":
                            delta = _field(event, "delta")
                            if _field(delta, "type") != "text_delta":
                                continue
                            chunk = _field(delta, "text")
                            if not isinstance(chunk, str):
                                raise ValueError("text_delta without text")
                            accumulated += chunk
                            delivered = True
                            if on_chunk:
                                on_chunk(chunk, accumulated)
                        elif event_type == "message_start":
                            start_usage = TokenUsage.from_response(
                                _field(_field(event, "message"), "usage")
                            )
                            usage.input_tokens = start_usage.input_tokens
                            usage.cache_read_input_tokens = start_usage.cache_read_input_tokens
                            usage.cache_creation_input_tokens = start_usage.cache_creation_input_tokens
                        elif event_type == "message_delta":
                            usage.output_tokens = _field(_field(event, "usage"), "output_tokens") or 0
                    except (AttributeError, TypeError, ValueError) as e:
                        logger.debug(f"[Gateway] Skipping malformed stream event: {e}")

            self._record_usage(usage)
            return accumulated

        return await self._with_retry(
            attempt,
            self.streaming_timeout,
            request["model"],
            can_retry=lambda: not delivered,
        )

    async def close(self):
        """Release the underlying SDK client."""
        close = getattr(self.client, "close", None)
        if close is not None:
            result = close()
            if asyncio.iscoroutine(result):
                await result

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _build_request(
        self,
        messages: List[Message],
        model: Optional[str],
        max_tokens: int,
        temperature: float,
    ) -> Dict[str, Any]:
        """Split system instructions from turns and attach the cache hint."""
        system_parts = [m["content"] for m in messages if m.get("role") == "system"]
        turns = [
            {"role": m["role"], "content": m["content"]}
            for m in messages
            if m.get("role") != "system"
        ]

        request: Dict[str, Any] = {
            "model": self.resolve_model(model),
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": turns,
        }

        if system_parts:
            request["system"] = [
                {
                    "type": "text",
                    "text": "\n\n".join(system_parts),
                    "cache_control": {"type": "ephemeral"},
                }
            ]

        return request

    async def _with_retry(
        self,
        operation: Callable[[], Awaitable[str]],
        timeout: float,
        model: str,
        can_retry: Callable[[], bool] = lambda: True,
    ) -> str:
        policy = self.retry_policy
        attempt = 0

        while True:
            attempt += 1
            try:
                return await asyncio.wait_for(operation(), timeout=timeout)

            except asyncio.TimeoutError:
                logger.error(f"[Gateway] {model} timed out after {timeout}s")
                raise GatewayTimeoutError(
                    f"Anthropic API call timed out after {timeout}s", timeout=timeout
                ) from None

            except anthropic.APITimeoutError as e:
                logger.error(f"[Gateway] {model} request timed out: {e}")
                raise GatewayTimeoutError(
                    f"Anthropic API request timed out: {e}", timeout=timeout
                ) from e

            except anthropic.APIStatusError as e:
                status = e.status_code
                message = str(e)

                if not policy.is_retryable(status, message):
                    logger.error(f"[Gateway] Anthropic API {status}: {message}")
                    raise GatewayHTTPError(
                        f"Anthropic API {status}: {message}",
                        status_code=status,
                        response=getattr(e, "body", None),
                    ) from e

                if attempt > policy.max_retries or not can_retry():
                    logger.error(
                        f"[Gateway] Giving up after {attempt} attempt(s): "
                        f"Anthropic API {status}"
                    )
                    raise GatewayRetryExhaustedError(
                        f"Anthropic API {status} after {attempt} attempt(s): {message}",
                        status_code=status,
                        response=getattr(e, "body", None),
                    ) from e

                delay = policy.delay_for(attempt)
                logger.warning(
                    f"[Gateway] {status} from {model}, retrying in {delay:.1f}s "
                    f"(attempt {attempt}/{policy.max_retries})"
                )
                await asyncio.sleep(delay)

            except anthropic.APIConnectionError as e:
                logger.error(f"[Gateway] Connection error: {e}")
                raise GatewayError(f"Anthropic API connection error: {e}") from e

    def _record_usage(self, usage: TokenUsage) -> None:
        self.total_usage.add(usage)
        self.call_count += 1

        logger.info(
            f"[Gateway] tokens: {usage.input_tokens} in "
            f"(cache read {usage.cache_read_input_tokens}, "
            f"cache write {usage.cache_creation_input_tokens}), "
            f"{usage.output_tokens} out"
        )
