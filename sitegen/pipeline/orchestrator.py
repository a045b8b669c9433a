"""
Site Generation Pipeline - Main Orchestrator

5-stage pipeline:
    Stage 1: Intent classification
    Stage 2: Style system generation (or template lookup)
    Stage 3: Content planning
    Stage 4: Document generation
    Stage 5: Quality validation (+ optional review pass)

Quality tiers control which stages run:
    fast:     1 + template style + 4 + 5 (auto-fix only)
    balanced: 1 + 2 + 4 + 5 (auto-fix only)
    best:     1 + (2 || 3) + 4 + 5 with a review pass below the threshold

The orchestrator is the error boundary for a run: stage exceptions become
error results and deterministic substitutes take over. Only a document
generation failure ends the run early, and even then a result is returned.
"""

import asyncio
import logging
import time
from typing import Any, Awaitable, Callable, List, Optional, Tuple, TYPE_CHECKING

from ..models import (
    STAGE_DESCRIPTIONS,
    ContentPlan,
    IntentResult,
    PipelineInput,
    PipelineResult,
    PipelineStageResult,
    QualityReport,
    StageName,
    StageStatus,
    StyleSystem,
    Tier,
)
from ..quality import (
    REVIEW_SCORE_THRESHOLD,
    DocumentQualityChecker,
    accept_review,
    auto_fix_html,
    llm_review_pass,
)
from ..stages import (
    ContentPlanner,
    StyleSystemGenerator,
    create_stages,
    fallback_intent,
    minimal_content_plan,
    template_style_system,
)
from .events import (
    DocumentChunk,
    EventChannel,
    PipelineCancelled,
    StageCompleted,
    StageFailed,
    StageStarted,
)

if TYPE_CHECKING:
    from ..gateway import GatewayClient

logger = logging.getLogger(__name__)

TEMPLATE_DESCRIPTION = "Applying template design system"
REVIEW_DESCRIPTION = "Running AI quality review"


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class PipelineOrchestrator:
    """
    Runs the generation pipeline for one request at a time.

    Usage:
        orchestrator = PipelineOrchestrator(gateway)
        result = await orchestrator.run(PipelineInput(prompt="...", tier=Tier.BEST))

    Holds no per-run state, so one instance can serve concurrent runs.
    """

    def __init__(
        self,
        gateway: "GatewayClient",
        review_threshold: int = REVIEW_SCORE_THRESHOLD,
        checker: Optional[DocumentQualityChecker] = None,
    ):
        """
        Initialize orchestrator.

        Args:
            gateway: Shared GatewayClient for every stage
            review_threshold: Best-tier review pass runs when the score is below this
            checker: Document checker (defaults to the full check set)
        """
        self.gateway = gateway
        self.review_threshold = review_threshold
        self.checker = checker or DocumentQualityChecker()

    async def run(
        self,
        pipeline_input: PipelineInput,
        events: Optional[EventChannel] = None,
        stream_document: Optional[bool] = None,
    ) -> PipelineResult:
        """
        Run the pipeline.

        Args:
            pipeline_input: prompt, tier and optional model
            events: channel receiving progress events (optional)
            stream_document: use streaming document generation; defaults to
                True whenever an event channel is attached

        Cancelling the calling task aborts the in-flight gateway call. A
        PipelineCancelled event carrying the stages recorded so far is
        published before the cancellation propagates.
        """
        if stream_document is None:
            stream_document = events is not None

        stages: List[PipelineStageResult] = []
        try:
            return await self._execute(pipeline_input, stages, events, stream_document)
        except asyncio.CancelledError:
            logger.warning(f"[Pipeline] Cancelled after {len(stages)} stage(s)")
            if events is not None and not events.closed:
                events.publish(PipelineCancelled(stages=list(stages)))
            raise

    # =========================================================================
    # RUN
    # =========================================================================

    async def _execute(
        self,
        pipeline_input: PipelineInput,
        stages: List[PipelineStageResult],
        events: Optional[EventChannel],
        stream_document: bool,
    ) -> PipelineResult:
        start = time.monotonic()
        tier = Tier.parse(pipeline_input.tier)
        model = self.gateway.resolve_model(pipeline_input.model)
        prompt = pipeline_input.prompt

        logger.info(f"[Pipeline] Starting: tier={tier.value} model={model} prompt=\"{prompt[:80]}\"")

        registry = create_stages(self.gateway, model=model)
        intent_stage = registry[StageName.INTENT]
        style_stage = registry[StageName.DESIGN]
        content_stage = registry[StageName.CONTENT]
        document_stage = registry[StageName.CODEGEN]

        # ── Stage 1: Intent ──────────────────────────────────────────────────
        intent, result = await self._run_stage(
            StageName.INTENT, lambda: intent_stage.classify(prompt), events
        )
        stages.append(result)
        if intent is None:
            logger.warning("[Pipeline] Intent stage failed, using fallback intent")
            intent = fallback_intent(prompt)

        # ── Stages 2 + 3: Style & Content ────────────────────────────────────
        style, plan = await self._style_and_content(
            tier, prompt, intent, style_stage, content_stage, stages, events
        )
        plan = (plan or minimal_content_plan(intent)).with_intent_context(intent)

        # ── Stage 4: Document ────────────────────────────────────────────────
        if stream_document:
            def on_chunk(delta: str, accumulated: str) -> None:
                if events is not None:
                    events.publish(DocumentChunk(delta=delta, accumulated=accumulated))

            generate = lambda: document_stage.generate_stream(prompt, intent, style, plan, on_chunk)
        else:
            generate = lambda: document_stage.generate(prompt, intent, style, plan)

        html, result = await self._run_stage(StageName.CODEGEN, generate, events)
        stages.append(result)

        if html is None:
            logger.error(f"[Pipeline] Document generation failed: {result.error}")
            return PipelineResult(
                html="",
                style_system=style,
                content_plan=plan,
                intent=intent,
                quality_report=QualityReport.failure(
                    f"Code generation failed: {result.error or 'Unknown error'}"
                ),
                stages=stages,
                total_duration_ms=_elapsed_ms(start),
                model=model,
                tier=tier,
            )

        # ── Stage 5: Quality ─────────────────────────────────────────────────
        html, report = await self._quality(tier, html, style, model, stages, events)

        total = _elapsed_ms(start)
        logger.info(
            f"[Pipeline] Complete: tier={tier.value} duration={total}ms "
            f"html={len(html):,} chars quality={report.score}/100"
        )

        return PipelineResult(
            html=html,
            style_system=style,
            content_plan=plan,
            intent=intent,
            quality_report=report,
            stages=stages,
            total_duration_ms=total,
            model=model,
            tier=tier,
        )

    async def _style_and_content(
        self,
        tier: Tier,
        prompt: str,
        intent: IntentResult,
        style_stage: StyleSystemGenerator,
        content_stage: ContentPlanner,
        stages: List[PipelineStageResult],
        events: Optional[EventChannel],
    ) -> Tuple[StyleSystem, Optional[ContentPlan]]:
        """Stages 2 and 3 according to tier. Returns (style, plan or None)."""
        if tier == Tier.FAST:
            async def template() -> StyleSystem:
                return template_style_system(intent.mood)

            style, result = await self._run_stage(
                StageName.DESIGN, template, events, description=TEMPLATE_DESCRIPTION
            )
            stages.append(result)
            stages.append(self._skipped(StageName.CONTENT))
            return style or template_style_system(intent.mood), None

        if tier == Tier.BEST:
            # Content only needs tone, so it gets the provisional template style
            provisional = template_style_system(intent.mood)
            (style, style_result), (plan, plan_result) = await asyncio.gather(
                self._run_stage(StageName.DESIGN, lambda: style_stage.generate(prompt, intent), events),
                self._run_stage(StageName.CONTENT, lambda: content_stage.plan(prompt, intent, provisional), events),
            )
            stages.append(style_result)
            stages.append(plan_result)
            if style is None:
                logger.warning("[Pipeline] Style stage failed, using template style system")
                style = provisional
            if plan is None:
                logger.warning("[Pipeline] Content stage failed, using minimal content plan")
            return style, plan

        style, result = await self._run_stage(
            StageName.DESIGN, lambda: style_stage.generate(prompt, intent), events
        )
        stages.append(result)
        if style is None:
            logger.warning("[Pipeline] Style stage failed, using template style system")
            style = template_style_system(intent.mood)
        stages.append(self._skipped(StageName.CONTENT))
        return style, None

    async def _quality(
        self,
        tier: Tier,
        html: str,
        style: StyleSystem,
        model: str,
        stages: List[PipelineStageResult],
        events: Optional[EventChannel],
    ) -> Tuple[str, QualityReport]:
        """Stage 5: auto-fix, validate, and (best tier only) a gated review pass."""
        start = time.monotonic()
        self._publish(events, StageStarted(StageName.QUALITY, STAGE_DESCRIPTIONS[StageName.QUALITY]))

        html = auto_fix_html(html)
        report = self.checker.validate(html, style)

        if tier == Tier.BEST and report.score < self.review_threshold:
            self._publish(events, StageStarted(StageName.QUALITY, REVIEW_DESCRIPTION))
            try:
                reviewed = await llm_review_pass(html, style, report, self.gateway, model=model)
                if accept_review(html, reviewed):
                    html = reviewed
                    report = self.checker.validate(html, style)
                else:
                    logger.warning(
                        f"[Pipeline] Discarding review output ({len(reviewed or ''):,} chars "
                        f"vs {len(html):,} original)"
                    )
            except Exception as e:
                # Review is advisory; the pre-review document stands
                logger.error(f"[Pipeline] Review pass failed: {e}")

        result = PipelineStageResult(
            stage=StageName.QUALITY,
            status=StageStatus.SUCCESS if report.passed else StageStatus.ERROR,
            duration_ms=_elapsed_ms(start),
            data=report,
        )
        stages.append(result)
        self._publish(events, StageCompleted(result))
        return html, report

    # =========================================================================
    # HELPERS
    # =========================================================================

    async def _run_stage(
        self,
        name: str,
        fn: Callable[[], Awaitable[Any]],
        events: Optional[EventChannel],
        description: Optional[str] = None,
    ) -> Tuple[Any, PipelineStageResult]:
        """
        Run one stage uniformly: publish start, time it, convert failure into
        an error result. Returns (data or None, stage result).
        """
        start = time.monotonic()
        self._publish(events, StageStarted(name, description or STAGE_DESCRIPTIONS[name]))

        try:
            data = await fn()
        except Exception as e:
            error = str(e) or e.__class__.__name__
            logger.error(f"[Pipeline] Stage {name} failed: {error}")
            result = PipelineStageResult(
                stage=name,
                status=StageStatus.ERROR,
                duration_ms=_elapsed_ms(start),
                error=error,
            )
            self._publish(events, StageFailed(name, error))
            self._publish(events, StageCompleted(result))
            return None, result

        result = PipelineStageResult(
            stage=name,
            status=StageStatus.SUCCESS,
            duration_ms=_elapsed_ms(start),
            data=data,
        )
        logger.info(f"[Pipeline] Stage {name} complete in {result.duration_ms}ms")
        self._publish(events, StageCompleted(result))
        return data, result

    @staticmethod
    def _skipped(name: str) -> PipelineStageResult:
        return PipelineStageResult(stage=name, status=StageStatus.SKIPPED, duration_ms=0)

    @staticmethod
    def _publish(events: Optional[EventChannel], event) -> None:
        if events is not None:
            events.publish(event)


async def run_pipeline(
    pipeline_input: PipelineInput,
    gateway: "GatewayClient",
    events: Optional[EventChannel] = None,
) -> PipelineResult:
    """Convenience wrapper: one-off orchestrator run."""
    return await PipelineOrchestrator(gateway).run(pipeline_input, events=events)
