"""
Test Suite: Pipeline Orchestrator

Tests the tier matrix, per-stage fallbacks, the fatal document-generation
path, the gated review pass, progress events and cancellation.
"""

import asyncio

import pytest

import sitegen.pipeline.orchestrator as orchestrator_module
from sitegen.models import (
    PipelineInput,
    Severity,
    StageName,
    StageStatus,
    Tier,
)
from sitegen.pipeline import (
    DocumentChunk,
    EventChannel,
    PipelineCancelled,
    PipelineOrchestrator,
    StageCompleted,
    StageFailed,
    StageStarted,
    run_pipeline,
)
from sitegen.stages import STAGE_CLASSES, create_stages, template_style_system

FLOWSYNC_PROMPT = "Build a coming-soon page for FlowSync"

# Has a document marker but scores well below the review threshold
WEAK_HTML = "<!DOCTYPE html><html><head></head><body><div>FlowSync is coming soon</div></body></html>"


async def _drain(channel: EventChannel):
    channel.close()
    return [event async for event in channel]


def _stage_names(result):
    return [s.stage for s in result.stages]


class TestTierMatrix:
    """Test which stages run under each tier."""

    @pytest.mark.asyncio
    async def test_fast_tier_flowsync(self, fake_gateway):
        result = await PipelineOrchestrator(fake_gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.FAST)
        )

        assert "<!DOCTYPE html>" in result.html
        assert "</html>" in result.html
        non_skipped = [s.stage for s in result.stages if s.status != StageStatus.SKIPPED]
        assert non_skipped == ["intent", "design", "codegen", "quality"]
        assert result.quality_report.score >= 0
        assert result.tier == Tier.FAST

        # Style comes from the template: no design or content call
        assert fake_gateway.calls == ["intent", "codegen"]
        assert result.style_system == template_style_system("dark_futuristic")

    @pytest.mark.asyncio
    async def test_balanced_tier(self, fake_gateway):
        result = await PipelineOrchestrator(fake_gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT))

        assert fake_gateway.calls == ["intent", "design", "codegen"]
        assert result.stage("content").status == StageStatus.SKIPPED
        assert result.stage("content").duration_ms == 0
        assert result.style_system.colors.primary == "#7c3aed"
        # Skipped content stage -> plan built from the intent's suggested sections
        assert result.content_plan.section_ids == (
            "hero", "features", "pricing", "testimonials", "cta", "footer",
        )

    @pytest.mark.asyncio
    async def test_best_tier_runs_design_and_content(self, fake_gateway):
        result = await PipelineOrchestrator(fake_gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST)
        )

        assert _stage_names(result) == ["intent", "design", "content", "codegen", "quality"]
        assert all(s.status == StageStatus.SUCCESS for s in result.stages)
        assert sorted(fake_gateway.calls) == sorted(["intent", "design", "content", "codegen"])
        assert result.content_plan.section_ids == ("hero", "features", "cta")

    @pytest.mark.asyncio
    async def test_best_tier_design_and_content_concurrent(self, fake_gateway):
        content_started = asyncio.Event()
        original = fake_gateway.call_structured

        async def call_structured(messages, model=None, max_tokens=4096, temperature=0.7):
            system = messages[0]["content"]
            if "content strategist" in system:
                content_started.set()
            elif "web design architect" in system:
                # Would time out if content only started after design finished
                await asyncio.wait_for(content_started.wait(), timeout=1)
            return await original(messages, model=model, max_tokens=max_tokens, temperature=temperature)

        fake_gateway.call_structured = call_structured

        result = await PipelineOrchestrator(fake_gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST)
        )

        assert result.stage("design").status == StageStatus.SUCCESS
        assert result.stage("content").status == StageStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_stages_built_from_registry(self, fake_gateway, monkeypatch):
        built = []

        def recording_create_stages(gateway, model=None):
            stages = create_stages(gateway, model=model)
            built.append(stages)
            return stages

        monkeypatch.setattr(orchestrator_module, "create_stages", recording_create_stages)

        await PipelineOrchestrator(fake_gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST))

        assert len(built) == 1
        assert set(built[0]) == set(STAGE_CLASSES)
        assert all(stage.model == fake_gateway.model for stage in built[0].values())

    @pytest.mark.asyncio
    async def test_unknown_tier_string_is_balanced(self, fake_gateway):
        result = await PipelineOrchestrator(fake_gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier="ultra")
        )
        assert result.tier == Tier.BALANCED

    @pytest.mark.asyncio
    async def test_model_passed_to_every_stage(self, fake_gateway):
        result = await PipelineOrchestrator(fake_gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST, model="claude-opus-4-5")
        )
        assert result.model == "claude-opus-4-5"
        assert set(fake_gateway.models) == {"claude-opus-4-5"}

    @pytest.mark.asyncio
    async def test_default_model(self, fake_gateway):
        result = await run_pipeline(PipelineInput(prompt=FLOWSYNC_PROMPT), fake_gateway)
        assert result.model == fake_gateway.model

    @pytest.mark.asyncio
    async def test_plan_enriched_with_intent_context(self, fake_gateway):
        result = await PipelineOrchestrator(fake_gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST)
        )
        metadata = result.content_plan.metadata
        assert metadata.subject_details == "Workflow automation for remote teams"
        assert metadata.image_keywords == ("team collaboration", "dashboard analytics")


class TestFallbacks:
    """Test deterministic substitutes on stage failure."""

    @pytest.mark.asyncio
    async def test_intent_failure_uses_fallback(self, make_gateway):
        gateway = make_gateway(intent=RuntimeError("provider unavailable"))
        result = await PipelineOrchestrator(gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT))

        assert result.stage("intent").status == StageStatus.ERROR
        assert result.stage("intent").error == "provider unavailable"
        assert result.intent.confidence == 0.3
        assert result.intent.business_name == "FlowSync"
        assert result.html

    @pytest.mark.asyncio
    async def test_design_failure_uses_template(self, make_gateway):
        gateway = make_gateway(design={"colors": {}})
        result = await PipelineOrchestrator(gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT))

        assert result.stage("design").status == StageStatus.ERROR
        assert result.style_system == template_style_system("dark_futuristic")
        assert result.stage("codegen").status == StageStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_best_tier_content_failure_uses_minimal_plan(self, make_gateway):
        gateway = make_gateway(content={"sections": []})
        result = await PipelineOrchestrator(gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST)
        )

        assert result.stage("content").status == StageStatus.ERROR
        assert result.content_plan.section_ids[0] == "hero"
        assert len(result.content_plan.sections) == 6

    @pytest.mark.asyncio
    async def test_best_tier_both_parallel_stages_fail(self, make_gateway):
        gateway = make_gateway(design=RuntimeError("a"), content=RuntimeError("b"))
        result = await PipelineOrchestrator(gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST)
        )

        assert result.style_system == template_style_system("dark_futuristic")
        assert len(result.content_plan.sections) == 6
        assert result.stage("codegen").status == StageStatus.SUCCESS


class TestDocumentGenerationFailure:
    """Stage 4 failure is fatal but still returns a result."""

    @pytest.mark.asyncio
    async def test_network_failure(self, make_gateway):
        gateway = make_gateway(codegen=ConnectionError("network down"))
        result = await PipelineOrchestrator(gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT))

        assert result.html == ""
        assert result.quality_report.score == 0
        assert result.quality_report.passed is False
        assert result.quality_report.issues[0].severity == Severity.CRITICAL
        assert "Code generation failed: network down" in result.quality_report.issues[0].message
        assert _stage_names(result)[-1] == "codegen"
        assert result.stage("quality") is None

    @pytest.mark.asyncio
    async def test_reply_without_document(self, make_gateway):
        gateway = make_gateway(codegen="I can't help with that.")
        result = await PipelineOrchestrator(gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT))

        assert result.html == ""
        assert result.stage("codegen").status == StageStatus.ERROR
        assert "valid HTML" in result.stage("codegen").error

    @pytest.mark.asyncio
    async def test_partial_results_kept(self, make_gateway):
        gateway = make_gateway(codegen=RuntimeError("boom"))
        result = await PipelineOrchestrator(gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT))

        assert result.intent.business_name == "FlowSync"
        assert result.style_system is not None
        assert result.content_plan is not None


class TestQualityStage:
    """Test auto-fix, validation and the gated review pass."""

    @pytest.mark.asyncio
    async def test_auto_fix_applied(self, make_gateway):
        gateway = make_gateway(codegen=WEAK_HTML)
        result = await PipelineOrchestrator(gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT))

        assert "scroll-behavior: smooth" in result.html
        assert 'name="viewport"' in result.html

    @pytest.mark.asyncio
    async def test_review_never_runs_under_balanced(self, make_gateway):
        gateway = make_gateway(codegen=WEAK_HTML)
        result = await PipelineOrchestrator(gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT))

        assert result.quality_report.score < 75
        assert gateway.count("review") == 0
        assert result.stage("quality").status == StageStatus.ERROR

    @pytest.mark.asyncio
    async def test_review_never_runs_under_fast(self, make_gateway):
        gateway = make_gateway(codegen=WEAK_HTML)
        await PipelineOrchestrator(gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.FAST))
        assert gateway.count("review") == 0

    @pytest.mark.asyncio
    async def test_review_runs_once_under_best_when_below_threshold(self, make_gateway, good_html):
        gateway = make_gateway(codegen=WEAK_HTML)
        result = await PipelineOrchestrator(gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST)
        )

        assert gateway.count("review") == 1
        assert result.html == good_html
        # Re-validated against the generated style system (Sora / #7c3aed)
        assert result.quality_report.score == 84
        assert result.quality_report.passed
        assert result.stage("quality").status == StageStatus.SUCCESS

    @pytest.mark.asyncio
    async def test_review_skipped_above_threshold(self, fake_gateway):
        result = await PipelineOrchestrator(fake_gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST)
        )
        assert result.quality_report.score >= 75
        assert fake_gateway.count("review") == 0

    @pytest.mark.asyncio
    async def test_custom_threshold(self, fake_gateway):
        orchestrator = PipelineOrchestrator(fake_gateway, review_threshold=101)
        await orchestrator.run(PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST))
        assert fake_gateway.count("review") == 1

    @pytest.mark.asyncio
    async def test_truncated_review_discarded(self, make_gateway):
        gateway = make_gateway(codegen=WEAK_HTML, review="<!DOCTYPE html><html></html>")
        result = await PipelineOrchestrator(gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST)
        )

        assert gateway.count("review") == 1
        assert "FlowSync is coming soon" in result.html

    @pytest.mark.asyncio
    async def test_review_failure_swallowed(self, make_gateway):
        gateway = make_gateway(codegen=WEAK_HTML, review=RuntimeError("review timed out"))
        result = await PipelineOrchestrator(gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST)
        )

        assert "FlowSync is coming soon" in result.html
        assert result.stage("quality") is not None
        assert result.quality_report.score < 75


class TestEvents:
    """Test progress events published to the channel."""

    @pytest.mark.asyncio
    async def test_event_sequence(self, fake_gateway):
        channel = EventChannel()
        await PipelineOrchestrator(fake_gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.FAST), events=channel
        )
        events = await _drain(channel)

        assert isinstance(events[0], StageStarted)
        assert events[0].stage == "intent"
        completed = [e.stage for e in events if isinstance(e, StageCompleted)]
        assert completed == ["intent", "design", "codegen", "quality"]

        started = [e for e in events if isinstance(e, StageStarted)]
        assert started[1].description == "Applying template design system"

    @pytest.mark.asyncio
    async def test_document_streamed_when_channel_attached(self, fake_gateway, good_html):
        channel = EventChannel()
        await PipelineOrchestrator(fake_gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT), events=channel)
        events = await _drain(channel)

        chunks = [e for e in events if isinstance(e, DocumentChunk)]
        assert len(chunks) > 1
        assert "".join(c.delta for c in chunks) == good_html
        assert chunks[-1].accumulated == good_html

    @pytest.mark.asyncio
    async def test_failure_events(self, make_gateway):
        gateway = make_gateway(design=RuntimeError("bad design"))
        channel = EventChannel()
        await PipelineOrchestrator(gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT), events=channel)
        events = await _drain(channel)

        failed = [e for e in events if isinstance(e, StageFailed)]
        assert [(e.stage, e.error) for e in failed] == [("design", "bad design")]
        index = events.index(failed[0])
        assert isinstance(events[index + 1], StageCompleted)
        assert events[index + 1].result.status == StageStatus.ERROR

    @pytest.mark.asyncio
    async def test_review_announced(self, make_gateway):
        gateway = make_gateway(codegen=WEAK_HTML)
        channel = EventChannel()
        await PipelineOrchestrator(gateway).run(
            PipelineInput(prompt=FLOWSYNC_PROMPT, tier=Tier.BEST), events=channel
        )
        events = await _drain(channel)

        quality_starts = [e.description for e in events if isinstance(e, StageStarted) and e.stage == "quality"]
        assert quality_starts == ["Running quality checks", "Running AI quality review"]


class TestCancellation:
    """Test cancelling a run mid-flight."""

    @pytest.mark.asyncio
    async def test_cancel_during_generation(self, fake_gateway):
        generating = asyncio.Event()

        async def hang(messages, on_chunk=None, **kwargs):
            generating.set()
            await asyncio.sleep(60)

        fake_gateway.call_streaming = hang
        channel = EventChannel()
        task = asyncio.create_task(
            PipelineOrchestrator(fake_gateway).run(PipelineInput(prompt=FLOWSYNC_PROMPT), events=channel)
        )
        await asyncio.wait_for(generating.wait(), timeout=1)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        events = await _drain(channel)
        cancelled = events[-1]
        assert isinstance(cancelled, PipelineCancelled)
        assert [s.stage for s in cancelled.stages] == ["intent", "design", "content"]
        assert StageName.CODEGEN not in [e.stage for e in events if isinstance(e, StageCompleted)]
