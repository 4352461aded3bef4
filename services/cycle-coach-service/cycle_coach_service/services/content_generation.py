from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Protocol

import structlog

from ..exceptions import GenerationError
from ..metrics import CYCLE_PLANS_GENERATED_TOTAL, GENERATION_FAILURES_TOTAL, GENERATION_FALLBACKS_TOTAL
from ..prompts import (
    INSIGHTS_SYSTEM_MESSAGE,
    NUTRITION_SYSTEM_MESSAGE,
    WORKOUT_SYSTEM_MESSAGE,
    build_insights_prompt,
    build_nutrition_prompt,
    build_workout_prompt,
)
from ..schemas.cycle import CyclePhase
from ..schemas.generation import GenerationKind, InsightsResponse
from ..schemas.meal_plan import MealPlan
from ..schemas.profile import JournalEntry, UserProfile
from ..schemas.workout_plan import WorkoutPlan
from .cycle_calculator import current_phase
from .response_parser import ParseResult, parse_meal_plan_report, parse_workout_report
from .task_registry import GenerationTaskRegistry

logger = structlog.get_logger(__name__)


class TextGenerator(Protocol):
    async def send(self, prompt: str, system_instruction: str) -> str: ...


class ContentGenerator:
    """Runs prompt building, the generation call and reply parsing for one profile."""

    def __init__(self, client: TextGenerator, registry: GenerationTaskRegistry | None = None) -> None:
        self._client = client
        self._registry = registry if registry is not None else GenerationTaskRegistry()

    @property
    def registry(self) -> GenerationTaskRegistry:
        return self._registry

    @staticmethod
    def _resolve_phase(profile: UserProfile, phase: CyclePhase | None, today: date | None) -> CyclePhase:
        if phase is not None:
            return phase
        resolved, _ = current_phase(profile.last_period_date, profile.average_cycle_length, today)
        return resolved

    async def _send(self, kind: GenerationKind, prompt: str, system_instruction: str) -> str:
        log = logger.bind(kind=kind.value)
        log.info("generation_requested", prompt_chars=len(prompt))
        try:
            return await self._client.send(prompt, system_instruction)
        except GenerationError as exc:
            GENERATION_FAILURES_TOTAL.labels(kind=kind.value).inc()
            log.error("generation_failed", error=str(exc), error_type=type(exc).__name__)
            raise

    @staticmethod
    def _record(kind: GenerationKind, result: ParseResult) -> None:
        CYCLE_PLANS_GENERATED_TOTAL.labels(kind=kind.value).inc()
        if result.used_fallback:
            GENERATION_FALLBACKS_TOTAL.labels(kind=kind.value).inc()

    async def generate_workout_report(
        self,
        *,
        profile: UserProfile,
        journal_entries: Sequence[JournalEntry] = (),
        phase: CyclePhase | None = None,
        today: date | None = None,
    ) -> ParseResult[WorkoutPlan]:
        phase = self._resolve_phase(profile, phase, today)
        prompt = build_workout_prompt(phase=phase, profile=profile, journal_entries=journal_entries)
        raw_text = await self._send(GenerationKind.workouts, prompt, WORKOUT_SYSTEM_MESSAGE)
        result = parse_workout_report(raw_text, phase)
        self._record(GenerationKind.workouts, result)
        return result

    async def generate_workout(self, **kwargs) -> WorkoutPlan:
        return (await self.generate_workout_report(**kwargs)).plan

    async def generate_meal_plan_report(
        self,
        *,
        profile: UserProfile,
        journal_entries: Sequence[JournalEntry] = (),
        phase: CyclePhase | None = None,
        today: date | None = None,
    ) -> ParseResult[MealPlan]:
        phase = self._resolve_phase(profile, phase, today)
        prompt = build_nutrition_prompt(phase=phase, profile=profile, journal_entries=journal_entries)
        raw_text = await self._send(GenerationKind.meal_plans, prompt, NUTRITION_SYSTEM_MESSAGE)
        result = parse_meal_plan_report(raw_text, phase)
        self._record(GenerationKind.meal_plans, result)
        return result

    async def generate_meal_plan(self, **kwargs) -> MealPlan:
        return (await self.generate_meal_plan_report(**kwargs)).plan

    async def generate_insights(
        self,
        *,
        profile: UserProfile,
        journal_entries: Sequence[JournalEntry] = (),
        phase: CyclePhase | None = None,
        today: date | None = None,
    ) -> InsightsResponse:
        phase = self._resolve_phase(profile, phase, today)
        prompt = build_insights_prompt(profile=profile, journal_entries=journal_entries, current_phase=phase)
        text = await self._send(GenerationKind.insights, prompt, INSIGHTS_SYSTEM_MESSAGE)
        CYCLE_PLANS_GENERATED_TOTAL.labels(kind=GenerationKind.insights.value).inc()
        return InsightsResponse(phase=phase, insights=text)

    def submit(
        self,
        kind: GenerationKind,
        *,
        profile: UserProfile,
        journal_entries: Sequence[JournalEntry] = (),
        today: date | None = None,
    ) -> str:
        """Start a generation in the background and return its task id."""
        runners = {
            GenerationKind.workouts: self.generate_workout,
            GenerationKind.meal_plans: self.generate_meal_plan,
            GenerationKind.insights: self.generate_insights,
        }
        coro = runners[kind](profile=profile, journal_entries=list(journal_entries), today=today)
        return self._registry.submit(kind, coro)
