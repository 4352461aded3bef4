import structlog
from fastapi import APIRouter, Depends, status

from ..dependencies import get_content_generator, get_task_registry
from ..exceptions import GenerationError, GenerationFailedException, TaskNotFoundException
from ..schemas.generation import (
    GenerationKind,
    GenerationRequest,
    InsightsResponse,
    TaskStatusResponse,
    TaskSubmissionResponse,
)
from ..schemas.meal_plan import MealPlan
from ..schemas.workout_plan import WorkoutPlan
from ..services.content_generation import ContentGenerator
from ..services.task_registry import GenerationTaskRegistry

router = APIRouter()

logger = structlog.get_logger(__name__)


@router.post("/workouts", response_model=WorkoutPlan)
async def generate_workout(body: GenerationRequest, generator: ContentGenerator = Depends(get_content_generator)):
    try:
        return await generator.generate_workout(
            profile=body.profile,
            journal_entries=body.journal_entries,
            today=body.today,
        )
    except GenerationError as exc:
        raise GenerationFailedException("workout") from exc


@router.post("/meal-plans", response_model=MealPlan)
async def generate_meal_plan(body: GenerationRequest, generator: ContentGenerator = Depends(get_content_generator)):
    try:
        return await generator.generate_meal_plan(
            profile=body.profile,
            journal_entries=body.journal_entries,
            today=body.today,
        )
    except GenerationError as exc:
        raise GenerationFailedException("meal plan") from exc


@router.post("/insights", response_model=InsightsResponse)
async def generate_insights(body: GenerationRequest, generator: ContentGenerator = Depends(get_content_generator)):
    try:
        return await generator.generate_insights(
            profile=body.profile,
            journal_entries=body.journal_entries,
            today=body.today,
        )
    except GenerationError as exc:
        raise GenerationFailedException("insights") from exc


@router.post("/tasks/{kind}", response_model=TaskSubmissionResponse, status_code=status.HTTP_202_ACCEPTED)
async def submit_generation_task(
    kind: GenerationKind,
    body: GenerationRequest,
    generator: ContentGenerator = Depends(get_content_generator),
) -> TaskSubmissionResponse:
    task_id = generator.submit(
        kind,
        profile=body.profile,
        journal_entries=body.journal_entries,
        today=body.today,
    )
    return TaskSubmissionResponse(task_id=task_id, status="PENDING")


@router.get("/tasks/{task_id}", response_model=TaskStatusResponse)
async def get_generation_task(
    task_id: str,
    registry: GenerationTaskRegistry = Depends(get_task_registry),
) -> TaskStatusResponse:
    result = registry.status(task_id)
    if result is None:
        raise TaskNotFoundException(task_id)
    return result


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def cancel_generation_task(
    task_id: str,
    registry: GenerationTaskRegistry = Depends(get_task_registry),
) -> None:
    if registry.status(task_id) is None:
        raise TaskNotFoundException(task_id)
    cancelled = registry.cancel(task_id)
    logger.info("generation_task_cancel_requested", task_id=task_id, cancelled=cancelled)
