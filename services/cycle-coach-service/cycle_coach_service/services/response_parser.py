"""
Lenient decoding of generated replies into workout and meal plans.

The model is asked for a JSON object but nothing guarantees it. Decoding never
raises: an unreadable reply becomes the phase fallback plan, a readable one is
read field by field with typed defaults, and nested items without an identity
(name, meal type) are dropped while their siblings are kept. Every default and
every dropped item is reported on the ``ParseResult``.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

import structlog

from ..schemas.cycle import CyclePhase
from ..schemas.meal_plan import MacroNutrients, Meal, MealPlan, MealType
from ..schemas.workout_plan import Difficulty, Exercise, WorkoutPlan

logger = structlog.get_logger(__name__)

DEFAULT_TAGS = ("AI Generated",)
FALLBACK_TAGS = ("AI Generated", "Fallback")
FALLBACK_EXERCISE_INSTRUCTIONS = "Perform with proper form and listen to your body"
FALLBACK_EXERCISE_COUNT = 5
BODYWEIGHT = "None"

_FENCED_BLOCK_RE = re.compile(r"```[a-zA-Z]*\s*(.*?)\s*```", re.DOTALL)

PlanT = TypeVar("PlanT", WorkoutPlan, MealPlan)
EnumT = TypeVar("EnumT", bound=Enum)
Key = str | tuple[str, ...]


@dataclass
class ParseResult(Generic[PlanT]):
    plan: PlanT
    used_fallback: bool = False
    defaulted_fields: list[str] = field(default_factory=list)
    dropped_items: list[str] = field(default_factory=list)


def _preview(raw_text: Any) -> str:
    return str(raw_text)[:200]


def _decode_object(raw_text: Any) -> dict[str, Any] | None:
    """Decode the reply as a JSON object, tolerating a Markdown fence or surrounding prose."""
    if not isinstance(raw_text, str):
        return None
    text = raw_text.strip()
    if not text:
        return None

    # First fenced block, then the whole reply, then the outermost brace span of each
    bodies = [text]
    fenced = _FENCED_BLOCK_RE.search(text)
    if fenced:
        bodies.insert(0, fenced.group(1))

    candidates = list(bodies)
    for body in bodies:
        start = body.find("{")
        end = body.rfind("}")
        if start != -1 and end > start:
            candidates.append(body[start : end + 1])

    for candidate in candidates:
        try:
            parsed = json.loads(candidate)
        except (ValueError, RecursionError):
            continue
        if isinstance(parsed, dict):
            return parsed
    return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)


def _match_enum(enum_cls: type[EnumT], value: Any) -> EnumT | None:
    if not isinstance(value, str):
        return None
    wanted = value.strip().lower()
    for member in enum_cls:
        if str(member.value).lower() == wanted:
            return member
    return None


class _FieldReader:
    """Reads typed fields from one JSON object and records every substituted default.

    ``key`` may be a tuple of aliases (``("totalCalories", "total_calories")``);
    the first one names the field in reports. Absent optional fields pass
    ``report_missing=False`` so only present-but-invalid values are reported.
    """

    def __init__(self, payload: dict[str, Any], defaulted: list[str], prefix: str = "") -> None:
        self._payload = payload
        self._defaulted = defaulted
        self._prefix = prefix

    def _lookup(self, key: Key) -> tuple[str, bool, Any]:
        aliases = (key,) if isinstance(key, str) else key
        for alias in aliases:
            if alias in self._payload:
                return aliases[0], True, self._payload[alias]
        return aliases[0], False, None

    def _default(self, name: str, present: bool, report_missing: bool, default: Any) -> Any:
        if present or report_missing:
            self._defaulted.append(f"{self._prefix}{name}")
        return default

    def string(self, key: Key, default: str, *, report_missing: bool = True) -> str:
        name, present, value = self._lookup(key)
        if isinstance(value, str):
            return value
        return self._default(name, present, report_missing, default)

    def integer(self, key: Key, default: int, *, report_missing: bool = True) -> int:
        name, present, value = self._lookup(key)
        parsed = _as_int(value)
        if parsed is not None:
            return parsed
        return self._default(name, present, report_missing, default)

    def optional_integer(self, key: Key) -> int | None:
        name, present, value = self._lookup(key)
        if value is None:
            return None
        parsed = _as_int(value)
        if parsed is None:
            self._defaulted.append(f"{self._prefix}{name}")
        return parsed

    def number(self, key: Key, default: float, *, report_missing: bool = True) -> float:
        name, present, value = self._lookup(key)
        parsed = _as_number(value)
        if parsed is not None:
            return parsed
        return self._default(name, present, report_missing, default)

    def strings(self, key: Key, default: list[str], *, report_missing: bool = True) -> list[str]:
        name, present, value = self._lookup(key)
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return list(value)
        return self._default(name, present, report_missing, list(default))

    def choice(self, key: Key, enum_cls: type[EnumT], default: EnumT, *, report_missing: bool = True) -> EnumT:
        name, present, value = self._lookup(key)
        matched = _match_enum(enum_cls, value)
        if matched is not None:
            return matched
        return self._default(name, present, report_missing, default)

    def macros(self, key: Key) -> MacroNutrients:
        name, present, value = self._lookup(key)
        if not isinstance(value, dict):
            return self._default(name, present, False, MacroNutrients())
        nested = _FieldReader(value, self._defaulted, prefix=f"{self._prefix}{name}.")
        return MacroNutrients(
            **{
                nutrient: nested.number(nutrient, 0.0, report_missing=False)
                for nutrient in ("protein", "carbs", "fat", "fiber", "sugar")
            }
        )


def _identity(item: Any, path: str, dropped: list[str]) -> str | None:
    if not isinstance(item, dict):
        dropped.append(f"{path}: not an object")
        return None
    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        dropped.append(f"{path}: missing name")
        return None
    return name


def _parse_exercise(item: Any, index: int, defaulted: list[str], dropped: list[str]) -> Exercise | None:
    path = f"exercises[{index}]"
    name = _identity(item, path, dropped)
    if name is None:
        return None

    reader = _FieldReader(item, defaulted, prefix=f"{path}.")
    reps_value = _as_int(item.get("reps"))
    reps = str(reps_value) if reps_value is not None else reader.string("reps", "10-12")

    return Exercise(
        name=name,
        sets=reader.integer("sets", 3),
        reps=reps,
        instructions=reader.string("instructions", ""),
        duration=reader.optional_integer("duration"),
        rest_time=reader.integer(("restTime", "rest_time"), 60, report_missing=False),
        target_muscles=reader.strings(("targetMuscles", "target_muscles"), [], report_missing=False),
        equipment=reader.strings("equipment", [], report_missing=False),
        difficulty=reader.choice("difficulty", Difficulty, Difficulty.moderate, report_missing=False),
        category=reader.string("category", "Strength", report_missing=False),
    )


def _parse_meal(item: Any, index: int, defaulted: list[str], dropped: list[str]) -> Meal | None:
    path = f"meals[{index}]"
    name = _identity(item, path, dropped)
    if name is None:
        return None

    raw_type = item.get("mealType", item.get("meal_type"))
    if raw_type is None:
        dropped.append(f"{path}: missing mealType")
        return None
    meal_type = _match_enum(MealType, raw_type)
    if meal_type is None:
        dropped.append(f"{path}: invalid mealType {raw_type!r}")
        return None

    reader = _FieldReader(item, defaulted, prefix=f"{path}.")
    return Meal(
        name=name,
        meal_type=meal_type,
        ingredients=reader.strings("ingredients", []),
        instructions=reader.string("instructions", ""),
        calories=reader.integer("calories", 300),
        prep_time=reader.integer(("prepTime", "prep_time"), 15, report_missing=False),
        cook_time=reader.integer(("cookTime", "cook_time"), 15, report_missing=False),
        servings=reader.integer("servings", 1, report_missing=False),
        macros=reader.macros("macros"),
        allergens=reader.strings("allergens", [], report_missing=False),
        tags=reader.strings("tags", [], report_missing=False),
    )


def fallback_workout(phase: CyclePhase) -> WorkoutPlan:
    exercises = [
        Exercise(
            name=name,
            sets=1,
            instructions=FALLBACK_EXERCISE_INSTRUCTIONS,
            equipment=[BODYWEIGHT],
        )
        for name in phase.workout_recommendations[:FALLBACK_EXERCISE_COUNT]
    ]
    return WorkoutPlan(
        title=f"{phase.value} Phase Workout",
        exercises=exercises,
        cycle_phase=phase,
        tags=list(FALLBACK_TAGS),
        description=phase.description,
    )


def fallback_meal_plan(phase: CyclePhase) -> MealPlan:
    meals = [
        Meal(name="Nutritious Breakfast", meal_type=MealType.breakfast),
        Meal(name="Balanced Lunch", meal_type=MealType.lunch),
        Meal(name="Healthy Dinner", meal_type=MealType.dinner),
    ]
    return MealPlan(
        title=f"{phase.value} Phase Nutrition",
        meals=meals,
        cycle_phase=phase,
        tags=list(FALLBACK_TAGS),
        description=phase.description,
        nutritional_focus=phase.nutrition_focus,
    )


def _parse_items(payload: dict[str, Any], key: str, parse_item, defaulted: list[str], dropped: list[str]) -> list:
    raw_items = payload.get(key)
    if not isinstance(raw_items, list):
        defaulted.append(key)
        return []
    parsed = (parse_item(item, index, defaulted, dropped) for index, item in enumerate(raw_items))
    return [item for item in parsed if item is not None]


def _log_outcome(event: str, phase: CyclePhase, result: ParseResult) -> None:
    if result.dropped_items:
        logger.warning(
            event,
            phase=phase.value,
            dropped_items=result.dropped_items,
            defaulted_fields=result.defaulted_fields,
        )
    else:
        logger.info(event, phase=phase.value, defaulted_fields=result.defaulted_fields)


def parse_workout_report(raw_text: str, phase: CyclePhase) -> ParseResult[WorkoutPlan]:
    payload = _decode_object(raw_text)
    if payload is None:
        logger.warning("workout_response_fallback", phase=phase.value, preview=_preview(raw_text))
        return ParseResult(plan=fallback_workout(phase), used_fallback=True)

    defaulted: list[str] = []
    dropped: list[str] = []
    exercises = _parse_items(payload, "exercises", _parse_exercise, defaulted, dropped)
    reader = _FieldReader(payload, defaulted)

    plan = WorkoutPlan(
        title=reader.string("title", f"AI Workout for {phase.value} Phase"),
        exercises=exercises,
        duration=reader.integer("duration", 30),
        difficulty=reader.choice("difficulty", Difficulty, Difficulty.moderate),
        cycle_phase=phase,
        description=reader.string("description", ""),
        tags=reader.strings("tags", list(DEFAULT_TAGS)),
    )
    result = ParseResult(plan=plan, defaulted_fields=defaulted, dropped_items=dropped)
    _log_outcome("workout_response_parsed", phase, result)
    return result


def parse_meal_plan_report(raw_text: str, phase: CyclePhase) -> ParseResult[MealPlan]:
    payload = _decode_object(raw_text)
    if payload is None:
        logger.warning("meal_plan_response_fallback", phase=phase.value, preview=_preview(raw_text))
        return ParseResult(plan=fallback_meal_plan(phase), used_fallback=True)

    defaulted: list[str] = []
    dropped: list[str] = []
    meals = _parse_items(payload, "meals", _parse_meal, defaulted, dropped)
    reader = _FieldReader(payload, defaulted)

    plan = MealPlan(
        title=reader.string("title", f"AI Meal Plan for {phase.value} Phase"),
        meals=meals,
        total_calories=reader.integer(("totalCalories", "total_calories"), 1800),
        macros=reader.macros("macros"),
        cycle_phase=phase,
        description=reader.string("description", ""),
        nutritional_focus=reader.strings(("nutritionalFocus", "nutritional_focus"), phase.nutrition_focus),
        tags=reader.strings("tags", list(DEFAULT_TAGS)),
    )
    result = ParseResult(plan=plan, defaulted_fields=defaulted, dropped_items=dropped)
    _log_outcome("meal_plan_response_parsed", phase, result)
    return result


def parse_workout(raw_text: str, phase: CyclePhase) -> WorkoutPlan:
    return parse_workout_report(raw_text, phase).plan


def parse_meal_plan(raw_text: str, phase: CyclePhase) -> MealPlan:
    return parse_meal_plan_report(raw_text, phase).plan
