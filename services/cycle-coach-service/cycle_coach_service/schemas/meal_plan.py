from datetime import date, datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from .cycle import CyclePhase


class MealType(str, Enum):
    breakfast = "Breakfast"
    lunch = "Lunch"
    dinner = "Dinner"
    snack = "Snack"


class MacroNutrients(BaseModel):
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0


class Meal(BaseModel):
    name: str
    meal_type: MealType = MealType.breakfast
    ingredients: list[str] = Field(default_factory=list)
    instructions: str = ""
    prep_time: int = 15  # minutes
    cook_time: int = 15  # minutes
    servings: int = 1
    calories: int = 300
    macros: MacroNutrients = Field(default_factory=MacroNutrients)
    allergens: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)


class MealPlan(BaseModel):
    title: str
    meals: list[Meal] = Field(default_factory=list)
    total_calories: int = 1800
    macros: MacroNutrients = Field(default_factory=MacroNutrients)
    cycle_phase: CyclePhase = CyclePhase.follicular
    is_ai_generated: bool = True
    date_created: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    is_added_to_schedule: bool = False
    scheduled_date: date | None = None
    tags: list[str] = Field(default_factory=list)
    description: str = ""
    nutritional_focus: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _scheduled_date_implies_flag(self) -> "MealPlan":
        if self.scheduled_date is not None:
            self.is_added_to_schedule = True
        return self
