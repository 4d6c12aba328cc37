from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CatalogExercise(BaseModel):
    """One exercise of the catalog names are matched against."""

    model_config = ConfigDict(frozen=True)

    id: int | str
    name: str
    muscle_group: str
    equipment: Optional[str] = None


class MatchResult(BaseModel):
    """Outcome of matching one name against a catalog."""

    model_config = ConfigDict(frozen=True)

    matched_exercise: Optional[CatalogExercise] = None
    similarity_score: float = Field(ge=0.0, le=100.0)
    is_new_exercise: bool

    @model_validator(mode="after")
    def _check_consistency(self) -> "MatchResult":
        if self.is_new_exercise != (self.matched_exercise is None):
            raise ValueError("is_new_exercise must be set exactly when no exercise matched")
        return self


class PlannedExercise(BaseModel):
    name: str
    sets: int = Field(default=3, ge=0)
    reps: str = "10"
    rest_seconds: int = 60
    notes: Optional[str] = None


class WorkoutSplit(BaseModel):
    id: int | str
    name: str
    muscle_groups: list[str] = Field(default_factory=list)
    order_in_rotation: int = Field(ge=1)
    is_rest_day: bool = False


class PlannedWorkoutRecord(BaseModel):
    """A past day of the plan, as seen by the split planner."""

    date: str
    split_id: int | str | None = None
    status: Literal["planned", "completed", "skipped", "rest"] = "planned"


class SplitDecision(BaseModel):
    split: WorkoutSplit
    reasoning: str
    is_rest_day: bool = False


class LoggedSet(BaseModel):
    session_id: int
    exercise_id: int | str
    set_number: int = Field(ge=1)
    reps: int
    weight_kg: Optional[float] = None
