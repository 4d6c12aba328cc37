from __future__ import annotations
from typing import Sequence

from loguru import logger

from models import PlannedExercise, PlannedWorkoutRecord, SplitDecision, WorkoutSplit


REST_DAY_REASONING = "Scheduled rest day - recovery is part of progress!"
MAX_FALLBACK_EXERCISES = 7
EXERCISES_PER_GROUP = 2

# name, sets, reps, rest seconds
FALLBACK_LIBRARY: dict[str, list[tuple[str, int, str, int]]] = {
    "chest": [
        ("Barbell Bench Press", 4, "8-10", 90),
        ("Incline Dumbbell Press", 3, "10-12", 75),
        ("Cable Flyes", 3, "12-15", 60),
    ],
    "back": [
        ("Pull-ups", 4, "8-10", 90),
        ("Barbell Rows", 4, "8-10", 90),
        ("Lat Pulldown", 3, "10-12", 75),
    ],
    "shoulders": [
        ("Overhead Press", 4, "8-10", 90),
        ("Lateral Raises", 3, "12-15", 60),
        ("Face Pulls", 3, "15-20", 60),
    ],
    "biceps": [
        ("Barbell Curls", 3, "10-12", 60),
        ("Hammer Curls", 3, "10-12", 60),
    ],
    "triceps": [
        ("Tricep Pushdowns", 3, "10-12", 60),
        ("Overhead Tricep Extension", 3, "10-12", 60),
    ],
    "quads": [
        ("Barbell Squats", 4, "8-10", 120),
        ("Leg Press", 3, "10-12", 90),
        ("Leg Extensions", 3, "12-15", 60),
    ],
    "hamstrings": [
        ("Romanian Deadlifts", 4, "8-10", 90),
        ("Leg Curls", 3, "10-12", 60),
    ],
    "glutes": [
        ("Hip Thrusts", 4, "10-12", 90),
        ("Bulgarian Split Squats", 3, "10-12", 75),
    ],
    "calves": [
        ("Standing Calf Raises", 4, "12-15", 60),
        ("Seated Calf Raises", 3, "15-20", 45),
    ],
    "abs": [
        ("Cable Crunches", 3, "15-20", 45),
        ("Hanging Leg Raises", 3, "12-15", 60),
    ],
}


class PlannerService:
    """Chooses today's split from the rotation and builds fallback plans."""

    def next_split(
        self,
        splits: Sequence[WorkoutSplit],
        history: Sequence[PlannedWorkoutRecord] = (),
    ) -> SplitDecision:
        if not splits:
            raise ValueError("no workout split configured")
        ordered = sorted(splits, key=lambda s: s.order_in_rotation)
        by_id = {s.id: s for s in ordered}
        recent = sorted(history, key=lambda w: w.date, reverse=True)

        skipped = [w for w in recent if w.status == "skipped"]
        last_completed = next((w for w in recent if w.status == "completed"), None)

        if skipped:
            split = by_id.get(skipped[-1].split_id, ordered[0])
            reasoning = (
                f"Rescheduled {split.name} - you skipped this earlier "
                "and we want to keep your rotation balanced."
            )
        elif last_completed is not None and last_completed.split_id in by_id:
            previous = by_id[last_completed.split_id]
            next_order = (previous.order_in_rotation % len(ordered)) + 1
            split = next(
                (s for s in ordered if s.order_in_rotation == next_order), ordered[0]
            )
            reasoning = f"Next in your rotation after {previous.name}."
        else:
            split = ordered[0]
            reasoning = f"Starting fresh with {split.name} - let's go!"

        logger.debug("Selected split {} ({})", split.name, reasoning)
        if split.is_rest_day:
            return SplitDecision(split=split, reasoning=REST_DAY_REASONING, is_rest_day=True)
        return SplitDecision(split=split, reasoning=reasoning)

    def fallback_exercises(self, muscle_groups: Sequence[str]) -> list[PlannedExercise]:
        """Return a basic plan for ``muscle_groups`` when no generated plan exists."""
        exercises: list[PlannedExercise] = []
        for group in muscle_groups:
            for name, sets, reps, rest in FALLBACK_LIBRARY.get(group.lower(), [])[
                :EXERCISES_PER_GROUP
            ]:
                exercises.append(
                    PlannedExercise(name=name, sets=sets, reps=reps, rest_seconds=rest)
                )
        return exercises[:MAX_FALLBACK_EXERCISES]
