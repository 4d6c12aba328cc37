from __future__ import annotations
import re
from typing import Iterable, Sequence

from loguru import logger

from algorithms.name_matcher import NameMatcher
from db import ExerciseRepository, WorkoutSessionRepository, WorkoutSetRepository
from models import CatalogExercise, LoggedSet, PlannedExercise, WorkoutSplit
from settings_schema import MatcherSettings


class WorkoutCompletionService:
    """Turns a completed planned workout into a logged session."""

    def __init__(
        self,
        exercise_repo: ExerciseRepository,
        session_repo: WorkoutSessionRepository,
        set_repo: WorkoutSetRepository,
        settings: MatcherSettings | None = None,
    ) -> None:
        self.exercises = exercise_repo
        self.sessions = session_repo
        self.sets = set_repo
        self.settings = settings or MatcherSettings()

    def parse_reps(self, reps: str) -> int:
        """Return the first number in a rep range such as ``"8-10"``."""
        found = re.search(r"\d+", reps or "")
        return int(found.group()) if found else self.settings.default_reps

    def resolve_exercises(
        self,
        names: Iterable[str],
        catalog: Sequence[CatalogExercise],
        muscle_group: str | None = None,
    ) -> dict[str, int | str]:
        """Map each name to a catalog id, creating exercises for unmatched names.

        Exercises created here are appended to a working copy of ``catalog``
        so later names in the same batch can match them.
        """
        working = list(catalog)
        group = muscle_group or self.settings.default_muscle_group
        resolved: dict[str, int | str] = {}
        for name in names:
            match = NameMatcher.find_best_match(
                name, working, self.settings.match_threshold
            )
            if match.is_new_exercise:
                created = self.exercises.add(
                    name, group, self.settings.default_equipment
                )
                working.append(created)
                logger.info(
                    "Created exercise {} ({}) for unmatched name, best score {:.1f}",
                    created.name,
                    created.id,
                    match.similarity_score,
                )
                resolved[name] = created.id
            else:
                logger.debug(
                    "Matched {!r} to {!r} with score {:.1f}",
                    name,
                    match.matched_exercise.name,
                    match.similarity_score,
                )
                resolved[name] = match.matched_exercise.id
        return resolved

    def complete_workout(
        self,
        exercises: Sequence[PlannedExercise],
        split: WorkoutSplit | None = None,
    ) -> int:
        """Log ``exercises`` as a new session and return its id."""
        session_id = self.sessions.create(split.name if split else "Workout")
        logger.info("Created workout session {}", session_id)
        if not exercises:
            return session_id

        muscle_group = split.muscle_groups[0] if split and split.muscle_groups else None
        catalog = self.exercises.fetch_all_exercises()
        ids = self.resolve_exercises(
            [ex.name for ex in exercises], catalog, muscle_group
        )
        to_insert: list[LoggedSet] = []
        for ex in exercises:
            reps = self.parse_reps(ex.reps)
            for set_number in range(1, ex.sets + 1):
                to_insert.append(
                    LoggedSet(
                        session_id=session_id,
                        exercise_id=ids[ex.name],
                        set_number=set_number,
                        reps=reps,
                    )
                )
        self.sets.add_many(to_insert)
        return session_id
