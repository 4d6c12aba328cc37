import argparse
import os

import yaml

from algorithms.name_matcher import NameMatcher
from completion_service import WorkoutCompletionService
from config import load_settings
from db import ExerciseRepository, WorkoutSessionRepository, WorkoutSetRepository
from logging_config import configure_logging
from models import CatalogExercise, PlannedExercise, WorkoutSplit


def read_rows(path: str) -> list[dict]:
    """Read a YAML or JSON list of mappings."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or []
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list")
    return data


def load_catalog(path: str) -> list[CatalogExercise]:
    catalog = []
    for idx, row in enumerate(read_rows(path), start=1):
        catalog.append(
            CatalogExercise(
                id=row.get("id", idx),
                name=row["name"],
                muscle_group=row.get("muscle_group", "other"),
                equipment=row.get("equipment"),
            )
        )
    return catalog


def format_matches(
    names: list[str], catalog: list[CatalogExercise], threshold: float
) -> list[str]:
    lines = []
    for name, result in NameMatcher.match_batch(names, catalog, threshold).items():
        if result.is_new_exercise:
            lines.append(f"{name} -> NEW ({result.similarity_score:.2f})")
        else:
            lines.append(
                f"{name} -> {result.matched_exercise.name} ({result.similarity_score:.2f})"
            )
    return lines


def import_catalog(catalog_path: str, db_path: str) -> int:
    return ExerciseRepository(db_path).add_many(read_rows(catalog_path))


def complete_plan(
    plan_path: str,
    db_path: str,
    yaml_path: str,
    muscle_group: str | None = None,
) -> int:
    settings = load_settings(yaml_path)
    service = WorkoutCompletionService(
        ExerciseRepository(db_path),
        WorkoutSessionRepository(db_path),
        WorkoutSetRepository(db_path),
        settings,
    )
    exercises = [PlannedExercise(**row) for row in read_rows(plan_path)]
    split = None
    if muscle_group:
        split = WorkoutSplit(
            id=0, name="Workout", muscle_groups=[muscle_group], order_in_rotation=1
        )
    return service.complete_workout(exercises, split)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Exercise name matching tools")
    parser.add_argument("--yaml", default="settings.yaml")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sim = sub.add_parser("similarity")
    sim.add_argument("first")
    sim.add_argument("second")

    match = sub.add_parser("match")
    match.add_argument("names", nargs="+")
    source = match.add_mutually_exclusive_group(required=True)
    source.add_argument("--catalog")
    source.add_argument("--db")
    match.add_argument("--threshold", type=float)

    imp = sub.add_parser("import-catalog")
    imp.add_argument("--catalog", required=True)
    imp.add_argument("--db", default="workout.db")

    comp = sub.add_parser("complete")
    comp.add_argument("--plan", required=True)
    comp.add_argument("--db", default="workout.db")
    comp.add_argument("--muscle-group", dest="muscle_group")

    args = parser.parse_args(argv)
    settings = load_settings(args.yaml)
    configure_logging(settings.log_level)

    for attr in ("catalog", "plan"):
        path = getattr(args, attr, None)
        if path and not os.path.exists(path):
            parser.error(f"file not found: {path}")

    if args.cmd == "similarity":
        print(f"{NameMatcher.similarity(args.first, args.second):.2f}")
    elif args.cmd == "match":
        threshold = (
            args.threshold if args.threshold is not None else settings.match_threshold
        )
        if args.catalog:
            catalog = load_catalog(args.catalog)
        else:
            catalog = ExerciseRepository(args.db).fetch_all_exercises()
        for line in format_matches(args.names, catalog, threshold):
            print(line)
    elif args.cmd == "import-catalog":
        count = import_catalog(args.catalog, args.db)
        print(f"Imported {count} exercises")
    elif args.cmd == "complete":
        session_id = complete_plan(args.plan, args.db, args.yaml, args.muscle_group)
        print(f"Logged session {session_id}")


if __name__ == "__main__":
    main()
