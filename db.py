import sqlite3
import datetime
from contextlib import contextmanager
from typing import Iterable, List, Optional, Tuple

from models import CatalogExercise, LoggedSet


class Database:
    """Provides SQLite connection management and schema initialization."""

    _TABLE_DEFINITIONS = {
        "exercises": """CREATE TABLE IF NOT EXISTS exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                muscle_group TEXT NOT NULL,
                equipment TEXT
            );""",
        "workout_sessions": """CREATE TABLE IF NOT EXISTS workout_sessions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                name TEXT NOT NULL,
                started_at TEXT NOT NULL
            );""",
        "workout_sets": """CREATE TABLE IF NOT EXISTS workout_sets (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                session_id INTEGER NOT NULL,
                exercise_id INTEGER NOT NULL,
                set_number INTEGER NOT NULL,
                reps INTEGER NOT NULL,
                weight_kg REAL,
                FOREIGN KEY(session_id) REFERENCES workout_sessions(id) ON DELETE CASCADE,
                FOREIGN KEY(exercise_id) REFERENCES exercises(id)
            );""",
    }

    def __init__(self, db_path: str = "workout.db") -> None:
        self._db_path = db_path
        self._ensure_schema()

    @contextmanager
    def _connection(self):
        connection = sqlite3.connect(self._db_path)
        try:
            connection.execute("PRAGMA foreign_keys=on;")
            yield connection
            connection.commit()
        finally:
            connection.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            for sql in self._TABLE_DEFINITIONS.values():
                conn.execute(sql)


class BaseRepository(Database):
    """Base repository providing helper methods."""

    def execute(self, query: str, params: Tuple = ()) -> int:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid

    def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.fetchall()


class ExerciseRepository(BaseRepository):
    """Repository for the exercise catalog."""

    def add(
        self, name: str, muscle_group: str, equipment: Optional[str] = None
    ) -> CatalogExercise:
        ex_id = self.execute(
            "INSERT INTO exercises (name, muscle_group, equipment) VALUES (?, ?, ?);",
            (name, muscle_group, equipment),
        )
        return CatalogExercise(
            id=ex_id, name=name, muscle_group=muscle_group, equipment=equipment
        )

    def add_many(self, rows: Iterable[dict]) -> int:
        """Insert catalog rows and return how many were stored."""
        count = 0
        with self._connection() as conn:
            for row in rows:
                name = str(row.get("name") or "").strip()
                if not name:
                    continue
                conn.execute(
                    "INSERT INTO exercises (name, muscle_group, equipment) VALUES (?, ?, ?);",
                    (name, row.get("muscle_group") or "other", row.get("equipment")),
                )
                count += 1
        return count

    def fetch_all_exercises(self) -> List[CatalogExercise]:
        rows = self.fetch_all(
            "SELECT id, name, muscle_group, equipment FROM exercises ORDER BY id;"
        )
        return [
            CatalogExercise(id=eid, name=name, muscle_group=group, equipment=eq)
            for eid, name, group, eq in rows
        ]

    def fetch_detail(self, exercise_id: int) -> CatalogExercise:
        rows = self.fetch_all(
            "SELECT id, name, muscle_group, equipment FROM exercises WHERE id = ?;",
            (exercise_id,),
        )
        if not rows:
            raise ValueError("exercise not found")
        eid, name, group, eq = rows[0]
        return CatalogExercise(id=eid, name=name, muscle_group=group, equipment=eq)


class WorkoutSessionRepository(BaseRepository):
    """Repository for logged workout sessions."""

    def create(self, name: str, started_at: Optional[str] = None) -> int:
        if started_at is None:
            started_at = datetime.datetime.now().isoformat(timespec="seconds")
        return self.execute(
            "INSERT INTO workout_sessions (name, started_at) VALUES (?, ?);",
            (name, started_at),
        )

    def fetch_detail(self, session_id: int) -> Tuple[int, str, str]:
        rows = self.fetch_all(
            "SELECT id, name, started_at FROM workout_sessions WHERE id = ?;",
            (session_id,),
        )
        if not rows:
            raise ValueError("session not found")
        return rows[0]


class WorkoutSetRepository(BaseRepository):
    """Repository for sets logged within a session."""

    def add_many(self, sets: Iterable[LoggedSet]) -> int:
        count = 0
        with self._connection() as conn:
            for s in sets:
                conn.execute(
                    "INSERT INTO workout_sets (session_id, exercise_id, set_number, reps, weight_kg) "
                    "VALUES (?, ?, ?, ?, ?);",
                    (s.session_id, s.exercise_id, s.set_number, s.reps, s.weight_kg),
                )
                count += 1
        return count

    def fetch_for_session(self, session_id: int) -> List[LoggedSet]:
        rows = self.fetch_all(
            "SELECT session_id, exercise_id, set_number, reps, weight_kg "
            "FROM workout_sets WHERE session_id = ? ORDER BY id;",
            (session_id,),
        )
        return [
            LoggedSet(
                session_id=sid,
                exercise_id=eid,
                set_number=num,
                reps=reps,
                weight_kg=weight,
            )
            for sid, eid, num, reps, weight in rows
        ]
