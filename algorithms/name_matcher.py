import re
from typing import Iterable, Sequence

import numpy as np

from models import CatalogExercise, MatchResult


class NameMatcher:
    """Match free-text exercise names against an exercise catalog.

    Scores blend character-level edit distance with word overlap so that
    abbreviations, equipment synonyms, punctuation and word order do not
    prevent a generated name from resolving to an existing exercise.
    """

    DEFAULT_THRESHOLD: float = 70.0
    LEXICAL_WEIGHT: float = 0.4
    OVERLAP_WEIGHT: float = 0.6
    MIN_TOKEN_LENGTH: int = 3
    TOKEN_SIMILARITY_CUTOFF: float = 80.0

    # longest spellings first; one pass so "bb" inside a folded "dumbbell" stays put
    SYNONYMS: dict[str, str] = {
        "dumbbell": "dumbbell",
        "dumbell": "dumbbell",
        "barbell": "barbell",
        "machine": "machine",
        "cable": "cable",
        "db": "dumbbell",
        "bb": "barbell",
    }
    _SYNONYM_PATTERN = re.compile("|".join(SYNONYMS))
    _WHITESPACE = re.compile(r"\s+")
    _EQUIPMENT_QUALIFIER = re.compile(r"\(\s*(dumbbell|barbell|cable|machine)\s*\)")
    _PARENTHESIZED = re.compile(r"\(.*?\)")
    _DISALLOWED = re.compile(r"[^a-z0-9 ]")

    @classmethod
    def normalize(cls, name: str) -> str:
        """Return ``name`` in a canonical, comparable spelling.

        An equipment qualifier in parentheses, as in ``"Back Squat (Barbell)"``,
        moves to the front of the name; any other parenthesized text is dropped.
        """
        text = cls._WHITESPACE.sub(" ", name.lower())
        text = cls._SYNONYM_PATTERN.sub(lambda m: cls.SYNONYMS[m.group()], text)
        equipment = cls._EQUIPMENT_QUALIFIER.findall(text)
        if equipment:
            text = " ".join(equipment) + " " + cls._EQUIPMENT_QUALIFIER.sub("", text)
        text = cls._PARENTHESIZED.sub("", text)
        text = cls._DISALLOWED.sub("", text)
        return text.strip()

    @staticmethod
    def edit_distance(a: str, b: str) -> int:
        """Return the Levenshtein distance between ``a`` and ``b``.

        Rows of the ``(len(b) + 1) x (len(a) + 1)`` table are filled in one
        vectorized step each: substitution and deletion candidates first, then
        insertions as a running minimum along the row.
        """
        if not a:
            return len(b)
        cols = np.arange(len(a) + 1, dtype=np.int64)
        table = np.zeros((len(b) + 1, len(a) + 1), dtype=np.int64)
        table[0] = cols
        chars = np.array(list(a))
        for i in range(1, len(b) + 1):
            prev = table[i - 1]
            cost = (chars != b[i - 1]).astype(np.int64)
            cand = np.empty(len(a) + 1, dtype=np.int64)
            cand[0] = i
            cand[1:] = np.minimum(prev[:-1] + cost, prev[1:] + 1)
            table[i] = np.minimum.accumulate(cand - cols) + cols
        return int(table[-1, -1])

    @classmethod
    def lexical_similarity(cls, a: str, b: str) -> float:
        """Return edit-distance similarity of ``a`` and ``b`` as a percentage."""
        a = a.lower()
        b = b.lower()
        max_len = max(len(a), len(b))
        if max_len == 0:
            return 100.0
        distance = cls.edit_distance(a, b)
        return ((max_len - distance) / max_len) * 100

    @classmethod
    def _tokens(cls, text: str) -> list[str]:
        return [t for t in text.lower().split() if len(t) >= cls.MIN_TOKEN_LENGTH]

    @classmethod
    def word_overlap_similarity(cls, a: str, b: str) -> float:
        """Return the share of significant words ``a`` and ``b`` have in common."""
        words_a = cls._tokens(a)
        words_b = cls._tokens(b)
        if not words_a or not words_b:
            return 0.0
        matches = 0
        for word_a in words_a:
            for word_b in words_b:
                if (
                    word_a == word_b
                    or cls.lexical_similarity(word_a, word_b)
                    > cls.TOKEN_SIMILARITY_CUTOFF
                ):
                    matches += 1
                    break
        return (matches / max(len(words_a), len(words_b))) * 100

    @classmethod
    def _blend(cls, normalized_a: str, normalized_b: str) -> float:
        if normalized_a == normalized_b:
            return 100.0
        lexical = cls.lexical_similarity(normalized_a, normalized_b)
        overlap = cls.word_overlap_similarity(normalized_a, normalized_b)
        return lexical * cls.LEXICAL_WEIGHT + overlap * cls.OVERLAP_WEIGHT

    @classmethod
    def similarity(cls, search_name: str, catalog_name: str) -> float:
        """Return the blended similarity score of two exercise names (0-100)."""
        return cls._blend(cls.normalize(search_name), cls.normalize(catalog_name))

    @classmethod
    def find_best_match(
        cls,
        search_name: str,
        catalog: Iterable[CatalogExercise],
        threshold: float = DEFAULT_THRESHOLD,
    ) -> MatchResult:
        """Return the catalog entry ``search_name`` most likely refers to.

        The first entry wins ties. A score below ``threshold`` marks the name
        as a new exercise.
        """
        normalized = cls.normalize(search_name)
        best_match: CatalogExercise | None = None
        best_score = -1.0
        for exercise in catalog:
            candidate = cls.normalize(exercise.name)
            score = cls._blend(normalized, candidate)
            if score > best_score:
                best_score = score
                best_match = exercise
            if candidate == normalized:
                break

        if best_match is None or best_score < threshold:
            return MatchResult(
                matched_exercise=None,
                similarity_score=max(best_score, 0.0),
                is_new_exercise=True,
            )
        return MatchResult(
            matched_exercise=best_match,
            similarity_score=best_score,
            is_new_exercise=False,
        )

    @classmethod
    def match_batch(
        cls,
        search_names: Iterable[str],
        catalog: Sequence[CatalogExercise],
        threshold: float = DEFAULT_THRESHOLD,
    ) -> dict[str, MatchResult]:
        """Match every name in ``search_names`` against the full ``catalog``."""
        catalog = list(catalog)
        return {
            name: cls.find_best_match(name, catalog, threshold)
            for name in search_names
        }


similarity = NameMatcher.similarity
find_best_match = NameMatcher.find_best_match
match_batch = NameMatcher.match_batch
