import os
import sys
import unittest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from algorithms import NameMatcher
from algorithms.name_matcher import find_best_match, match_batch, similarity
from models import CatalogExercise


def exercise(eid, name, group="other", equipment=None) -> CatalogExercise:
    return CatalogExercise(id=eid, name=name, muscle_group=group, equipment=equipment)


class NormalizeTestCase(unittest.TestCase):
    def test_case_and_whitespace(self) -> None:
        self.assertEqual(NameMatcher.normalize("  Bench \t  Press "), "bench press")

    def test_synonyms(self) -> None:
        self.assertEqual(NameMatcher.normalize("DB Bench Press"), "dumbbell bench press")
        self.assertEqual(NameMatcher.normalize("Dumbell Curl"), "dumbbell curl")
        self.assertEqual(NameMatcher.normalize("BB Row!"), "barbell row")
        self.assertEqual(NameMatcher.normalize("Cable Fly"), "cable fly")
        self.assertEqual(NameMatcher.normalize("Dumbells Curl"), "dumbbells curl")
        self.assertEqual(NameMatcher.normalize("DBs Row"), "dumbbells row")
        self.assertEqual(NameMatcher.normalize("Dumbbell Fly"), "dumbbell fly")

    def test_parenthetical_stripping(self) -> None:
        self.assertEqual(NameMatcher.normalize("Chicken Breast (150g)"), "chicken breast")
        self.assertEqual(
            NameMatcher.normalize("Chicken Breast (150g)"),
            NameMatcher.normalize("Chicken Breast"),
        )

    def test_equipment_qualifier_moves_to_front(self) -> None:
        self.assertEqual(NameMatcher.normalize("Back Squat (Barbell)"), "barbell back squat")
        self.assertEqual(NameMatcher.normalize("Row (DB)"), "dumbbell row")

    def test_punctuation_and_empty(self) -> None:
        self.assertEqual(NameMatcher.normalize(""), "")
        self.assertEqual(NameMatcher.normalize("?!...--"), "")
        self.assertEqual(NameMatcher.normalize("Pull-ups"), "pullups")


class DistanceTestCase(unittest.TestCase):
    def test_known_distances(self) -> None:
        self.assertEqual(NameMatcher.edit_distance("kitten", "sitting"), 3)
        self.assertEqual(NameMatcher.edit_distance("flaw", "lawn"), 2)
        self.assertEqual(NameMatcher.edit_distance("", "abc"), 3)
        self.assertEqual(NameMatcher.edit_distance("abc", ""), 3)
        self.assertEqual(NameMatcher.edit_distance("", ""), 0)
        self.assertEqual(NameMatcher.edit_distance("press", "press"), 0)

    def test_symmetry(self) -> None:
        words = ["", "a", "squat", "squats", "back squat", "barbell back squat", "leg press"]
        for a in words:
            for b in words:
                self.assertEqual(
                    NameMatcher.edit_distance(a, b), NameMatcher.edit_distance(b, a)
                )

    def test_lexical_similarity(self) -> None:
        self.assertEqual(NameMatcher.lexical_similarity("", ""), 100.0)
        self.assertEqual(NameMatcher.lexical_similarity("Press", "press"), 100.0)
        self.assertAlmostEqual(
            NameMatcher.lexical_similarity("kitten", "sitting"), 4 / 7 * 100
        )
        self.assertEqual(NameMatcher.lexical_similarity("abc", ""), 0.0)


class WordOverlapTestCase(unittest.TestCase):
    def test_short_tokens_ignored(self) -> None:
        self.assertEqual(NameMatcher.word_overlap_similarity("of an", "of an"), 0.0)
        self.assertEqual(NameMatcher.word_overlap_similarity("", "bench press"), 0.0)

    def test_word_order(self) -> None:
        self.assertEqual(
            NameMatcher.word_overlap_similarity("bench press", "press bench"), 100.0
        )

    def test_near_spellings(self) -> None:
        # squats/squat is above the cutoff, pulls/pull sits exactly on it
        self.assertEqual(
            NameMatcher.word_overlap_similarity("barbell squats", "barbell squat"), 100.0
        )
        self.assertEqual(NameMatcher.word_overlap_similarity("pulls", "pull"), 0.0)

    def test_partial_overlap(self) -> None:
        self.assertEqual(NameMatcher.word_overlap_similarity("leg press", "leg curl"), 50.0)

    def test_no_double_counting(self) -> None:
        self.assertAlmostEqual(
            NameMatcher.word_overlap_similarity("press press press", "press"),
            100.0,
        )
        self.assertAlmostEqual(
            NameMatcher.word_overlap_similarity("press", "press bench curl"),
            100 / 3,
        )


class SimilarityTestCase(unittest.TestCase):
    def test_identity(self) -> None:
        for name in ["Bench Press", "", "!!!", "Romanian Deadlift (RDL)"]:
            self.assertEqual(similarity(name, name), 100.0)

    def test_case_and_whitespace_insensitive(self) -> None:
        self.assertEqual(
            similarity("Bench Press", "bench   press"),
            similarity("bench press", "bench press"),
        )

    def test_synonym_folding(self) -> None:
        self.assertGreaterEqual(similarity("DB Bench Press", "Dumbbell Bench Press"), 90)

    def test_bounded(self) -> None:
        names = ["Bench Press", "Leg Curl", "Squat", "Face Pulls", "x", "Lat Pulldown"]
        for a in names:
            for b in names:
                score = similarity(a, b)
                self.assertGreaterEqual(score, 0.0)
                self.assertLessEqual(score, 100.0)

    def test_blend(self) -> None:
        expected = 0.4 * (15 / 16 * 100) + 0.6 * (2 / 3 * 100)
        self.assertAlmostEqual(similarity("Cable Face Pulls", "Cable Face Pull"), expected)


class FindBestMatchTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.catalog = [
            exercise(1, "Barbell Back Squat", "quads", "barbell"),
            exercise(2, "Leg Press", "quads", "machine"),
            exercise(3, "Leg Curl", "hamstrings", "machine"),
            exercise(4, "Dumbbell Bench Press", "chest", "dumbbell"),
        ]

    def test_empty_catalog(self) -> None:
        result = find_best_match("anything", [], 70)
        self.assertIsNone(result.matched_exercise)
        self.assertEqual(result.similarity_score, 0.0)
        self.assertTrue(result.is_new_exercise)

    def test_equipment_qualifier_scenario(self) -> None:
        catalog = [exercise(1, "Barbell Back Squat"), exercise(2, "Leg Press")]
        result = find_best_match("Back Squat (Barbell)", catalog, 70)
        self.assertFalse(result.is_new_exercise)
        self.assertEqual(result.matched_exercise.name, "Barbell Back Squat")
        self.assertGreaterEqual(result.similarity_score, 70)

    def test_synonym_match(self) -> None:
        result = NameMatcher.find_best_match("DB Bench Press", self.catalog)
        self.assertEqual(result.matched_exercise.id, 4)
        self.assertEqual(result.similarity_score, 100.0)

    def test_inflected_synonym_matches(self) -> None:
        catalog = [exercise(1, "Leg Press"), exercise(2, "Dumbbell Curl")]
        result = find_best_match("Dumbells Curl", catalog, 70)
        self.assertFalse(result.is_new_exercise)
        self.assertEqual(result.matched_exercise.id, 2)
        self.assertGreaterEqual(result.similarity_score, 90)

    def test_zero_threshold_always_matches_non_empty_catalog(self) -> None:
        catalog = [exercise(1, "Leg Press"), exercise(2, "Leg Curl")]
        result = find_best_match("xy", catalog, 0)
        self.assertEqual(result.similarity_score, 0.0)
        self.assertFalse(result.is_new_exercise)
        self.assertEqual(result.matched_exercise.id, 1)
        empty = find_best_match("xy", [], 0)
        self.assertTrue(empty.is_new_exercise)
        self.assertEqual(empty.similarity_score, 0.0)

    def test_unrelated_name_is_new(self) -> None:
        result = NameMatcher.find_best_match("Hanging Leg Raises", self.catalog)
        self.assertTrue(result.is_new_exercise)
        self.assertIsNone(result.matched_exercise)
        self.assertLess(result.similarity_score, 70)

    def test_threshold_boundary(self) -> None:
        score = similarity("Leg Curls", "Leg Curl")
        at = find_best_match("Leg Curls", self.catalog, score)
        self.assertFalse(at.is_new_exercise)
        self.assertEqual(at.matched_exercise.id, 3)
        self.assertEqual(at.similarity_score, score)
        above = find_best_match("Leg Curls", self.catalog, score + 0.01)
        self.assertTrue(above.is_new_exercise)
        self.assertIsNone(above.matched_exercise)
        self.assertEqual(above.similarity_score, score)

    def test_first_entry_wins_ties(self) -> None:
        catalog = [exercise("a", "Leg Curl"), exercise("b", "Leg Curl")]
        result = find_best_match("Leg Curls", catalog, 50)
        self.assertEqual(result.matched_exercise.id, "a")

    def test_perfect_match_short_circuit(self) -> None:
        catalog = [
            exercise(1, "Incline Bench Press"),
            exercise(2, "bench   press"),
            exercise(3, "Bench Press"),
        ]
        result = find_best_match("Bench Press", catalog)
        self.assertEqual(result.similarity_score, 100.0)
        self.assertEqual(result.matched_exercise.id, 2)

    def test_punctuation_only_names(self) -> None:
        result = find_best_match("???", [exercise(1, "!!!")])
        self.assertEqual(result.similarity_score, 100.0)
        self.assertEqual(result.matched_exercise.id, 1)


class MatchBatchTestCase(unittest.TestCase):
    def test_batch_independence(self) -> None:
        catalog = [
            exercise(1, "Barbell Bench Press"),
            exercise(2, "Lat Pulldown"),
            exercise(3, "Leg Press"),
        ]
        names = ["BB Bench Press", "Lat Pull Down", "Cable Crunches", "Leg Press"]
        results = match_batch(names, catalog, 70)
        self.assertEqual(set(results), set(names))
        for name in names:
            self.assertEqual(results[name], find_best_match(name, catalog, 70))
        self.assertTrue(results["Cable Crunches"].is_new_exercise)
        self.assertEqual(results["BB Bench Press"].matched_exercise.id, 1)

    def test_duplicates_and_empty(self) -> None:
        catalog = [exercise(1, "Leg Press")]
        results = NameMatcher.match_batch(["Leg Press", "Leg Press"], catalog)
        self.assertEqual(len(results), 1)
        self.assertEqual(NameMatcher.match_batch([], catalog), {})


if __name__ == "__main__":
    unittest.main()
