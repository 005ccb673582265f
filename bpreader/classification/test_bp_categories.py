import unittest

from bpreader.classification.bp_categories import (
    BPCategory,
    category_counts,
    classify,
    diastolic_band,
    heart_rate_band,
    match_category,
    systolic_band,
)


class TestClassify(unittest.TestCase):
    def test_thresholds(self) -> None:
        cases = [
            ((115, 75), BPCategory.NORMAL),
            ((120, 79), BPCategory.ELEVATED),
            ((129, 70), BPCategory.ELEVATED),
            ((130, 70), BPCategory.HYPERTENSION_STAGE_1),
            ((118, 80), BPCategory.HYPERTENSION_STAGE_1),
            ((140, 70), BPCategory.HYPERTENSION_STAGE_2),
            ((125, 90), BPCategory.HYPERTENSION_STAGE_2),
            ((180, 100), BPCategory.HYPERTENSIVE_CRISIS),
            ((150, 120), BPCategory.HYPERTENSIVE_CRISIS),
        ]
        for (sys_, dia), expected in cases:
            with self.subTest(sys=sys_, dia=dia):
                self.assertIs(classify(sys_, dia), expected)

    def test_category_text(self) -> None:
        self.assertEqual(BPCategory.HYPERTENSIVE_CRISIS.label, "Hypertensive Crisis")
        self.assertTrue(BPCategory.HYPERTENSIVE_CRISIS.advice.startswith("MEDICAL EMERGENCY"))
        self.assertIn("borderline", BPCategory.ELEVATED.search_terms)

    def test_counts(self) -> None:
        counts = category_counts([(115, 75), (185, 95), (182, 100)])
        self.assertEqual(counts[BPCategory.NORMAL], 1)
        self.assertEqual(counts[BPCategory.HYPERTENSIVE_CRISIS], 2)
        self.assertEqual(counts[BPCategory.ELEVATED], 0)


class TestMatchCategory(unittest.TestCase):
    def test_label_and_search_terms(self) -> None:
        self.assertIs(match_category("crisis"), BPCategory.HYPERTENSIVE_CRISIS)
        self.assertIs(match_category("Borderline"), BPCategory.ELEVATED)
        self.assertIs(match_category("stage 1"), BPCategory.HYPERTENSION_STAGE_1)

    def test_mildest_category_wins_on_shared_term(self) -> None:
        self.assertIs(match_category("severe"), BPCategory.HYPERTENSION_STAGE_2)

    def test_no_match(self) -> None:
        self.assertIsNone(match_category("purple"))
        self.assertIsNone(match_category("  "))


class TestBands(unittest.TestCase):
    def test_bands(self) -> None:
        self.assertEqual(systolic_band(165), "very_high")
        self.assertEqual(systolic_band(125), "elevated")
        self.assertEqual(diastolic_band(92), "high")
        self.assertEqual(diastolic_band(70), "normal")
        self.assertEqual(heart_rate_band(48), "low")
        self.assertEqual(heart_rate_band(72), "normal")
        self.assertEqual(heart_rate_band(104), "very_high")


if __name__ == "__main__":
    unittest.main()
