import datetime as dt
import json
import tempfile
import unittest
from pathlib import Path

from bpreader.classification.bp_categories import BPCategory
from bpreader.extraction.model import (
    ExtractionIssue,
    Reading,
    ReadingType,
    Report,
    ReportMetadata,
    SummaryStats,
)
from bpreader.reporting.aggregate import (
    count_duplicates,
    date_range,
    merge_readings,
    reading_identity,
    recent_means,
)
from bpreader.reporting.export import report_to_dict, write_report_json
from bpreader.reporting.review import review_report


def _reading(day: int, time: str = "08:00", sys_: int = 120, dia: int = 78, hr: int = 65, month: int = 3) -> Reading:
    return Reading(dt.date(2024, month, day), time, sys_, dia, hr)


def _metadata(**overrides) -> ReportMetadata:
    values = dict(
        member_name="Jane Doe", email="jane.doe@example.com", month="March", year="2024",
        gender="Female", date_of_birth="12 Jun 1980", height="168", weight="64",
    )
    values.update(overrides)
    return ReportMetadata(**values)


class TestAggregate(unittest.TestCase):
    def test_identity(self) -> None:
        self.assertEqual(reading_identity(_reading(5, "08:15", 120, 75, 62)), "2024-03-05-08:15-120-75-62")

    def test_identity_ignores_reading_type(self) -> None:
        a = _reading(5)
        b = Reading(a.date, a.time, a.systolic, a.diastolic, a.heart_rate, ReadingType.CUFF_MEASUREMENT)
        self.assertEqual(reading_identity(a), reading_identity(b))

    def test_merge_skips_duplicates_newest_first(self) -> None:
        existing = [_reading(1), _reading(3)]
        incoming = [_reading(3), _reading(2), _reading(2), _reading(4, "23:00")]
        merged = merge_readings(existing, incoming)
        self.assertEqual([r.date.day for r in merged], [4, 3, 2, 1])
        self.assertEqual(count_duplicates(existing, incoming), 1)

    def test_merge_orders_same_day_by_time(self) -> None:
        merged = merge_readings([], [_reading(1, "07:00"), _reading(1, "21:30")])
        self.assertEqual([r.time for r in merged], ["21:30", "07:00"])

    def test_recent_means_last_30_days(self) -> None:
        readings = [
            _reading(1, sys_=100, dia=60, hr=50),
            _reading(20, sys_=130, dia=85, hr=70, month=2),
            _reading(28, sys_=140, dia=90, hr=80),
        ]
        means = recent_means(readings, today=dt.date(2024, 3, 30))
        self.assertEqual((means.systolic_mean, means.diastolic_mean, means.heart_rate_mean), (120, 75, 65))

    def test_recent_means_falls_back_to_newest(self) -> None:
        readings = [_reading(d, sys_=110 + d) for d in range(1, 15)]
        means = recent_means(readings, today=dt.date(2025, 1, 1))
        # newest ten: days 5..14 → systolic 115..124
        self.assertEqual(means.systolic_mean, 119)

    def test_recent_means_empty(self) -> None:
        means = recent_means([], today=dt.date(2024, 3, 30))
        self.assertEqual((means.systolic_mean, means.diastolic_mean, means.heart_rate_mean), (0, 0, 0))

    def test_date_range(self) -> None:
        self.assertIsNone(date_range([]))
        self.assertEqual(
            date_range([_reading(9), _reading(2), _reading(17)]),
            (dt.date(2024, 3, 2), dt.date(2024, 3, 17)),
        )


class TestReview(unittest.TestCase):
    def test_flags_and_crisis_count(self) -> None:
        report = Report(
            metadata=_metadata(),
            readings=(
                _reading(1),
                _reading(2, sys_=185, dia=100),
                _reading(3, sys_=0, dia=75),
                _reading(4, sys_=110, dia=115, hr=300),
            ),
        )
        review = review_report(report)
        self.assertEqual(review.crisis_count, 1)
        self.assertTrue(review.needs_attention)
        flagged = {(f.reading_index, f.metric) for f in review.flags}
        self.assertIn((2, "systolic"), flagged)
        self.assertIn((3, "heart_rate"), flagged)
        self.assertIn((3, "diastolic"), flagged)
        self.assertNotIn((0, "systolic"), flagged)
        self.assertEqual(review.category_counts[BPCategory.ELEVATED], 1)

    def test_clean_report(self) -> None:
        review = review_report(Report(metadata=_metadata(), readings=(_reading(1, sys_=112),)))
        self.assertFalse(review.needs_attention)


class TestExport(unittest.TestCase):
    def _report(self) -> Report:
        stats = SummaryStats(128, 82, 71, 115, 70, 60, 124, 79, 68)
        return Report(
            metadata=_metadata(summary_stats=stats),
            readings=(_reading(2), Reading(dt.date(2024, 3, 5), "21:10", 142, 91, 70, ReadingType.ON_DEMAND_PHONE)),
            page_count=3,
            issues=(ExtractionIssue("page", "unreadable", "Page text unavailable", 2),),
        )

    def test_report_to_dict(self) -> None:
        data = report_to_dict(self._report())
        self.assertEqual(data["meta"]["reading_count"], 2)
        self.assertEqual(data["meta"]["first_date"], "2024-03-02")
        self.assertEqual(data["metadata"]["member_name"], "Jane Doe")
        self.assertNotIn("summary_stats", data["metadata"])
        self.assertEqual(data["summary_stats"]["overall_heart_rate_mean"], 68)
        self.assertEqual(data["readings"][0]["reading_type"], "Normal")
        self.assertEqual(data["readings"][1]["reading_type"], "On demand phone measurement")
        self.assertEqual(data["readings"][1]["category"], "Hypertension Stage 2")
        self.assertEqual(data["issues"][0]["page_index"], 2)

    def test_write_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = write_report_json(self._report(), Path(tmp) / "out" / "report.json")
            data = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(len(data["readings"]), 2)


if __name__ == "__main__":
    unittest.main()
