import json
import tempfile
import unittest
from pathlib import Path

from bpreader.extraction.engine import parse_pages
from bpreader.governance.failure_log import (
    FailureLog,
    log_parse_failure,
    log_report_issues,
)


class TestFailureLog(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.log = FailureLog(Path(self._tmp.name) / "logs" / "failures.jsonl")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_empty_log(self) -> None:
        self.assertEqual(self.log.read_all(), [])
        self.assertEqual(self.log.summary(), {})

    def test_report_issues_round_trip(self) -> None:
        report = parse_pages(["Monthly Report\nJane Doe\nMarch, 2024", None, "5 Xyz, 24 08:15 120 75 62"])
        written = log_report_issues(self.log, "march.pdf", report)
        entries = self.log.read_all()
        self.assertEqual(len(entries), written)
        self.assertTrue(all(e.document == "march.pdf" for e in entries))
        summary = self.log.summary()
        self.assertEqual(summary.get("unreadable"), 1)
        self.assertEqual(summary.get("dropped"), 1)

    def test_parse_failure_entry(self) -> None:
        failure = parse_pages([])
        log_parse_failure(self.log, "empty.pdf", failure)
        (entry,) = self.log.read_all()
        self.assertEqual(entry.category, "fatal")
        self.assertEqual(entry.metadata["reason"], "NO_HEADER_PAGE")

    def test_none_fields_omitted_and_bad_lines_skipped(self) -> None:
        log_parse_failure(self.log, "x.pdf", parse_pages(None))
        with open(self.log.path, "a", encoding="utf-8") as f:
            f.write("{not json\n\n")
        raw = json.loads(self.log.path.read_text(encoding="utf-8").splitlines()[0])
        self.assertNotIn("page_index", raw)
        self.assertEqual(len(self.log.read_all()), 1)


if __name__ == "__main__":
    unittest.main()
