import unittest

from bpreader.extraction.columns import (
    LineShape,
    classify_line,
    find_dual_header,
    split_into_columns,
    split_line,
)
from bpreader.extraction.engine import extract_page_readings
from bpreader.extraction.rows import extract_readings

DUAL_HEADER = "DATE TIME SBP DBP HR DATE TIME SBP DBP HR"


def _two_reading_line(left: str, right: str, width: int = 30) -> str:
    return f"{left:<{width}}{right:<{width}}"


LEFT_ROWS = [
    "1 Mar, 24 07:02 121 77 64",
    "2 Mar, 24 07:15 119 76 66",
    "3 Mar, 24 21:40 112 70 58",
]
RIGHT_ROWS = [
    "16 Mar, 24 07:10 118 74 61",
    "17 Mar, 24 08:05 125 79 70",
    "18 Mar, 24 22:30 109 68 57",
]


def _dual_page(extra_lines=()) -> str:
    lines = ["Readings March 2024", DUAL_HEADER]
    lines += [_two_reading_line(l, r) for l, r in zip(LEFT_ROWS, RIGHT_ROWS)]
    lines += list(extra_lines)
    return "\n".join(lines)


class TestLineShape(unittest.TestCase):
    def test_two_reading_line(self) -> None:
        line = _two_reading_line(LEFT_ROWS[0], RIGHT_ROWS[0])
        self.assertIs(classify_line(line), LineShape.TWO_READINGS)

    def test_single_reading_line(self) -> None:
        self.assertIs(classify_line(LEFT_ROWS[0]), LineShape.OTHER)
        self.assertIs(classify_line(DUAL_HEADER), LineShape.OTHER)

    def test_split_at_midpoint(self) -> None:
        left, right = split_line("abcdef")
        self.assertEqual((left, right), ("abc", "def"))
        left, right = split_line("abcde")
        self.assertEqual((left, right), ("ab", "cde"))


class TestSplitIntoColumns(unittest.TestCase):
    def test_single_column_page_is_one_stream(self) -> None:
        page = "DATE TIME SBP DBP HR\n" + "\n".join(LEFT_ROWS)
        self.assertEqual(find_dual_header(page), -1)
        self.assertEqual(split_into_columns(page), [page])

    def test_dual_page_yields_two_streams(self) -> None:
        streams = split_into_columns(_dual_page())
        self.assertEqual(len(streams), 2)
        left, right = (extract_readings(s) for s in streams)
        self.assertEqual(len(left), len(LEFT_ROWS))
        self.assertEqual(len(right), len(RIGHT_ROWS))
        self.assertEqual([r.date.day for r in left], [1, 2, 3])
        self.assertEqual([r.date.day for r in right], [16, 17, 18])
        self.assertFalse(set(left) & set(right))

    def test_left_stream_keeps_header_text(self) -> None:
        left, _ = split_into_columns(_dual_page())
        self.assertTrue(left.startswith("Readings March 2024\n" + DUAL_HEADER))

    def test_unsplit_line_goes_to_left_only(self) -> None:
        streams = split_into_columns(_dual_page(extra_lines=["19 Mar, 24 06:55 130 85 72"]))
        left, right = (extract_readings(s) for s in streams)
        self.assertEqual([r.date.day for r in left], [1, 2, 3, 19])
        self.assertEqual(len(right), 3)
        self.assertNotIn("19 Mar", streams[1])

    def test_reading_count_matches_split_lines(self) -> None:
        page = _dual_page(extra_lines=["Cuff measurement", "", "page 2"])
        split_lines = [ln for ln in page.splitlines() if classify_line(ln) is LineShape.TWO_READINGS]
        streams = split_into_columns(page)
        total = sum(len(extract_readings(s)) for s in streams)
        self.assertEqual(total, 2 * len(split_lines))


class TestPageFallback(unittest.TestCase):
    def test_bad_split_falls_back_to_whole_page(self) -> None:
        # Midpoint cuts the only full row in half, so neither stream matches
        page = DUAL_HEADER + "\n1 Mar, 24 07:02 121 77 64 16 Mar, 24"
        streams = split_into_columns(page)
        self.assertEqual(sum(len(extract_readings(s)) for s in streams), 0)

        readings = extract_page_readings(page)
        self.assertEqual(len(readings), 1)
        self.assertEqual(readings[0].systolic, 121)

    def test_dual_page_readings_left_then_right(self) -> None:
        readings = extract_page_readings(_dual_page())
        self.assertEqual([r.date.day for r in readings], [1, 2, 3, 16, 17, 18])


if __name__ == "__main__":
    unittest.main()
