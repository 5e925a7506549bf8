# Copyright 2024 Google Inc. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Tests for lang_detect.py."""

import unittest

from fontlang import lang_data
from fontlang import lang_detect
from fontlang.lang_detect import InvalidInputOrderError

TEST_TABLE = lang_data.compile_table(
    [
        ("aa", "test1", "ntest1", ["1..3"]),
        ("ab", "test2", "ntest2", ["4..6"]),
        ("ac", "test3", "ntest3", ["7..9"]),
        ("ad", "test4", "ntest4", [8]),
        ("ae", "test5", "ntest5", [16]),
    ]
)


def detect(ranges, threshold):
    return lang_detect.detect(ranges, threshold, TEST_TABLE)


def identifiers(matches):
    return [m.identifier for m in matches]


class DetectTest(unittest.TestCase):
    """Tests for lang_detect.detect."""

    def test_empty(self):
        for threshold in [0.0, 0.5, 1.0]:
            self.assertEqual([], detect([], threshold))

    def test_unknown_codepoint(self):
        self.assertEqual([], detect([(256, 256)], 0.5))
        self.assertEqual([], detect([(256, 256)], 0.0))

    def test_single_language(self):
        result = detect([(1, 1)], 0.0)
        self.assertEqual(1, len(result))
        self.assertEqual("aa", result[0].identifier)
        self.assertEqual("test1", result[0].display_name)
        self.assertEqual("ntest1", result[0].native_name)
        self.assertEqual(1, result[0].matched_count)
        self.assertAlmostEqual(1 / 3, result[0].score)

    def test_threshold_not_met(self):
        self.assertEqual([], detect([(1, 2)], 1.0))

    def test_threshold_met(self):
        result = detect([(1, 3)], 1.0)
        self.assertEqual(["aa"], identifiers(result))
        self.assertEqual(3, result[0].matched_count)
        self.assertEqual(1.0, result[0].score)

    def test_threshold_partially_met(self):
        result = detect([(1, 2)], 0.6)
        self.assertEqual(["aa"], identifiers(result))
        self.assertEqual(2, result[0].matched_count)

    def test_threshold_inclusive(self):
        """A score equal to the threshold is included."""
        result = detect([(16, 16)], 1.0)
        self.assertEqual(["ae"], identifiers(result))
        self.assertEqual(1.0, result[0].score)
        result = detect([(1, 1)], 1 / 3)
        self.assertEqual(["aa"], identifiers(result))

    def test_zero_threshold_excludes_unmatched(self):
        self.assertEqual(["aa"], identifiers(detect([(1, 1)], 0.0)))

    def test_multiple_languages(self):
        """Equal scores are ordered by identifier."""
        result = detect([(1, 1), (4, 4)], 0.0)
        self.assertEqual(["aa", "ab"], identifiers(result))
        self.assertEqual(result[0].score, result[1].score)

    def test_overlapping_languages(self):
        """Languages sharing a codepoint both match, best score first."""
        result = detect([(8, 8)], 0.0)
        self.assertEqual(["ad", "ac"], identifiers(result))
        self.assertEqual(1.0, result[0].score)
        self.assertAlmostEqual(1 / 3, result[1].score)
        for m in result:
            self.assertGreaterEqual(m.matched_count, 1)

    def test_partial_range_overlap(self):
        """Overlap is counted exactly, not as a hit or miss."""
        result = detect([(3, 5)], 0.0)
        self.assertEqual(["ab", "aa"], identifiers(result))
        self.assertEqual(2, result[0].matched_count)
        self.assertAlmostEqual(2 / 3, result[0].score)
        self.assertEqual(1, result[1].matched_count)
        self.assertAlmostEqual(1 / 3, result[1].score)

    def test_wide_range(self):
        result = detect([(0, 100)], 1.0)
        self.assertEqual(["aa", "ab", "ac", "ad", "ae"], identifiers(result))
        self.assertEqual([3, 3, 3, 1, 1], [m.matched_count for m in result])

    def test_many_language_ranges(self):
        table = lang_data.compile_table(
            [("af", "test", "ntest", ["9..10", "1..2", "5..6"])]
        )
        result = lang_detect.detect([(2, 5), (10, 12)], 0.0, table)
        self.assertEqual(3, result[0].matched_count)
        self.assertAlmostEqual(0.5, result[0].score)
        result = lang_detect.detect([(0, 0), (3, 4), (7, 8), (11, 11)], 0.0, table)
        self.assertEqual([], result)

    def test_overlapping_language_ranges(self):
        """Overlapping ranges in one language are kept, so the total counts
        shared codepoints twice.  A codepoint in both ranges matches once,
        since the scan stops at the first range reaching past it."""
        with self.assertLogs("fontlang.lang_data", "WARNING"):
            table = lang_data.compile_table(
                [("ag", "test", "ntest", ["3..8", "1..5"])]
            )
        self.assertEqual(((1, 5), (3, 8)), table[0].ranges)
        self.assertEqual(11, table[0].total)
        result = lang_detect.detect([(4, 4)], 0.0, table)
        self.assertEqual(1, result[0].matched_count)
        self.assertAlmostEqual(1 / 11, result[0].score)
        result = lang_detect.detect([(0, 9)], 1.0, table)
        self.assertEqual(11, result[0].matched_count)
        self.assertEqual(1.0, result[0].score)
        result = lang_detect.detect([(1, 2), (6, 8)], 0.0, table)
        self.assertEqual(5, result[0].matched_count)

    def test_sorted_descending(self):
        result = detect([(1, 1), (4, 5), (7, 9), (16, 16)], 0.0)
        scores = [m.score for m in result]
        self.assertEqual(sorted(scores, reverse=True), scores)
        self.assertEqual(["ac", "ad", "ae", "ab", "aa"], identifiers(result))

    def test_list_ranges(self):
        self.assertEqual(["aa"], identifiers(detect([[1, 3]], 1.0)))

    def test_result_is_new_list(self):
        result = detect([(1, 3)], 0.0)
        result.clear()
        self.assertEqual(["aa"], identifiers(detect([(1, 3)], 0.0)))

    def test_unsorted_input(self):
        with self.assertRaises(InvalidInputOrderError):
            detect([(4, 4), (1, 1)], 0.0)

    def test_overlapping_input(self):
        with self.assertRaises(InvalidInputOrderError):
            detect([(1, 3), (3, 4)], 0.0)
        with self.assertRaises(InvalidInputOrderError):
            detect([(1, 1), (1, 1)], 0.0)

    def test_reversed_range(self):
        with self.assertRaises(InvalidInputOrderError):
            detect([(3, 1)], 0.0)

    def test_negative_range(self):
        with self.assertRaisesRegex(InvalidInputOrderError, "negative"):
            detect([(-5, -1)], 0.0)
        with self.assertRaisesRegex(InvalidInputOrderError, "negative"):
            detect([(-1, 2)], 0.0)

    def test_adjacent_input(self):
        result = detect([(1, 2), (3, 3)], 1.0)
        self.assertEqual(["aa"], identifiers(result))

    def test_bad_threshold(self):
        for threshold in [-0.1, 1.5, float("nan")]:
            with self.assertRaises(ValueError):
                detect([(1, 1)], threshold)


class DetectCodepointsTest(unittest.TestCase):
    def test_unsorted_codepoints(self):
        result = lang_detect.detect_codepoints([3, 1, 2, 2], 1.0, TEST_TABLE)
        self.assertEqual(["aa"], identifiers(result))
        self.assertEqual(3, result[0].matched_count)

    def test_empty(self):
        self.assertEqual([], lang_detect.detect_codepoints([], 0.0, TEST_TABLE))

    def test_packaged_data(self):
        table = lang_data.table(lang_data.DATA_DIR)
        latin = list(range(65, 91)) + list(range(97, 123))
        self.assertEqual(
            ["en"], identifiers(lang_detect.detect_codepoints(latin, 1.0, table))
        )
        result = lang_detect.detect_codepoints(latin + [196, 214, 220], 0.9, table)
        self.assertEqual("en", result[0].identifier)
        self.assertIn("de", identifiers(result))
        arabic_alef = [0x0627]
        self.assertEqual(
            ["ar", "fa"],
            sorted(identifiers(lang_detect.detect_codepoints(arabic_alef, 0.0, table))),
        )


if __name__ == "__main__":
    unittest.main()
