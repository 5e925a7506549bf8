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

"""Detect the languages a set of codepoint ranges supports.

Each language in the table is scored by the fraction of its codepoints
that the input ranges cover.  Languages scoring at least the threshold are
returned, best first.
"""

import collections

from fontlang import cmap_ranges
from fontlang import lang_data


class InvalidInputOrderError(ValueError):
    """Input ranges are malformed or negative, unsorted, or overlap."""


Match = collections.namedtuple(
    "Match", "identifier,display_name,native_name,matched_count,score"
)


def check_input_ranges(input_ranges):
    """Raises InvalidInputOrderError unless the ranges are well formed,
    sorted by lower bound, and do not overlap."""
    prev_upper = -1
    for lower, upper in input_ranges:
        if lower < 0:
            raise InvalidInputOrderError(
                "range (%d, %d) has a negative codepoint" % (lower, upper)
            )
        if lower > upper:
            raise InvalidInputOrderError(
                "range (%d, %d) has lower bound greater than upper bound"
                % (lower, upper)
            )
        if lower <= prev_upper:
            raise InvalidInputOrderError(
                "range (%d, %d) is out of order or overlaps the previous range"
                % (lower, upper)
            )
        prev_upper = upper


def _matched_count(input_ranges, ranges):
    """Returns how many codepoints of the language ranges the input covers.

    Both lists must be sorted by lower bound."""
    count = 0
    for il, iu in input_ranges:
        for rl, ru in ranges:
            if rl > iu:
                break
            if il <= ru:
                count += min(iu, ru) - max(il, rl) + 1
            if iu <= ru:
                break
    return count


def detect(input_ranges, threshold, table=None):
    """Returns the languages the input ranges support.

    Args:
      input_ranges: sequence of inclusive (lower, upper) codepoint ranges,
        sorted by lower bound and not overlapping.
      threshold: minimum score, between 0 and 1 inclusive.
      table: the language table, defaults to lang_data.table().

    Returns:
      A list of Match sorted by score, highest first, then by identifier.
      Languages with no matched codepoints are never included.

    Raises:
      InvalidInputOrderError: the input ranges are unsorted or overlap.
      ValueError: the threshold is out of range.
    """
    if not 0.0 <= threshold <= 1.0:
        raise ValueError("threshold %r is not between 0 and 1" % (threshold,))
    input_ranges = [tuple(r) for r in input_ranges]
    check_input_ranges(input_ranges)
    if table is None:
        table = lang_data.table()

    result = []
    if not input_ranges:
        return result
    for entry in table:
        count = _matched_count(input_ranges, entry.ranges)
        if count <= 0:
            continue
        score = count / entry.total
        if score >= threshold:
            result.append(
                Match(
                    entry.identifier,
                    entry.display_name,
                    entry.native_name,
                    count,
                    score,
                )
            )
    result.sort(key=lambda m: (-m.score, m.identifier))
    return result


def detect_codepoints(codepoints, threshold, table=None):
    """Like detect, but for any collection of codepoints in any order."""
    return detect(cmap_ranges.convert_set_to_ranges(codepoints), threshold, table)
