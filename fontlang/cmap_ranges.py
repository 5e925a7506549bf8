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

"""Routines for character coverage of fonts, as codepoint ranges."""

from fontTools import ttLib

# (format, platformID, platEncID) of the Unicode cmap subtables we read, in
# order of preference.
_UNICODE_CMAPS = [(12, 3, 10), (4, 3, 1)]


def character_set(font):
    """Returns the character coverage of a font.

    Args:
      font: The input font's file name, or a TTFont.

    Returns:
      A frozenset listing the characters supported in the font.
    """
    if type(font) is str:
        with ttLib.TTFont(font) as ttfont:
            return character_set(ttfont)
    if "cmap" not in font:
        return frozenset()
    cmaps = {}
    for table in font["cmap"].tables:
        key = (table.format, table.platformID, table.platEncID)
        if key in _UNICODE_CMAPS:
            cmaps[key] = table.cmap
    for key in _UNICODE_CMAPS:
        if key in cmaps:
            return frozenset(cmaps[key].keys())
    return frozenset()


def convert_set_to_ranges(charset):
    """Converts a collection of characters to a sorted list of inclusive,
    non-overlapping (start, end) ranges.  Duplicates are ignored."""
    output_list = []
    for cp in sorted(set(charset)):
        if output_list and output_list[-1][1] + 1 == cp:
            output_list[-1] = (output_list[-1][0], cp)
        else:
            output_list.append((cp, cp))
    return output_list


def font_ranges(font):
    """Returns the character coverage of a font as a list of ranges, in the
    form the language detector expects."""
    return convert_set_to_ranges(character_set(font))
