#!/usr/bin/env python
#
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

"""Report the languages supported by the character coverage of fonts."""

import argparse
import logging
import sys

from fontTools.ttLib import TTLibError

from fontlang import cmap_ranges
from fontlang import fontlangconfig
from fontlang import lang_data
from fontlang import lang_detect
from fontlang import tool_utils

logger = logging.getLogger(__name__)


def _get_table(data_dir, table_module, validate_tags):
    if table_module:
        table_module = tool_utils.resolve_required_path(table_module)
        return lang_data.load_table_module(table_module)
    if data_dir:
        data_dir = tool_utils.resolve_required_path(data_dir)
    return lang_data.table(data_dir, validate_tags)


def write_matches(matches, out, source=None):
    """Writes one line per match.  With a source name, writes csv rows
    starting with that name instead."""
    for m in matches:
        if source is not None:
            out.write(
                "%s,%s,%.4f,%d,%s,%s\n"
                % (
                    source,
                    m.identifier,
                    m.score,
                    m.matched_count,
                    m.display_name,
                    m.native_name,
                )
            )
        else:
            out.write(
                "  %-10s %6.2f%% %6d  %s (%s)\n"
                % (
                    m.identifier,
                    m.score * 100,
                    m.matched_count,
                    m.display_name,
                    m.native_name,
                )
            )


def detect_font_langs(
    font_files, codepoints, threshold, table, out=None, csv=False
):
    """Writes the matches for each font, and for the codepoints if given."""
    out = out or sys.stdout
    sources = []
    if codepoints:
        sources.append(("codepoints", cmap_ranges.convert_set_to_ranges(codepoints)))
    for font_file in font_files:
        tool_utils.check_file_exists(font_file)
        sources.append((font_file, cmap_ranges.font_ranges(font_file)))

    for name, ranges in sources:
        logger.info("%s: %d ranges", name, len(ranges))
        matches = lang_detect.detect(ranges, threshold, table)
        if csv:
            write_matches(matches, out, source=name)
            continue
        out.write("%s: %d languages\n" % (name, len(matches)))
        write_matches(matches, out)


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "font_files",
        metavar="font",
        nargs="*",
        help="a font file to check, can omit if codepoints are provided",
    )
    parser.add_argument(
        "-c",
        "--codepoints",
        help="hex codepoints and ranges to check, e.g. '0041-005a 00e9'",
        metavar="ranges",
    )
    parser.add_argument(
        "-t",
        "--threshold",
        help="minimum score to report, 0 to 1 (default %(default)s)",
        metavar="score",
        type=float,
        default=fontlangconfig.threshold(0.0),
    )
    parser.add_argument(
        "-d",
        "--data_dir",
        help="directory of language yaml files (default is the configured "
        "or packaged data)",
        metavar="dir",
    )
    parser.add_argument(
        "--table_module",
        help="python table module written by fontlang-compile, used instead "
        "of reading yaml",
        metavar="file",
    )
    parser.add_argument(
        "--no_tag_check",
        dest="validate_tags",
        help="keep languages whose file name is not a valid language tag",
        action="store_false",
    )
    parser.add_argument(
        "--csv", help="produces csv output", action="store_true"
    )
    parser.add_argument(
        "-l",
        "--loglevel",
        help="log level name or value",
        metavar="level",
        default="warning",
    )
    args = parser.parse_args(argv)

    try:
        tool_utils.setup_logging(args.loglevel)
        codepoints = None
        if args.codepoints:
            codepoints = tool_utils.parse_int_ranges(args.codepoints)
        if not codepoints and not args.font_files:
            parser.error("no fonts or codepoints to check")
        table = _get_table(args.data_dir, args.table_module, args.validate_tags)
        detect_font_langs(
            args.font_files, codepoints, args.threshold, table, csv=args.csv
        )
    except (ValueError, TTLibError) as e:
        logging.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
