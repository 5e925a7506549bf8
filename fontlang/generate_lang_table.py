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

"""Compile language yaml data into a python table module.

The module defines TABLE, so tools can load the language table without
parsing any yaml (see detect_font_langs --table_module).  Without an output
file, prints a summary of the compiled languages instead."""

import argparse
import logging
import os
from os import path
import sys

from fontlang import lang_data
from fontlang import tool_utils

logger = logging.getLogger(__name__)


def generate_table(data_dir, outfile, validate_tags=True):
    """Compiles data_dir and writes the table module to outfile.  Returns
    the compiled table."""
    entries = lang_data.compile_table(lang_data.load_records(data_dir), validate_tags)
    parent = path.dirname(path.abspath(outfile))
    if not path.isdir(parent):
        os.makedirs(parent)
    with open(outfile, "w", encoding="utf-8") as f:
        lang_data.write_table_module(entries, f)
    logger.info("wrote %d languages to %s", len(entries), outfile)
    return entries


def write_summary(entries, out):
    for entry in entries:
        out.write(
            "%-10s %4d ranges %6d codepoints  %s (%s)\n"
            % (
                entry.identifier,
                len(entry.ranges),
                entry.total,
                entry.display_name,
                entry.native_name,
            )
        )
    out.write("%d languages\n" % len(entries))


def main(argv=None):
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "-d",
        "--data_dir",
        help="directory of language yaml files (default is the configured "
        "or packaged data)",
        metavar="dir",
    )
    parser.add_argument(
        "-o",
        "--outfile",
        help="python module to write, prints a summary if not provided",
        metavar="file",
    )
    parser.add_argument(
        "--no_tag_check",
        dest="validate_tags",
        help="keep languages whose file name is not a valid language tag",
        action="store_false",
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
        if args.data_dir:
            data_dir = tool_utils.resolve_required_path(args.data_dir)
        else:
            data_dir = lang_data.default_data_dir()
        if args.outfile:
            generate_table(data_dir, args.outfile, args.validate_tags)
        else:
            entries = lang_data.compile_table(
                lang_data.load_records(data_dir), args.validate_tags
            )
            write_summary(entries, sys.stdout)
    except ValueError as e:
        logging.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
