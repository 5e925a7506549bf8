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

"""Some common utilities for tools to use."""

import logging
import os
import os.path as path
import re

from fontlang import cmap_ranges
from fontlang import fontlangconfig


data_re = re.compile(r"\[data\](.*)")


def resolve_path(somepath):
    """Resolve a path that might start with the '[data]' shorthand for the
    configured language data directory. If the path is empty, is '-', or the
    shorthand is not defined, returns None. Example: '[data]/en.yml'."""

    if not somepath or somepath == "-":
        return None
    m = data_re.match(somepath)
    if m:
        base = fontlangconfig.lang_data()
        if not base:
            return None
        rest = m.group(1)
        while rest.startswith(path.sep):
            rest = rest[len(path.sep):]
        somepath = path.join(base, rest)
    return path.realpath(path.abspath(path.expanduser(somepath)))


def resolve_required_path(somepath):
    """Like resolve_path, but raises instead of returning None when a path
    was given but cannot be resolved."""
    resolved = resolve_path(somepath)
    if resolved is None:
        raise ValueError("%s could not be resolved" % somepath)
    return resolved


def check_dir_exists(dirpath):
    if not dirpath or not os.path.isdir(dirpath):
        raise ValueError("%s does not exist or is not a directory" % dirpath)


def check_file_exists(filepath):
    if not filepath or not os.path.isfile(filepath):
        raise ValueError("%s does not exist or is not a file" % filepath)


_comment_re = re.compile(r"#.*$", re.MULTILINE)


def _parse_int_range(val, base):
    """Returns the inclusive (lo, hi) pair for 'n' or 'lo-hi'."""
    parts = val.split("-")
    if len(parts) > 2:
        raise ValueError("could not parse range from '%s'" % val)
    try:
        bounds = [int(part, base) for part in parts]
    except ValueError:
        raise ValueError("could not parse range from '%s'" % val)
    lo, hi = bounds[0], bounds[-1]
    if lo > hi:
        raise ValueError("range '%s' has high < low" % val)
    return lo, hi


def parse_int_ranges(range_string, is_hex=True, sep=None, allow_duplicates=False):
    """Returns a set of ints from a string of numbers or ranges separated by sep.
    A range is two values separated by hyphen with no intervening separator;
    ranges are inclusive, and 'n-n' is the single value n.  When sep is None,
    text after '#' on a line is a comment."""
    base = 16 if is_hex else 10
    if sep is None:
        range_string = _comment_re.sub("", range_string)
    result = set()
    count = 0
    for val in range_string.split(sep):
        val = val.strip()
        if not val:
            continue
        lo, hi = _parse_int_range(val, base)
        result.update(range(lo, hi + 1))
        count += hi - lo + 1
    if not allow_duplicates and len(result) != count:
        raise ValueError(
            "duplicate values in '%s', %d values listed but only %d distinct"
            % (range_string.strip(), count, len(result))
        )
    return result


def write_int_ranges(int_values, in_hex=True, sep=" "):
    """Returns a string listing the ints as values and ranges, sorted, in the
    form parse_int_ranges reads."""
    fmt = "%04x" if in_hex else "%d"
    items = []
    for lo, hi in cmap_ranges.convert_set_to_ranges(int_values):
        if lo == hi:
            items.append(fmt % lo)
        else:
            items.append((fmt + "-" + fmt) % (lo, hi))
    return sep.join(items)


def setup_logging(loglevel, quiet_ttx=True):
    """Set up logging to stream to stderr.

    The loglevel is a logging level name or a level value (int or string).

    fontTools uses 'info' to report when it is reading tables, but when we
    want 'info' in our own tools we usually don't want this detail.  When
    quiet_ttx is true, set up logging to treat 'info' logs from fontTools
    ttLib as though they were at level 19."""

    try:
        loglevel = int(loglevel)
    except ValueError:
        loglevel = getattr(logging, loglevel.upper(), loglevel)
    if not isinstance(loglevel, int):
        raise ValueError(
            "Could not set log level, should be one of debug, info, warning, "
            "error, critical, or a numeric value"
        )
    logging.basicConfig(level=loglevel)

    if quiet_ttx and loglevel == logging.INFO:
        for logger_name in ["fontTools.misc.xmlReader", "fontTools.ttLib"]:
            logger = logging.getLogger(logger_name)
            logger.setLevel(loglevel + 1)
    return loglevel
