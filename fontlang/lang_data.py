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

"""Per-language codepoint data.

Each known language is described by a yaml file whose name is the language
tag, holding the anglicized name, the native name, and the list of
codepoints the language requires.  Codepoints are written either as a single
decimal value or as an inclusive range 'lower..upper', optionally tagged
'!ruby/range' (the format the data was originally authored in).

This module compiles those records into the table the language detector
reads: a tuple of LanguageEntry, one per language, ordered by identifier,
each with its ranges sorted by lower bound and the total number of
codepoints the ranges span.  The table is built at most once per data
directory and is never modified afterwards, so it can be shared freely
between threads.

Any problem with the data is fatal: compiling raises and no table is
produced.
"""

import collections
import glob
import importlib.util
import logging
from os import path
import re
import threading

import yaml

from fontlang import fontlangconfig
from fontlang import tool_utils

logger = logging.getLogger(__name__)

DATA_DIR = path.join(path.dirname(path.abspath(__file__)), "data")

RANGE_SEPARATOR = ".."

_LANG_FILE_SUFFIXES = (".yml", ".yaml")


class MalformedRangeError(ValueError):
    """A codepoint token could not be parsed into a range."""


class MalformedLanguageError(ValueError):
    """A language record or file is not usable."""


class EmptyLanguageError(MalformedLanguageError):
    """A language record covers no codepoints."""


LanguageEntry = collections.namedtuple(
    "LanguageEntry", "identifier,display_name,native_name,ranges,total"
)


_BOUND_RE = re.compile(r"[0-9]+\Z")


def _parse_bound(text, token):
    text = text.strip()
    if not _BOUND_RE.match(text):
        raise MalformedRangeError(
            'bad codepoint "%s" in "%s", expected a non-negative decimal integer'
            % (text, token)
        )
    return int(text)


def parse_token(token):
    """Returns the inclusive (lower, upper) range for a codepoint token.

    A token is an int, or a string holding either one decimal codepoint or
    two separated by '..'.  A single codepoint n becomes (n, n)."""
    # bool is an int subclass, but True is never a codepoint
    if isinstance(token, bool):
        raise MalformedRangeError("bad codepoint %r" % token)
    if isinstance(token, int):
        if token < 0:
            raise MalformedRangeError("negative codepoint %d" % token)
        return (token, token)
    if not isinstance(token, str):
        raise MalformedRangeError(
            "bad codepoint %r, expected int or string" % (token,)
        )
    if RANGE_SEPARATOR not in token:
        n = _parse_bound(token, token)
        return (n, n)
    parts = token.split(RANGE_SEPARATOR)
    if len(parts) != 2:
        raise MalformedRangeError('could not parse range from "%s"' % token)
    lower = _parse_bound(parts[0], token)
    upper = _parse_bound(parts[1], token)
    if lower > upper:
        raise MalformedRangeError(
            'range "%s" has lower bound greater than upper bound' % token
        )
    return (lower, upper)


def normalize_ranges(ranges):
    """Returns the ranges as a tuple sorted by lower bound.

    The detector stops scanning a language early based on this order, so
    sort even if the input looks sorted."""
    return tuple(sorted(ranges))


def range_total(ranges):
    """Returns the number of codepoints spanned by the ranges.

    Overlapping ranges are counted once per range."""
    return sum(upper - lower + 1 for lower, upper in ranges)


def _has_overlaps(ranges):
    """Ranges must be sorted."""
    max_upper = -1
    for lower, upper in ranges:
        if lower <= max_upper:
            return True
        max_upper = max(max_upper, upper)
    return False


# RFC 5646 well-formed tags, plus the irregular grandfathered ones.
_LANGTAG_RE = re.compile(
    r"""
    (?:
      (?:[a-z]{2,3}(?:-[a-z]{3}){0,3}|[a-z]{4}|[a-z]{5,8})  # language
      (?:-[a-z]{4})?                                        # script
      (?:-(?:[a-z]{2}|[0-9]{3}))?                           # region
      (?:-(?:[a-z0-9]{5,8}|[0-9][a-z0-9]{3}))*              # variants
      (?:-[0-9a-wyz](?:-[a-z0-9]{2,8})+)*                   # extensions
      (?:-x(?:-[a-z0-9]{1,8})+)?                            # private use
    |
      x(?:-[a-z0-9]{1,8})+
    |
      en-gb-oed|i-ami|i-bnn|i-default|i-enochian|i-hak|i-klingon|i-lux
      |i-mingo|i-navajo|i-pwn|i-tao|i-tay|i-tsu|sgn-be-fr|sgn-be-nl|sgn-ch-de
    )\Z
    """,
    re.VERBOSE | re.IGNORECASE,
)


def is_valid_tag(tag):
    """Returns True if tag is a well-formed BCP 47 language tag."""
    return isinstance(tag, str) and bool(_LANGTAG_RE.match(tag))


def make_entry(identifier, anglicized_name, native_name, tokens):
    """Returns the LanguageEntry for one language record."""
    for field, value in (
        ("anglicized_name", anglicized_name),
        ("native_name", native_name),
    ):
        if not isinstance(value, str) or not value.strip():
            raise MalformedLanguageError(
                '%s: %s must be a non-empty string' % (identifier, field)
            )
    if not isinstance(tokens, (list, tuple)):
        raise MalformedLanguageError(
            "%s: codepoints must be a list, got %r" % (identifier, tokens)
        )
    try:
        ranges = normalize_ranges(parse_token(token) for token in tokens)
    except MalformedRangeError as e:
        raise MalformedRangeError("%s: %s" % (identifier, e))
    total = range_total(ranges)
    if total <= 0:
        raise EmptyLanguageError("%s: language has no codepoints" % identifier)
    if _has_overlaps(ranges):
        logger.warning(
            "%s: codepoint ranges overlap, total %d counts some codepoints "
            "more than once",
            identifier,
            total,
        )
    logger.debug("%s: %d ranges, %d codepoints", identifier, len(ranges), total)
    return LanguageEntry(identifier, anglicized_name, native_name, ranges, total)


def compile_table(records, validate_tags=True):
    """Returns the language table for a collection of records.

    Each record is (identifier, anglicized_name, native_name, tokens).  If
    validate_tags is true, records whose identifier is not a well-formed
    language tag are dropped.  Duplicate identifiers are an error."""
    entries = {}
    for identifier, anglicized_name, native_name, tokens in records:
        if validate_tags and not is_valid_tag(identifier):
            logger.warning('dropping "%s", not a valid language tag', identifier)
            continue
        if identifier in entries:
            raise MalformedLanguageError('duplicate language "%s"' % identifier)
        entries[identifier] = make_entry(
            identifier, anglicized_name, native_name, tokens
        )
    table = tuple(entries[k] for k in sorted(entries))
    logger.info("compiled %d languages", len(table))
    return table


def _construct_ruby_range(loader, node):
    """Returns the token for a '!ruby/range' node.

    The scalar form is 'lower..upper'.  The mapping form is the one Ruby
    writes when dumping a Range object, with keys begin, end and excl."""
    if isinstance(node, yaml.ScalarNode):
        return loader.construct_scalar(node)
    if isinstance(node, yaml.MappingNode):
        value = loader.construct_mapping(node)
        try:
            begin, end = value["begin"], value["end"]
        except KeyError:
            raise MalformedRangeError(
                "ruby/range mapping needs begin and end: %r" % (value,)
            )
        if not isinstance(begin, int) or not isinstance(end, int):
            raise MalformedRangeError("bad ruby/range bounds: %r" % (value,))
        if value.get("excl"):
            end -= 1
        return "%d%s%d" % (begin, RANGE_SEPARATOR, end)
    raise MalformedRangeError("bad ruby/range node: %s" % node.id)


class _LanguageLoader(yaml.SafeLoader):
    pass


_LanguageLoader.add_constructor("!ruby/range", _construct_ruby_range)


def identifier_for_file(filepath):
    """Returns the language identifier for a data file, its base name less
    any yaml suffix."""
    name = path.basename(filepath)
    root, ext = path.splitext(name)
    return root if ext.lower() in _LANG_FILE_SUFFIXES else name


def load_language_file(filepath):
    """Returns the record (identifier, anglicized_name, native_name, tokens)
    read from a language yaml file."""
    with open(filepath, "r", encoding="utf-8") as f:
        try:
            data = yaml.load(f, Loader=_LanguageLoader)
        except yaml.YAMLError as e:
            raise MalformedLanguageError("%s: %s" % (filepath, e))
    if not isinstance(data, dict):
        raise MalformedLanguageError("%s: expected a mapping" % filepath)
    missing = [
        k for k in ("anglicized_name", "native_name", "codepoints") if k not in data
    ]
    if missing:
        raise MalformedLanguageError(
            "%s: missing %s" % (filepath, ", ".join(missing))
        )
    return (
        identifier_for_file(filepath),
        data["anglicized_name"],
        data["native_name"],
        data["codepoints"],
    )


def _is_language_file(filepath):
    name = path.basename(filepath)
    if name.startswith(".") or not path.isfile(filepath):
        return False
    ext = path.splitext(name)[1]
    return not ext or ext.lower() in _LANG_FILE_SUFFIXES


def load_records(data_dir):
    """Returns the records for all the language files in data_dir, in file
    name order."""
    tool_utils.check_dir_exists(data_dir)
    filepaths = sorted(
        p for p in glob.glob(path.join(data_dir, "*")) if _is_language_file(p)
    )
    logger.debug("reading %d language files from %s", len(filepaths), data_dir)
    return [load_language_file(p) for p in filepaths]


def default_data_dir():
    """The configured language data directory, else the packaged data."""
    configured = tool_utils.resolve_path(fontlangconfig.lang_data())
    return configured or DATA_DIR


_table_lock = threading.Lock()
_tables = {}


def table(data_dir=None, validate_tags=True):
    """Returns the language table compiled from data_dir (by default the
    configured or packaged data).  The table is compiled on first use and
    cached; concurrent first callers wait for a single compile."""
    data_dir = path.realpath(data_dir or default_data_dir())
    key = (data_dir, validate_tags)
    result = _tables.get(key)
    if result is None:
        with _table_lock:
            result = _tables.get(key)
            if result is None:
                result = compile_table(load_records(data_dir), validate_tags)
                _tables[key] = result
    return result


def write_table_module(entries, out):
    """Writes the table as python source defining TABLE to the file-like
    object out.  Importing the result yields the same entries without
    reading any yaml."""
    out.write("# Generated by fontlang.generate_lang_table, do not edit.\n\n")
    out.write('"""Compiled language table."""\n\n')
    out.write("from fontlang.lang_data import LanguageEntry\n\n")
    out.write("TABLE = (\n")
    for entry in entries:
        out.write("    LanguageEntry(\n")
        out.write("        %r,\n" % entry.identifier)
        out.write("        %r,\n" % entry.display_name)
        out.write("        %r,\n" % entry.native_name)
        out.write("        (\n")
        for lower, upper in entry.ranges:
            out.write("            (%d, %d),\n" % (lower, upper))
        out.write("        ),\n")
        out.write("        %d,\n" % entry.total)
        out.write("    ),\n")
    out.write(")\n")


def load_table_module(filepath):
    """Returns TABLE from a module written by write_table_module."""
    tool_utils.check_file_exists(filepath)
    spec = importlib.util.spec_from_file_location(
        "fontlang._generated_table", filepath
    )
    if spec is None:
        raise MalformedLanguageError("%s is not a python module" % filepath)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    entries = getattr(module, "TABLE", None)
    if entries is None:
        raise MalformedLanguageError("%s does not define TABLE" % filepath)
    for entry in entries:
        if not isinstance(entry, LanguageEntry) or entry.total <= 0:
            raise MalformedLanguageError(
                "%s: bad table entry %r" % (filepath, entry)
            )
    return tuple(entries)
