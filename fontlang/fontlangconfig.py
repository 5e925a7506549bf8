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

"""Read config file for fontlang tools.  One could also just pass the
options on every command line, but a config file lets you keep local
language data and a preferred threshold without touching shell prefs.

This expects a file named '.fontlangconfig' in the users home directory.
It should contain lines consisting of a name, '=' and a value.  The
expected names are 'lang_data', an absolute path to a directory of
language yaml files, and 'threshold', the default minimum score used
by the command line tools.
"""

import logging
from os import path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "~/.fontlangconfig"

values = {}


def _setup(configfile=None):
    """The config consists of lines of the form <name> = <value>.
    values will hold a mapping from the <name> to value.
    Blank lines and lines starting with '#' are ignored."""

    values.clear()
    configfile = path.expanduser(configfile or DEFAULT_CONFIG_FILE)
    if not path.exists(configfile):
        logger.debug("no config file at %s, using defaults", configfile)
        return
    with open(configfile, "r") as f:
        for n, line in enumerate(f, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                raise ValueError(
                    '%s line %d: expected "name = value" but got "%s"'
                    % (configfile, n, line)
                )
            k, v = line.split("=", 1)
            values[k.strip()] = v.strip()


_setup()


def lang_data(default=""):
    """Local path to a directory of language yaml files."""
    return values.get("lang_data", default)


def threshold(default=0.0):
    """Default minimum score for reported matches."""
    if "threshold" not in values:
        return default
    try:
        return float(values["threshold"])
    except ValueError:
        raise ValueError(
            '.fontlangconfig threshold "%s" is not a number' % values["threshold"]
        )


def get(key):
    """Throws exception if key not present."""
    if key not in values:
        raise ValueError('.fontlangconfig has no entry for "%s"' % key)
    return values[key]
