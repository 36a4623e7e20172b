# Copyright 2026 Firefly Software Solutions Inc.
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
"""Moment-style date patterns compiled to ``strptime`` formats.

Supported tokens (longest match first)::

    YYYY YY          year
    MMMM MMM MM M    month name, abbreviated name, number
    DD D             day of month
    HH H hh h        hour (24h, 12h)
    mm m             minute
    ss s             second
    SSS SS S         fraction of a second
    A a              AM/PM
    ZZ Z             UTC offset (``+01:00``, ``+0100`` or ``Z``)
    [text]           literal text

Any other character is matched literally.
"""

from __future__ import annotations

import functools
import math
import re
from dataclasses import dataclass
from datetime import UTC, date, datetime, time
from typing import Any

from dataformats.mapping.values import UNDEFINED

_TOKEN_RE = re.compile(r"\[[^\]]*\]|YYYY|YY|MMMM|MMM|MM|M|DD|D|HH|H|hh|h|mm|m|ss|s|SSS|SS|S|A|a|ZZ|Z")

TOKENS: dict[str, str] = {
    "YYYY": "%Y",
    "YY": "%y",
    "MMMM": "%B",
    "MMM": "%b",
    "MM": "%m",
    "M": "%m",
    "DD": "%d",
    "D": "%d",
    "HH": "%H",
    "H": "%H",
    "hh": "%I",
    "h": "%I",
    "mm": "%M",
    "m": "%M",
    "ss": "%S",
    "s": "%S",
    "SSS": "%f",
    "SS": "%f",
    "S": "%f",
    "A": "%p",
    "a": "%p",
    "ZZ": "%z",
    "Z": "%z",
}


def _literal(text: str) -> str:
    return text.replace("%", "%%")


@dataclass(frozen=True)
class DatePattern:
    """A compiled date pattern.

    Attributes:
        pattern: The moment-style pattern as declared.
        strptime_format: The equivalent ``datetime.strptime`` format.
    """

    pattern: str
    strptime_format: str

    def parse(self, value: Any) -> datetime | Any:
        """Parse *value* into a ``datetime``; ``UNDEFINED`` when it cannot.

        Strings go through the compiled format, then ISO 8601 as a lenient
        fallback. Numbers are epoch milliseconds (UTC). ``datetime`` values
        pass through and ``date`` values are promoted to midnight.
        """
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime.combine(value, time())
        if isinstance(value, bool):
            return UNDEFINED
        if isinstance(value, (int, float)):
            if isinstance(value, float) and not math.isfinite(value):
                return UNDEFINED
            try:
                return datetime.fromtimestamp(value / 1000, tz=UTC)
            except (OverflowError, OSError, ValueError):
                return UNDEFINED
        if not isinstance(value, str):
            return UNDEFINED

        text = value.strip()
        try:
            return datetime.strptime(text, self.strptime_format)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return UNDEFINED


@functools.lru_cache(maxsize=64)
def compile_pattern(pattern: str) -> DatePattern:
    """Compile a moment-style *pattern*; results are cached."""
    parts: list[str] = []
    position = 0
    for match in _TOKEN_RE.finditer(pattern):
        parts.append(_literal(pattern[position : match.start()]))
        token = match.group(0)
        if token.startswith("["):
            parts.append(_literal(token[1:-1]))
        else:
            parts.append(TOKENS[token])
        position = match.end()
    parts.append(_literal(pattern[position:]))
    return DatePattern(pattern=pattern, strptime_format="".join(parts))
