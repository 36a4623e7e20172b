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
"""Value semantics shared by every mapper.

JSON-shaped data distinguishes a field that is *missing* from a field that
is explicitly ``null``. ``UNDEFINED`` stands for the former, ``None`` for
the latter. Truthiness follows JSON/JavaScript rules: empty containers are
truthy, ``NaN`` is falsy.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from typing import Any, Final


class _Undefined:
    __slots__ = ()
    _instance: _Undefined | None = None

    def __new__(cls) -> _Undefined:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __reduce__(self) -> str:
        return "UNDEFINED"

    def __copy__(self) -> _Undefined:
        return self

    def __deepcopy__(self, memo: dict) -> _Undefined:
        return self


UNDEFINED: Final = _Undefined()

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")
_DECIMAL_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_RADIX_RE = re.compile(r"0(?:[xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


def is_undefined(value: Any) -> bool:
    return value is UNDEFINED


def is_absent(value: Any) -> bool:
    """``None`` or ``UNDEFINED``."""
    return value is None or value is UNDEFINED


def is_falsy(value: Any) -> bool:
    """JSON-style falsiness: undefined, null, false, 0, NaN and ``""``."""
    if value is UNDEFINED or value is None or value is False:
        return True
    if isinstance(value, (int, float)):
        return value == 0 or math.isnan(value)
    if isinstance(value, str):
        return value == ""
    return False


def to_number(value: Any) -> int | float:
    """Numeric coercion of a JSON value; never raises.

    Strings follow JSON number syntax plus ``0x``/``0o``/``0b`` literals and
    ``Infinity``; unparseable input becomes ``nan``.
    """
    if value is UNDEFINED:
        return math.nan
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0
        if _INTEGER_RE.fullmatch(text):
            return int(text)
        if _DECIMAL_RE.fullmatch(text):
            return float(text)
        if _RADIX_RE.fullmatch(text):
            return int(text, 0)
        return _INFINITIES.get(text, math.nan)
    return math.nan


def get_field(obj: Any, name: str) -> Any:
    """Read *name* from a mapping or an object; missing gives ``UNDEFINED``."""
    if isinstance(obj, Mapping):
        return obj.get(name, UNDEFINED)
    return getattr(obj, name, UNDEFINED)
