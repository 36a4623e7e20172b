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
"""Outcome of a whole-object read or write.

``Format.read``/``Format.write`` collapse these to the plain value,
``None`` or ``UNDEFINED``. Use ``Format.read_result``/``write_result`` to
tell *absent input* apart from *failure while mapping*.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from dataformats.kernel.exceptions import DataFormatsException
from dataformats.mapping.values import UNDEFINED

T = TypeVar("T")


@dataclass(frozen=True)
class Mapped(Generic[T]):
    """The format produced a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def or_else(self, default: Any) -> T:
        return self.value

    def collapse(self) -> T:
        return self.value


@dataclass(frozen=True)
class Absent:
    """The input was ``None`` or undefined; nothing to map."""

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> None:
        return None

    def or_else(self, default: Any) -> Any:
        return default

    def collapse(self) -> None:
        return None


@dataclass(frozen=True)
class Failed:
    """A mapper raised, or the format refused the direction; nothing was produced."""

    error: DataFormatsException

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Any:
        """Re-raise the captured failure."""
        raise self.error

    def or_else(self, default: Any) -> Any:
        return default

    def collapse(self) -> Any:
        return UNDEFINED


MappingResult = Mapped[Any] | Absent | Failed
