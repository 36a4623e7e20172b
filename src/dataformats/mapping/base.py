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
"""Format contract shared by mappers and formats."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from dataformats.kernel.exceptions import FormatConfigurationException

S = TypeVar("S")
D = TypeVar("D")


@runtime_checkable
class FormatLike(Protocol):
    """Anything that can read a source value and write a model value."""

    def read(self, source: Any) -> Any: ...
    def write(self, model: Any) -> Any: ...


class AbstractFormat(ABC, Generic[S, D]):
    """Base class for any format: reads ``S`` into ``D`` and writes it back."""

    @abstractmethod
    def read(self, source: S | None) -> D | None: ...

    @abstractmethod
    def write(self, model: D | None) -> S | None: ...


def ensure_format(fmt: Any, where: str) -> FormatLike:
    """Reject anything that cannot act as a nested format."""
    if (
        fmt is None
        or isinstance(fmt, type)
        or not callable(getattr(fmt, "read", None))
        or not callable(getattr(fmt, "write", None))
    ):
        raise FormatConfigurationException(
            f"{where} should be called with a valid format",
            context={"format": repr(fmt)},
        )
    return fmt
