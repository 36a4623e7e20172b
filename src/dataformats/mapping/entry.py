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
"""Entry mappers: the first link of every mapper chain.

An entry mapper reads a named field straight out of the source object and
writes the same-named attribute straight back. Only at this stage can the
whole source object be reached (``raw_transform``) or a nested format be
attached to a sub-object (``JsonNode.is_``).
"""

from __future__ import annotations

from dataformats.mapping.base import FormatLike, ensure_format
from dataformats.mapping.mapper import (
    Mapper,
    NumberMapper,
    ReadFn,
    WriteFn,
    check_name,
    field_getter,
    fixed_plan,
)


class JsonValue(Mapper):
    """A field of a JSON object, before any transform has been applied."""

    def raw_transform(self, read: ReadFn, write: WriteFn | None = None) -> Mapper:
        """Replace both functions with ones working on whole objects.

        *read* receives the entire source object, so it can combine several
        fields. *write* receives the entire model; without it the mapper has
        no write direction.
        """
        return Mapper(self.name, self.model_name, read, None if write is None else fixed_plan(write))


class JsonNode(JsonValue):
    """A JSON sub-object, to be read with a nested format."""

    def is_(self, fmt: FormatLike) -> Mapper:
        """Delegate the sub-object to *fmt* in both directions."""
        ensure_format(fmt, "JsonNode.is_")
        return self.transform(fmt.read, fmt.write)


def value(name: str) -> JsonValue:
    """Entry mapper for the field *name*."""
    check_name(name, "value")
    return JsonValue(name, name, field_getter(name), field_getter)


def node(name: str) -> JsonNode:
    """Entry mapper for the sub-object *name*; finish it with ``.is_(fmt)``."""
    check_name(name, "node")
    return JsonNode(name, name, field_getter(name), field_getter)


def number(name: str) -> NumberMapper:
    return value(name).number()


def boolean(name: str) -> Mapper:
    return value(name).boolean()
