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
"""Field mappers: immutable, chainable read/write function pairs.

A mapper knows the field name on the source side (``name``), the attribute
name on the model side (``model_name``), how to *read* a value out of a
source object and how to *write* a value out of a model. Every chain method
returns a new mapper wrapping the previous pair of functions::

    value("b").number().min(5).max(10)
    value("created").to("created_at").date()
    value("tags").array_of(Tag.format).defaults_to([])

Mappers never mutate: the same mapper can sit in several formats.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from dataformats.core.settings import get_settings
from dataformats.kernel.exceptions import FormatConfigurationException
from dataformats.mapping.base import FormatLike, ensure_format
from dataformats.mapping.dates import compile_pattern
from dataformats.mapping.values import UNDEFINED, get_field, is_falsy, to_number

ReadFn = Callable[[Any], Any]
WriteFn = Callable[[Any], Any]
# Model attribute name -> write function; re-run by ``to``.
WritePlan = Callable[[str], WriteFn]

_TRUE_STRINGS = frozenset({"true", "1"})


def _identity(value: Any) -> Any:
    return value


def _undefined(_: Any) -> Any:
    return UNDEFINED


def _never_writes(_: str) -> WriteFn:
    return _undefined


def fixed_plan(write: WriteFn) -> WritePlan:
    """Write plan that ignores the model attribute name."""

    def plan(_: str) -> WriteFn:
        return write

    return plan


def _to_boolean(value: Any) -> bool:
    if value is True:
        return True
    if isinstance(value, str):
        return value in _TRUE_STRINGS
    return isinstance(value, (int, float)) and not isinstance(value, bool) and value == 1


def field_getter(name: str) -> ReadFn:
    """Function reading *name* from a mapping or an object."""

    def get(obj: Any) -> Any:
        return get_field(obj, name)

    return get


def check_name(name: Any, where: str) -> str:
    if not isinstance(name, str) or not name.strip():
        raise FormatConfigurationException(
            f"{where} should be called with a non-empty field name",
            context={"name": repr(name)},
        )
    return name


@dataclass(frozen=True, eq=False)
class Mapper:
    """Maps one field of a source object to one attribute of a model.

    Attributes:
        name: Field name in the source (JSON) object.
        model_name: Attribute name on the model.
        read: Source object -> model value, or ``UNDEFINED``.
        write_plan: Builds the write function for a model attribute name.
            ``None`` when the mapper has no write direction at all.
        write: Model -> source value, or ``UNDEFINED``; built from
            ``write_plan`` and ``model_name``.
    """

    name: str
    model_name: str
    read: ReadFn
    write_plan: WritePlan | None = field(repr=False)
    write: WriteFn | None = field(init=False, repr=False)

    def __post_init__(self) -> None:
        plan = self.write_plan
        object.__setattr__(self, "write", None if plan is None else plan(self.model_name))

    def _chain(self, read: ReadFn, write_plan: WritePlan | None) -> Mapper:
        return Mapper(self.name, self.model_name, read, write_plan)

    def _composed(self, read_step: ReadFn, write_step: WriteFn) -> tuple[ReadFn, WritePlan | None]:
        read, plan = self.read, self.write_plan

        def composed_read(source: Any) -> Any:
            return read_step(read(source))

        if plan is None:
            return composed_read, None

        def composed_plan(model_name: str) -> WriteFn:
            write = plan(model_name)

            def composed_write(model: Any) -> Any:
                return write_step(write(model))

            return composed_write

        return composed_read, composed_plan

    def to(self, model_name: str) -> Mapper:
        """Rename the model attribute, keeping every step chained so far."""
        check_name(model_name, "Mapper.to")
        return type(self)(self.name, model_name, self.read, self.write_plan)

    def readonly(self) -> Mapper:
        """Only goes from source to model."""
        return self._chain(self.read, _never_writes)

    def writeonly(self) -> Mapper:
        """Only goes from model to source."""
        return self._chain(_undefined, self.write_plan)

    def transform(self, read_step: ReadFn, write_step: WriteFn = _identity) -> Mapper:
        """Run *read_step* after the current read and *write_step* after the current write."""
        return self._chain(*self._composed(read_step, write_step))

    def boolean(self) -> Mapper:
        """``True`` for ``True``, ``"true"``, ``"1"`` and ``1``; ``False`` for anything else."""
        return Mapper(self.name, self.model_name, *self._composed(_to_boolean, _identity))

    def number(self) -> NumberMapper:
        """Numeric coercion; unlocks ``abs``, ``min`` and ``max``."""
        return NumberMapper(self.name, self.model_name, *self._composed(to_number, _identity))

    def date(self, pattern: str | None = None) -> Mapper:
        """Parse with a moment-style *pattern*. Writes the value back untouched."""
        compiled = compile_pattern(pattern or get_settings().date_pattern)
        return Mapper(self.name, self.model_name, *self._composed(compiled.parse, _identity))

    def array_of(self, fmt: FormatLike) -> Mapper:
        """Map every element of a list through *fmt*; non-lists become ``UNDEFINED``."""
        ensure_format(fmt, "Mapper.array_of")

        def read_all(items: Any) -> Any:
            if not isinstance(items, (list, tuple)):
                return UNDEFINED
            return [fmt.read(item) for item in items]

        def write_all(items: Any) -> Any:
            if not isinstance(items, (list, tuple)):
                return UNDEFINED
            return [fmt.write(item) for item in items]

        return Mapper(self.name, self.model_name, *self._composed(read_all, write_all))

    def defaults_to(self, fallback: Any) -> Mapper:
        """Substitute *fallback* for any falsy value, in both directions.

        Falsy includes ``0``, ``""`` and ``False``, not only missing values.
        """

        def substitute(value: Any) -> Any:
            return fallback if is_falsy(value) else value

        return self.transform(substitute, substitute)

    def id_resolver(self, collection: Sequence[Any], id_field: str = "id") -> Mapper:
        """Treat the value as the id of an element of *collection*.

        Reading returns the first element whose ``id_field`` equals the
        value; writing returns the model value's ``id_field``, or ``None``.
        """

        def resolve(value: Any) -> Any:
            if value is UNDEFINED:
                return UNDEFINED
            return next((item for item in collection if get_field(item, id_field) == value), UNDEFINED)

        def unresolve(item: Any) -> Any:
            return None if is_falsy(item) else get_field(item, id_field)

        return Mapper(self.name, self.model_name, *self._composed(resolve, unresolve))


class NumberMapper(Mapper):
    """A mapper whose read value is a number; adds numeric refinements."""

    def _chain(self, read: ReadFn, write_plan: WritePlan | None) -> NumberMapper:
        return NumberMapper(self.name, self.model_name, read, write_plan)

    def abs(self) -> NumberMapper:
        return self.transform(lambda v: v if is_falsy(v) else abs(v))

    def min(self, bound: float) -> NumberMapper:
        """Clamp from below. A falsy value becomes *bound*."""
        return self.transform(lambda v: bound if is_falsy(v) else max(v, bound))

    def max(self, bound: float) -> NumberMapper:
        """Clamp from above. A falsy value becomes *bound*."""
        return self.transform(lambda v: bound if is_falsy(v) else min(v, bound))
