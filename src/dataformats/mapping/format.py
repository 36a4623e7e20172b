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
"""Formats: read a JSON-shaped object into a model, and write it back.

A format is bound to one model class and an ordered list of mappers::

    class Foo:
        format: ClassVar[Format[Foo]]

    Foo.format = Format(Foo, value("bar"))

    foo = Foo.format.read({"bar": "baz"})
    assert Foo.format.write(foo) == {"bar": "baz"}

Mappers run in list order and each one assigns its own field, so when two
mappers share a field name the later one wins, in both directions.

A format never lets a mapper exception escape ``read`` or ``write``: the
failure is logged and ``UNDEFINED`` comes back instead. ``read_result``
and ``write_result`` expose the same outcome as a :mod:`result
<dataformats.mapping.result>` value.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping, Sequence
from typing import Any, TypeVar

import structlog

from dataformats.core.settings import get_settings
from dataformats.kernel.exceptions import (
    DirectionViolationException,
    FormatConfigurationException,
    FormatValidationException,
    MappingException,
    ReadOnlyFormatException,
    WriteOnlyFormatException,
)
from dataformats.kernel.types import Direction, FieldError
from dataformats.mapping.base import AbstractFormat
from dataformats.mapping.mapper import Mapper
from dataformats.mapping.result import Absent, Failed, Mapped, MappingResult
from dataformats.mapping.values import UNDEFINED, get_field, is_absent

T = TypeVar("T")
E = TypeVar("E")

logger = structlog.get_logger("dataformats.mapping.format")

ReadStep = Callable[[Any, Any], None]


def _assign(out: Any, name: str, value: Any) -> None:
    if isinstance(out, MutableMapping):
        out[name] = value
    else:
        setattr(out, name, value)


def _entity_name(entity_type: type) -> str:
    return getattr(entity_type, "__qualname__", repr(entity_type))


class Format(AbstractFormat[Mapping[str, Any], T]):
    """Reads and writes one model class through an ordered list of mappers.

    Args:
        entity_type: Model class, instantiated with no arguments on every read.
        *mappers: Field mappers, applied in order.
        drop_undefined: Leave a field out when its mapped value is
            ``UNDEFINED``. Defaults to the active ``MappingSettings``.
    """

    def __init__(
        self,
        entity_type: type[T],
        *mappers: Mapper,
        drop_undefined: bool | None = None,
    ) -> None:
        if not isinstance(entity_type, type):
            raise FormatConfigurationException(
                "Format should be created with a valid class",
                context={"entity_type": repr(entity_type)},
            )
        for mapper in mappers:
            if not isinstance(mapper, Mapper):
                raise FormatConfigurationException(
                    f"Format for {_entity_name(entity_type)} received something that is not a mapper",
                    context={"mapper": repr(mapper)},
                )

        self._entity_type = entity_type
        self._mappers: tuple[Mapper, ...] = mappers
        self._drop_undefined = get_settings().drop_undefined if drop_undefined is None else drop_undefined
        self._read = self._compile_read()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def entity_type(self) -> type[T]:
        return self._entity_type

    @property
    def mappers(self) -> tuple[Mapper, ...]:
        """Read-only view of the mappers, in application order."""
        return self._mappers

    @property
    def drop_undefined(self) -> bool:
        return self._drop_undefined

    @property
    def entity_name(self) -> str:
        return _entity_name(self._entity_type)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.entity_name}, {len(self._mappers)} mappers)"

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def _read_step(self, mapper: Mapper) -> ReadStep:
        drop_undefined = self._drop_undefined

        def step(source: Any, out: Any) -> None:
            try:
                value = mapper.read(source)
                if drop_undefined and value is UNDEFINED:
                    return
                _assign(out, mapper.model_name, value)
            except Exception as exc:
                raise MappingException(mapper.model_name, Direction.READ.value, exc) from exc

        return step

    def _compile_read(self) -> ReadStep:
        steps = [self._read_step(mapper) for mapper in self._mappers]

        def read_all(source: Any, out: Any) -> None:
            for step in steps:
                step(source, out)

        return read_all

    def _new_entity(self) -> T:
        try:
            return self._entity_type()
        except Exception as exc:
            raise MappingException(None, Direction.READ.value, exc) from exc

    def read_result(self, source: Mapping[str, Any] | None) -> MappingResult:
        """Read *source* into a new model, reporting how it went."""
        if is_absent(source):
            return Absent()

        try:
            out = self._new_entity()
            self._read(source, out)
        except MappingException as exc:
            logger.error(
                "format_read_failed",
                entity=self.entity_name,
                field=exc.field,
                error=str(exc.cause),
                exc_info=exc.cause,
            )
            return Failed(exc)
        return Mapped(out)

    def read(self, source: Mapping[str, Any] | None) -> T | None:
        """Read *source* into a new model.

        Returns ``None`` for a missing source and ``UNDEFINED`` when a
        mapper failed.
        """
        return self.read_result(source).collapse()

    def read_many(self, sources: Sequence[Mapping[str, Any]] | None) -> list[T | None] | Any:
        """Read every element of a list; anything else gives ``UNDEFINED``."""
        if not isinstance(sources, (list, tuple)):
            return UNDEFINED
        return [self.read(source) for source in sources]

    def validate(self, source: Mapping[str, Any] | None) -> T:
        """Read *source*, raising instead of swallowing failures.

        Unlike ``read``, every mapper runs even after one has failed, so the
        raised ``FormatValidationException`` lists all failing fields.
        """
        if is_absent(source):
            raise FormatValidationException(
                self.entity_name,
                [FieldError(field=self.entity_name, message="source object is missing", rejected_value=source)],
                rejected=source,
            )

        try:
            out = self._new_entity()
        except MappingException as exc:
            raise FormatValidationException(
                self.entity_name,
                [FieldError(field=self.entity_name, message=str(exc.cause))],
                rejected=source,
            ) from exc

        errors: list[FieldError] = []
        for mapper in self._mappers:
            try:
                self._read_step(mapper)(source, out)
            except MappingException as exc:
                errors.append(
                    FieldError(
                        field=mapper.model_name,
                        message=str(exc.cause),
                        rejected_value=get_field(source, mapper.name),
                    )
                )

        if errors:
            logger.warning(
                "format_validation_failed",
                entity=self.entity_name,
                fields=[e.field for e in errors],
            )
            raise FormatValidationException(self.entity_name, errors, rejected=source)
        return out

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def write_result(self, model: T | None) -> MappingResult:
        """Write *model* into a new plain dict, reporting how it went."""
        if is_absent(model):
            return Absent()

        out: dict[str, Any] = {}
        for mapper in self._mappers:
            if mapper.write is None:
                continue
            try:
                value = mapper.write(model)
            except Exception as exc:
                error = MappingException(mapper.name, Direction.WRITE.value, exc)
                logger.error(
                    "format_write_failed",
                    entity=self.entity_name,
                    field=mapper.name,
                    error=str(exc),
                    exc_info=exc,
                )
                return Failed(error)
            if self._drop_undefined and value is UNDEFINED:
                continue
            out[mapper.name] = value
        return Mapped(out)

    def write(self, model: T | None) -> dict[str, Any] | None:
        """Write *model* into a new plain dict.

        Returns ``None`` for a missing model and ``UNDEFINED`` when a mapper
        failed.
        """
        return self.write_result(model).collapse()

    def write_many(self, models: Sequence[T] | None) -> list[dict[str, Any] | None] | Any:
        """Write every element of a list; anything else gives ``UNDEFINED``."""
        if not isinstance(models, (list, tuple)):
            return UNDEFINED
        return [self.write(model) for model in models]

    # ------------------------------------------------------------------
    # Derived formats
    # ------------------------------------------------------------------

    def _derive(self, entity_type: type[E], mappers: Sequence[Mapper]) -> Format[E]:
        return Format(entity_type, *mappers, drop_undefined=self._drop_undefined)

    def extend(self, entity_type: type[E], *mappers: Mapper) -> Format[E]:
        """Format for a subclass: *mappers* first, then this format's mappers.

        Because later mappers win, a base mapper overrides an added mapper
        on the same field.
        """
        if not isinstance(entity_type, type):
            raise FormatConfigurationException(
                "Format.extend should be called with a valid class",
                context={"entity_type": repr(entity_type)},
            )
        return self._derive(entity_type, (*mappers, *self._mappers))

    def readonly(self, silent: bool | None = None) -> ReadOnlyFormat[T]:
        """Same mappers, but writing is refused.

        A refused write is always logged. It raises ``ReadOnlyFormatException``
        only when *silent* is false (default from ``MappingSettings``).
        """
        return ReadOnlyFormat(self._entity_type, *self._mappers, drop_undefined=self._drop_undefined, silent=silent)

    def writeonly(self, silent: bool | None = None) -> WriteOnlyFormat[T]:
        """Same mappers, but reading is refused. See :meth:`readonly`."""
        return WriteOnlyFormat(self._entity_type, *self._mappers, drop_undefined=self._drop_undefined, silent=silent)

    def transform(
        self,
        read_step: Callable[[T], Any],
        write_step: Callable[[Any], T],
    ) -> TransformedFormat[T]:
        """Post-process what ``read`` returns and pre-process what ``write`` gets."""
        return TransformedFormat(self, read_step, write_step)


class _RestrictedFormat(Format[T]):
    """A format refusing one direction."""

    def __init__(
        self,
        entity_type: type[T],
        *mappers: Mapper,
        drop_undefined: bool | None = None,
        silent: bool | None = None,
    ) -> None:
        super().__init__(entity_type, *mappers, drop_undefined=drop_undefined)
        self._silent = get_settings().silent if silent is None else silent

    @property
    def silent(self) -> bool:
        return self._silent

    def _derive(self, entity_type: type[E], mappers: Sequence[Mapper]) -> Format[E]:
        return type(self)(entity_type, *mappers, drop_undefined=self._drop_undefined, silent=self._silent)

    def _refuse(self, violation: DirectionViolationException) -> Failed:
        logger.error("format_direction_violation", entity=self.entity_name, error=str(violation))
        if not self._silent:
            raise violation
        return Failed(violation)


class ReadOnlyFormat(_RestrictedFormat[T]):
    """Reads normally; refuses to write."""

    def write_result(self, model: T | None) -> MappingResult:
        return self._refuse(ReadOnlyFormatException(self.entity_name))


class WriteOnlyFormat(_RestrictedFormat[T]):
    """Writes normally; refuses to read."""

    def read_result(self, source: Mapping[str, Any] | None) -> MappingResult:
        return self._refuse(WriteOnlyFormatException(self.entity_name))

    def validate(self, source: Mapping[str, Any] | None) -> T:
        violation = WriteOnlyFormatException(self.entity_name)
        logger.error("format_direction_violation", entity=self.entity_name, error=str(violation))
        raise violation


class TransformedFormat(AbstractFormat[Mapping[str, Any], Any]):
    """A format whose model side is post-processed by a pair of functions.

    Failures in either step are logged and give ``UNDEFINED``, like a
    failing mapper does.
    """

    def __init__(
        self,
        base: AbstractFormat[Mapping[str, Any], T],
        read_step: Callable[[T], Any],
        write_step: Callable[[Any], T],
    ) -> None:
        self._base = base
        self._read_step = read_step
        self._write_step = write_step

    def read(self, source: Mapping[str, Any] | None) -> Any:
        model = self._base.read(source)
        if is_absent(model):
            return model
        try:
            return self._read_step(model)
        except Exception as exc:
            logger.error("format_transform_failed", direction=Direction.READ.value, error=str(exc), exc_info=exc)
            return UNDEFINED

    def write(self, model: Any) -> Any:
        if is_absent(model):
            return self._base.write(model)
        try:
            converted = self._write_step(model)
        except Exception as exc:
            logger.error("format_transform_failed", direction=Direction.WRITE.value, error=str(exc), exc_info=exc)
            return UNDEFINED
        return self._base.write(converted)
