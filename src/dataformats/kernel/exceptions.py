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
"""Unified exception hierarchy for dataformats.

All library exceptions inherit from DataFormatsException, enabling unified
error handling: catch DataFormatsException to handle every library error,
or catch specific subclasses for targeted handling.

Categories:
- FormatConfigurationException: programming mistakes found while building
  mappers and formats (bad entity type, bad nested format, bad field name)
  and invalid library configuration
- DirectionViolationException: reading through a write-only format or
  writing through a read-only one
- MappingException: a data-level failure raised by a mapper function
- FormatValidationException: one or more mappers failed during validation
"""

from __future__ import annotations

from typing import Any

from dataformats.kernel.types import FieldError

# =============================================================================
# Base Exception
# =============================================================================


class DataFormatsException(Exception):
    """Base exception for all dataformats errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "FORMAT_READ_ONLY").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class FormatConfigurationException(DataFormatsException):
    """A mapper, format or library configuration value is invalid."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="FORMAT_CONFIGURATION", context=context)


# =============================================================================
# Direction Exceptions
# =============================================================================


class DirectionViolationException(DataFormatsException):
    """A restricted format was used in its forbidden direction."""


class ReadOnlyFormatException(DirectionViolationException):
    """Write attempted through a read-only format."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            "This is a read only format",
            code="FORMAT_READ_ONLY",
            context={"entity": entity},
        )


class WriteOnlyFormatException(DirectionViolationException):
    """Read attempted through a write-only format."""

    def __init__(self, entity: str) -> None:
        super().__init__(
            "This is a write only format",
            code="FORMAT_WRITE_ONLY",
            context={"entity": entity},
        )


# =============================================================================
# Data Exceptions
# =============================================================================


class MappingException(DataFormatsException):
    """A mapper function raised while converting a value.

    Never raised out of ``Format.read``/``Format.write``; it is carried
    inside a ``Failed`` result instead.
    """

    def __init__(self, field: str | None, direction: str, cause: BaseException) -> None:
        super().__init__(
            f"Mapping {direction} failed on field '{field}': {cause}",
            code="MAPPING_FAILED",
            context={"field": field, "direction": direction},
        )
        self.field = field
        self.direction = direction
        self.cause = cause
        self.__cause__ = cause


class FormatValidationException(DataFormatsException):
    """One or more mappers failed while validating a source object."""

    def __init__(self, entity: str, errors: list[FieldError], rejected: Any = None) -> None:
        detail = "; ".join(f"{e.field}: {e.message}" for e in errors)
        super().__init__(
            f"Validation of {entity} failed: {detail}" if detail else f"Validation of {entity} failed",
            code="FORMAT_VALIDATION",
            context={"entity": entity, "errors": errors},
        )
        self.errors = errors
        self.rejected = rejected
