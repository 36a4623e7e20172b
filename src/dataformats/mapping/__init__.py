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
"""Mappers and formats."""

from dataformats.mapping.base import AbstractFormat, FormatLike
from dataformats.mapping.dates import DatePattern, compile_pattern
from dataformats.mapping.entry import JsonNode, JsonValue, boolean, node, number, value
from dataformats.mapping.format import (
    Format,
    ReadOnlyFormat,
    TransformedFormat,
    WriteOnlyFormat,
)
from dataformats.mapping.mapper import Mapper, NumberMapper
from dataformats.mapping.result import Absent, Failed, Mapped, MappingResult
from dataformats.mapping.values import UNDEFINED, get_field, is_absent, is_falsy, is_undefined, to_number

__all__ = [
    # Formats
    "AbstractFormat",
    "FormatLike",
    "Format",
    "ReadOnlyFormat",
    "WriteOnlyFormat",
    "TransformedFormat",
    # Mappers
    "Mapper",
    "NumberMapper",
    "JsonValue",
    "JsonNode",
    "value",
    "node",
    "number",
    "boolean",
    # Results
    "MappingResult",
    "Mapped",
    "Absent",
    "Failed",
    # Values
    "UNDEFINED",
    "is_undefined",
    "is_absent",
    "is_falsy",
    "to_number",
    "get_field",
    # Dates
    "DatePattern",
    "compile_pattern",
]
