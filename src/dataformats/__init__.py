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
"""dataformats: declarative, bidirectional mapping between JSON-shaped data and models.

Usage::

    from dataformats import Format, node, number, value

    class Address:
        pass

    class Person:
        pass

    address_format = Format(Address, value("street"), value("zip_code").to("zip"))
    person_format = Format(
        Person,
        value("name"),
        number("age").min(0),
        node("address").is_(address_format),
    )

    person = person_format.read({"name": "Ada", "age": "36", "address": {"street": "Main"}})
    person_format.write(person)
"""

from dataformats.bootstrap import configure
from dataformats.core import Config, MappingSettings, get_settings
from dataformats.kernel import (
    DataFormatsException,
    DirectionViolationException,
    FieldError,
    FormatConfigurationException,
    FormatValidationException,
    MappingException,
    ReadOnlyFormatException,
    WriteOnlyFormatException,
)
from dataformats.mapping import (
    UNDEFINED,
    Absent,
    AbstractFormat,
    Failed,
    Format,
    JsonNode,
    JsonValue,
    Mapped,
    Mapper,
    MappingResult,
    NumberMapper,
    boolean,
    is_falsy,
    node,
    number,
    value,
)

__version__ = "0.6.0"

__all__ = [
    "__version__",
    "configure",
    "Config",
    "MappingSettings",
    "get_settings",
    # Formats
    "AbstractFormat",
    "Format",
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
    "UNDEFINED",
    "is_falsy",
    # Errors
    "DataFormatsException",
    "FormatConfigurationException",
    "DirectionViolationException",
    "ReadOnlyFormatException",
    "WriteOnlyFormatException",
    "MappingException",
    "FormatValidationException",
    "FieldError",
]
