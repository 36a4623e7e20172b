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
"""Process-wide mapping defaults bound from ``dataformats.mapping``.

Mappers and formats read these once, when they are declared. Changing the
active settings afterwards does not alter formats that already exist.
"""

from __future__ import annotations

from dataclasses import dataclass

from dataformats.core.config import config_properties

DEFAULT_DATE_PATTERN = "YYYY-MM-DD[T]HH:mm:ss.SSSZ"


@config_properties(prefix="dataformats.mapping")
@dataclass(frozen=True)
class MappingSettings:
    """Defaults applied when a format or mapper leaves an option unset.

    Attributes:
        drop_undefined: Leave a field unset when its mapped value is undefined.
        silent: Direction violations on restricted formats are logged only,
            instead of raised.
        date_pattern: Moment-style pattern used by ``Mapper.date()``.
    """

    drop_undefined: bool = True
    silent: bool = True
    date_pattern: str = DEFAULT_DATE_PATTERN


_active = MappingSettings()


def get_settings() -> MappingSettings:
    """Return the active mapping settings."""
    return _active


def set_settings(settings: MappingSettings) -> MappingSettings:
    """Install *settings* as the active defaults and return the previous ones."""
    global _active
    previous, _active = _active, settings
    return previous
