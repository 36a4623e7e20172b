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
"""One-call setup: bind mapping settings and configure logging."""

from __future__ import annotations

from pathlib import Path

from dataformats.core.config import Config
from dataformats.core.settings import MappingSettings, set_settings
from dataformats.logging.setup import configure_logging


def configure(
    config: Config | str | Path | None = None,
    setup_logging: bool = True,
) -> MappingSettings:
    """Apply configuration to the library.

    *config* may be a :class:`Config`, a path to a YAML/TOML file, or
    ``None`` for the packaged defaults. Pass ``setup_logging=False`` when
    the application configures structlog itself. Returns the installed
    settings.
    """
    if config is None:
        config = Config.defaults()
    elif not isinstance(config, Config):
        config = Config.from_file(config)

    settings = config.bind(MappingSettings)
    set_settings(settings)
    if setup_logging:
        configure_logging(config)
    return settings
