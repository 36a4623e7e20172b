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
"""structlog setup for the library's mapping diagnostics.

Driven by three configuration keys::

    dataformats.logging.format          console | json
    dataformats.logging.level.root      level of the root stdlib logger
    dataformats.logging.level.<logger>  e.g. dataformats.mapping.format: DEBUG

Mapping failures are logged as events such as ``format_read_failed`` with
``entity``, ``field`` and ``error`` keys; the json renderer keeps those keys
machine-readable.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO

import structlog

from dataformats.core.config import Config

_PREFIX = "dataformats.logging"
_FORMATS = ("console", "json")


@dataclass(frozen=True)
class LoggingOptions:
    """Logging options read from ``dataformats.logging``."""

    format: str = "console"
    root_level: str = "INFO"
    logger_levels: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: Config) -> LoggingOptions:
        levels = {name: str(level).upper() for name, level in config.get_section(f"{_PREFIX}.level").items()}
        levels.pop("root", None)
        root_level = str(config.get(f"{_PREFIX}.level.root", "INFO")).upper()
        fmt = str(config.get(f"{_PREFIX}.format", "console")).lower()
        if fmt not in _FORMATS:
            fmt = "console"
        return cls(format=fmt, root_level=root_level, logger_levels=levels)


def level_number(level: str) -> int:
    """stdlib level for *level*; unknown names map to INFO."""
    number = logging.getLevelName(level.upper())
    return number if isinstance(number, int) else logging.INFO


def build_processors(fmt: str) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def configure_logging(config: Config, stream: TextIO | None = None) -> LoggingOptions:
    """Route the library's structlog events through stdlib logging.

    Output goes to *stream*, stderr by default. Returns the options applied.
    """
    options = LoggingOptions.from_config(config)

    # Module-level loggers must follow later reconfiguration.
    structlog.configure(
        processors=build_processors(options.format),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stderr,
        level=level_number(options.root_level),
        force=True,
    )
    for name, level in options.logger_levels.items():
        logging.getLogger(name).setLevel(level_number(level))
    return options
