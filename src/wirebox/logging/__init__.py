# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox

"""
Public API for the wirebox logging system.
"""

from __future__ import annotations

from wirebox.logging.config import LoggingSettings
from wirebox.logging.level import LogLevel
from wirebox.logging.logger import StructuredFormatter, WireboxLogger, get_logger

__all__ = [
    "LogLevel",
    "LoggingSettings",
    "StructuredFormatter",
    "WireboxLogger",
    "get_logger",
]
