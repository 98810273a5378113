# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""wirebox: a small dependency injection container with declarative registries."""

from wirebox.injection import (
    GlobalAccessor,
    ServiceCollection,
    ServiceFactory,
    ServiceKey,
    ServiceLifetime,
    ServiceProvider,
    get_service,
    services,
)

__version__ = "0.1.0"

__all__ = [
    "GlobalAccessor",
    "ServiceCollection",
    "ServiceFactory",
    "ServiceKey",
    "ServiceLifetime",
    "ServiceProvider",
    "__version__",
    "get_service",
    "services",
]
