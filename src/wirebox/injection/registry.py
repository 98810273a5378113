# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: wirebox
"""
Declarative registry records and the loader that turns them into registrations.

A registry row looks like::

    {
        "DeveloperName": "PaymentGateway",
        "Implementation_Type": "billing.gateways:StripeGateway",
        "Service_Lifetime": "Singleton",
        "Active": true
    }

Only active rows are loaded. The loader keeps no state: every call reads the
snapshot it is given.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    field_validator,
)

from wirebox.injection.activator import Activator, ImportActivator
from wirebox.injection.errors import (
    DuplicateRegistrationError,
    InvalidLifetimeError,
    RegistrySourceError,
    UnresolvedImplementationError,
)
from wirebox.injection.keys import ServiceKey
from wirebox.injection.lifetime import ServiceLifetime
from wirebox.injection.registration import Strategy, strategy_for
from wirebox.logging import get_logger

if TYPE_CHECKING:
    from wirebox.injection.collection import ServiceCollection
    from wirebox.injection.registration import Registration

logger = get_logger(__name__)


class RegistryRecord(BaseModel):
    """One declarative registration row."""

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    developer_name: str = Field(
        min_length=1,
        validation_alias=AliasChoices("DeveloperName", "developer_name"),
        serialization_alias="DeveloperName",
        description="Service key, used verbatim",
    )
    implementation_type: str = Field(
        min_length=1,
        validation_alias=AliasChoices(
            "Implementation_Type", "Implementation_Type__c", "implementation_type"
        ),
        serialization_alias="Implementation_Type",
        description="Name of the class or factory handed to the activator",
    )
    service_lifetime: ServiceLifetime = Field(
        validation_alias=AliasChoices(
            "Service_Lifetime", "Service_Lifetime__c", "service_lifetime"
        ),
        serialization_alias="Service_Lifetime",
        description="Scoped, Singleton or Transient",
    )
    active: bool = Field(
        default=False,
        validation_alias=AliasChoices("Active", "Active__c", "active"),
        serialization_alias="Active",
        description="Inactive rows are ignored entirely",
    )

    @field_validator("service_lifetime", mode="before")
    @classmethod
    def parse_lifetime(cls, v: Any) -> ServiceLifetime:
        try:
            return ServiceLifetime.parse(v)
        except InvalidLifetimeError as exc:
            raise ValueError(exc.message) from exc


_RECORDS_ADAPTER = TypeAdapter(list[RegistryRecord])


@runtime_checkable
class RegistrySource(Protocol):
    """External supplier of registry rows."""

    def records(self) -> Sequence[RegistryRecord]:
        """Return the current snapshot of rows, active and inactive."""
        ...


def validate_records(rows: Any, source: str) -> list[RegistryRecord]:
    """Validate raw rows into ``RegistryRecord`` models.

    Raises:
        RegistrySourceError: If the rows are not a list of valid records
    """
    if isinstance(rows, Mapping):
        if "registrations" not in rows:
            raise RegistrySourceError(
                "Registry document must be a list of rows or contain a 'registrations' list",
                source=source,
            )
        rows = rows["registrations"]
    if rows is None:
        return []
    if isinstance(rows, str | bytes) or not isinstance(rows, Iterable):
        raise RegistrySourceError(
            f"Registry rows must be a list, got {type(rows).__name__}", source=source
        )
    rows = [
        row.model_dump(by_alias=True) if isinstance(row, RegistryRecord) else row
        for row in rows
    ]
    try:
        return _RECORDS_ADAPTER.validate_python(rows)
    except ValidationError as exc:
        raise RegistrySourceError(
            f"Invalid registry rows in {source}: {exc.error_count()} validation error(s)",
            source=source,
            errors=exc.errors(include_url=False, include_context=False),
        ) from exc


class StaticRegistrySource:
    """In-memory rows, validated once."""

    def __init__(self, rows: Iterable[RegistryRecord | Mapping[str, Any]] = ()) -> None:
        self._records = tuple(validate_records(list(rows), source="static rows"))

    def records(self) -> Sequence[RegistryRecord]:
        return self._records


class FileRegistrySource:
    """Rows read from a JSON or YAML file each time ``records`` is called."""

    _LOADERS = {
        ".json": json.loads,
        ".yaml": yaml.safe_load,
        ".yml": yaml.safe_load,
    }

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def records(self) -> Sequence[RegistryRecord]:
        source = str(self.path)
        parse = self._LOADERS.get(self.path.suffix.lower())
        if parse is None:
            raise RegistrySourceError(
                f"Unsupported registry file type '{self.path.suffix}'; use .json, .yaml or .yml",
                source=source,
            )
        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise RegistrySourceError(
                f"Cannot read registry file: {exc.strerror or exc}", source=source
            ) from exc
        try:
            document = parse(text)
        except (json.JSONDecodeError, yaml.YAMLError) as exc:
            raise RegistrySourceError(
                f"Cannot parse registry file: {exc}", source=source
            ) from exc
        return validate_records(document, source=source)


class RegistryLoader:
    """Turns active registry rows into ``ServiceCollection.add`` calls.

    Loading is checked before anything is added: every active row's
    implementation must resolve and no key may collide with another row or
    with an existing registration. A failed load leaves the collection
    untouched.
    """

    def __init__(self, activator: Activator | None = None) -> None:
        self._activator = activator or ImportActivator()

    def load(
        self,
        records: RegistrySource | Iterable[RegistryRecord | Mapping[str, Any]],
        collection: ServiceCollection,
    ) -> list[Registration]:
        """Register every active row into ``collection``.

        Raises:
            UnresolvedImplementationError: If an active row's implementation cannot be resolved
            DuplicateRegistrationError: If an active row's key is already taken
            RegistrySourceError: If the rows themselves are invalid
        """
        if isinstance(records, RegistrySource):
            rows = records.records()
        else:
            rows = validate_records(list(records), source="registry rows")

        pending: list[tuple[RegistryRecord, Strategy]] = []
        seen: dict[ServiceKey, RegistryRecord] = {}
        for record in rows:
            if not record.active:
                logger.debug("Skipping inactive registry record", record=record.developer_name)
                continue
            key = ServiceKey.of(record.developer_name)
            earlier = seen.get(key) or collection.find(key)
            if earlier is not None:
                existing_lifetime = (
                    earlier.service_lifetime
                    if isinstance(earlier, RegistryRecord)
                    else earlier.lifetime
                )
                raise DuplicateRegistrationError(
                    key.name,
                    record.service_lifetime.display_name,
                    existing_lifetime.display_name,
                    collection.label,
                    record=record.developer_name,
                )
            seen[key] = record
            pending.append((record, self._resolve(record)))

        registrations = [
            collection.add(record.developer_name, record.service_lifetime, strategy)
            for record, strategy in pending
        ]
        logger.info(
            "Loaded registry records",
            collection=collection.label,
            loaded=len(registrations),
            skipped=len(rows) - len(registrations),
        )
        return registrations

    def _resolve(self, record: RegistryRecord) -> Strategy:
        """Resolve a record's implementation into a construction strategy."""
        try:
            implementation = self._activator.resolve(record.implementation_type)
        except UnresolvedImplementationError as exc:
            raise UnresolvedImplementationError(
                record.implementation_type,
                exc.context.get("reason", exc.message),
                record=record.developer_name,
            ) from exc
        try:
            return strategy_for(implementation)
        except TypeError as exc:
            raise UnresolvedImplementationError(
                record.implementation_type,
                f"{type(implementation).__name__} object is not constructible",
                record=record.developer_name,
            ) from exc
