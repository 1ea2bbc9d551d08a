"""In-memory collection of one entity kept in step with backend mutations.

Every store owns exactly one list of view-models plus a loading/error pair.
``fetch_all`` swallows backend errors into that state; mutations record the
error and re-raise so the caller can react (keep a form open, retry).
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, TypeAdapter

from hrerp.core.exceptions import BackendError
from hrerp.core.notifications import NotificationVariant, Notifier, logging_notifier
from hrerp.models.schema import TABLES, TableSpec, validate_insert

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

WILDCARD = "all"


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def _sort_key(value: Any) -> tuple[bool, Any]:
    if isinstance(value, str):
        value = value.lower()
    return (value is None, value if value is not None else 0)


class EntityStore(Generic[T]):
    table: str = ""
    label: str = "record"
    plural: str = "records"
    order_column: str = "created_at"
    insert_defaults: dict[str, Any] = {}

    def __init__(self, backend: Any, notifier: Notifier = logging_notifier) -> None:
        self.backend = backend
        self.notifier = notifier
        self.items: list[T] = []
        self.state = LoadState.IDLE
        self.error: str | None = None

    @property
    def spec(self) -> TableSpec:
        return TABLES[self.table]

    @property
    def loading(self) -> bool:
        return self.state == LoadState.LOADING

    def to_view_model(self, row: dict[str, Any]) -> T:
        return self.spec.row.model_validate(row)  # type: ignore[return-value]

    def prepare_insert(self, data: Any) -> dict[str, Any]:
        payload = {**self.insert_defaults, **dict(data)}
        validate_insert(self.table, payload)
        validated = self.spec.row.model_validate({"id": "", **payload})
        return validated.model_dump(mode="json", include=set(payload))

    def prepare_patch(self, changes: Any) -> dict[str, Any]:
        fields = self.spec.row.model_fields
        changes = dict(changes)
        unknown = sorted(set(changes) - set(fields) | ({"id"} & set(changes)))
        if unknown:
            raise ValueError(f"Cannot update columns of {self.table}: {', '.join(unknown)}")
        if not changes:
            raise ValueError("No fields to update")

        patch: dict[str, Any] = {}
        for column, value in changes.items():
            if value is None and column not in self.spec.nullable_columns:
                raise ValueError(f"{column} cannot be null")
            adapter = TypeAdapter(fields[column].annotation)
            patch[column] = adapter.dump_python(adapter.validate_python(value), mode="json")
        return patch

    def confirmed_fields(self, patch: dict[str, Any]) -> set[str]:
        """View-model fields that a successful update with ``patch`` rewrites."""
        return set(patch) | {"updated_at"}

    def _begin(self) -> None:
        self.state = LoadState.LOADING

    def _succeed(self, message: str | None = None) -> None:
        self.state = LoadState.READY
        self.error = None
        if message:
            self.notifier.notify("Success", message)

    def _fail(self, err: BackendError, description: str) -> None:
        self.state = LoadState.ERROR
        self.error = str(err)
        logger.error("%s: %s", description, err)
        self.notifier.notify("Error", description, NotificationVariant.DESTRUCTIVE)

    async def fetch_all(self) -> list[T]:
        """Replace the local collection with every row, newest first."""
        self._begin()
        try:
            rows = await self.backend.select(self.table, order=(self.order_column, True))
        except BackendError as err:
            self._fail(err, f"Failed to fetch {self.plural}")
            return self.items

        self.items = [self.to_view_model(row) for row in rows or []]
        self._succeed()
        return self.items

    async def add(self, data: Any) -> T:
        payload = self.prepare_insert(data)
        self._begin()
        try:
            row = await self.backend.insert(self.table, payload)
        except BackendError as err:
            self._fail(err, f"Failed to add {self.label}")
            raise

        item = self.to_view_model(row)
        self.items.insert(0, item)
        self._succeed(f"{self.label.capitalize()} added successfully")
        return item

    async def update(self, item_id: str, changes: Any) -> T:
        patch = self.prepare_patch(changes)
        self._begin()
        try:
            row = await self.backend.update(self.table, patch, filters={"id": item_id})
        except BackendError as err:
            self._fail(err, f"Failed to update {self.label}")
            raise

        item = self.apply_confirmed(item_id, self.to_view_model(row), self.confirmed_fields(patch))
        self._succeed(f"{self.label.capitalize()} updated successfully")
        return item

    def apply_confirmed(self, item_id: str, confirmed: T, fields: set[str]) -> T:
        """Copy the server-confirmed ``fields`` onto the cached entry for ``item_id``."""
        known = {f for f in fields if f in type(confirmed).model_fields}
        for index, current in enumerate(self.items):
            if current.id == item_id:  # type: ignore[attr-defined]
                self.items[index] = current.model_copy(update={f: getattr(confirmed, f) for f in known})
                return self.items[index]
        return confirmed

    async def delete(self, item_id: str) -> None:
        self._begin()
        try:
            await self.backend.delete(self.table, filters={"id": item_id})
        except BackendError as err:
            self._fail(err, f"Failed to delete {self.label}")
            raise

        self.items = [item for item in self.items if item.id != item_id]  # type: ignore[attr-defined]
        self._succeed(f"{self.label.capitalize()} deleted successfully")

    def get(self, item_id: str) -> T | None:
        return next((item for item in self.items if item.id == item_id), None)  # type: ignore[attr-defined]

    def sort(self, field: str, order: str = "asc") -> list[T]:
        if order not in ("asc", "desc"):
            raise ValueError(f"Invalid sort order: {order}")
        return sorted(
            self.items,
            key=lambda item: _sort_key(getattr(item, field, None)),
            reverse=order == "desc",
        )

    def filter_by(self, **criteria: Any) -> list[T]:
        """Equality filter; ``None`` and ``"all"`` criteria are ignored."""
        active = {k: v for k, v in criteria.items() if v is not None and v != WILDCARD}
        return [
            item for item in self.items if all(getattr(item, k, None) == v for k, v in active.items())
        ]
