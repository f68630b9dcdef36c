"""
Status taxonomy
===============

An ordered mapping ``StatusCategory -> [Status, ...]``.  Each entry is a
tagged variant:

* ``DefaultStatus`` -- shipped with the application, immutable, cannot be
  deleted.
* ``CustomStatus`` -- created by an administrator, editable and deletable.

Statuses are looked up by their *slug*: the name lower-cased with runs of
whitespace replaced by ``-`` (``"In Progress"`` -> ``"in-progress"``).
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, replace
from typing import Any, Iterable, Optional, Union

from .enums import StatusCategory


class ImmutableStatusError(Exception):
    """Raised when trying to modify or delete a default status."""


def slugify(name: str) -> str:
    return re.sub(r"\s+", "-", name.lower())


# ── Variants ──────────────────────────────────────────────────────────


@dataclass(frozen=True)
class DefaultStatus:
    id: int
    name: str
    label: str
    color: str
    icon: str
    description: str
    category: StatusCategory

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @property
    def is_default(self) -> bool:
        return True


@dataclass(frozen=True)
class CustomStatus:
    id: int
    name: str
    label: str
    color: str
    icon: str
    description: str
    category: StatusCategory

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @property
    def is_default(self) -> bool:
        return False


Status = Union[DefaultStatus, CustomStatus]


def status_to_dict(status: Status) -> dict[str, Any]:
    data = asdict(status)
    data["category"] = status.category.value
    data["isDefault"] = status.is_default
    data["canEdit"] = not status.is_default
    return data


def status_from_dict(data: dict[str, Any], category: StatusCategory) -> Status:
    variant = DefaultStatus if data.get("isDefault") else CustomStatus
    return variant(
        id=int(data["id"]),
        name=data["name"],
        label=data.get("label", data["name"]),
        color=data.get("color", "secondary"),
        icon=data.get("icon", "tabler-circle"),
        description=data.get("description", ""),
        category=category,
    )


def _defaults(category: StatusCategory, rows: Iterable[tuple]) -> list[Status]:
    return [
        DefaultStatus(status_id, name, label, color, icon, description, category)
        for status_id, name, label, color, icon, description in rows
    ]


DEFAULT_STATUSES: dict[StatusCategory, list[Status]] = {
    StatusCategory.DELIVERIES: _defaults(StatusCategory.DELIVERIES, [
        (1, "Pending", "En attente", "warning", "tabler-clock",
         "Demande reçue, en attente d'assignation"),
        (2, "Assigned", "Assignée", "info", "tabler-user-check",
         "Livreur assigné à la demande"),
        (3, "In Progress", "En cours", "primary", "tabler-truck",
         "Livraison en cours"),
        (4, "Delivered", "Livrée", "success", "tabler-check",
         "Livraison terminée avec succès"),
        (5, "Cancelled", "Annulée", "error", "tabler-x", "Demande annulée"),
    ]),
    StatusCategory.DRIVERS: _defaults(StatusCategory.DRIVERS, [
        (101, "Available", "Disponible", "success", "tabler-user-check",
         "Livreur disponible pour une nouvelle mission"),
        (102, "Busy", "Occupé", "warning", "tabler-truck",
         "Livreur en cours de livraison"),
        (103, "Offline", "Hors ligne", "secondary", "tabler-user-off",
         "Livreur non disponible"),
        (104, "Suspended", "Suspendu", "error", "tabler-user-x",
         "Livreur temporairement suspendu"),
    ]),
    StatusCategory.PARTNERS: _defaults(StatusCategory.PARTNERS, [
        (201, "Prospecting", "Prospection", "info", "tabler-search",
         "Partenaire en cours de prospection"),
        (202, "Active", "Actif", "success", "tabler-handshake",
         "Partenaire actif et opérationnel"),
        (203, "Inactive", "Inactif", "secondary", "tabler-pause",
         "Partenaire temporairement inactif"),
        (204, "Rejected", "Rejeté", "error", "tabler-x",
         "Partenariat rejeté ou terminé"),
    ]),
    StatusCategory.CLIENTS: _defaults(StatusCategory.CLIENTS, [
        (301, "Active", "Actif", "success", "tabler-user-check",
         "Client actif avec compte valide"),
        (302, "Pending", "En attente", "warning", "tabler-clock",
         "Client en attente de validation"),
        (303, "Suspended", "Suspendu", "error", "tabler-user-x",
         "Client temporairement suspendu"),
    ]),
}


# ── Registry ──────────────────────────────────────────────────────────


class StatusRegistry:
    """Ordered, per-category collection of statuses with CRUD operations."""

    def __init__(self, statuses: Optional[dict[StatusCategory, list[Status]]] = None):
        source = DEFAULT_STATUSES if statuses is None else statuses
        self._statuses: dict[StatusCategory, list[Status]] = {
            category: list(entries) for category, entries in source.items()
        }

    def categories(self) -> list[StatusCategory]:
        return list(self._statuses)

    def statuses_for(self, category: StatusCategory) -> list[Status]:
        return list(self._statuses.get(category, []))

    def options_for(self, category: StatusCategory) -> list[dict[str, str]]:
        """Select-box options: title / value / color / icon."""
        return [
            {"title": s.label, "value": s.slug, "color": s.color, "icon": s.icon}
            for s in self.statuses_for(category)
        ]

    def find_by_name(self, category: StatusCategory, name: str) -> Optional[Status]:
        wanted = name.lower()
        for status in self._statuses.get(category, []):
            if status.slug == wanted:
                return status
        return None

    def color_for(self, category: StatusCategory, name: str) -> str:
        status = self.find_by_name(category, name)
        return status.color if status else "secondary"

    def icon_for(self, category: StatusCategory, name: str) -> str:
        status = self.find_by_name(category, name)
        return status.icon if status else "tabler-circle"

    def label_for(self, category: StatusCategory, name: str) -> str:
        status = self.find_by_name(category, name)
        return status.label if status else name

    def add(
        self,
        category: StatusCategory,
        *,
        name: str,
        label: str,
        color: str,
        icon: str,
        description: str = "",
    ) -> CustomStatus:
        entries = self._statuses.setdefault(category, [])
        next_id = max((s.id for s in entries), default=0) + 1
        status = CustomStatus(next_id, name, label, color, icon, description, category)
        entries.append(status)
        return status

    def update(self, category: StatusCategory, status_id: int, **changes: Any) -> CustomStatus:
        entries = self._statuses.get(category, [])
        for index, status in enumerate(entries):
            if status.id != status_id:
                continue
            if isinstance(status, DefaultStatus):
                raise ImmutableStatusError(f"Default status {status.name!r} cannot be edited")
            changes.pop("id", None)
            changes.pop("category", None)
            updated = replace(status, **changes)
            entries[index] = updated
            return updated
        raise KeyError(f"No status {status_id} in category {category.value}")

    def delete(self, category: StatusCategory, status_id: int) -> bool:
        """Delete a custom status.  Returns False for unknown or default ones."""
        entries = self._statuses.get(category, [])
        for index, status in enumerate(entries):
            if status.id == status_id:
                if isinstance(status, DefaultStatus):
                    return False
                del entries[index]
                return True
        return False

    def merge(self, statuses: dict[StatusCategory, list[Status]]) -> None:
        """Replace whole categories with *statuses*, keeping the others."""
        for category, entries in statuses.items():
            self._statuses[category] = list(entries)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            category.value: [status_to_dict(s) for s in entries]
            for category, entries in self._statuses.items()
        }
