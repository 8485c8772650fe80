"""Read-only roster and template snapshot."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from marina_portal.scheduling.types import Employee, WeeklyShiftTemplate

DEFAULT_COLOR = "#4577D5"

# Legacy spelling still present in older template files
_LEGACY_NAME_ALIASES = {"brigalagher": "bri ghallager"}

_HEX_RE = re.compile(r"^[0-9a-fA-F]{6}$")


def hex_to_rgba(color: str | None, alpha: float = 1.0) -> str | None:
    """Convert ``#rgb`` / ``#rrggbb`` to an ``rgba()`` string.

    Non-hex values are returned unchanged.
    """
    if not color:
        return None
    h = str(color).strip()
    if h.startswith("#"):
        h = h[1:]
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if not _HEX_RE.match(h):
        return color
    r, g, b = (int(h[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {alpha})"


@dataclass(frozen=True)
class RosterSnapshot:
    """Roster and weekly templates as of the last explicit reload."""

    employees: tuple[Employee, ...] = ()
    templates: tuple[WeeklyShiftTemplate, ...] = ()
    _by_id: dict[str, Employee] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        ordered = sorted(self.employees, key=lambda e: e.roster_order)
        object.__setattr__(self, "employees", tuple(ordered))
        object.__setattr__(self, "_by_id", {e.employee_id: e for e in ordered})

    def get(self, employee_id: str) -> Employee | None:
        return self._by_id.get(str(employee_id))

    def order_of(self, employee_id: str) -> int | None:
        """Position of the employee in roster order, or None if absent."""
        emp = self.get(employee_id)
        if emp is None:
            return None
        return self.employees.index(emp)

    def display_name(self, employee_id: str) -> str:
        emp = self.get(employee_id)
        return emp.name if emp else f"Emp {employee_id}"

    def color_of(self, employee_id: str) -> str | None:
        emp = self.get(employee_id)
        return str(emp.color) if emp and emp.color else None

    def resolve_name(self, name: str | None) -> str | None:
        """Case-insensitive roster lookup by display name."""
        if not name:
            return None
        norm = str(name).strip().lower()
        hit = self._find_by_normalized_name(norm)
        if hit is None:
            alias = _LEGACY_NAME_ALIASES.get(re.sub(r"\s+", "", norm))
            if alias:
                hit = self._find_by_normalized_name(alias)
        return hit.employee_id if hit else None

    def _find_by_normalized_name(self, norm: str) -> Employee | None:
        for emp in self.employees:
            if emp.name.strip().lower() == norm:
                return emp
        return None

    def with_employee(self, employee: Employee) -> RosterSnapshot:
        """Copy of this snapshot with one employee replaced."""
        employees = tuple(
            employee if e.employee_id == employee.employee_id else e
            for e in self.employees
        )
        return RosterSnapshot(employees=employees, templates=self.templates)
