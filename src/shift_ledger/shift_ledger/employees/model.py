from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Employee bound to a chat identity.

    Note: Registration/binding happens elsewhere; this package only reads it.
    """

    employee_id: str
    user_id: str
    name: str
    role: Role
    base_salary: int = 0
    position_allowance: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class Identity:
    """Who is acting: the opaque chat user id plus the employee it resolves to."""

    user_id: str
    employee_id: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
