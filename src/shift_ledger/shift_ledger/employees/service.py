from __future__ import annotations

from typing import Sequence

from ..core.enums import Role
from ..core.exceptions import NotFound, NotRegistered
from .model import Employee, Identity
from .repository import EmployeeRepository


class IdentityResolver:
    """Use case: turn an opaque chat user id into an acting identity."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def resolve(self, user_id: str) -> Identity:
        employee = self._employees.get_by_user_id(str(user_id or "").strip())
        if not employee or not employee.is_active:
            raise NotRegistered("This account is not registered as an employee")
        return Identity(user_id=employee.user_id, employee_id=employee.employee_id, role=employee.role)

    def employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFound(f"Employee {employee_id} not found")
        return employee

    def approvers(self) -> Sequence[Identity]:
        return [
            Identity(user_id=e.user_id, employee_id=e.employee_id, role=e.role)
            for e in self._employees.list_by_role(Role.ADMIN)
        ]
