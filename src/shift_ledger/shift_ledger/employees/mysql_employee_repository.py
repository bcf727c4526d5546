from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_SELECT = "SELECT employee_id, user_id, name, role, base_salary, position_allowance, is_active FROM employees"


def _to_model(r: dict) -> Employee:
    return Employee(
        employee_id=str(r["employee_id"]),
        user_id=str(r["user_id"]),
        name=r["name"],
        role=Role(r["role"]),
        base_salary=int(r.get("base_salary") or 0),
        position_allowance=int(r.get("position_allowance") or 0),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE user_id=%s LIMIT 1", (user_id,))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE employee_id=%s", (employee_id,))
            r = fetchone(cur)
            return _to_model(r) if r else None

    def list_by_role(self, role: Role) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE role=%s AND is_active=1 ORDER BY employee_id", (role.value,))
            return [_to_model(r) for r in fetchall(cur)]
