from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_user_id(self, user_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_by_role(self, role) -> Sequence[Employee]:
        """Active employees holding ``role``."""

        raise NotImplementedError
