from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department, Designation


class DepartmentRepository(Protocol):
    def list_active(self) -> Sequence[Department]:
        raise NotImplementedError

    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def insert(self, *, name: str, description: Optional[str]) -> Department:
        """Raises ``DuplicateNameError`` when the name is taken."""

        raise NotImplementedError

    def update(self, department_id: int, *, name: str, description: Optional[str]) -> bool:
        raise NotImplementedError

    def deactivate(self, department_id: int) -> bool:
        raise NotImplementedError


class DesignationRepository(Protocol):
    def list_active(self) -> Sequence[Designation]:
        raise NotImplementedError

    def get_by_id(self, designation_id: int) -> Optional[Designation]:
        raise NotImplementedError

    def insert(self, *, title: str, description: Optional[str]) -> Designation:
        raise NotImplementedError

    def update(self, designation_id: int, *, title: str, description: Optional[str]) -> bool:
        raise NotImplementedError

    def deactivate(self, designation_id: int) -> bool:
        raise NotImplementedError
