from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from ..core.identity import Actor
from .model import Department, Designation
from .repository import DepartmentRepository, DesignationRepository

logger = logging.getLogger(__name__)


def _description(value: Optional[str]) -> Optional[str]:
    return (value or "").strip() or None


class OrganizationService:
    """Use case: maintain departments and designations (admin only writes)."""

    def __init__(self, departments: DepartmentRepository, designations: DesignationRepository):
        self._departments = departments
        self._designations = designations

    def list_departments(self) -> Sequence[Department]:
        return self._departments.list_active()

    def create_department(self, actor: Actor, *, name: str, description: Optional[str] = None) -> Department:
        actor.require_admin("Only admins can manage departments")
        department = self._departments.insert(name=require_non_empty(name, "Name"), description=_description(description))
        logger.info("Department %s created by %s", department.department_id, actor.user_id)
        return department

    def update_department(
        self, actor: Actor, *, department_id: int, name: str, description: Optional[str] = None
    ) -> Department:
        actor.require_admin("Only admins can manage departments")
        self._get_department(department_id)
        self._departments.update(int(department_id), name=require_non_empty(name, "Name"), description=_description(description))
        return self._get_department(department_id)

    def delete_department(self, actor: Actor, *, department_id: int) -> None:
        actor.require_admin("Only admins can manage departments")
        self._get_department(department_id)
        self._departments.deactivate(int(department_id))
        logger.info("Department %s deactivated by %s", department_id, actor.user_id)

    def _get_department(self, department_id: int) -> Department:
        department = self._departments.get_by_id(int(department_id))
        if not department or not department.is_active:
            raise NotFoundError("Department not found")
        return department

    def list_designations(self) -> Sequence[Designation]:
        return self._designations.list_active()

    def create_designation(self, actor: Actor, *, title: str, description: Optional[str] = None) -> Designation:
        actor.require_admin("Only admins can manage designations")
        designation = self._designations.insert(
            title=require_non_empty(title, "Title"), description=_description(description)
        )
        logger.info("Designation %s created by %s", designation.designation_id, actor.user_id)
        return designation

    def update_designation(
        self, actor: Actor, *, designation_id: int, title: str, description: Optional[str] = None
    ) -> Designation:
        actor.require_admin("Only admins can manage designations")
        self._get_designation(designation_id)
        self._designations.update(
            int(designation_id), title=require_non_empty(title, "Title"), description=_description(description)
        )
        return self._get_designation(designation_id)

    def delete_designation(self, actor: Actor, *, designation_id: int) -> None:
        actor.require_admin("Only admins can manage designations")
        self._get_designation(designation_id)
        self._designations.deactivate(int(designation_id))
        logger.info("Designation %s deactivated by %s", designation_id, actor.user_id)

    def _get_designation(self, designation_id: int) -> Designation:
        designation = self._designations.get_by_id(int(designation_id))
        if not designation or not designation.is_active:
            raise NotFoundError("Designation not found")
        return designation
