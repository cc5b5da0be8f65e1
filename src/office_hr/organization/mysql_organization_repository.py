from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.exceptions import DuplicateNameError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unique_violation_as
from .model import Department, Designation
from .repository import DepartmentRepository, DesignationRepository


class _MySQLCatalogRepository:
    """Shared SQL for the small name/description lookup tables.

    Rows are soft-deleted through ``is_active``.
    """

    table = ""
    id_column = ""
    label_column = ""
    label = ""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _build(self, r: dict) -> Any:
        raise NotImplementedError

    @property
    def _columns(self) -> str:
        return f"{self.id_column}, {self.label_column}, description, is_active, created_at"

    def list_active(self) -> Sequence[Any]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {self._columns} FROM {self.table} WHERE is_active=1 ORDER BY {self.label_column}"
            )
            return [self._build(r) for r in fetchall(cur)]

    def get_by_id(self, row_id: int) -> Optional[Any]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {self._columns} FROM {self.table} WHERE {self.id_column}=%s", (int(row_id),))
            r = fetchone(cur)
            return self._build(r) if r else None

    def _insert(self, label: str, description: Optional[str]) -> Any:
        with unique_violation_as(DuplicateNameError, f"{self.label} already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO {self.table}({self.label_column}, description) VALUES(%s,%s)",
                    (label, description),
                )
                cur.execute(
                    f"SELECT {self._columns} FROM {self.table} WHERE {self.id_column}=%s",
                    (int(cur.lastrowid),),
                )
                r = fetchone(cur)
        if not r:
            raise NotFoundError(f"{self.label} not found after insert")
        return self._build(r)

    def _update(self, row_id: int, label: str, description: Optional[str]) -> bool:
        with unique_violation_as(DuplicateNameError, f"{self.label} already exists"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE {self.table} SET {self.label_column}=%s, description=%s WHERE {self.id_column}=%s",
                    (label, description, int(row_id)),
                )
                return cur.rowcount > 0

    def deactivate(self, row_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE {self.table} SET is_active=0 WHERE {self.id_column}=%s AND is_active=1",
                (int(row_id),),
            )
            return cur.rowcount > 0


class MySQLDepartmentRepository(_MySQLCatalogRepository, DepartmentRepository):
    table = "departments"
    id_column = "department_id"
    label_column = "name"
    label = "Department"

    def _build(self, r: dict) -> Department:
        return Department(
            department_id=int(r["department_id"]),
            name=r["name"],
            description=r.get("description"),
            is_active=bool(r["is_active"]),
            created_at=r.get("created_at"),
        )

    def insert(self, *, name: str, description: Optional[str]) -> Department:
        return self._insert(name, description)

    def update(self, department_id: int, *, name: str, description: Optional[str]) -> bool:
        return self._update(department_id, name, description)


class MySQLDesignationRepository(_MySQLCatalogRepository, DesignationRepository):
    table = "designations"
    id_column = "designation_id"
    label_column = "title"
    label = "Designation"

    def _build(self, r: dict) -> Designation:
        return Designation(
            designation_id=int(r["designation_id"]),
            title=r["title"],
            description=r.get("description"),
            is_active=bool(r["is_active"]),
            created_at=r.get("created_at"),
        )

    def insert(self, *, title: str, description: Optional[str]) -> Designation:
        return self._insert(title, description)

    def update(self, designation_id: int, *, title: str, description: Optional[str]) -> bool:
        return self._update(designation_id, title, description)
