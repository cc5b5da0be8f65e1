from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.serialization import iso


@dataclass(frozen=True)
class Department:
    department_id: int
    name: str
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "department_id": self.department_id,
            "name": self.name,
            "description": self.description,
            "is_active": self.is_active,
            "created_at": iso(self.created_at),
        }


@dataclass(frozen=True)
class Designation:
    """A job title employees can be given."""

    designation_id: int
    title: str
    description: Optional[str] = None
    is_active: bool = True
    created_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "designation_id": self.designation_id,
            "title": self.title,
            "description": self.description,
            "is_active": self.is_active,
            "created_at": iso(self.created_at),
        }
