# Rev 0.1.0
"""Lightweight entities aligned with the projects schema.

Every field has a default so each entity can be built with no arguments and
filled in later, either by the shell or by DaoBase.extract.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional


@dataclass
class Material:
    material_id: Optional[int] = None
    project_id: Optional[int] = None
    material_name: Optional[str] = None
    num_required: Optional[int] = None
    cost: Optional[Decimal] = None      # NULL when no cost is tracked

    def __str__(self) -> str:
        return (
            f"ID={self.material_id}, materialName={self.material_name}, "
            f"numRequired={self.num_required}, cost={self.cost}"
        )


@dataclass
class Step:
    step_id: Optional[int] = None
    project_id: Optional[int] = None
    step_text: Optional[str] = None
    step_order: Optional[int] = None

    def __str__(self) -> str:
        return f"ID={self.step_id}, stepText={self.step_text}"


@dataclass
class Category:
    category_id: Optional[int] = None
    category_name: Optional[str] = None

    def __str__(self) -> str:
        return f"ID={self.category_id}, categoryName={self.category_name}"


@dataclass
class Project:
    project_id: Optional[int] = None
    project_name: Optional[str] = None
    estimated_hours: Optional[Decimal] = None
    actual_hours: Optional[Decimal] = None
    difficulty: Optional[int] = None    # 1-5 when entered through the shell
    notes: Optional[str] = None

    # not columns: left alone by row mapping
    materials: List[Material] = field(default_factory=list)
    steps: List[Step] = field(default_factory=list)
    categories: List[Category] = field(default_factory=list)

    def __str__(self) -> str:
        lines = [
            f"   ID={self.project_id}",
            f"   name={self.project_name}",
            f"   estimatedHours={self.estimated_hours}",
            f"   actualHours={self.actual_hours}",
            f"   difficulty={self.difficulty}",
            f"   notes={self.notes}",
            "   Materials:",
        ]
        lines += [f"      {m}" for m in self.materials]
        lines.append("   Steps:")
        lines += [f"      {s}" for s in self.steps]
        lines.append("   Categories:")
        lines += [f"      {c}" for c in self.categories]
        return "\n" + "\n".join(lines)
