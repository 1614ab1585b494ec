# Rev 0.1.0
# diy_projects – ProjectDao
from __future__ import annotations
from decimal import Decimal
from typing import List, Optional

from ..exceptions import DbError
from ..models.entities import Category, Material, Project, Step
from .dao_base import DaoBase, Statement

CATEGORY_TABLE = "category"
MATERIAL_TABLE = "material"
PROJECT_TABLE = "project"
PROJECT_CATEGORY_TABLE = "project_category"
STEP_TABLE = "step"


class ProjectDao(DaoBase):
    """
    Project persistence.
    Every call opens its own connection and runs inside one transaction.
    """

    # ---------- writes ----------

    def insert_project(self, project: Project) -> Project:
        """Insert the scalar project columns and return `project` with its new id."""
        stmt = Statement(
            f"INSERT INTO {PROJECT_TABLE} "
            "(project_name, estimated_hours, actual_hours, difficulty, notes) "
            "VALUES (?, ?, ?, ?, ?)"
        )
        with self._db.connection() as conn:
            try:
                with self.transaction(conn):
                    self.bind(stmt, 1, project.project_name, str)
                    self.bind(stmt, 2, project.estimated_hours, Decimal)
                    self.bind(stmt, 3, project.actual_hours, Decimal)
                    self.bind(stmt, 4, project.difficulty, int)
                    self.bind(stmt, 5, project.notes, str)
                    self.execute(conn, stmt).close()
                    project_id = self.last_inserted_id(conn, PROJECT_TABLE)
            except Exception as e:
                raise DbError(f"Unable to insert project {project.project_name!r}: {e}") from e

        project.project_id = project_id
        self._log.info("Inserted project %s (%s)", project_id, project.project_name)
        return project

    # ---------- reads ----------

    def fetch_all_projects(self) -> List[Project]:
        stmt = Statement(f"SELECT * FROM {PROJECT_TABLE} ORDER BY project_name")
        with self._db.connection() as conn:
            try:
                with self.transaction(conn):
                    return self.query(conn, stmt, Project)
            except Exception as e:
                raise DbError(f"Unable to fetch projects: {e}") from e

    def fetch_project_by_id(self, project_id: int) -> Optional[Project]:
        """Project with its materials, steps and categories, or None."""
        stmt = Statement(f"SELECT * FROM {PROJECT_TABLE} WHERE project_id = ?")
        with self._db.connection() as conn:
            try:
                with self.transaction(conn):
                    self.bind(stmt, 1, project_id, int)
                    found = self.query(conn, stmt, Project)
                    if not found:
                        return None
                    project = found[0]
                    project.materials.extend(self._fetch_materials(conn, project_id))
                    project.steps.extend(self._fetch_steps(conn, project_id))
                    project.categories.extend(self._fetch_categories(conn, project_id))
                    return project
            except Exception as e:
                raise DbError(f"Unable to fetch project {project_id}: {e}") from e

    # ---------- internals ----------

    def _fetch_materials(self, conn, project_id: int) -> List[Material]:
        stmt = Statement(f"SELECT * FROM {MATERIAL_TABLE} WHERE project_id = ? ORDER BY material_id")
        self.bind(stmt, 1, project_id, int)
        return self.query(conn, stmt, Material)

    def _fetch_steps(self, conn, project_id: int) -> List[Step]:
        stmt = Statement(f"SELECT * FROM {STEP_TABLE} WHERE project_id = ? ORDER BY step_order")
        self.bind(stmt, 1, project_id, int)
        return self.query(conn, stmt, Step)

    def _fetch_categories(self, conn, project_id: int) -> List[Category]:
        stmt = Statement(
            f"SELECT c.* FROM {CATEGORY_TABLE} c "
            f"JOIN {PROJECT_CATEGORY_TABLE} pc USING (category_id) "
            "WHERE pc.project_id = ? ORDER BY c.category_name"
        )
        self.bind(stmt, 1, project_id, int)
        return self.query(conn, stmt, Category)
