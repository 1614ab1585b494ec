# Rev 0.1.0

"""Project service
Thin pass-through between the shell and ProjectDao.
"""
from __future__ import annotations
from typing import List

from ..exceptions import DbError
from ..models.entities import Project
from ..repositories.project_dao import ProjectDao


class ProjectService:
    def __init__(self, dao: ProjectDao):
        self._dao = dao

    def add_project(self, project: Project) -> Project:
        return self._dao.insert_project(project)

    def fetch_all_projects(self) -> List[Project]:
        return self._dao.fetch_all_projects()

    def fetch_project_by_id(self, project_id: int) -> Project:
        project = self._dao.fetch_project_by_id(project_id)
        if project is None:
            raise DbError(f"Project with project ID={project_id} does not exist.")
        return project
