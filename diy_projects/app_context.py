# diy_projects application context
# Rev 0.1.0

from __future__ import annotations
from dataclasses import dataclass
from .utils.config import DbConfig
from .utils.logging_setup import get_logger
from .repositories.db import Database
from .repositories.project_dao import ProjectDao
from .services.project_service import ProjectService

@dataclass
class AppContext:
    """Central container for shared app resources."""
    config: DbConfig
    db: Database
    dao: ProjectDao
    project_service: ProjectService

    @classmethod
    def create(cls, config: DbConfig) -> "AppContext":
        """Initialize DB, DAO, and services."""
        log = get_logger("AppContext")
        db = Database(config)
        dao = ProjectDao(db)
        service = ProjectService(dao)
        log.info("AppContext initialized with DB=%s", config.describe())
        return cls(config=config, db=db, dao=dao, project_service=service)
