"""
Whole-tree persistence.

The collection is written as one ordered JSON list (camelCase keys, derived
quantity included) per save. Loading trusts the stored quantities.
"""

import logging
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy.orm import Session

from . import models
from .config import settings
from .schemas import Project
from .store import find_quantity_mismatches

logger = logging.getLogger(__name__)


def serialize_projects(projects: List[Project]) -> list:
    return [p.model_dump(mode="json", by_alias=True) for p in projects]


def parse_projects(data: list) -> List[Project]:
    """Raises ValueError if the payload is not a list of valid projects."""
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of projects, got {type(data).__name__}")
    try:
        return [Project.model_validate(entry) for entry in data]
    except ValidationError as e:
        raise ValueError(f"Stored projects do not match the project schema: {e}") from e


def check_quantities(projects: List[Project]) -> list:
    mismatches = find_quantity_mismatches(projects)
    for m in mismatches:
        logger.warning(
            "Work item %s (project %s, area %s) stores quantity %s, formula gives %s",
            m["item_id"], m["project_id"], m["area_id"], m["stored"], m["expected"],
        )
    return mismatches


def save_snapshot(db: Session, projects: List[Project]) -> models.ProjectSnapshot:
    snapshot = models.ProjectSnapshot(
        projects_json=serialize_projects(projects),
        project_count=len(projects),
    )
    db.add(snapshot)
    db.commit()
    db.refresh(snapshot)
    logger.info("Saved snapshot %s with %d projects", snapshot.id, snapshot.project_count)
    return snapshot


def load_latest(db: Session) -> Optional[List[Project]]:
    """Newest snapshot parsed back into Projects, or None when nothing was ever saved."""
    snapshot = db.query(models.ProjectSnapshot).order_by(
        models.ProjectSnapshot.id.desc()
    ).first()
    if snapshot is None:
        return None
    projects = parse_projects(snapshot.projects_json)
    if settings.VALIDATE_QUANTITIES_ON_LOAD:
        check_quantities(projects)
    logger.info("Loaded snapshot %s with %d projects", snapshot.id, len(projects))
    return projects
