"""
Save / load of the whole project tree.

POST /api/save: snapshot the in-memory store into the database.
POST /api/load: replace the store with the newest snapshot.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from .. import schemas
from ..database import get_db
from ..snapshots import load_latest, save_snapshot
from ..state import get_store
from ..store import ProjectStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["persistence"])


@router.post("/save", response_model=schemas.SaveResult)
def save_projects(store: ProjectStore = Depends(get_store), db: Session = Depends(get_db)):
    snapshot = save_snapshot(db, store.projects)
    return schemas.SaveResult(
        message="Projects saved successfully",
        snapshot_id=snapshot.id,
        project_count=snapshot.project_count,
    )


@router.post("/load", response_model=list[schemas.Project])
def load_projects(store: ProjectStore = Depends(get_store), db: Session = Depends(get_db)):
    try:
        projects = load_latest(db)
    except ValueError as e:
        logger.error("Snapshot could not be loaded: %s", e)
        raise HTTPException(status_code=500, detail="Saved projects could not be read")
    if projects is None:
        raise HTTPException(status_code=404, detail="No saved projects")
    store.replace(projects)
    return store.projects
