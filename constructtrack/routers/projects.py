"""
Project tree endpoints.

Every write goes through the ProjectStore operations. The store itself
treats unknown ids as no-ops; here they are checked first and answered
with 404 so the client can tell.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from .. import intake, schemas, store as tree
from ..progress import project_work_items, summarize_progress
from ..state import get_store
from ..store import ProjectStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projects", tags=["projects"])


def _require_project(store: ProjectStore, project_id: str) -> schemas.Project:
    project = tree.find_project(store.projects, project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")
    return project


def _require_area(store: ProjectStore, project_id: str, area_id: str) -> schemas.Area:
    _require_project(store, project_id)
    area = tree.find_area(store.projects, project_id, area_id)
    if not area:
        raise HTTPException(status_code=404, detail="Area not found")
    return area


def _require_item(store: ProjectStore, project_id: str, area_id: str,
                  item_id: str) -> schemas.WorkItem:
    _require_area(store, project_id, area_id)
    item = tree.find_work_item(store.projects, project_id, area_id, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Work item not found")
    return item


def _item_fields(data: schemas.WorkItemInput) -> dict:
    """Input -> WorkItem kwargs. Sub-works without an id get a fresh one."""
    fields = data.model_dump(exclude={"id", "sub_works"})
    fields["sub_works"] = [
        schemas.SubWork(id=sw.id or tree.new_id("sub"), name=sw.name,
                        is_completed=sw.is_completed)
        for sw in data.sub_works
    ]
    return fields


# --- Projects ---

@router.get("/", response_model=List[schemas.Project])
def list_projects(store: ProjectStore = Depends(get_store)):
    return store.projects


@router.post("/", response_model=schemas.Project)
def create_project(data: schemas.ProjectCreate, store: ProjectStore = Depends(get_store)):
    return store.add_project(data.name)


@router.get("/{project_id}", response_model=schemas.Project)
def get_project(project_id: str, store: ProjectStore = Depends(get_store)):
    return _require_project(store, project_id)


@router.patch("/{project_id}", response_model=schemas.Project)
def rename_project(project_id: str, data: schemas.ProjectRename,
                   store: ProjectStore = Depends(get_store)):
    _require_project(store, project_id)
    store.rename_project(project_id, data.name)
    return tree.find_project(store.projects, project_id)


@router.delete("/{project_id}")
def delete_project(project_id: str, selected: Optional[str] = None,
                   store: ProjectStore = Depends(get_store)):
    """`selected` is the project the client is showing; defaults to the one deleted."""
    _require_project(store, project_id)
    next_selected = tree.select_after_removal(store.projects, selected or project_id,
                                              project_id)
    store.remove_project(project_id)
    return {"deleted": project_id, "selected_project_id": next_selected}


@router.get("/{project_id}/progress", response_model=schemas.ProgressSummary)
def project_progress(project_id: str, store: ProjectStore = Depends(get_store)):
    project = _require_project(store, project_id)
    return summarize_progress(project_work_items(project))


# --- Areas ---

@router.post("/{project_id}/areas", response_model=schemas.Area)
def create_area(project_id: str, data: schemas.AreaCreate,
                store: ProjectStore = Depends(get_store)):
    _require_project(store, project_id)
    return store.add_area(project_id, data.name)


@router.patch("/{project_id}/areas/{area_id}", response_model=schemas.Area)
def update_area(project_id: str, area_id: str, update: schemas.AreaUpdate,
                store: ProjectStore = Depends(get_store)):
    _require_area(store, project_id, area_id)
    fields = update.model_dump(exclude_unset=True)
    if "name" in fields and fields["name"] is None:
        raise HTTPException(status_code=422, detail="Area name cannot be null")
    store.update_area(project_id, area_id, fields)
    return tree.find_area(store.projects, project_id, area_id)


@router.delete("/{project_id}/areas/{area_id}")
def delete_area(project_id: str, area_id: str, store: ProjectStore = Depends(get_store)):
    _require_area(store, project_id, area_id)
    store.remove_area(project_id, area_id)
    return {"deleted": area_id}


# --- Work items ---

@router.post("/{project_id}/areas/{area_id}/work-items", response_model=schemas.WorkItem)
def create_work_item(project_id: str, area_id: str, data: schemas.WorkItemInput,
                     store: ProjectStore = Depends(get_store)):
    _require_area(store, project_id, area_id)
    item = tree.new_work_item(**_item_fields(data))
    store.add_work_item(project_id, area_id, item)
    return tree.find_area(store.projects, project_id, area_id).work_items[-1]


@router.post("/{project_id}/areas/{area_id}/work-items/generated", response_model=schemas.Area)
def add_generated_work(project_id: str, area_id: str, data: schemas.GeneratedWork,
                       store: ProjectStore = Depends(get_store)):
    """Fold photo-analysis proposals (and the analysed photo) into the area."""
    _require_area(store, project_id, area_id)
    store.apply(intake.fold_generated_work, project_id, area_id, data.items, data.image_url)
    return tree.find_area(store.projects, project_id, area_id)


@router.put("/{project_id}/areas/{area_id}/work-items/{item_id}",
            response_model=schemas.WorkItem)
def replace_work_item(project_id: str, area_id: str, item_id: str,
                      data: schemas.WorkItemInput, store: ProjectStore = Depends(get_store)):
    _require_item(store, project_id, area_id, item_id)
    item = schemas.WorkItem(id=item_id, **_item_fields(data))
    store.update_work_item(project_id, area_id, item)
    return tree.find_work_item(store.projects, project_id, area_id, item_id)


@router.delete("/{project_id}/areas/{area_id}/work-items/{item_id}")
def delete_work_item(project_id: str, area_id: str, item_id: str,
                     store: ProjectStore = Depends(get_store)):
    _require_item(store, project_id, area_id, item_id)
    store.remove_work_item(project_id, area_id, item_id)
    return {"deleted": item_id}


@router.post("/{project_id}/areas/{area_id}/work-items/{item_id}/sub-works",
             response_model=schemas.WorkItem)
def add_sub_works(project_id: str, area_id: str, item_id: str, data: schemas.SubTaskNames,
                  store: ProjectStore = Depends(get_store)):
    """Append suggested sub-task names as unchecked sub-works."""
    _require_item(store, project_id, area_id, item_id)
    store.apply(intake.fold_sub_task_names, project_id, area_id, item_id, data.names)
    return tree.find_work_item(store.projects, project_id, area_id, item_id)
