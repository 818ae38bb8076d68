"""
Folding externally produced payloads into the project tree.

The photo analyser, the image generator and the sub-task suggester run
outside this package. Whatever they hand back arrives here and goes through
the ordinary store operations, so nothing in the tree records where an edit
came from. Bad entries get defaults or are skipped; a batch is never
rejected as a whole.
"""

import logging
from collections.abc import Mapping
from typing import Iterable, List, Optional

from . import store
from .schemas import WorkItem

logger = logging.getLogger(__name__)


def fold_image(projects: store.Projects, project_id: str, area_id: str,
               image_url: Optional[str]) -> store.Projects:
    """Store an image reference verbatim as the Area's image. Empty values are ignored."""
    if not image_url:
        return projects
    return store.update_area(projects, project_id, area_id, {"image_url": image_url})


def fold_color_image(item: WorkItem, image_ref: Optional[str],
                     file_name: Optional[str] = None) -> WorkItem:
    """Use an uploaded/generated image as the item's colour swatch. Passing None clears it."""
    if not image_ref:
        return item.model_copy(update={"color": "", "color_file_name": None})
    return item.model_copy(update={"color": image_ref, "color_file_name": file_name})


def clean_proposals(proposals: Iterable) -> List[Mapping]:
    """Keep mapping entries; anything else in the batch is dropped with a warning."""
    cleaned = []
    for index, proposal in enumerate(proposals or []):
        if isinstance(proposal, Mapping):
            cleaned.append(proposal)
        else:
            logger.warning("Skipping generated work entry %d: expected an object, got %r",
                           index, type(proposal).__name__)
    return cleaned


def clean_names(names: Iterable) -> List[str]:
    """Strip names; drop blanks and non-strings."""
    cleaned = []
    for name in names or []:
        if not isinstance(name, str):
            logger.warning("Skipping sub-task name %r: not a string", name)
            continue
        if name.strip():
            cleaned.append(name.strip())
    return cleaned


def fold_generated_work(projects: store.Projects, project_id: str, area_id: str,
                        proposals: Iterable, image_url: Optional[str] = None) -> store.Projects:
    """
    Save the result of "generate work from photo": the analysed photo becomes
    the Area image, then every selected {name, category} proposal is added
    with defaults filled in.
    """
    projects = fold_image(projects, project_id, area_id, image_url)
    cleaned = clean_proposals(proposals)
    if cleaned:
        logger.info("Adding %d generated work items to area %s", len(cleaned), area_id)
    return store.add_work_items(projects, project_id, area_id, cleaned)


def fold_sub_task_names(projects: store.Projects, project_id: str, area_id: str,
                        item_id: str, names: Iterable) -> store.Projects:
    return store.add_sub_works(projects, project_id, area_id, item_id, clean_names(names))
