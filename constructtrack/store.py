"""
Project tree store.

Every operation takes the current list of Projects and returns a new list.
Nodes are frozen models: an edit rebuilds only the chain of ancestors above
the touched node, every sibling keeps its identity.

Lookups that miss (unknown project/area/item id) are no-ops and hand back
the input list unchanged.
"""

import logging
import uuid
from collections.abc import Mapping
from typing import Callable, Iterable, List, Optional, Tuple

from .calculators import quantity_for_item
from .models import WorkCategory, UnitType, WorkStatus, lookup_enum
from .schemas import Area, Project, SubWork, WorkItem

logger = logging.getLogger(__name__)

Projects = List[Project]

AREA_FIELDS = {"name": "name", "image_url": "image_url", "imageUrl": "image_url"}

# Area-based units where a stored units of 0 means "one surface" in older data
LEGACY_UNIT_TYPES = (UnitType.SQFT, UnitType.SQM)


def new_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


# --- Lookup ---

def find_project(projects: Projects, project_id: str) -> Optional[Project]:
    return next((p for p in projects if p.id == project_id), None)


def find_area(projects: Projects, project_id: str, area_id: str) -> Optional[Area]:
    project = find_project(projects, project_id)
    if project is None:
        return None
    return next((a for a in project.areas if a.id == area_id), None)


def find_work_item(projects: Projects, project_id: str, area_id: str,
                   item_id: str) -> Optional[WorkItem]:
    area = find_area(projects, project_id, area_id)
    if area is None:
        return None
    return next((wi for wi in area.work_items if wi.id == item_id), None)


# --- Replace-by-id along the ancestor chain ---

def _replace(nodes: list, node_id: str, fn: Callable, kind: str) -> list:
    for index, node in enumerate(nodes):
        if node.id == node_id:
            updated = fn(node)
            if updated is node:
                return nodes
            return nodes[:index] + [updated] + nodes[index + 1:]
    logger.debug("%s %s not found, nothing changed", kind, node_id)
    return nodes


def _map_project(projects: Projects, project_id: str,
                 fn: Callable[[Project], Project]) -> Projects:
    return _replace(projects, project_id, fn, "Project")


def _map_area(projects: Projects, project_id: str, area_id: str,
              fn: Callable[[Area], Area]) -> Projects:
    def on_project(project: Project) -> Project:
        areas = _replace(project.areas, area_id, fn, "Area")
        if areas is project.areas:
            return project
        return project.model_copy(update={"areas": areas})
    return _map_project(projects, project_id, on_project)


def _map_work_item(projects: Projects, project_id: str, area_id: str, item_id: str,
                   fn: Callable[[WorkItem], WorkItem]) -> Projects:
    def on_area(area: Area) -> Area:
        items = _replace(area.work_items, item_id, fn, "WorkItem")
        if items is area.work_items:
            return area
        return area.model_copy(update={"work_items": items})
    return _map_area(projects, project_id, area_id, on_area)


# --- Work item construction ---

def with_quantity(item: WorkItem) -> WorkItem:
    """Same item with quantity re-derived. Returns the item itself if already consistent."""
    quantity = quantity_for_item(item)
    if item.quantity == quantity:
        return item
    return item.model_copy(update={"quantity": quantity})


def new_sub_work(name: str) -> SubWork:
    return SubWork(id=new_id("sub"), name=name, is_completed=False)


def _unique_sub_works(item: WorkItem) -> WorkItem:
    """Re-id any sub-work whose id repeats an earlier one on the same item."""
    seen = set()
    sub_works = []
    changed = False
    for sw in item.sub_works:
        if sw.id in seen:
            sw = sw.model_copy(update={"id": new_id("sub")})
            changed = True
        seen.add(sw.id)
        sub_works.append(sw)
    if not changed:
        return item
    return item.model_copy(update={"sub_works": sub_works})


def new_work_item(**fields) -> WorkItem:
    """Build a WorkItem with a fresh id. Any quantity passed in is replaced."""
    fields.pop("quantity", None)
    fields.setdefault("id", new_id("item"))
    return with_quantity(WorkItem(**fields))


def edit_work_item(item: WorkItem, **changes) -> WorkItem:
    """
    Apply field changes and recompute quantity.

    Area-based items saved with units == 0 predate the units field; they are
    read as one surface (units = 1) before the changes are applied.
    """
    changes.pop("quantity", None)
    changes.pop("id", None)
    if item.unit_type in LEGACY_UNIT_TYPES and not item.units:
        item = item.model_copy(update={"units": 1.0})
    validated = WorkItem.model_validate({**item.model_dump(), **changes})
    return with_quantity(validated)


def _coerce_enum(enum_cls, value, default):
    member = lookup_enum(enum_cls, value)
    if member is not None:
        return member
    if value is not None:
        logger.info("Unrecognized %s %r, using %s", enum_cls.__name__, value, default.value)
    return default


def _coerce_number(value, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (ValueError, TypeError):
        logger.info("Non-numeric dimension %r, using %s", value, default)
        return default


def complete_proposal(proposal: Mapping) -> WorkItem:
    """
    Fill in a partial work item (e.g. a generated {name, category} pair).

    Defaults: name "Unnamed Work", category Other, unit type Lumpsum, zero
    dimensions, multiplier 1, status Pending, no sub-works. Quantity is always
    derived, so a bare proposal lands with quantity 1.
    """
    def pick(*keys):
        for key in keys:
            if key in proposal:
                return proposal[key]
        return None

    name = pick("name")
    if not isinstance(name, str) or not name.strip():
        name = "Unnamed Work"

    return new_work_item(
        name=name.strip(),
        category=_coerce_enum(WorkCategory, pick("category"), WorkCategory.OTHER),
        design_preference=str(pick("designPreference", "design_preference") or ""),
        color=str(pick("color") or ""),
        length=_coerce_number(pick("length"), 0.0),
        width=_coerce_number(pick("width"), 0.0),
        depth=_coerce_number(pick("depth"), 0.0),
        units=_coerce_number(pick("units"), 0.0),
        unit_multiplier=_coerce_number(pick("unitMultiplier", "unit_multiplier"), 1.0),
        unit_type=_coerce_enum(UnitType, pick("unitType", "unit_type"), UnitType.LUMPSUM),
        status=_coerce_enum(WorkStatus, pick("status"), WorkStatus.PENDING),
    )


# --- Projects ---

def add_project(projects: Projects, name: str) -> Tuple[Projects, Project]:
    project = Project(id=new_id("proj"), name=name, areas=[])
    logger.info("Added project %s (%s)", project.id, name)
    return projects + [project], project


def rename_project(projects: Projects, project_id: str, name: str) -> Projects:
    return _map_project(projects, project_id,
                        lambda p: p.model_copy(update={"name": name}))


def remove_project(projects: Projects, project_id: str) -> Projects:
    remaining = [p for p in projects if p.id != project_id]
    if len(remaining) == len(projects):
        logger.debug("Project %s not found, nothing removed", project_id)
        return projects
    logger.info("Removed project %s", project_id)
    return remaining


def select_after_removal(projects: Projects, selected_id: Optional[str],
                         removed_id: str) -> Optional[str]:
    """Which project the caller should show after removed_id is deleted."""
    if selected_id != removed_id:
        return selected_id
    remaining = [p for p in projects if p.id != removed_id]
    return remaining[0].id if remaining else None


# --- Areas ---

def add_area(projects: Projects, project_id: str, name: str) -> Tuple[Projects, Optional[Area]]:
    if find_project(projects, project_id) is None:
        logger.debug("Project %s not found, area %r not added", project_id, name)
        return projects, None
    area = Area(id=new_id("area"), name=name, work_items=[])
    updated = _map_project(projects, project_id,
                           lambda p: p.model_copy(update={"areas": p.areas + [area]}))
    return updated, area


def update_area(projects: Projects, project_id: str, area_id: str, fields: dict) -> Projects:
    """
    Merge name / image_url into an Area. Work items are never touched here.

    A None name is ignored (an area always has one); a None image_url clears
    the image. Values of the wrong type raise pydantic's ValidationError.
    """
    update = {}
    for key, value in fields.items():
        if key not in AREA_FIELDS:
            logger.warning("Ignoring unsupported area field %r", key)
            continue
        if AREA_FIELDS[key] == "name" and value is None:
            logger.warning("Ignoring null name for area %s", area_id)
            continue
        update[AREA_FIELDS[key]] = value
    if not update:
        return projects

    def merge(area: Area) -> Area:
        checked = Area.model_validate(
            {"id": area.id, "name": area.name, "image_url": area.image_url, **update}
        )
        return area.model_copy(update={key: getattr(checked, key) for key in update})
    return _map_area(projects, project_id, area_id, merge)


def remove_area(projects: Projects, project_id: str, area_id: str) -> Projects:
    def drop(project: Project) -> Project:
        areas = [a for a in project.areas if a.id != area_id]
        if len(areas) == len(project.areas):
            logger.debug("Area %s not found, nothing removed", area_id)
            return project
        return project.model_copy(update={"areas": areas})
    return _map_project(projects, project_id, drop)


# --- Work items ---

def add_work_item(projects: Projects, project_id: str, area_id: str,
                  item: WorkItem) -> Projects:
    return add_work_items(projects, project_id, area_id, [item])


def add_work_items(projects: Projects, project_id: str, area_id: str,
                   items: Iterable) -> Projects:
    """
    Append work items to an Area, keeping existing order.

    Entries may be complete WorkItems or partial mappings; mappings are filled
    in with complete_proposal defaults first, anything else is skipped. An
    item whose id is already taken in the area gets a fresh one.
    """
    prepared = []
    for index, item in enumerate(items):
        if isinstance(item, WorkItem):
            prepared.append(_unique_sub_works(with_quantity(item)))
        elif isinstance(item, Mapping):
            prepared.append(complete_proposal(item))
        else:
            logger.warning("Skipping work item entry %d: expected an object, got %r",
                           index, type(item).__name__)
    if not prepared:
        return projects

    def append(area: Area) -> Area:
        taken = {wi.id for wi in area.work_items}
        added = []
        for item in prepared:
            if item.id in taken:
                fresh = new_id("item")
                logger.warning("Work item id %s already used in area %s, assigned %s",
                               item.id, area.id, fresh)
                item = item.model_copy(update={"id": fresh})
            taken.add(item.id)
            added.append(item)
        return area.model_copy(update={"work_items": area.work_items + added})
    return _map_area(projects, project_id, area_id, append)


def update_work_item(projects: Projects, project_id: str, area_id: str,
                     item: WorkItem) -> Projects:
    """Replace the item with the same id, in place. Quantity is re-derived on write."""
    item = _unique_sub_works(with_quantity(item))
    return _map_work_item(projects, project_id, area_id, item.id, lambda _: item)


def remove_work_item(projects: Projects, project_id: str, area_id: str,
                     item_id: str) -> Projects:
    def drop(area: Area) -> Area:
        items = [wi for wi in area.work_items if wi.id != item_id]
        if len(items) == len(area.work_items):
            logger.debug("WorkItem %s not found, nothing removed", item_id)
            return area
        return area.model_copy(update={"work_items": items})
    return _map_area(projects, project_id, area_id, drop)


# --- Sub-works ---

def add_sub_works(projects: Projects, project_id: str, area_id: str, item_id: str,
                  names: Iterable[str]) -> Projects:
    sub_works = [new_sub_work(name) for name in names]
    if not sub_works:
        return projects
    return _map_work_item(
        projects, project_id, area_id, item_id,
        lambda wi: wi.model_copy(update={"sub_works": wi.sub_works + sub_works}),
    )


def toggle_sub_work(projects: Projects, project_id: str, area_id: str, item_id: str,
                    sub_work_id: str) -> Projects:
    def toggle(item: WorkItem) -> WorkItem:
        sub_works = _replace(
            item.sub_works, sub_work_id,
            lambda sw: sw.model_copy(update={"is_completed": not sw.is_completed}),
            "SubWork",
        )
        if sub_works is item.sub_works:
            return item
        return item.model_copy(update={"sub_works": sub_works})
    return _map_work_item(projects, project_id, area_id, item_id, toggle)


def remove_sub_work(projects: Projects, project_id: str, area_id: str, item_id: str,
                    sub_work_id: str) -> Projects:
    def drop(item: WorkItem) -> WorkItem:
        sub_works = [sw for sw in item.sub_works if sw.id != sub_work_id]
        if len(sub_works) == len(item.sub_works):
            return item
        return item.model_copy(update={"sub_works": sub_works})
    return _map_work_item(projects, project_id, area_id, item_id, drop)


# --- Consistency ---

def find_quantity_mismatches(projects: Projects) -> List[dict]:
    """Work items whose stored quantity disagrees with a fresh computation."""
    mismatches = []
    for project in projects:
        for area in project.areas:
            for item in area.work_items:
                expected = quantity_for_item(item)
                if item.quantity != expected:
                    mismatches.append({
                        "project_id": project.id,
                        "area_id": area.id,
                        "item_id": item.id,
                        "stored": item.quantity,
                        "expected": expected,
                    })
    return mismatches


class ProjectStore:
    """
    Holder for "the current collection". Each method swaps in the list
    returned by the matching module-level function.
    """

    def __init__(self, projects: Optional[Projects] = None):
        self._projects: Projects = list(projects or [])

    @property
    def projects(self) -> Projects:
        return self._projects

    def replace(self, projects: Projects) -> None:
        self._projects = list(projects)

    def add_project(self, name: str) -> Project:
        self._projects, project = add_project(self._projects, name)
        return project

    def rename_project(self, project_id: str, name: str) -> None:
        self._projects = rename_project(self._projects, project_id, name)

    def remove_project(self, project_id: str) -> None:
        self._projects = remove_project(self._projects, project_id)

    def add_area(self, project_id: str, name: str) -> Optional[Area]:
        self._projects, area = add_area(self._projects, project_id, name)
        return area

    def update_area(self, project_id: str, area_id: str, fields: dict) -> None:
        self._projects = update_area(self._projects, project_id, area_id, fields)

    def remove_area(self, project_id: str, area_id: str) -> None:
        self._projects = remove_area(self._projects, project_id, area_id)

    def add_work_item(self, project_id: str, area_id: str, item: WorkItem) -> None:
        self._projects = add_work_item(self._projects, project_id, area_id, item)

    def add_work_items(self, project_id: str, area_id: str, items: Iterable) -> None:
        self._projects = add_work_items(self._projects, project_id, area_id, items)

    def update_work_item(self, project_id: str, area_id: str, item: WorkItem) -> None:
        self._projects = update_work_item(self._projects, project_id, area_id, item)

    def remove_work_item(self, project_id: str, area_id: str, item_id: str) -> None:
        self._projects = remove_work_item(self._projects, project_id, area_id, item_id)

    def add_sub_works(self, project_id: str, area_id: str, item_id: str,
                      names: Iterable[str]) -> None:
        self._projects = add_sub_works(self._projects, project_id, area_id, item_id, names)

    def toggle_sub_work(self, project_id: str, area_id: str, item_id: str,
                        sub_work_id: str) -> None:
        self._projects = toggle_sub_work(self._projects, project_id, area_id, item_id,
                                         sub_work_id)

    def remove_sub_work(self, project_id: str, area_id: str, item_id: str,
                        sub_work_id: str) -> None:
        self._projects = remove_sub_work(self._projects, project_id, area_id, item_id,
                                         sub_work_id)

    def apply(self, operation: Callable, *args) -> None:
        """Run any list -> list operation (e.g. from intake) against the current collection."""
        self._projects = operation(self._projects, *args)
