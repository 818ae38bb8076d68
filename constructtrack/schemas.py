from pydantic import BaseModel
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional
from .models import WorkCategory, UnitType, WorkStatus


class CamelModel(BaseModel):
    """snake_case attributes, camelCase JSON keys (either accepted on input)."""
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class TreeModel(CamelModel):
    """Immutable tree node. Edits go through model_copy(update=...)."""
    class Config:
        frozen = True


# --- Project tree ---

class SubWork(TreeModel):
    id: str
    name: str
    is_completed: bool = False

class WorkItem(TreeModel):
    id: str
    name: str
    category: WorkCategory = WorkCategory.OTHER
    sub_works: List[SubWork] = []
    design_preference: str = ""
    color: str = ""  # Free text, or an embedded image reference
    color_file_name: Optional[str] = None
    length: float = 0.0
    width: float = 0.0
    depth: float = 0.0
    units: float = 0.0
    unit_multiplier: Optional[float] = 1.0
    unit_type: UnitType = UnitType.LUMPSUM
    quantity: float = 0.0  # Derived, see calculators.quantity_for_item
    status: WorkStatus = WorkStatus.PENDING

class Area(TreeModel):
    id: str
    name: str
    work_items: List[WorkItem] = []
    image_url: Optional[str] = None

class Project(TreeModel):
    id: str
    name: str
    areas: List[Area] = []


# --- Request bodies ---

class ProjectCreate(CamelModel):
    name: str

class ProjectRename(CamelModel):
    name: str

class AreaCreate(CamelModel):
    name: str

class AreaUpdate(CamelModel):
    name: Optional[str] = None
    image_url: Optional[str] = None

class SubWorkInput(CamelModel):
    id: Optional[str] = None
    name: str
    is_completed: bool = False

class WorkItemInput(CamelModel):
    """Work item as submitted by the editor. Quantity is never taken from input."""
    id: Optional[str] = None
    name: str
    category: WorkCategory = WorkCategory.OTHER
    sub_works: List[SubWorkInput] = []
    design_preference: str = ""
    color: str = ""
    color_file_name: Optional[str] = None
    length: float = 0.0
    width: float = 0.0
    depth: float = 0.0
    units: float = 0.0
    unit_multiplier: Optional[float] = 1.0
    unit_type: UnitType = UnitType.LUMPSUM
    status: WorkStatus = WorkStatus.PENDING

class GeneratedWork(CamelModel):
    """Output of the photo-analysis generator. Entries are checked one by one on intake."""
    items: List[Any] = []
    image_url: Optional[str] = None

class SubTaskNames(CamelModel):
    names: List[Any] = []


# --- Quantity / progress ---

class QuantityRequest(CamelModel):
    unit_type: str
    length: float = 0.0
    width: float = 0.0
    depth: float = 0.0
    units: float = 0.0
    unit_multiplier: Optional[float] = None

class QuantityResponse(CamelModel):
    unit_type: str
    quantity: float

class ProgressSummary(CamelModel):
    total: int
    counts: Dict[str, int]
    completion_percentage: float

class SaveResult(CamelModel):
    message: str
    snapshot_id: int
    project_count: int
