from sqlalchemy import Column, Integer, DateTime, JSON
from datetime import datetime
from .database import Base
import enum


# --- Enums (values are the wire format stored in snapshots) ---

class WorkCategory(str, enum.Enum):
    INTERIOR = "Interior"
    CIVIL = "Civil"
    ELECTRICAL = "Electrical"
    PLUMBING = "Plumbing"
    OTHER = "Other"


class UnitType(str, enum.Enum):
    SQFT = "sqft"
    SQM = "sqm"
    CUBIC_METER = "m³"
    PIECES = "pcs"
    RUNNING_METER = "rm"
    LUMPSUM = "lumpsum"
    NOS = "nos"


class WorkStatus(str, enum.Enum):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


def _spelling(text: str) -> str:
    return "".join(ch for ch in text.lower() if ch not in " _-")


def lookup_enum(enum_cls, value):
    """
    Resolve a loosely spelled member: "Cubic Meter", "CubicMeter", "cubic_meter"
    and "m³" all give UnitType.CUBIC_METER. Returns None when nothing matches.
    """
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        return None
    wanted = _spelling(value.strip())
    for member in enum_cls:
        if wanted in (_spelling(member.value), _spelling(member.name)):
            return member
    return None


WORK_CATEGORY_OPTIONS = [c.value for c in WorkCategory]
UNIT_TYPE_OPTIONS = [u.value for u in UnitType]
WORK_STATUS_OPTIONS = [s.value for s in WorkStatus]


# --- Tables ---

class ProjectSnapshot(Base):
    """Whole-tree save point. The newest row is what /api/load restores."""
    __tablename__ = "project_snapshots"

    id = Column(Integer, primary_key=True, index=True)
    projects_json = Column(JSON, nullable=False, default=list)  # Ordered list of Project dicts
    project_count = Column(Integer, default=0)
    saved_at = Column(DateTime, default=datetime.utcnow)
