"""
Completion summary over a set of work items (counts per status).
"""

from typing import Iterable, List

from .models import WorkStatus
from .schemas import ProgressSummary, Project, WorkItem


def project_work_items(project: Project) -> List[WorkItem]:
    """All work items of a project, area by area, in display order."""
    return [item for area in project.areas for item in area.work_items]


def summarize_progress(work_items: Iterable[WorkItem]) -> ProgressSummary:
    counts = {status.value: 0 for status in WorkStatus}
    total = 0
    for item in work_items:
        counts[WorkStatus(item.status).value] += 1
        total += 1
    completed = counts[WorkStatus.COMPLETED.value]
    percentage = (completed / total) * 100 if total > 0 else 0.0
    return ProgressSummary(total=total, counts=counts, completion_percentage=percentage)
