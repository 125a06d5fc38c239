"""
Dashboard Statistics

Derives the learner dashboard figures from the current catalog state.
"""

from dataclasses import dataclass
from typing import List

from course_catalog import CatalogStore, Course

CHART_LABEL_LENGTH = 10


@dataclass(frozen=True)
class ProgressBar:
    label: str
    progress: int


@dataclass(frozen=True)
class DashboardSummary:
    enrolled_count: int
    completed_count: int
    certificate_count: int
    progress_chart: List[ProgressBar]
    in_progress: List[Course]


def chart_label(title: str) -> str:
    return title[:CHART_LABEL_LENGTH] + "..."


def summarize(catalog: CatalogStore) -> DashboardSummary:
    courses = catalog.courses()
    enrolled = [c for c in courses if c.enrolled]
    completed = [c for c in courses if c.progress == 100]
    return DashboardSummary(
        enrolled_count=len(enrolled),
        completed_count=len(completed),
        # one certificate per finished course
        certificate_count=len(completed),
        progress_chart=[ProgressBar(chart_label(c.title), c.progress) for c in enrolled],
        in_progress=[c for c in enrolled if c.progress < 100],
    )
