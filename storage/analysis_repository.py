"""
Analysis persistence.

Stores analysis reports keyed by a generated analysis id and by the child
(subject) the drawing belongs to.
"""

import copy
import logging
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from analysis.results import AnalysisReport

logger = logging.getLogger(__name__)


class AnalysisRepository(ABC):
    """
    Abstract base class for analysis report stores.
    """

    @abstractmethod
    def save(self, report: AnalysisReport) -> AnalysisReport:
        """
        Store a report under a newly generated analysis id.

        Returns:
            Copy of the report carrying its analysis id
        """

    @abstractmethod
    def find_by_id(self, analysis_id: str) -> Optional[AnalysisReport]:
        """Return the report with this id, or None."""

    @abstractmethod
    def find_by_subject(self, subject_id: str) -> List[AnalysisReport]:
        """Return every report of a subject, newest first."""


class InMemoryAnalysisRepository(AnalysisRepository):
    """
    Process-local repository, safe to share between request threads.

    Reports go in and come out as deep copies, so callers never hold a
    reference to the stored record.
    """

    def __init__(self):
        self._reports: Dict[str, AnalysisReport] = {}
        self._lock = threading.Lock()

    def save(self, report: AnalysisReport) -> AnalysisReport:
        stored = copy.deepcopy(report.with_id(str(uuid.uuid4())))

        with self._lock:
            self._reports[stored.analysis_id] = stored

        logger.info(f"Stored analysis {stored.analysis_id} for subject {stored.subject_id}")
        return copy.deepcopy(stored)

    def find_by_id(self, analysis_id: str) -> Optional[AnalysisReport]:
        with self._lock:
            report = self._reports.get(analysis_id)

        return copy.deepcopy(report)

    def find_by_subject(self, subject_id: str) -> List[AnalysisReport]:
        with self._lock:
            # insertion order breaks timestamp ties, later saves first
            matching = [r for r in self._reports.values() if r.subject_id == subject_id]

        matching.reverse()
        return [copy.deepcopy(r) for r in sorted(matching, key=lambda r: r.timestamp, reverse=True)]

    def __len__(self) -> int:
        with self._lock:
            return len(self._reports)
