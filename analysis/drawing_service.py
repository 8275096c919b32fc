"""
Drawing analysis service.

Loads a drawing, preprocesses it, analyzes it and stores the report. Every
collaborator is handed in at construction.
"""

import logging
import os
from typing import Any, Dict, List, Optional

import numpy as np

from preprocessing import ImagePreprocessor, create_preprocessing_pipeline
from storage import AnalysisRepository, InMemoryAnalysisRepository

from .drawing_analyzer import DrawingAnalyzer, create_drawing_analyzer
from .results import AnalysisReport

logger = logging.getLogger(__name__)


class DrawingAnalysisService:
    """
    Load -> preprocess -> analyze -> save.

    Only image loading failures (ImageLoadError) reach the caller.
    """

    def __init__(self, preprocessor: ImagePreprocessor,
                 analyzer: DrawingAnalyzer,
                 repository: AnalysisRepository):
        self.preprocessor = preprocessor
        self.analyzer = analyzer
        self.repository = repository

    def analyze_drawing(self, image_path: str, subject_id: str) -> AnalysisReport:
        """
        Analyze a drawing stored on disk and persist the report.

        Args:
            image_path: Path to the drawing
            subject_id: Identifier of the child who made it

        Returns:
            Stored report, carrying its analysis id
        """

        logger.info(f"Starting drawing analysis for subject {subject_id}")

        image = self.preprocessor.load_image(image_path)
        return self.analyze_image(image, subject_id, file_name=os.path.basename(image_path))

    def analyze_image(self, image: np.ndarray, subject_id: str,
                      file_name: Optional[str] = None) -> AnalysisReport:
        """Analyze an already loaded drawing and persist the report."""

        processed = self.preprocessor.preprocess(image)
        report = self.analyzer.analyze(processed, subject_id=subject_id, file_name=file_name)

        stored = self.repository.save(report)
        logger.info(f"Analysis {stored.analysis_id} completed for subject {subject_id}")

        return stored

    def get_analysis(self, analysis_id: str) -> Optional[AnalysisReport]:
        return self.repository.find_by_id(analysis_id)

    def get_analyses_for_subject(self, subject_id: str) -> List[AnalysisReport]:
        return self.repository.find_by_subject(subject_id)


def create_analysis_service(config: Optional[Dict[str, Any]] = None,
                            repository: Optional[AnalysisRepository] = None) -> DrawingAnalysisService:
    """
    Factory function wiring a service from one configuration dictionary.

    Args:
        config: Partial analyzer configuration (see DrawingAnalyzer defaults)
        repository: Report store; an in-memory store when omitted

    Returns:
        Configured DrawingAnalysisService
    """

    config = config or {}
    analyzer = create_drawing_analyzer(config)

    return DrawingAnalysisService(
        preprocessor = create_preprocessing_pipeline(analyzer.config.get('preprocessing', {})),
        analyzer = analyzer,
        repository = repository or InMemoryAnalysisRepository()
    )
