#!/usr/bin/env python3
"""
Main Drawing Analyzer

This module provides the DrawingAnalyzer class that runs every analysis stage
on one preprocessed drawing and assembles the resulting AnalysisReport.

Loading failures are handled before this point; inside the analyzer each
heuristic stage falls back to its documented default when it fails, so a
loaded image always produces a complete report.

"""

import copy
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from .color_analyzer import ColorDistributionAnalyzer
from .composition_analyzer import CompositionAnalyzer
from .contour_extractor import ContourExtractor
from .emotion_scorer import EmotionScorer
from .errors import StageDegraded
from .risk_assessor import RiskAssessor
from .results import (
    AnalysisReport,
    ColorDistribution,
    CompositionAnalysis,
    DetectedShape,
    EmotionAnalysis,
    RiskAssessment
)
from .shape_aggregator import ShapeAggregator
from .shape_classifier import ShapeClassifier
from .symbol_detector import SymbolDetector

from utils.validation_api import ValidationError, validate_analysis_config

logger = logging.getLogger(__name__)


class DrawingAnalyzer:
    """

    Drawing analysis orchestrator.

    Runs color analysis, shape detection, composition analysis, symbol
    detection, emotion scoring and risk assessment, in that order. Every
    stage is received at construction or built from the configuration.

    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 color_analyzer: Optional[ColorDistributionAnalyzer] = None,
                 contour_extractor: Optional[ContourExtractor] = None,
                 shape_classifier: Optional[ShapeClassifier] = None,
                 shape_aggregator: Optional[ShapeAggregator] = None,
                 composition_analyzer: Optional[CompositionAnalyzer] = None,
                 symbol_detector: Optional[SymbolDetector] = None,
                 emotion_scorer: Optional[EmotionScorer] = None,
                 risk_assessor: Optional[RiskAssessor] = None):
        """
        Initialize the drawing analyzer.

        Args:
            config: Configuration dictionary for analyzer settings
            color_analyzer ... risk_assessor: Stage implementations; built
                from the configuration when omitted
        """

        self.config = config or self._get_default_config()

        self.color_analyzer = color_analyzer or ColorDistributionAnalyzer(self.config.get('color', {}))
        self.contour_extractor = contour_extractor or ContourExtractor(self.config.get('contours', {}))
        self.shape_classifier = shape_classifier or ShapeClassifier(self.config.get('contours', {}))
        self.shape_aggregator = shape_aggregator or ShapeAggregator()
        self.composition_analyzer = composition_analyzer or CompositionAnalyzer()
        self.symbol_detector = symbol_detector or SymbolDetector()
        self.emotion_scorer = emotion_scorer or EmotionScorer()
        self.risk_assessor = risk_assessor or RiskAssessor()

        logger.info("DrawingAnalyzer initialized")

    @staticmethod
    def _get_default_config() -> Dict[str, Any]:
        """Get default configuration for the analyzer"""

        return {
            'preprocessing': {
                'noise_reduction': True,
                'blur_kernel': (5, 5),
                'contrast_gain': 1.2
            },

            'color': {
                'noise_floor': 0.5
            },

            'contours': {
                'blur_kernel': (5, 5),
                'canny_low': 50,
                'canny_high': 150,
                'min_area': 100
            },

            'summary': {
                'max_shapes': 3
            }
        }

    def analyze(self, image: np.ndarray,
                subject_id: Optional[str] = None,
                file_name: Optional[str] = None,
                timestamp: Optional[datetime] = None) -> AnalysisReport:
        """
        Perform the complete analysis of a preprocessed drawing.

        Args:
            image: Preprocessed image (H, W, 3) in BGR format
            subject_id: Identifier of the child who made the drawing
            file_name: Original file name of the drawing
            timestamp: Analysis time; defaults to now

        Returns:
            AnalysisReport containing every stage result
        """

        start_time = datetime.now()
        degraded = []
        image_size = image.shape[:2]

        # Step 1: Color distribution
        logger.debug("Analyzing colors...")
        colors = self._run_stage('color', degraded, ColorDistribution,
                                 self.color_analyzer.analyze, image)

        # Step 2: Contours, classification and aggregation
        logger.debug("Detecting shapes...")
        located, shapes = self._run_stage('shapes', degraded, lambda: ([], []),
                                          self._detect_shapes, image, image_size)

        # Step 3: Spatial composition
        logger.debug("Analyzing composition...")
        composition = self._run_stage('composition', degraded, CompositionAnalysis,
                                      self.composition_analyzer.analyze, located, image_size)

        # Step 4: Symbols and their interpretations
        logger.debug("Detecting symbols...")
        symbols = self._run_stage('symbols', degraded, list,
                                  self.symbol_detector.detect, located, composition, image_size)

        indicators = self._run_stage('indicators', degraded, list,
                                     self.symbol_detector.psychological_indicators,
                                     located, symbols, composition)

        # Step 5: Emotion scores
        logger.debug("Scoring emotions...")
        emotions = self._run_stage('emotion', degraded, EmotionAnalysis,
                                   self.emotion_scorer.score, colors, shapes, symbols, composition)

        # Step 6: Risk, only meaningful on scored emotions
        emotions_scored = 'emotion' not in degraded
        if emotions_scored:
            logger.debug("Assessing risk...")
            risk = self._run_stage('risk', degraded, RiskAssessor.unknown,
                                   self.risk_assessor.assess, emotions)
        else:
            risk = RiskAssessor.unknown()

        summary = self._run_stage('summary', degraded, str,
                                  self._generate_summary, colors, shapes, emotions, risk,
                                  emotions_scored)

        report = AnalysisReport(
            colors = colors,
            shapes = shapes,
            symbols = symbols,
            composition = composition,
            psychological_indicators = indicators,
            emotions = emotions,
            risk = risk,
            summary = summary,
            timestamp = timestamp or start_time,
            subject_id = subject_id,
            file_name = file_name,
            degraded_stages = tuple(degraded)
        )

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(f"Analysis completed in {processing_time:.3f}s - "
                    f"emotion: {emotions.dominant_emotion}, risk: {risk.level}")

        return report

    def _run_stage(self, stage: str, degraded: List[str],
                   default: Callable[[], Any], func: Callable, *args) -> Any:
        """Run one stage, substituting its default result if it fails."""

        try:
            return func(*args)

        except Exception as e:
            failure = StageDegraded(stage, e)
            logger.warning(str(failure))
            degraded.append(stage)
            return default()

    def _detect_shapes(self, image: np.ndarray,
                       image_size: Tuple[int, int]) -> Tuple[List[DetectedShape], List[DetectedShape]]:
        """Return the shapes located one per contour, and grouped by type."""

        contours = self.contour_extractor.extract(image)
        classified = self.shape_classifier.classify_all(contours)

        located = self.shape_aggregator.locate(classified, image_size)
        return located, self.shape_aggregator.aggregate(located)

    def _generate_summary(self, colors: ColorDistribution, shapes: List[DetectedShape],
                          emotions: EmotionAnalysis, risk: RiskAssessment,
                          emotions_scored: bool = True) -> str:
        max_shapes = self.config.get('summary', {}).get('max_shapes', 3)
        primary = emotions.dominant_emotion if emotions_scored else 'unknown'

        parts = [
            f"Primary emotion: {primary}",
            f"Emotional state: {emotions.emotional_state}",
            f"Dominant color: {colors.dominant_color}"
        ]

        listed = shapes[:max_shapes]
        if listed:
            parts.append(f"Detected shapes: {', '.join(s.type for s in listed)}")

        parts.append(f"Risk level: {risk.level}")

        return ". ".join(parts)


def _merge_config(defaults: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(defaults)
    for section, values in overrides.items():
        merged.setdefault(section, {}).update(values)

    return merged


def create_drawing_analyzer(config: Optional[Dict[str, Any]] = None) -> DrawingAnalyzer:
    """
    Factory function to create a configured drawing analyzer.

    Args:
        config: Partial configuration; missing options keep their defaults

    Returns:
        Configured DrawingAnalyzer instance

    Raises:
        ValidationError: If the configuration is invalid
    """

    config = config or {}

    is_valid, errors = validate_analysis_config(config)
    if not is_valid:
        raise ValidationError("Invalid analyzer configuration", errors)

    return DrawingAnalyzer(config=_merge_config(DrawingAnalyzer._get_default_config(), config))
