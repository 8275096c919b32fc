"""
Drawing Analysis Module

This module turns a child's drawing into a structured report: color
distribution, classified shapes, symbols, spatial composition, emotion scores
and a risk assessment.
"""

from .results import (
    EMOTIONS,
    AnalysisReport,
    ColorDistribution,
    CompositionAnalysis,
    DetectedShape,
    DetectedSymbol,
    EmotionAnalysis,
    EmotionalIndicator,
    RiskAssessment
)
from .errors import StageDegraded
from .color_analyzer import ColorDistributionAnalyzer
from .contour_extractor import Contour, ContourExtractor
from .shape_classifier import ShapeClassifier
from .shape_aggregator import ShapeAggregator
from .composition_analyzer import CompositionAnalyzer
from .symbol_detector import SymbolDetector
from .emotion_scorer import EmotionScorer
from .risk_assessor import RiskAssessor, RiskLevel
from .drawing_analyzer import DrawingAnalyzer, create_drawing_analyzer

__all__ = [
    'EMOTIONS',
    'AnalysisReport',
    'ColorDistribution',
    'CompositionAnalysis',
    'DetectedShape',
    'DetectedSymbol',
    'EmotionAnalysis',
    'EmotionalIndicator',
    'RiskAssessment',
    'StageDegraded',
    'ColorDistributionAnalyzer',
    'Contour',
    'ContourExtractor',
    'ShapeClassifier',
    'ShapeAggregator',
    'CompositionAnalyzer',
    'SymbolDetector',
    'EmotionScorer',
    'RiskAssessor',
    'RiskLevel',
    'DrawingAnalyzer',
    'create_drawing_analyzer'
]

__version__ = "1.0.0"
