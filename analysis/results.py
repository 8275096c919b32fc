"""
Result records produced by the drawing analysis stages.

Each record converts to plain JSON-compatible structures through to_dict().
"""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

EMOTIONS = ('joy', 'sadness', 'anger', 'fear', 'calm', 'energy', 'anxiety', 'love')


@dataclass
class ColorDistribution:
    """Exclusive share of the drawing's pixels per named color bucket."""

    distribution: Dict[str, float] = field(default_factory=dict)
    dominant_color: str = 'unknown'
    intensity: float = 0.0
    interpretations: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'distribution': dict(self.distribution),
            'dominant_color': self.dominant_color,
            'intensity': self.intensity,
            'interpretations': list(self.interpretations)
        }


@dataclass
class ClassifiedShape:
    """Geometric typing of a single contour."""

    shape_type: str
    area: float
    bounding_rect: Tuple[int, int, int, int]
    solidity: float = 0.0
    confidence: float = 0.0


@dataclass
class DetectedShape:
    """A shape, or a group of same-typed shapes, located in the drawing."""

    type: str
    count: int
    average_size: float
    position: str
    confidence: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'count': self.count,
            'average_size': self.average_size,
            'position': self.position,
            'confidence': self.confidence
        }


@dataclass
class DetectedSymbol:
    type: str
    count: int
    complexity: str
    characteristics: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'count': self.count,
            'complexity': self.complexity,
            'characteristics': list(self.characteristics)
        }


@dataclass
class CompositionAnalysis:
    """Spatial layout of the drawing: balance, space usage and stroke pressure."""

    balance: str = 'empty'
    space_usage: str = 'minimal'
    pressure: str = 'unknown'
    indicators: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'balance': self.balance,
            'space_usage': self.space_usage,
            'pressure': self.pressure,
            'indicators': list(self.indicators)
        }


@dataclass
class EmotionalIndicator:
    type: str
    description: str
    confidence: float
    correlation: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'description': self.description,
            'confidence': self.confidence,
            'correlation': self.correlation
        }


@dataclass
class EmotionAnalysis:
    """
    Normalized emotion scores and the categorical state derived from them.

    Every score lies in [0, 1]; whenever any evidence was accumulated the
    leading emotion scores exactly 1.0.
    """

    scores: Dict[str, float] = field(default_factory=lambda: {e: 0.0 for e in EMOTIONS})
    dominant_emotion: str = EMOTIONS[0]
    emotional_state: str = 'unknown'
    indicators: List[EmotionalIndicator] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'scores': dict(self.scores),
            'dominant_emotion': self.dominant_emotion,
            'emotional_state': self.emotional_state,
            'indicators': [i.to_dict() for i in self.indicators]
        }


@dataclass
class RiskAssessment:
    level: str = 'unknown'
    risk_factors: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    requires_attention: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'level': self.level,
            'risk_factors': list(self.risk_factors),
            'recommendations': list(self.recommendations),
            'requires_attention': self.requires_attention
        }


@dataclass(frozen=True)
class AnalysisReport:
    """
    Complete analysis of one drawing.

    Created once per analysis and never modified; the repository stores a
    copy stamped with the generated analysis id.
    """

    colors: ColorDistribution
    shapes: List[DetectedShape]
    symbols: List[DetectedSymbol]
    composition: CompositionAnalysis
    psychological_indicators: List[str]
    emotions: EmotionAnalysis
    risk: RiskAssessment
    summary: str
    timestamp: datetime
    subject_id: Optional[str] = None
    file_name: Optional[str] = None
    degraded_stages: Tuple[str, ...] = ()
    analysis_id: Optional[str] = None

    @property
    def emotion_scores(self) -> Dict[str, float]:
        return self.emotions.scores

    @property
    def emotional_state(self) -> str:
        return self.emotions.emotional_state

    def with_id(self, analysis_id: str) -> 'AnalysisReport':
        return replace(self, analysis_id=analysis_id)

    def to_dict(self) -> Dict[str, Any]:
        """ Convert report to dictionary format. """

        return {
            'analysis_id': self.analysis_id,
            'subject_id': self.subject_id,
            'file_name': self.file_name,
            'colors': self.colors.to_dict(),
            'shapes': [s.to_dict() for s in self.shapes],
            'symbols': [s.to_dict() for s in self.symbols],
            'composition': self.composition.to_dict(),
            'psychological_indicators': list(self.psychological_indicators),
            'emotions': self.emotions.to_dict(),
            'risk': self.risk.to_dict(),
            'summary': self.summary,
            'degraded_stages': list(self.degraded_stages),
            'timestamp': self.timestamp.isoformat()
        }
