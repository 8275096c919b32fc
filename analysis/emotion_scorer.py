#!/usr/bin/env python3
"""
Emotion Scoring

Combines color, shape/symbol and composition evidence into an 8-dimension
emotion vector, then derives the dominant emotion, a categorical emotional
state and a list of descriptive indicators.

"""

import logging
from typing import Any, Dict, List, Optional

from .results import (
    EMOTIONS,
    ColorDistribution,
    CompositionAnalysis,
    DetectedShape,
    DetectedSymbol,
    EmotionAnalysis,
    EmotionalIndicator
)

logger = logging.getLogger(__name__)

# Weights applied to percentage / 100 of each color bucket
COLOR_EMOTION_WEIGHTS = {
    'red': {'anger': 0.8, 'energy': 0.7, 'joy': 0.2},
    'blue': {'calm': 0.9, 'sadness': 0.6, 'fear': 0.3},
    'yellow': {'joy': 0.9, 'energy': 0.7},
    'green': {'calm': 0.8, 'joy': 0.4},
    'black': {'sadness': 0.8, 'anxiety': 0.9, 'fear': 0.5},
    'white': {'calm': 0.6, 'fear': 0.3},
    'orange': {'joy': 0.7, 'energy': 0.8},
    'purple': {'calm': 0.5, 'anxiety': 0.4},
    'brown': {'calm': 0.6, 'sadness': 0.2},
    'pink': {'love': 0.8, 'joy': 0.5, 'calm': 0.4},
    'gray': {'sadness': 0.5, 'calm': 0.3, 'anxiety': 0.4},
}

SYMBOL_EMOTION_DELTAS = {
    'human': {'love': 0.3, 'calm': 0.2},
    'face': {'love': 0.3, 'calm': 0.2},
    'isolation': {'sadness': 0.4, 'anxiety': 0.3, 'fear': 0.2},
    'emotional_expression': {'energy': 0.3},
    'past_focus': {'sadness': 0.3, 'calm': 0.2},
    'house': {'calm': 0.3, 'love': 0.2},
    'tree': {'calm': 0.2, 'joy': 0.1},
}
# Symbols that also reinforce whichever emotion leads at that point
LEADER_BOOST_SYMBOLS = {'emotional_expression': 0.2}

ORGANIC_DOMINANT_DELTAS = {'energy': 0.2, 'love': 0.1}
GEOMETRIC_DOMINANT_DELTAS = {'calm': 0.2}
PER_SHAPE_DELTAS = {
    'circle': ('calm', 0.1),
    'triangle': ('energy', 0.1),
}

COMPOSITION_EMOTION_DELTAS = {
    'space_usage': {
        'constricted': {'anxiety': 0.4, 'fear': 0.2, 'sadness': 0.1},
        'expansive': {'joy': 0.3, 'energy': 0.2, 'calm': 0.1},
        'crowded': {'anxiety': 0.3, 'energy': 0.2},
    },
    'pressure': {
        'heavy': {'anger': 0.3, 'energy': 0.2, 'anxiety': 0.1},
        'light': {'calm': 0.3, 'sadness': 0.1},
    },
    'balance': {
        'left-heavy': {'sadness': 0.2, 'calm': 0.1},
        'right-heavy': {'energy': 0.2, 'joy': 0.1},
    },
}

CONFLICTING_PAIRS = (('joy', 'sadness'), ('anger', 'calm'), ('energy', 'fear'))
CONFLICT_THRESHOLD = 0.4
HIGH_SCORE_THRESHOLD = 0.6
INTENSE_THRESHOLD = 0.8

COLOR_CORRELATIONS = {
    'red': "Intense energy, passion or anger",
    'blue': "Calm, serenity or sadness",
    'yellow': "Joy, optimism and positive energy",
    'black': "Anxiety, sadness or need for structure",
    'green': "Balance, growth and harmony",
    'white': "Purity, simplicity or emotional emptiness",
    'orange': "Creativity, enthusiasm and sociability",
    'purple': "Imagination, spirituality and sensitivity",
    'pink': "Tenderness, affection and gentleness",
    'brown': "Stability, security and pragmatism",
    'gray': "Neutrality, indecision or maturity",
}
DEFAULT_COLOR_CORRELATION = "Contextual emotional meaning"

STATE_CORRELATIONS = {
    'conflicted': "Contradictory emotions or internal tension",
    'volatile': "Changing or unstable emotions",
    'intense': "Strong and concentrated emotion",
    'stable': "Emotional balance",
    'neutral': "Moderate or contained emotions",
}
DEFAULT_STATE_CORRELATION = "Particular emotional state"

ORGANIC_TYPES = ('organic', 'blob')
GEOMETRIC_TYPES = ('square', 'rectangle', 'triangle')


def leading_emotion(scores: Dict[str, float]) -> str:
    """Highest scoring emotion; the first in vocabulary order wins ties."""

    return max(EMOTIONS, key=lambda emotion: scores.get(emotion, 0.0))


class EmotionScorer:
    """
    Multi-source heuristic emotion scorer.

    Evidence from colors, shapes/symbols and composition is accumulated as
    additive deltas, then normalized so the leading emotion scores 1.0.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    def score(self, colors: ColorDistribution, shapes: List[DetectedShape],
              symbols: List[DetectedSymbol], composition: CompositionAnalysis) -> EmotionAnalysis:
        """
        Score the emotions expressed by a drawing.

        Args:
            colors: Color distribution of the drawing
            shapes: Detected shapes (grouped or per contour; counts are summed)
            symbols: Detected symbols
            composition: Spatial composition

        Returns:
            EmotionAnalysis with normalized scores, dominant emotion, state and indicators
        """

        scores = {emotion: 0.0 for emotion in EMOTIONS}

        self._add_color_evidence(scores, colors)
        self._add_shape_evidence(scores, shapes, symbols)
        self._add_composition_evidence(scores, composition)

        scores = self.normalize(scores)

        analysis = EmotionAnalysis(
            scores = scores,
            dominant_emotion = leading_emotion(scores),
            emotional_state = self.assess_state(scores)
        )
        analysis.indicators = self._generate_indicators(analysis, colors, shapes, symbols)

        logger.debug(f"Emotion scores: {scores} -> {analysis.emotional_state}")
        return analysis

    def _add_color_evidence(self, scores: Dict[str, float], colors: ColorDistribution) -> None:
        for color, percentage in colors.distribution.items():
            weight = percentage / 100.0

            for emotion, factor in COLOR_EMOTION_WEIGHTS.get(color.lower(), {}).items():
                scores[emotion] += factor * weight

    def _add_shape_evidence(self, scores: Dict[str, float], shapes: List[DetectedShape],
                            symbols: List[DetectedSymbol]) -> None:
        for symbol in symbols:
            self._apply(scores, SYMBOL_EMOTION_DELTAS.get(symbol.type, {}))

            if symbol.type in LEADER_BOOST_SYMBOLS:
                scores[leading_emotion(scores)] += LEADER_BOOST_SYMBOLS[symbol.type]

        organic = sum(s.count for s in shapes if s.type in ORGANIC_TYPES)
        geometric = sum(s.count for s in shapes if s.type in GEOMETRIC_TYPES)

        if organic > geometric:
            self._apply(scores, ORGANIC_DOMINANT_DELTAS)
        elif shapes:
            self._apply(scores, GEOMETRIC_DOMINANT_DELTAS)

        for shape_type, (emotion, per_shape) in PER_SHAPE_DELTAS.items():
            count = sum(s.count for s in shapes if s.type == shape_type)
            scores[emotion] += per_shape * count

    def _add_composition_evidence(self, scores: Dict[str, float], composition: CompositionAnalysis) -> None:
        for attribute, table in COMPOSITION_EMOTION_DELTAS.items():
            self._apply(scores, table.get(getattr(composition, attribute), {}))

    @staticmethod
    def _apply(scores: Dict[str, float], deltas: Dict[str, float]) -> None:
        for emotion, delta in deltas.items():
            scores[emotion] += delta

    @staticmethod
    def normalize(scores: Dict[str, float]) -> Dict[str, float]:
        """Scale all scores by the maximum so the leader becomes 1.0."""

        max_score = max(scores.values())
        if max_score <= 0:
            return dict(scores)

        return {emotion: min(score / max_score, 1.0) for emotion, score in scores.items()}

    @staticmethod
    def assess_state(scores: Dict[str, float]) -> str:
        """
        Categorical emotional state, evaluated in order: conflicted, volatile,
        neutral, intense, stable.
        """

        for first, second in CONFLICTING_PAIRS:
            if scores.get(first, 0.0) > CONFLICT_THRESHOLD and scores.get(second, 0.0) > CONFLICT_THRESHOLD:
                return 'conflicted'

        high_scores = sum(1 for score in scores.values() if score > HIGH_SCORE_THRESHOLD)

        if high_scores >= 3:
            return 'volatile'
        if high_scores == 0:
            return 'neutral'
        if high_scores == 1 and max(scores.values()) > INTENSE_THRESHOLD:
            return 'intense'

        return 'stable'

    def _generate_indicators(self, analysis: EmotionAnalysis, colors: ColorDistribution,
                             shapes: List[DetectedShape],
                             symbols: List[DetectedSymbol]) -> List[EmotionalIndicator]:
        indicators = []

        if colors.dominant_color and colors.dominant_color != 'unknown':
            indicators.append(EmotionalIndicator(
                type = 'color',
                description = f"Dominant color: {colors.dominant_color}",
                confidence = 0.8,
                correlation = COLOR_CORRELATIONS.get(colors.dominant_color, DEFAULT_COLOR_CORRELATION)
            ))

        if any(s.type == 'circle' for s in shapes):
            indicators.append(EmotionalIndicator(
                type = 'shape',
                description = "Presence of round shapes",
                confidence = 0.7,
                correlation = "Emotional harmony and gentleness"
            ))

        if any(s.type == 'isolation' for s in symbols):
            indicators.append(EmotionalIndicator(
                type = 'symbol',
                description = "Withdrawal elements detected",
                confidence = 0.6,
                correlation = "Tendency toward introspection or need for protection"
            ))

        indicators.append(EmotionalIndicator(
            type = 'emotional',
            description = f"Dominant emotion: {analysis.dominant_emotion}",
            confidence = analysis.scores[analysis.dominant_emotion],
            correlation = "Main emotional state detected"
        ))

        indicators.append(EmotionalIndicator(
            type = 'state',
            description = f"Overall state: {analysis.emotional_state}",
            confidence = 0.7,
            correlation = STATE_CORRELATIONS.get(analysis.emotional_state, DEFAULT_STATE_CORRELATION)
        ))

        return indicators
