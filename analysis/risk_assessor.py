#!/usr/bin/env python3
"""
Risk Assessment

Applies fixed threshold rules to the emotion scores and emotional state and
turns the triggered rules into a risk level with recommendations.

"""

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from .results import EmotionAnalysis, RiskAssessment

logger = logging.getLogger(__name__)


class RiskLevel(Enum):
    """Risk levels for a drawing analysis."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    UNKNOWN = "unknown"


# (emotion, threshold, risk factor, recommendation)
SCORE_RULES = (
    ('sadness', 0.7, "High sadness detected", "Observe recent behavior and mood"),
    ('anger', 0.7, "Intense anger detected", "Encourage verbal expression of emotions"),
    ('anxiety', 0.6, "Notable anxiety", "Relaxing and reassuring activities recommended"),
    ('fear', 0.5, "Fear detected", "Reassure and create a secure environment"),
)

# emotional state -> (risk factor, recommendation)
STATE_RULES = {
    'conflicted': ("Internal emotional conflict", "Help put contradictory emotions into words"),
    'volatile': ("Emotional instability", "Establish reassuring routines"),
}

HIGH_RISK_MIN_FACTORS = 3

LEVEL_RECOMMENDATIONS = {
    RiskLevel.HIGH: "Professional consultation recommended",
    RiskLevel.MEDIUM: "Attentive monitoring recommended",
    RiskLevel.LOW: "Continue observing normal development",
}
UNKNOWN_RECOMMENDATION = "Assessment should be repeated"


class RiskAssessor:
    """
    Rule-based risk assessor.

    Each triggered rule contributes one risk factor and one recommendation, in
    rule order; the number of factors sets the level.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    def assess(self, emotions: EmotionAnalysis) -> RiskAssessment:
        """
        Assess the risk level of an emotion analysis.

        Args:
            emotions: Normalized emotion scores and emotional state

        Returns:
            RiskAssessment with level, factors, recommendations and attention flag
        """

        risk_factors = []
        recommendations = []

        for emotion, threshold, factor, recommendation in SCORE_RULES:
            if emotions.scores.get(emotion, 0.0) > threshold:
                risk_factors.append(factor)
                recommendations.append(recommendation)

        if emotions.emotional_state in STATE_RULES:
            factor, recommendation = STATE_RULES[emotions.emotional_state]
            risk_factors.append(factor)
            recommendations.append(recommendation)

        level = self.level_for(len(risk_factors))
        recommendations.append(LEVEL_RECOMMENDATIONS[level])

        logger.debug(f"Risk level {level.value} from {len(risk_factors)} factors")

        return RiskAssessment(
            level = level.value,
            risk_factors = risk_factors,
            recommendations = recommendations,
            requires_attention = level in (RiskLevel.MEDIUM, RiskLevel.HIGH)
        )

    @staticmethod
    def level_for(factor_count: int) -> RiskLevel:
        if factor_count >= HIGH_RISK_MIN_FACTORS:
            return RiskLevel.HIGH
        if factor_count >= 1:
            return RiskLevel.MEDIUM

        return RiskLevel.LOW

    @staticmethod
    def unknown() -> RiskAssessment:
        """Result used when the assessment itself could not be completed."""

        return RiskAssessment(
            level = RiskLevel.UNKNOWN.value,
            recommendations = [UNKNOWN_RECOMMENDATION],
            requires_attention = False
        )
