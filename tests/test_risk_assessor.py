"""
Unit tests for risk assessment.
"""

import os
import sys
import pytest

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from analysis.risk_assessor import RiskAssessor, RiskLevel
from analysis.results import EMOTIONS, EmotionAnalysis


def emotions_with(state='stable', **values):
    scores = {emotion: 0.0 for emotion in EMOTIONS}
    scores.update(values)
    return EmotionAnalysis(scores=scores, emotional_state=state)


class TestRiskAssessor:

    @pytest.fixture
    def assessor(self):
        return RiskAssessor()

    def test_low_risk(self, assessor):
        risk = assessor.assess(emotions_with(state='intense', calm=1.0))

        assert risk.level == 'low'
        assert risk.risk_factors == []
        assert risk.recommendations == ["Continue observing normal development"]
        assert risk.requires_attention is False

    def test_medium_risk(self, assessor):
        risk = assessor.assess(emotions_with(sadness=0.8, joy=1.0))

        assert risk.level == 'medium'
        assert risk.risk_factors == ["High sadness detected"]
        assert risk.recommendations == [
            "Observe recent behavior and mood",
            "Attentive monitoring recommended"
        ]
        assert risk.requires_attention is True

    def test_high_risk(self, assessor):
        risk = assessor.assess(emotions_with(anxiety=1.0, sadness=0.89, fear=0.56))

        assert risk.level == 'high'
        assert risk.risk_factors == ["High sadness detected", "Notable anxiety", "Fear detected"]
        assert risk.recommendations[-1] == "Professional consultation recommended"
        assert risk.requires_attention is True

    def test_thresholds_are_strict(self, assessor):
        risk = assessor.assess(emotions_with(sadness=0.7, anger=0.7, anxiety=0.6, fear=0.5))

        assert risk.level == 'low'

    def test_state_rules(self, assessor):
        conflicted = assessor.assess(emotions_with(state='conflicted'))
        volatile = assessor.assess(emotions_with(state='volatile'))

        assert conflicted.risk_factors == ["Internal emotional conflict"]
        assert volatile.risk_factors == ["Emotional instability"]
        assert conflicted.level == volatile.level == 'medium'

    def test_every_rule_triggered(self, assessor):
        emotions = emotions_with(state='volatile', sadness=0.9, anger=0.9, anxiety=1.0, fear=0.9)

        risk = assessor.assess(emotions)

        assert len(risk.risk_factors) == 5
        # One recommendation per factor, plus the level recommendation
        assert len(risk.recommendations) == 6
        assert risk.level == 'high'

    def test_level_is_monotonic_in_factor_count(self):
        order = [RiskLevel.LOW, RiskLevel.MEDIUM, RiskLevel.HIGH]
        levels = [order.index(RiskAssessor.level_for(n)) for n in range(7)]

        assert levels == sorted(levels)
        assert RiskAssessor.level_for(0) == RiskLevel.LOW
        assert RiskAssessor.level_for(2) == RiskLevel.MEDIUM
        assert RiskAssessor.level_for(3) == RiskLevel.HIGH

    def test_unknown_assessment(self):
        risk = RiskAssessor.unknown()

        assert risk.level == 'unknown'
        assert risk.risk_factors == []
        assert risk.recommendations == ["Assessment should be repeated"]
        assert risk.requires_attention is False
