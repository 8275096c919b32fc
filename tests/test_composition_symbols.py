"""
Unit tests for spatial composition analysis and symbol detection.
"""

import os
import sys
import pytest

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from analysis.composition_analyzer import CompositionAnalyzer
from analysis.symbol_detector import (
    SymbolDetector,
    FLUID_EXPRESSION_INDICATOR,
    SHYNESS_INDICATOR
)
from analysis.results import CompositionAnalysis, DetectedShape


def shape(shape_type, size, position='center'):
    """One located shape, as produced per contour."""
    return DetectedShape(shape_type, 1, float(size), position, 0.5)


NEUTRAL = CompositionAnalysis(balance='balanced', space_usage='normal', pressure='medium')
LARGE_PAGE = (1000, 1000)


class TestCompositionAnalyzer:

    @pytest.fixture
    def analyzer(self):
        return CompositionAnalyzer()

    def test_no_shapes(self, analyzer):
        composition = analyzer.analyze([], (100, 100))

        assert composition.balance == 'empty'
        assert composition.space_usage == 'minimal'
        assert composition.pressure == 'unknown'
        assert composition.indicators == []

    def test_small_left_shapes(self, analyzer):
        shapes = [shape('blob', 100, 'left'), shape('blob', 100, 'left')]

        composition = analyzer.analyze(shapes, (100, 100))

        assert composition.balance == 'left-heavy'
        assert composition.space_usage == 'constricted'
        assert composition.pressure == 'light'
        assert composition.indicators == [
            "Orientation toward the past/maternal figure",
            "Reserved or shy expression",
            "Delicacy in the stroke"
        ]

    def test_balanced_crowded_heavy(self, analyzer):
        shapes = [shape('square', 3000, 'left'), shape('square', 3000, 'right')]

        composition = analyzer.analyze(shapes, (100, 100))

        assert composition.balance == 'balanced'
        assert composition.space_usage == 'crowded'
        assert composition.pressure == 'heavy'
        assert composition.indicators == ["Intensity of expression"]

    def test_right_heavy_expansive_medium(self, analyzer):
        shapes = [shape('circle', 1000, 'right') for _ in range(4)]

        composition = analyzer.analyze(shapes, (100, 100))

        assert composition.balance == 'right-heavy'
        assert composition.space_usage == 'expansive'
        assert composition.pressure == 'medium'
        assert composition.indicators == [
            "Orientation toward the future/paternal figure",
            "Spatial confidence"
        ]

    def test_one_shape_difference_is_balanced(self, analyzer):
        shapes = [shape('blob', 1500, 'left'), shape('blob', 1500, 'center')]

        assert analyzer.analyze(shapes, (100, 100)).balance == 'balanced'


class TestSymbolDetector:
    """Tests for the structural motif and emotional pattern rules."""

    @pytest.fixture
    def detector(self):
        return SymbolDetector()

    def detect_types(self, detector, shapes, composition=NEUTRAL):
        return [s.type for s in detector.detect(shapes, composition, LARGE_PAGE)]

    def test_no_shapes_no_symbols(self, detector):
        assert self.detect_types(detector, []) == []

    def test_house(self, detector):
        symbols = detector.detect([shape('rectangle', 3000), shape('triangle', 600)], NEUTRAL, LARGE_PAGE)

        assert [s.type for s in symbols] == ['house']
        assert symbols[0].complexity == 'structured'
        assert symbols[0].count == 1
        assert 'home' in symbols[0].characteristics

    def test_face(self, detector):
        shapes = [shape('circle', 2000), shape('circle', 500), shape('ellipse', 400)]

        assert self.detect_types(detector, shapes) == ['face']

    def test_human_figure(self, detector):
        shapes = [shape('circle', 500), shape('rectangle', 800)]

        assert self.detect_types(detector, shapes) == ['human']

    def test_tree(self, detector):
        shapes = [shape('rectangle', 800), shape('organic', 1500)]

        assert self.detect_types(detector, shapes) == ['tree']

    def test_isolation_and_past_focus(self, detector):
        composition = CompositionAnalysis(balance='left-heavy', space_usage='constricted', pressure='light')

        assert self.detect_types(detector, [], composition) == ['isolation', 'past_focus']

    def test_emotional_expression(self, detector):
        shapes = [shape('organic', 200) for _ in range(8)] + [shape('rectangle', 300) for _ in range(2)]

        types = self.detect_types(detector, shapes)

        # The small rectangles also read as a tree trunk without foliage: no tree
        assert types == ['emotional_expression']

    def test_organic_ratio_must_exceed_threshold(self, detector):
        shapes = [shape('blob', 200) for _ in range(7)] + [shape('square', 300) for _ in range(3)]

        assert 'emotional_expression' not in self.detect_types(detector, shapes)

    def test_several_symbols_at_once(self, detector):
        shapes = [
            shape('rectangle', 3000),
            shape('triangle', 600),
            shape('rectangle', 800),
            shape('circle', 1500),
        ]

        types = self.detect_types(detector, shapes)

        assert types == ['human', 'house', 'tree']


class TestPsychologicalIndicators:

    @pytest.fixture
    def detector(self):
        return SymbolDetector()

    def test_fluid_expression(self, detector):
        shapes = [shape('organic', 200) for _ in range(8)] + [shape('rectangle', 300) for _ in range(2)]
        symbols = detector.detect(shapes, NEUTRAL, LARGE_PAGE)

        indicators = detector.psychological_indicators(shapes, symbols, NEUTRAL)

        assert indicators == [FLUID_EXPRESSION_INDICATOR, "Marked emotional expressiveness"]

    def test_house_theme(self, detector):
        shapes = [shape('rectangle', 3000), shape('triangle', 600)]
        symbols = detector.detect(shapes, NEUTRAL, LARGE_PAGE)

        assert detector.psychological_indicators(shapes, symbols, NEUTRAL) == ["Family and home themes"]

    def test_shy_self_representation(self, detector):
        composition = CompositionAnalysis(balance='balanced', space_usage='constricted', pressure='heavy')
        shapes = [shape('circle', 2000), shape('circle', 500), shape('circle', 400)]
        symbols = detector.detect(shapes, composition, LARGE_PAGE)

        indicators = detector.psychological_indicators(shapes, symbols, composition)

        # The shyness note directly follows the self-representation note
        assert indicators == [
            "Representation of self or others",
            SHYNESS_INDICATOR,
            "Tendency to withdraw or need for personal space",
            "Emotional intensity in the expression"
        ]

    def test_shyness_noted_once_for_human_and_face(self, detector):
        composition = CompositionAnalysis(balance='balanced', space_usage='constricted', pressure='medium')
        shapes = [shape('circle', 2000), shape('circle', 500), shape('circle', 400), shape('rectangle', 800)]
        symbols = detector.detect(shapes, composition, LARGE_PAGE)

        indicators = detector.psychological_indicators(shapes, symbols, composition)

        assert [s.type for s in symbols][:2] == ['human', 'face']
        assert indicators.count(SHYNESS_INDICATOR) == 1
        assert indicators.index(SHYNESS_INDICATOR) == indicators.index("Representation of self or others") + 1

    def test_no_shyness_without_constriction(self, detector):
        shapes = [shape('circle', 2000), shape('circle', 500), shape('circle', 400)]
        symbols = detector.detect(shapes, NEUTRAL, LARGE_PAGE)

        assert SHYNESS_INDICATOR not in detector.psychological_indicators(shapes, symbols, NEUTRAL)

    def test_text_requires_detected_symbol(self, detector):
        shapes = [shape('rectangle', 3000)]

        assert detector.psychological_indicators(shapes, [], NEUTRAL) == []
