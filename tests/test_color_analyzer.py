"""
Unit tests for color distribution analysis.
"""

import os
import sys
import pytest
import numpy as np

# Add project root to path
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from analysis.color_analyzer import (
    ColorDistributionAnalyzer,
    BLACK_PREDOMINANCE_NOTE,
    MONOCHROME_NOTE,
    RICH_PALETTE_NOTE
)

BGR_RED = (0, 0, 255)
BGR_BLUE = (255, 0, 0)
BGR_WHITE = (255, 255, 255)
# Hue 175 in OpenCV units: the upper red band
BGR_CRIMSON = (42, 0, 255)


def solid_image(color, size=(100, 100)):
    image = np.zeros((size[0], size[1], 3), dtype=np.uint8)
    image[:, :] = color
    return image


def split_image(left, right, size=(100, 100)):
    """Left half in one color, right half in another."""
    image = solid_image(left, size)
    image[:, size[1] // 2:] = right
    return image


class TestColorDistributionAnalyzer:
    """Tests for HSV bucketing and interpretation."""

    @pytest.fixture
    def analyzer(self):
        return ColorDistributionAnalyzer()

    def test_all_black(self, analyzer):
        result = analyzer.analyze(solid_image((0, 0, 0)))

        assert result.distribution == {'black': 100.0}
        assert result.dominant_color == 'black'
        assert result.intensity == 0.0
        assert result.interpretations == [
            "Important black: possible anxiety or sadness",
            BLACK_PREDOMINANCE_NOTE
        ]

    def test_half_red_half_blue(self, analyzer):
        result = analyzer.analyze(split_image(BGR_RED, BGR_BLUE))

        assert result.distribution == {'red': 50.0, 'blue': 50.0}
        assert result.dominant_color == 'red'
        assert result.intensity == pytest.approx(1.0)

    def test_red_bands_are_merged(self, analyzer):
        result = analyzer.analyze(split_image(BGR_RED, BGR_CRIMSON))

        assert result.distribution == {'red': 100.0}
        assert 'red2' not in result.distribution

    def test_noise_floor_drops_small_buckets(self, analyzer):
        image = solid_image(BGR_WHITE)
        image[0, :20] = BGR_RED  # 0.2% of the pixels

        result = analyzer.analyze(image)

        assert result.distribution == {'white': 99.8}
        assert 'red' not in result.distribution
        assert 'other' not in result.distribution

    def test_unmatched_pixels_count_as_other(self, analyzer):
        # Hue 36 falls between the yellow and green ranges
        result = analyzer.analyze(solid_image((40, 200, 170)))

        assert result.distribution == {'other': 100.0}
        assert result.dominant_color == 'other'

    def test_percentages_never_exceed_100(self, analyzer):
        image = solid_image(BGR_WHITE, size=(90, 120))
        image[:30, :40] = BGR_RED
        image[30:60, 40:80] = BGR_BLUE
        image[60:, 80:] = (0, 0, 0)
        image[:30, 80:] = BGR_CRIMSON

        result = analyzer.analyze(image)

        assert sum(result.distribution.values()) <= 100.0 + 1e-6
        assert all(value > 0.5 for value in result.distribution.values())

    def test_empty_image(self, analyzer):
        result = analyzer.analyze(np.zeros((0, 0, 3), dtype=np.uint8))

        assert result.distribution == {}
        assert result.dominant_color == 'unknown'
        assert result.intensity == 0.0
        assert result.interpretations == []

    def test_custom_noise_floor(self):
        analyzer = ColorDistributionAnalyzer({'noise_floor': 30})
        image = solid_image(BGR_WHITE)
        image[:20, :] = BGR_BLUE  # 20%

        result = analyzer.analyze(image)

        assert 'blue' not in result.distribution
        assert result.distribution['white'] == 80.0


class TestColorInterpretation:

    @pytest.fixture
    def analyzer(self):
        return ColorDistributionAnalyzer()

    def test_monochrome(self, analyzer):
        assert analyzer.interpret({'white': 99.8}) == [
            "Dominant white: purity or emotional emptiness",
            MONOCHROME_NOTE
        ]

    def test_mild_presence(self, analyzer):
        interpretations = analyzer.interpret({'blue': 25.0, 'yellow': 75.0})

        assert interpretations == [
            "Yellow: joy, optimism",
            "Presence of blue: peace, tranquility"
        ]

    def test_rich_palette(self, analyzer):
        distribution = {'red': 20.0, 'blue': 20.0, 'green': 20.0, 'yellow': 20.0, 'white': 20.0}

        interpretations = analyzer.interpret(distribution)

        # Only the three largest buckets are described
        assert len(interpretations) == 4
        assert interpretations[-1] == RICH_PALETTE_NOTE

    def test_unlisted_color(self, analyzer):
        assert analyzer.interpret({'teal': 100.0})[0] == "Color teal: contextual meaning"
