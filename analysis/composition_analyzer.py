#!/usr/bin/env python3
"""
Spatial Composition Analyzer

Derives balance, space usage and stroke pressure from the shapes located in
a drawing, and attaches the matching interpretation indicators.

"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .results import CompositionAnalysis, DetectedShape

logger = logging.getLogger(__name__)

# (upper bound, category), checked in order; the last category has no bound
SPACE_USAGE_BANDS = ((0.1, 'constricted'), (0.3, 'normal'), (0.6, 'expansive'))
SPACE_USAGE_OVERFLOW = 'crowded'

PRESSURE_BANDS = ((500, 'light'), (2000, 'medium'))
PRESSURE_OVERFLOW = 'heavy'

COMPOSITION_INDICATORS = {
    ('balance', 'left-heavy'): "Orientation toward the past/maternal figure",
    ('balance', 'right-heavy'): "Orientation toward the future/paternal figure",
    ('space_usage', 'constricted'): "Reserved or shy expression",
    ('space_usage', 'expansive'): "Spatial confidence",
    ('pressure', 'heavy'): "Intensity of expression",
    ('pressure', 'light'): "Delicacy in the stroke",
}


class CompositionAnalyzer:
    """
    Spatial composition analysis of the located shapes.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

    def analyze(self, shapes: List[DetectedShape],
                image_size: Tuple[int, int]) -> CompositionAnalysis:
        """
        Analyze the layout of the drawing.

        Args:
            shapes: One located shape per contour
            image_size: (height, width) of the drawing

        Returns:
            CompositionAnalysis; an empty shape set yields empty/minimal/unknown
        """

        if not shapes:
            return CompositionAnalysis(balance='empty', space_usage='minimal', pressure='unknown')

        height, width = image_size

        total_area = sum(s.average_size for s in shapes)
        coverage = total_area / float(height * width)
        mean_size = total_area / len(shapes)

        composition = CompositionAnalysis(
            balance = self._assess_balance(shapes),
            space_usage = self._band(coverage, SPACE_USAGE_BANDS, SPACE_USAGE_OVERFLOW),
            pressure = self._band(mean_size, PRESSURE_BANDS, PRESSURE_OVERFLOW)
        )
        composition.indicators = self.indicators_for(composition)

        logger.debug(f"Composition: balance={composition.balance}, "
                     f"space={composition.space_usage} ({coverage:.3f}), pressure={composition.pressure}")
        return composition

    def _assess_balance(self, shapes: List[DetectedShape]) -> str:
        left = sum(1 for s in shapes if s.position == 'left')
        right = sum(1 for s in shapes if s.position == 'right')

        if abs(left - right) <= 1:
            return 'balanced'

        return 'left-heavy' if left > right else 'right-heavy'

    @staticmethod
    def _band(value: float, bands, overflow: str) -> str:
        for upper, category in bands:
            if value < upper:
                return category

        return overflow

    @staticmethod
    def indicators_for(composition: CompositionAnalysis) -> List[str]:
        indicators = []

        for attribute in ('balance', 'space_usage', 'pressure'):
            text = COMPOSITION_INDICATORS.get((attribute, getattr(composition, attribute)))
            if text:
                indicators.append(text)

        return indicators
