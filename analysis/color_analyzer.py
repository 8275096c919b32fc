#!/usr/bin/env python3
"""
Color Distribution Analysis

Partitions the pixels of a drawing into named HSV color buckets and turns the
resulting distribution into short interpretation notes.

"""

import logging
from typing import Any, Dict, List, Optional

import cv2
import numpy as np

from .results import ColorDistribution

logger = logging.getLogger(__name__)

# OpenCV HSV ranges (H: 0-180, S and V: 0-255). Order matters: a pixel belongs
# to the first range that claims it. Red wraps across hue 0 and is counted in
# two bands that are merged afterwards.
COLOR_RANGES = (
    ('red',    (0, 100, 100),   (10, 255, 255)),
    ('red2',   (170, 100, 100), (180, 255, 255)),
    ('orange', (10, 100, 100),  (20, 255, 255)),
    ('yellow', (20, 100, 100),  (30, 255, 255)),
    ('green',  (40, 100, 100),  (80, 255, 255)),
    ('blue',   (100, 100, 100), (130, 255, 255)),
    ('purple', (130, 100, 100), (170, 255, 255)),
    ('pink',   (140, 50, 100),  (170, 255, 255)),
    ('brown',  (10, 100, 50),   (20, 255, 150)),
    ('black',  (0, 0, 0),       (180, 255, 50)),
    ('white',  (0, 0, 200),     (180, 50, 255)),
    ('gray',   (0, 0, 50),      (180, 50, 200)),
)

SECONDARY_BANDS = {'red2': 'red'}

NOISE_FLOOR_PERCENT = 0.5

# color -> (strong-presence threshold, strong phrase, mild phrase)
COLOR_INTERPRETATIONS = {
    'red': (30, "Dominant red: intense energy, passion",
            "Presence of red: energy, vitality"),
    'blue': (30, "Dominant blue: calm, serenity",
             "Presence of blue: peace, tranquility"),
    'black': (20, "Important black: possible anxiety or sadness",
              "Traces of black: may indicate anxiety"),
    'white': (30, "Dominant white: purity or emotional emptiness",
              "Presence of white: clarity, innocence"),
    'yellow': (None, "Yellow: joy, optimism", None),
    'green': (None, "Green: balance, growth", None),
    'orange': (None, "Orange: creativity, enthusiasm", None),
    'purple': (None, "Purple: imagination, spirituality", None),
    'pink': (None, "Pink: tenderness, affection", None),
    'brown': (None, "Brown: stability, security", None),
    'gray': (None, "Gray: neutrality, maturity", None),
    'other': (None, "Varied colors: complex palette", None),
}

BLACK_PREDOMINANCE_NOTE = "Predominance of black: calls for particular attention"
MONOCHROME_NOTE = "Monochromatic drawing: focused expression"
RICH_PALETTE_NOTE = "Varied color palette: rich emotional expression"


class ColorDistributionAnalyzer:
    """
    Measures how much of a drawing each named color occupies.

    Buckets are exclusive: every pixel is attributed to at most one color, so
    the percentages never sum above 100.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.noise_floor = self.config.get('noise_floor', NOISE_FLOOR_PERCENT)

    def analyze(self, image: np.ndarray) -> ColorDistribution:
        """
        Compute the color distribution of a BGR image.

        Args:
            image: Input image (H, W, 3) in BGR format

        Returns:
            ColorDistribution; an image without pixels yields the empty default
        """

        if image is None or image.size == 0:
            return ColorDistribution()

        total_pixels = image.shape[0] * image.shape[1]
        hsv = cv2.cvtColor(image, cv2.COLOR_BGR2HSV)

        distribution = self._bucket_pixels(hsv, total_pixels)
        dominant_color = max(distribution, key=distribution.get) if distribution else 'unknown'

        result = ColorDistribution(
            distribution = distribution,
            dominant_color = dominant_color,
            intensity = self._calculate_intensity(hsv),
            interpretations = self.interpret(distribution)
        )

        logger.debug(f"Color distribution: {distribution}")
        return result

    def _bucket_pixels(self, hsv: np.ndarray, total_pixels: int) -> Dict[str, float]:
        """Assign pixels to the first matching range, dropping buckets under the noise floor."""

        distribution = {}
        claimed = np.zeros(hsv.shape[:2], dtype=np.uint8)

        for color_name, lower, upper in COLOR_RANGES:
            mask = cv2.inRange(hsv, np.array(lower, dtype=np.uint8), np.array(upper, dtype=np.uint8))

            # Exclude pixels already attributed to an earlier color
            mask = cv2.bitwise_and(mask, cv2.bitwise_not(claimed))

            percentage = cv2.countNonZero(mask) / total_pixels * 100

            if percentage > self.noise_floor:
                distribution[color_name] = round(percentage, 2)
                claimed = cv2.bitwise_or(claimed, mask)

        remaining = (total_pixels - cv2.countNonZero(claimed)) / total_pixels * 100
        if remaining > self.noise_floor:
            distribution['other'] = round(remaining, 2)

        for band, color_name in SECONDARY_BANDS.items():
            if band in distribution:
                merged = distribution.get(color_name, 0.0) + distribution.pop(band)
                distribution[color_name] = round(merged, 2)

        return distribution

    def _calculate_intensity(self, hsv: np.ndarray) -> float:
        """Average of the mean saturation and mean value, each in [0, 1]."""

        avg_saturation = float(hsv[:, :, 1].mean()) / 255.0
        avg_value = float(hsv[:, :, 2].mean()) / 255.0

        return (avg_saturation + avg_value) / 2.0

    def interpret(self, distribution: Dict[str, float]) -> List[str]:
        """Describe the three largest buckets, then add one note on the palette as a whole."""

        interpretations = []

        top_colors = sorted(distribution.items(), key=lambda item: item[1], reverse=True)[:3]
        for color, percentage in top_colors:
            interpretations.append(self._interpret_color(color, percentage))

        if distribution.get('black', 0.0) > 50:
            interpretations.append(BLACK_PREDOMINANCE_NOTE)
        elif len(distribution) == 1:
            interpretations.append(MONOCHROME_NOTE)
        elif len(distribution) >= 5:
            interpretations.append(RICH_PALETTE_NOTE)

        return interpretations

    def _interpret_color(self, color: str, percentage: float) -> str:
        if color not in COLOR_INTERPRETATIONS:
            return f"Color {color}: contextual meaning"

        threshold, strong, mild = COLOR_INTERPRETATIONS[color]
        if threshold is None or percentage > threshold:
            return strong

        return mild
