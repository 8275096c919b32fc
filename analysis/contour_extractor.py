"""
Contour extraction for drawn shapes.

Edges are traced into closed boundary curves; tiny curves left by paper grain
or stray marks are dropped before classification.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)

MIN_CONTOUR_AREA = 100


@dataclass
class Contour:
    """Closed sequence of integer points, shaped (N, 1, 2) as OpenCV returns them."""

    points: np.ndarray

    @property
    def area(self) -> float:
        return cv2.contourArea(self.points)

    @property
    def bounding_rect(self) -> Tuple[int, int, int, int]:
        x, y, w, h = cv2.boundingRect(self.points)
        return int(x), int(y), int(w), int(h)

    @property
    def perimeter(self) -> float:
        return cv2.arcLength(self.points, True)


class ContourExtractor:
    """
    Grayscale -> Gaussian blur -> Canny -> hierarchical boundary tracing.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

        self.blur_kernel = tuple(self.config.get('blur_kernel', (5, 5)))
        self.canny_low = self.config.get('canny_low', 50)
        self.canny_high = self.config.get('canny_high', 150)
        self.min_area = self.config.get('min_area', MIN_CONTOUR_AREA)

    def extract(self, image: np.ndarray) -> List[Contour]:
        """
        Extract the contours of every drawn element.

        Args:
            image: Input image (H, W, 3) in BGR format

        Returns:
            Contours whose area exceeds the noise threshold
        """

        gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        blurred = cv2.GaussianBlur(gray, self.blur_kernel, 0)
        edges = cv2.Canny(blurred, self.canny_low, self.canny_high)

        raw_contours, _ = cv2.findContours(edges, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)

        contours = [Contour(points) for points in raw_contours]
        kept = [c for c in contours if c.area > self.min_area]

        logger.debug(f"Extracted {len(kept)} contours ({len(contours) - len(kept)} discarded as noise)")
        return kept
