#!/usr/bin/env python3
"""
Geometric Shape Classifier

Types each contour as triangle, square, rectangle, circle, ellipse, blob or
organic from its vertex count, solidity and aspect ratio.

"""

import logging
from typing import Any, Dict, List, Optional

import cv2

from .contour_extractor import Contour, MIN_CONTOUR_AREA
from .results import ClassifiedShape

logger = logging.getLogger(__name__)

SQUARENESS_TOLERANCE = 0.2
APPROXIMATION_EPSILON = 0.02  # fraction of the perimeter
ROUND_MIN_VERTICES = 8
ROUND_MIN_SOLIDITY = 0.8
BLOB_MIN_SOLIDITY = 0.9

# shape -> (solidity threshold, confidence above, confidence at or below)
CONFIDENCE_BANDS = {
    'circle': (0.8, 0.9, 0.6),
    'ellipse': (0.8, 0.9, 0.6),
    'square': (0.85, 0.8, 0.5),
    'rectangle': (0.85, 0.8, 0.5),
    'triangle': (0.75, 0.7, 0.4),
}
DEFAULT_CONFIDENCE = 0.3
UNKNOWN_CONFIDENCE = 0.1


class ShapeClassifier:
    """
    Classifies contours into a fixed shape vocabulary.

    A contour whose geometry cannot be computed is typed 'unknown' instead of
    aborting the rest of the batch.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.min_area = self.config.get('min_area', MIN_CONTOUR_AREA)

    def classify(self, contour: Contour) -> ClassifiedShape:
        """
        Classify a single contour.

        Args:
            contour: Closed contour to classify

        Returns:
            ClassifiedShape with type, area, bounding box, solidity and confidence
        """

        area, bounding_rect = 0.0, (0, 0, 0, 0)

        try:
            area = contour.area
            bounding_rect = contour.bounding_rect

            hull = cv2.convexHull(contour.points)
            solidity = area / cv2.contourArea(hull)

            _, _, w, h = bounding_rect
            aspect_ratio = w / float(h)

            epsilon = APPROXIMATION_EPSILON * contour.perimeter
            vertices = len(cv2.approxPolyDP(contour.points, epsilon, True))

            shape_type = self._classify_geometry(area, vertices, solidity, aspect_ratio)

            return ClassifiedShape(
                shape_type = shape_type,
                area = area,
                bounding_rect = bounding_rect,
                solidity = solidity,
                confidence = self.confidence_for(shape_type, solidity)
            )

        except Exception as e:
            logger.warning(f"Shape classification failed: {str(e)}")
            # Keep whatever geometry was measured before the failure
            return ClassifiedShape(
                shape_type = 'unknown',
                area = area,
                bounding_rect = bounding_rect,
                confidence = UNKNOWN_CONFIDENCE
            )

    def classify_all(self, contours: List[Contour]) -> List[ClassifiedShape]:
        return [self.classify(contour) for contour in contours]

    def _classify_geometry(self, area: float, vertices: int,
                           solidity: float, aspect_ratio: float) -> str:
        is_square = abs(aspect_ratio - 1.0) < SQUARENESS_TOLERANCE

        if area < self.min_area:
            return 'noise'
        if vertices == 3:
            return 'triangle'
        if vertices == 4:
            return 'square' if is_square else 'rectangle'
        if vertices > ROUND_MIN_VERTICES and solidity > ROUND_MIN_SOLIDITY:
            return 'circle' if is_square else 'ellipse'

        return 'blob' if solidity > BLOB_MIN_SOLIDITY else 'organic'

    @staticmethod
    def confidence_for(shape_type: str, solidity: float) -> float:
        """Look up the confidence of a shape type for the given solidity."""

        if shape_type not in CONFIDENCE_BANDS:
            return DEFAULT_CONFIDENCE

        threshold, high, low = CONFIDENCE_BANDS[shape_type]
        return high if solidity > threshold else low
