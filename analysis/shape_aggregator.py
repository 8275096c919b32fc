"""
Shape aggregation.

Places each classified shape relative to the image center and groups shapes
of the same type into summary records.
"""

import logging
from collections import Counter
from typing import List, Tuple

import numpy as np

from .results import ClassifiedShape, DetectedShape

logger = logging.getLogger(__name__)

POSITION_MARGIN = 0.25  # fraction of the image dimension


class ShapeAggregator:
    """Locates shapes in the drawing and groups them by type."""

    def __init__(self, margin: float = POSITION_MARGIN):
        self.margin = margin

    def position_of(self, bounding_rect: Tuple[int, int, int, int],
                    image_size: Tuple[int, int]) -> str:
        """
        Position of a bounding box center relative to the image center.

        Args:
            bounding_rect: (x, y, w, h) of the shape
            image_size: (height, width) of the drawing

        Returns:
            One of 'left', 'right', 'top', 'bottom' or 'center'
        """

        x, y, w, h = bounding_rect
        height, width = image_size

        center_x = x + w / 2.0
        center_y = y + h / 2.0

        if center_x < width / 2.0 - width * self.margin:
            return 'left'
        if center_x > width / 2.0 + width * self.margin:
            return 'right'
        if center_y < height / 2.0 - height * self.margin:
            return 'top'
        if center_y > height / 2.0 + height * self.margin:
            return 'bottom'

        return 'center'

    def locate(self, classified: List[ClassifiedShape],
               image_size: Tuple[int, int]) -> List[DetectedShape]:
        """One DetectedShape (count 1) per classified contour."""

        return [
            DetectedShape(
                type = shape.shape_type,
                count = 1,
                average_size = shape.area,
                position = self.position_of(shape.bounding_rect, image_size),
                confidence = shape.confidence
            )
            for shape in classified
        ]

    def aggregate(self, shapes: List[DetectedShape]) -> List[DetectedShape]:
        """
        Group located shapes by type, in order of first appearance.

        Each group reports its count, mean size, mean confidence and the most
        frequent position among its members.
        """

        groups = {}
        for shape in shapes:
            groups.setdefault(shape.type, []).append(shape)

        aggregated = [
            DetectedShape(
                type = shape_type,
                count = len(members),
                average_size = float(np.mean([m.average_size for m in members])),
                position = self.dominant_position(members),
                confidence = float(np.mean([m.confidence for m in members]))
            )
            for shape_type, members in groups.items()
        ]

        logger.debug(f"Aggregated {len(shapes)} shapes into {len(aggregated)} groups")
        return aggregated

    @staticmethod
    def dominant_position(shapes: List[DetectedShape]) -> str:
        if not shapes:
            return 'unknown'

        # most_common keeps first-seen order among equal counts
        return Counter(s.position for s in shapes).most_common(1)[0][0]
