#!/usr/bin/env python3
"""
Symbol Detection

Matches co-occurring shapes and the spatial composition against a small set
of drawn motifs (human figure, face, house, tree) and emotional patterns
(isolation, past focus, emotional expression).

"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from .results import CompositionAnalysis, DetectedShape, DetectedSymbol

logger = logging.getLogger(__name__)

ROUND_TYPES = ('circle', 'ellipse')
ORGANIC_TYPES = ('organic', 'blob')
QUADRILATERAL_TYPES = ('square', 'rectangle')
GEOMETRIC_TYPES = ('square', 'rectangle', 'triangle')
SELF_SYMBOLS = ('human', 'face')

HEAD_MAX_IMAGE_FRACTION = 0.1
ORGANIC_EXPRESSION_RATIO = 0.7

# symbol -> (complexity, characteristics)
SYMBOL_DESCRIPTIONS = {
    'human': ('detailed', ['human_figure', 'self_representation']),
    'face': ('organic', ['face', 'expression', 'identity']),
    'house': ('structured', ['dwelling', 'home', 'structure']),
    'tree': ('natural', ['nature', 'growth', 'life']),
    'isolation': ('emotional', ['withdrawal', 'shyness', 'protection']),
    'past_focus': ('emotional', ['nostalgia', 'attachment', 'memory']),
    'emotional_expression': ('fluid', ['sensitivity', 'expressiveness', 'emotionality']),
}

SYMBOL_INDICATORS = {
    'human': "Representation of self or others",
    'face': "Representation of self or others",
    'house': "Family and home themes",
    'tree': "Themes of growth and vitality",
    'isolation': "Tendency to withdraw or need for personal space",
    'emotional_expression': "Marked emotional expressiveness",
}

FLUID_EXPRESSION_INDICATOR = "Fluid and organic emotional expression"
SHYNESS_INDICATOR = "Possible shyness or reserve in expression"
PRESSURE_INDICATORS = {
    'heavy': "Emotional intensity in the expression",
    'light': "Delicacy and sensitivity in the stroke",
}


def _of_type(shapes: List[DetectedShape], types: Tuple[str, ...]) -> List[DetectedShape]:
    return [s for s in shapes if s.type in types]


class SymbolDetector:
    """
    Rule-based detector for higher-level symbols.

    Every rule is independent, so several symbols may be reported for the
    same drawing.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}

        self.structural_rules = (
            ('human', self._detect_human_figure),
            ('face', self._detect_face),
            ('house', self._detect_house),
            ('tree', self._detect_tree),
        )

    def detect(self, shapes: List[DetectedShape], composition: CompositionAnalysis,
               image_size: Tuple[int, int]) -> List[DetectedSymbol]:
        """
        Detect symbols in a drawing.

        Args:
            shapes: One located shape per contour
            composition: Spatial composition of the same shapes
            image_size: (height, width) of the drawing

        Returns:
            Detected symbols, structural motifs first
        """

        detected = [name for name, rule in self.structural_rules if rule(shapes, image_size)]

        if composition.space_usage == 'constricted':
            detected.append('isolation')

        if composition.balance == 'left-heavy':
            detected.append('past_focus')

        if shapes and len(_of_type(shapes, ORGANIC_TYPES)) > len(shapes) * ORGANIC_EXPRESSION_RATIO:
            detected.append('emotional_expression')

        symbols = [self._build_symbol(name) for name in detected]

        logger.debug(f"Detected symbols: {detected}")
        return symbols

    def _build_symbol(self, symbol_type: str) -> DetectedSymbol:
        complexity, characteristics = SYMBOL_DESCRIPTIONS[symbol_type]
        return DetectedSymbol(
            type = symbol_type,
            count = 1,
            complexity = complexity,
            characteristics = list(characteristics)
        )

    def _detect_human_figure(self, shapes: List[DetectedShape], image_size: Tuple[int, int]) -> bool:
        height, width = image_size
        head_limit = width * height * HEAD_MAX_IMAGE_FRACTION

        has_head = any(s.average_size < head_limit for s in _of_type(shapes, ROUND_TYPES))
        has_body = (any(s.average_size > 500 for s in _of_type(shapes, ('rectangle',)))
                    or any(s.average_size > 1000 for s in _of_type(shapes, ORGANIC_TYPES)))

        return has_head and has_body

    def _detect_face(self, shapes: List[DetectedShape], image_size: Tuple[int, int]) -> bool:
        circles = _of_type(shapes, ROUND_TYPES)

        small = [c for c in circles if c.average_size < 1000]
        medium = [c for c in circles if 1000 <= c.average_size < 5000]

        return len(medium) >= 1 and len(small) >= 2

    def _detect_house(self, shapes: List[DetectedShape], image_size: Tuple[int, int]) -> bool:
        has_walls = any(s.average_size > 2000 for s in _of_type(shapes, QUADRILATERAL_TYPES))
        has_roof = any(s.average_size > 500 for s in _of_type(shapes, ('triangle',)))

        return has_walls and has_roof

    def _detect_tree(self, shapes: List[DetectedShape], image_size: Tuple[int, int]) -> bool:
        has_trunk = any(s.average_size < 2000 for s in _of_type(shapes, ('rectangle',)))
        has_foliage = any(s.average_size > 1000
                          for s in _of_type(shapes, ('circle',) + ORGANIC_TYPES))

        return has_trunk and has_foliage

    def psychological_indicators(self, shapes: List[DetectedShape],
                                 symbols: List[DetectedSymbol],
                                 composition: CompositionAnalysis) -> List[str]:
        """
        Interpretation texts for the detected shapes, symbols and composition.

        A text tied to a symbol only appears when that symbol was detected.
        """

        indicators = []
        symbol_types = [s.type for s in symbols]

        organic = sum(s.count for s in _of_type(shapes, ORGANIC_TYPES))
        geometric = sum(s.count for s in _of_type(shapes, GEOMETRIC_TYPES))
        if organic > geometric * 2:
            indicators.append(FLUID_EXPRESSION_INDICATOR)

        for symbol_type in symbol_types:
            text = SYMBOL_INDICATORS.get(symbol_type)
            if text and text not in indicators:
                indicators.append(text)

                # Shyness qualifies the self-representation note it follows
                if symbol_type in SELF_SYMBOLS and composition.space_usage == 'constricted':
                    indicators.append(SHYNESS_INDICATOR)

        if composition.pressure in PRESSURE_INDICATORS:
            indicators.append(PRESSURE_INDICATORS[composition.pressure])

        return indicators
