"""
Preprocessing Module

Image loading and cleanup that runs before any drawing analysis stage.
"""

from .image_preprocessor import ImagePreprocessor, ImageLoadError, create_preprocessing_pipeline

__all__ = [
    'ImagePreprocessor',
    'ImageLoadError',
    'create_preprocessing_pipeline'
]
