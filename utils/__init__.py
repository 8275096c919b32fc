"""
Utilities Module for Drawing Analysis

Provides validation tools shared by the analyzer and the web API.
"""

from .validation_api import (
    validate_image_format,
    validate_file_size,
    validate_analysis_config,
    sanitize_filename,
    ValidationError,
    SUPPORTED_IMAGE_FORMATS,
    MAX_FILE_SIZE
)

__all__ = [
    'validate_image_format',
    'validate_file_size',
    'validate_analysis_config',
    'sanitize_filename',
    'ValidationError',
    'SUPPORTED_IMAGE_FORMATS',
    'MAX_FILE_SIZE'
]
