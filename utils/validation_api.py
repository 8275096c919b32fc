"""
Validation utilities for the Drawing Analysis service

This module provides validation functions for API inputs, image formats,
and analyzer configuration parameters.
"""

import os
import re
from typing import Dict, Any, List
from pathlib import Path
import logging

logger = logging.getLogger(__name__)

# Supported image formats
SUPPORTED_IMAGE_FORMATS = {
    '.jpg', '.jpeg', '.png', '.tiff', '.tif', '.bmp', '.webp'
}

# Maximum upload size (in bytes) - 10MB
MAX_FILE_SIZE = 10 * 1024 * 1024

# section -> {key: expected type(s)}
CONFIG_SCHEMA = {
    'preprocessing': {
        'noise_reduction': bool,
        'blur_kernel': (tuple, list),
        'contrast_gain': (int, float)
    },
    'color': {
        'noise_floor': (int, float)
    },
    'contours': {
        'blur_kernel': (tuple, list),
        'canny_low': (int, float),
        'canny_high': (int, float),
        'min_area': (int, float)
    },
    'summary': {
        'max_shapes': int
    }
}

def validate_image_format(filename: str) -> bool:
    """
    Validate if the image format is supported.

    Args:
        filename: Name of the image file

    Returns:
        bool: True if format is supported, False otherwise
    """
    if not filename:
        return False

    file_extension = Path(filename).suffix.lower()
    return file_extension in SUPPORTED_IMAGE_FORMATS

def validate_file_size(file_size: int) -> bool:
    """
    Validate if the file size is within acceptable limits.

    Args:
        file_size: Size of the file in bytes

    Returns:
        bool: True if size is acceptable, False otherwise
    """
    return 0 < file_size <= MAX_FILE_SIZE

def _validate_kernel(section: str, kernel: Any, errors: List[str]) -> None:
    # Gaussian kernels must be positive and odd in both dimensions
    if len(kernel) != 2 or not all(isinstance(k, int) and k > 0 and k % 2 == 1 for k in kernel):
        errors.append(f"{section}.blur_kernel must be two positive odd integers")

def validate_analysis_config(config: Dict[str, Any]) -> tuple[bool, List[str]]:
    """
    Validate analyzer configuration parameters.

    Args:
        config: Configuration dictionary

    Returns:
        tuple: (is_valid, list_of_errors)
    """
    errors = []

    if not isinstance(config, dict):
        return False, ["Configuration must be a dictionary"]

    for section, values in config.items():
        if section not in CONFIG_SCHEMA:
            errors.append(f"Unknown configuration section '{section}'. Valid sections: {sorted(CONFIG_SCHEMA)}")
            continue

        if not isinstance(values, dict):
            errors.append(f"Configuration section '{section}' must be a dictionary")
            continue

        for key, value in values.items():
            expected = CONFIG_SCHEMA[section].get(key)
            if expected is None:
                errors.append(f"Unknown option '{section}.{key}'")
                continue

            # bool is an int subclass; only accept it where a bool is expected
            if not isinstance(value, expected) or (isinstance(value, bool) and expected is not bool):
                errors.append(f"{section}.{key} has invalid type {type(value).__name__}")
                continue

            if key == 'blur_kernel':
                _validate_kernel(section, value, errors)
            elif expected is not bool and value < 0:
                errors.append(f"{section}.{key} must not be negative")

    contours = config.get('contours', {})
    if isinstance(contours, dict):
        low = contours.get('canny_low', 50)
        high = contours.get('canny_high', 150)
        if isinstance(low, (int, float)) and isinstance(high, (int, float)) and low >= high:
            errors.append("contours.canny_low must be lower than contours.canny_high")

    color = config.get('color', {})
    if isinstance(color, dict):
        noise_floor = color.get('noise_floor', 0.5)
        if isinstance(noise_floor, (int, float)) and noise_floor >= 100:
            errors.append("color.noise_floor must be below 100 percent")

    return len(errors) == 0, errors

def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent security issues.

    Args:
        filename: Original filename

    Returns:
        str: Sanitized filename
    """
    # Remove any path components
    filename = os.path.basename(filename)

    # Remove or replace dangerous characters
    filename = re.sub(r'[^\w\s.-]', '', filename)

    # Limit length
    if len(filename) > 255:
        name, ext = os.path.splitext(filename)
        filename = name[:250] + ext

    return filename

class ValidationError(Exception):
    """Custom exception for validation errors"""

    def __init__(self, message: str, errors: List[str] = None):
        super().__init__(message)
        self.errors = errors or []
