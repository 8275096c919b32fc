"""
Image Preprocessing Module for Drawing Analysis

Handles image acquisition, noise reduction and contrast normalization
ahead of the color and shape analysis stages.
"""

import io
import logging
from typing import Dict, Optional, Tuple

import cv2
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)


class ImageLoadError(ValueError):
    """Raised when a drawing cannot be read or holds no pixels."""


class ImagePreprocessor:
    """
    Image preprocessing class for drawing analysis.

    Features:
    - Multi-format image loading (OpenCV with a Pillow fallback)
    - Decoding of uploaded image bytes
    - Gaussian noise reduction
    - Contrast normalization
    """

    def __init__(self, noise_reduction: bool = True,
                 blur_kernel: Tuple[int, int] = (5, 5),
                 contrast_gain: float = 1.2):
        """
        Initialize the ImagePreprocessor.

        Args:
            noise_reduction: Whether to blur away paper and sensor noise
            blur_kernel: Gaussian kernel size used for noise reduction
            contrast_gain: Multiplicative gain applied to every channel
        """
        self.noise_reduction = noise_reduction
        self.blur_kernel = tuple(blur_kernel)
        self.contrast_gain = contrast_gain

        logger.info(f"ImagePreprocessor initialized with blur_kernel = {self.blur_kernel}, "
                    f"contrast_gain = {contrast_gain}")

    def load_image(self, image_path: str) -> np.ndarray:
        """
        Load image from file path with format validation.

        Args:
            image_path: Path to the image file

        Returns:
            Loaded image as numpy array in BGR format

        Raises:
            ImageLoadError: If image cannot be loaded or is empty
        """

        try:
            # Try OpenCV first for better performance
            image = cv2.imread(image_path, cv2.IMREAD_COLOR)

            if image is None:
                # Fallback to PIL for additional format support
                with Image.open(image_path) as pil_image:
                    image = self._pil_to_bgr(pil_image)

        except Exception as e:
            logger.error(f"Error loading image {image_path}: {str(e)}")
            raise ImageLoadError(f"Failed to load image: {str(e)}") from e

        self._check_not_empty(image, image_path)
        logger.debug(f"Loaded image: {image_path}, shape: {image.shape}")

        return image

    def decode_image(self, data: bytes, source: str = "<upload>") -> np.ndarray:
        """
        Decode image bytes (e.g. an uploaded file) into a BGR array.

        Raises:
            ImageLoadError: If the bytes are not a readable image
        """

        if not data:
            raise ImageLoadError(f"No image data received for {source}")

        try:
            buffer = np.frombuffer(data, dtype=np.uint8)
            image = cv2.imdecode(buffer, cv2.IMREAD_COLOR)

            if image is None:
                with Image.open(io.BytesIO(data)) as pil_image:
                    image = self._pil_to_bgr(pil_image)

        except Exception as e:
            logger.error(f"Error decoding image {source}: {str(e)}")
            raise ImageLoadError(f"Failed to decode image: {str(e)}") from e

        self._check_not_empty(image, source)
        return image

    def apply_noise_reduction(self, image: np.ndarray) -> np.ndarray:
        """
        Suppress sensor and paper grain with a Gaussian blur.

        Args:
            image: Input image

        Returns:
            Denoised image
        """

        if not self.noise_reduction:
            return image

        return cv2.GaussianBlur(image, self.blur_kernel, 0)

    def normalize_contrast(self, image: np.ndarray) -> np.ndarray:
        """Scale pixel values by the contrast gain, saturating at 255."""

        return cv2.convertScaleAbs(image, alpha=self.contrast_gain, beta=0)

    def preprocess(self, image: np.ndarray) -> np.ndarray:
        """
        Complete preprocessing pipeline for a single loaded drawing.

        Args:
            image: BGR image as returned by load_image

        Returns:
            New preprocessed BGR image; the input is left untouched
        """

        if image is None or image.size == 0:
            raise ImageLoadError("Cannot preprocess an empty image")

        processed = self.apply_noise_reduction(image)
        processed = self.normalize_contrast(processed)

        logger.debug(f"Preprocessed image of shape {processed.shape}")
        return processed

    def _pil_to_bgr(self, pil_image: Image.Image) -> np.ndarray:
        """Convert any Pillow image mode to a 3-channel BGR array."""

        if pil_image.mode != 'RGB':
            pil_image = pil_image.convert('RGB')

        return cv2.cvtColor(np.array(pil_image), cv2.COLOR_RGB2BGR)

    def _check_not_empty(self, image: Optional[np.ndarray], source: str) -> None:
        if image is None or image.size == 0:
            logger.error(f"Image {source} contains no pixels")
            raise ImageLoadError(f"Could not load image from {source}")


def create_preprocessing_pipeline(config: Optional[Dict] = None) -> ImagePreprocessor:
    """
    Factory function to create a configured preprocessing pipeline.

    Args:
        config: Configuration dictionary with preprocessing parameters

    Returns:
        Configured ImagePreprocessor instance
    """

    if config is None:
        config = {}

    return ImagePreprocessor(
        noise_reduction = config.get('noise_reduction', True),
        blur_kernel = config.get('blur_kernel', (5, 5)),
        contrast_gain = config.get('contrast_gain', 1.2)
    )
