"""Row and column projection profiles of images."""

import logging
from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image
from pydantic import Field
from pydantic.dataclasses import dataclass

logger = logging.getLogger(__name__)

__all__ = ['ProjectionExtractor']

SUPPORTED_FORMATS = (".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tif", ".tiff")


@dataclass
class ProjectionExtractor:
    """
    Sums pixel intensities along image rows and columns.

    By default intensities are inverted (max_value - value), so dark ink on
    a light background produces high profile values. Fully transparent
    pixels contribute nothing.
    """

    invert: bool = Field(default=True)
    max_value: float = Field(default=255.0, gt=0.0)

    def load_image(self, image_path: Union[str, Path]) -> np.ndarray:
        """
        Load an image from disk as an RGBA uint8 array.

        Args:
            image_path: Path to the image file

        Returns:
            Array of shape (H, W, 4)

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the format is unsupported or the file cannot be decoded
        """
        path = Path(image_path)
        if not path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        if path.suffix.lower() not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported image format: {path.suffix}")

        logger.debug(f"Loading image: {image_path}")
        try:
            img = Image.open(path)
            img.verify()
            # verify() leaves the image unusable, reopen
            img = Image.open(path)
            if img.mode != "RGBA":
                logger.debug(f"Converting image from {img.mode} to RGBA")
                img = img.convert("RGBA")
            return np.array(img, dtype=np.uint8)
        except Exception as e:
            raise ValueError(f"Failed to load image {image_path}: {e}")

    def compute_projections(self, image: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """
        Compute horizontal and vertical projection profiles.

        Args:
            image: Grayscale (H, W), single-channel (H, W, 1), RGB (H, W, 3)
                or RGBA (H, W, 4) array

        Returns:
            Tuple of (horizontal, vertical)
            - horizontal: per-row sums, length H
            - vertical: per-column sums, length W

        Raises:
            ValueError: If the array is empty or has an unsupported shape
        """
        pixels = np.asarray(image, dtype=np.float64)
        if pixels.size == 0:
            raise ValueError("Image array is empty")

        opaque = None
        if pixels.ndim == 2:
            intensity = pixels
        elif pixels.ndim == 3 and pixels.shape[2] == 1:
            intensity = pixels[..., 0]
        elif pixels.ndim == 3 and pixels.shape[2] in (3, 4):
            intensity = pixels[..., :3].mean(axis=2)
            if pixels.shape[2] == 4:
                opaque = pixels[..., 3] != 0
        else:
            raise ValueError(
                f"Expected (H, W), (H, W, 1), (H, W, 3) or (H, W, 4) array, got shape {pixels.shape}"
            )

        if self.invert:
            intensity = self.max_value - intensity
        if opaque is not None:
            intensity = np.where(opaque, intensity, 0.0)

        horizontal = intensity.sum(axis=1)
        vertical = intensity.sum(axis=0)

        logger.debug(
            f"Computed projections for {intensity.shape[0]}x{intensity.shape[1]} image "
            f"(invert: {self.invert})"
        )

        return horizontal, vertical

    def extract(self, image_path: Union[str, Path]) -> Tuple[np.ndarray, np.ndarray]:
        """Load an image and return its (horizontal, vertical) projections."""
        return self.compute_projections(self.load_image(image_path))
