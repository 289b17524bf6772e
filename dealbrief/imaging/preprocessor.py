"""Raster cleanup applied before a page is sent for recognition.

Processing flow:
1. Luminance normalization: relative luminance per pixel, min/max stretch to
   0..255, then background whitening and ink blackening thresholds.
2. Sharpening: 3x3 unit-gain Laplacian convolution with zero padding.
"""

import numpy as np

from dealbrief.imaging.models import PageImage

LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)
WHITE_THRESHOLD = 185
BLACK_THRESHOLD = 70
SHARPEN_KERNEL = np.array(
    [
        [0, -1, 0],
        [-1, 5, -1],
        [0, -1, 0],
    ],
    dtype=np.float64,
)


def normalize_luminance(pixels: np.ndarray) -> None:
    """Rewrite RGB channels of an RGBA buffer as thresholded gray, in place."""
    if pixels.size == 0:
        return
    luminance = pixels[..., :3].astype(np.float64) @ LUMINANCE_WEIGHTS
    low = float(luminance.min())
    high = float(luminance.max())
    span = (high - low) or 1.0

    gray = (luminance - low) / span * 255.0
    gray[gray > WHITE_THRESHOLD] = 255.0
    gray[gray < BLACK_THRESHOLD] = 0.0

    pixels[..., :3] = np.clip(np.rint(gray), 0, 255).astype(np.uint8)[..., np.newaxis]


def convolve(pixels: np.ndarray, kernel: np.ndarray) -> None:
    """Apply a square kernel to the RGB channels in place; alpha becomes opaque.

    Every neighbour lookup reads from a snapshot taken before the pass.
    Out-of-bounds neighbours contribute nothing.
    """
    if pixels.size == 0:
        return
    side = kernel.shape[0]
    half = side // 2
    height, width = pixels.shape[:2]

    source = pixels[..., :3].astype(np.float64)
    padded = np.pad(source, ((half, half), (half, half), (0, 0)))
    output = np.zeros_like(source)
    for ky in range(side):
        for kx in range(side):
            weight = kernel[ky, kx]
            if weight:
                output += weight * padded[ky:ky + height, kx:kx + width]

    pixels[..., :3] = np.clip(output, 0, 255).astype(np.uint8)
    pixels[..., 3] = 255


def sharpen(pixels: np.ndarray) -> None:
    convolve(pixels, SHARPEN_KERNEL)


class ImagePreprocessor:
    """Normalizes and sharpens a raster image for text recognition."""

    def preprocess(self, image: PageImage | None) -> PageImage | None:
        """Transform ``image`` in place and return it.

        A missing surface is not an error: ``None`` passes through untouched.
        """
        if image is None:
            return None
        normalize_luminance(image.pixels)
        sharpen(image.pixels)
        return image
