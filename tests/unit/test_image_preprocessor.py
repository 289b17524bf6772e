import numpy as np

from dealbrief.imaging.models import PageImage
from dealbrief.imaging.preprocessor import (
    ImagePreprocessor,
    normalize_luminance,
    sharpen,
)


def _gray_row(*values: int, alpha: int = 255) -> np.ndarray:
    pixels = np.zeros((1, len(values), 4), dtype=np.uint8)
    for x, value in enumerate(values):
        pixels[0, x] = (value, value, value, alpha)
    return pixels


class TestNormalizeLuminance:
    def test_full_range_gray_is_near_identity(self) -> None:
        pixels = _gray_row(0, 100, 150, 255)
        normalize_luminance(pixels)
        assert pixels[0, :, 0].tolist() == [0, 100, 150, 255]

    def test_rescales_to_full_range(self) -> None:
        pixels = _gray_row(100, 140, 200)
        normalize_luminance(pixels)
        assert pixels[0, :, 0].tolist() == [0, 102, 255]

    def test_whitens_background_and_blackens_ink(self) -> None:
        pixels = _gray_row(0, 50, 200, 255)
        normalize_luminance(pixels)
        assert pixels[0, :, 0].tolist() == [0, 0, 255, 255]

    def test_writes_same_gray_to_every_color_channel(self) -> None:
        pixels = np.array([[[255, 0, 0, 255], [0, 0, 255, 255], [0, 255, 0, 255]]], dtype=np.uint8)
        normalize_luminance(pixels)
        for x in range(3):
            r, g, b = pixels[0, x, :3]
            assert r == g == b

    def test_uses_relative_luminance_weights(self) -> None:
        # Pure green is brightest, pure blue darkest.
        pixels = np.array([[[255, 0, 0, 255], [0, 0, 255, 255], [0, 255, 0, 255]]], dtype=np.uint8)
        normalize_luminance(pixels)
        assert pixels[0, 1, 0] == 0
        assert pixels[0, 2, 0] == 255

    def test_flat_image_does_not_divide_by_zero(self) -> None:
        pixels = _gray_row(120, 120, 120)
        normalize_luminance(pixels)
        assert pixels[0, :, 0].tolist() == [0, 0, 0]

    def test_leaves_alpha_unchanged(self) -> None:
        pixels = _gray_row(0, 255, alpha=77)
        normalize_luminance(pixels)
        assert pixels[0, :, 3].tolist() == [77, 77]

    def test_empty_image_is_noop(self) -> None:
        pixels = np.zeros((0, 0, 4), dtype=np.uint8)
        normalize_luminance(pixels)
        assert pixels.size == 0


class TestSharpen:
    def test_single_pixel_is_center_weight_clamped(self) -> None:
        pixels = np.array([[[40, 10, 60, 128]]], dtype=np.uint8)
        sharpen(pixels)
        assert pixels[0, 0].tolist() == [200, 50, 255, 255]

    def test_zero_padding_at_borders(self) -> None:
        pixels = _gray_row(10, 20, 30)
        sharpen(pixels)
        assert pixels[0, :, 0].tolist() == [30, 60, 130]

    def test_clamps_negative_values_to_zero(self) -> None:
        pixels = _gray_row(255, 0, 255)
        sharpen(pixels)
        assert pixels[0, 1, 0] == 0

    def test_forces_opaque_alpha(self) -> None:
        pixels = _gray_row(10, 20, alpha=0)
        sharpen(pixels)
        assert pixels[0, :, 3].tolist() == [255, 255]

    def test_reads_neighbours_from_snapshot(self) -> None:
        pixels = np.zeros((3, 3, 4), dtype=np.uint8)
        pixels[1, 1, :3] = 50
        sharpen(pixels)
        assert pixels[1, 1, 0] == 250
        assert pixels[0, 1, 0] == 0
        assert pixels[1, 0, 0] == 0
        assert pixels[0, 0, 0] == 0


class TestImagePreprocessor:
    def test_missing_surface_is_noop(self) -> None:
        assert ImagePreprocessor().preprocess(None) is None

    def test_transforms_in_place(self) -> None:
        image = PageImage(width=3, height=1, pixels=_gray_row(0, 100, 255, alpha=10))
        pixels = image.pixels
        result = ImagePreprocessor().preprocess(image)
        assert result is image
        assert image.pixels is pixels
        assert pixels[0, :, 3].tolist() == [255, 255, 255]

    def test_output_is_grayscale(self, png_bytes: bytes) -> None:
        image = PageImage.from_bytes(png_bytes)
        ImagePreprocessor().preprocess(image)
        rgb = image.pixels[..., :3]
        assert (rgb[..., 0] == rgb[..., 1]).all()
        assert (rgb[..., 1] == rgb[..., 2]).all()
