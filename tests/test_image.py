"""Tests for spriteforge/utils/image.py"""

import pytest

from helpers import BLUE, RED, make_image, make_png, oversized_png, sprite_png, to_png
from spriteforge.services.errors import DecodeError
from spriteforge.utils.image import decode, encode_png, sniff_mime, validate_alpha_and_size


class TestDecode:
    def test_exposes_size_and_pixels(self):
        img = make_image((3, 2))
        img.putpixel((2, 1), RED)
        raster = decode(to_png(img))
        assert (raster.width, raster.height) == (3, 2)
        assert raster.pixel(2, 1) == RED
        assert raster.alpha(0, 0) == 0

    def test_rgb_input_becomes_opaque_rgba(self):
        raster = decode(to_png(make_image((2, 2), BLUE).convert("RGB")))
        assert raster.image.mode == "RGBA"
        assert raster.pixel(1, 1) == BLUE

    @pytest.mark.parametrize("data", [b"", b"not an image", make_png((4, 4))[:20]])
    def test_bad_bytes_raise_decode_error(self, data):
        with pytest.raises(DecodeError):
            decode(data)

    def test_oversized_declared_dimensions_raise_decode_error(self):
        with pytest.raises(DecodeError):
            decode(oversized_png(20000, 20000))

    def test_encode_png_is_lossless(self):
        img = make_image((2, 2))
        img.putpixel((0, 0), (10, 20, 30, 40))
        assert decode(encode_png(img)).pixel(0, 0) == (10, 20, 30, 40)


class TestSniffMime:
    def test_png_and_jpeg(self):
        assert sniff_mime(make_png((2, 2))) == "image/png"
        assert sniff_mime(to_png(make_image((2, 2), BLUE).convert("RGB"), fmt="JPEG")) == "image/jpeg"

    def test_unknown_falls_back(self):
        assert sniff_mime(b"garbage") == "image/png"

    def test_oversized_declared_dimensions_fall_back(self):
        assert sniff_mime(oversized_png(20000, 20000), default="image/webp") == "image/webp"


class TestValidateAlphaAndSize:
    def test_valid_sprite(self, valid_sprite):
        assert validate_alpha_and_size(valid_sprite, 8, 8, True) is True

    def test_size_mismatch_fails_even_when_borders_clear(self):
        data = sprite_png((9, 8), (2, 2, 5, 5))
        assert validate_alpha_and_size(data, 8, 8, True) is False
        assert validate_alpha_and_size(data, 8, 8, False) is False

    def test_oversized_declared_dimensions_are_invalid(self):
        assert validate_alpha_and_size(oversized_png(20000, 20000), 8, 8, True) is False
        assert validate_alpha_and_size(oversized_png(20000, 20000), 20000, 20000, False) is False

    @pytest.mark.parametrize("point", [(0, 0), (4, 0), (7, 7), (4, 7), (0, 4), (7, 3)])
    def test_single_opaque_border_pixel_fails(self, point):
        img = make_image((8, 8))
        img.putpixel(point, (0, 0, 0, 1))
        assert validate_alpha_and_size(to_png(img), 8, 8, True) is False

    def test_interior_is_never_inspected(self):
        img = make_image((8, 8))
        for y in range(1, 7):
            for x in range(1, 7):
                img.putpixel((x, y), (12, 34, 56, 128))
        assert validate_alpha_and_size(to_png(img), 8, 8, True) is True

    def test_size_only_when_alpha_not_expected(self):
        assert validate_alpha_and_size(make_png((8, 8), RED), 8, 8, False) is True

    def test_undecodable_bytes_are_invalid_not_errors(self):
        assert validate_alpha_and_size(b"\x89PNG broken", 8, 8, True) is False
