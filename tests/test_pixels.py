"""
Tests for packed pixels and PixelBuffer.
"""
import numpy as np
import pytest

from openxform.core.exceptions import InvalidDimensionsError, OutOfBoundsError
from openxform.core.pixels import (PixelBuffer, merge_channels, pack_argb,
                                   pack_rgb, split_channels, unpack_argb)
from openxform.core.roi import RegionOfInterest


class TestPacking:

    def test_pack_argb_lane_order(self):
        assert pack_argb(0x12, 0x34, 0x56, 0x78) == 0x12345678

    def test_pack_rgb_is_opaque(self):
        assert pack_rgb(1, 2, 3) == 0xFF010203

    def test_pack_masks_each_lane(self):
        assert pack_argb(0x1FF, 0, 0, 0x100) == 0xFF000000

    def test_unpack_argb(self):
        assert unpack_argb(0x80FF4001) == (0x80, 0xFF, 0x40, 0x01)

    def test_unpack_accepts_signed_value(self):
        assert unpack_argb(-16777216) == (0xFF, 0, 0, 0)

    def test_split_channels_adds_lane_axis(self):
        lanes = split_channels(np.array([[0xFF102030, 0x00000001]], dtype=np.uint32))
        assert lanes.shape == (1, 2, 4)
        assert lanes[0, 0].tolist() == [255, 16, 32, 48]
        assert lanes[0, 1].tolist() == [0, 0, 0, 1]

    def test_merge_channels_inverts_split(self):
        values = np.array([0xFF102030, 0x7F000001, 0], dtype=np.uint32)
        assert np.array_equal(merge_channels(split_channels(values)), values)


class TestPixelBuffer:

    def test_zero_filled_by_default(self):
        buffer = PixelBuffer(3, 2)
        assert len(buffer) == 6
        assert buffer.data.dtype == np.uint32
        assert not buffer.data.any()

    @pytest.mark.parametrize("width,height", [(0, 1), (1, 0), (-2, 3)])
    def test_non_positive_dimensions_rejected(self, width, height):
        with pytest.raises(InvalidDimensionsError):
            PixelBuffer(width, height)

    def test_data_length_must_match(self):
        with pytest.raises(InvalidDimensionsError, match="Expected 4 pixels"):
            PixelBuffer(2, 2, [1, 2, 3])

    def test_constructor_copies_data(self):
        source = np.arange(4, dtype=np.uint32)
        buffer = PixelBuffer(2, 2, source)
        source[0] = 99
        assert buffer.get(0, 0) == 0

    @pytest.mark.parametrize("data", [[1.7, 2.0], np.array([0.5, 1.0]), [True, False]])
    def test_non_integral_data_rejected(self, data):
        with pytest.raises(TypeError, match="integral"):
            PixelBuffer(2, 1, data)

    def test_signed_data_wraps_to_unsigned(self):
        buffer = PixelBuffer(1, 1, [-16777216])
        assert buffer.get(0, 0) == 0xFF000000

    def test_get_and_set_are_row_major(self):
        buffer = PixelBuffer(3, 2, range(6))
        assert buffer.get(2, 0) == 2
        assert buffer.get(0, 1) == 3
        buffer.set(1, 1, 0xDEADBEEF)
        assert buffer.data[4] == 0xDEADBEEF

    def test_set_masks_to_32_bits(self):
        buffer = PixelBuffer(1, 1)
        buffer.set(0, 0, -1)
        assert buffer.get(0, 0) == 0xFFFFFFFF

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (3, 0), (0, 2)])
    def test_out_of_bounds_access(self, x, y):
        buffer = PixelBuffer(3, 2)
        with pytest.raises(OutOfBoundsError):
            buffer.get(x, y)
        with pytest.raises(IndexError):
            buffer.set(x, y, 1)

    def test_copy_is_independent(self):
        buffer = PixelBuffer(2, 2, [1, 2, 3, 4])
        copy = buffer.copy()
        assert copy == buffer
        assert not np.shares_memory(copy.data, buffer.data)
        copy.set(0, 0, 42)
        assert buffer.get(0, 0) == 1

    def test_as_2d_is_live_view(self):
        buffer = PixelBuffer(3, 2)
        buffer.as_2d()[1, 2] = 7
        assert buffer.get(2, 1) == 7

    def test_from_rows(self):
        buffer = PixelBuffer.from_rows([[1, 2, 3], [4, 5, 6]])
        assert (buffer.width, buffer.height) == (3, 2)
        assert buffer.get(0, 1) == 4

    def test_from_rows_rejects_flat_input(self):
        with pytest.raises(InvalidDimensionsError):
            PixelBuffer.from_rows(np.arange(4))

    def test_fill_whole_buffer(self):
        buffer = PixelBuffer(2, 2)
        buffer.fill(-1)
        assert buffer.data.tolist() == [0xFFFFFFFF] * 4

    def test_fill_scoped_to_roi(self):
        buffer = PixelBuffer(3, 3)
        buffer.fill(5, RegionOfInterest(1, 1, 5, 5))
        assert buffer.as_2d().tolist() == [[0, 0, 0], [0, 5, 5], [0, 5, 5]]

    def test_equality_checks_dimensions(self):
        assert PixelBuffer(2, 1, [1, 2]) != PixelBuffer(1, 2, [1, 2])
