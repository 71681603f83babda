"""
Tests for transform operations.
"""

import pytest
import numpy as np


class TestResizeRaster:
    """Tests for resize_raster function."""

    def test_resize_raster_imports(self):
        """Test that resize_raster can be imported."""
        from hillshade.transforms import resize_raster

        assert callable(resize_raster)

    def test_identity_scale(self):
        """A scale of 1 returns the input untouched."""
        from hillshade.transforms import resize_raster

        data = np.arange(12, dtype=np.uint16).reshape(3, 4)
        assert resize_raster(1.0)(data) is data

    @pytest.mark.parametrize("scale,shape", [(2.0, (20, 30)), (0.5, (5, 7)), (1.5, (15, 22))])
    def test_truncated_target_shape(self, scale, shape):
        """Output is int(H * scale) x int(W * scale)."""
        from hillshade.transforms import resize_raster

        data = np.zeros((10, 15), dtype=np.uint16)
        assert resize_raster(scale)(data).shape == shape

    def test_keeps_dtype(self):
        from hillshade.transforms import resize_raster

        data = np.full((4, 4), 40000, dtype=np.uint16)
        resized = resize_raster(3.0)(data)
        assert resized.dtype == np.uint16
        assert np.all(resized == 40000)

    def test_bilinear_values_between_neighbours(self):
        """Upsampled values stay within the range of the input ramp."""
        from hillshade.transforms import resize_raster

        data = np.array([[0, 1000, 2000, 3000]] * 3, dtype=np.uint16)
        resized = resize_raster(2.0)(data)
        assert resized.min() >= 0
        assert resized.max() <= 3000
        # monotone along x
        assert np.all(np.diff(resized.astype(int), axis=1) >= 0)

    def test_rejects_non_positive(self):
        from hillshade.transforms import resize_raster

        with pytest.raises(ValueError):
            resize_raster(0.0)

    def test_rejects_vanishing_output(self):
        from hillshade.transforms import resize_raster

        with pytest.raises(ValueError):
            resize_raster(0.1)(np.zeros((5, 5), dtype=np.uint16))
