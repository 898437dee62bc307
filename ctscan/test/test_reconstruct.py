import numpy as np

import pytest

from ctscan import AccumulationBuffer, PixelBuffer, ScanConfiguration
from ctscan.examples import create_circular_phantom
from ctscan.geometry import FanBeamGeometry
from ctscan.projector import SinogramSynthesizer
from ctscan.reconstruct import BackprojectionReconstructor, rescale


def test_rescale_empty():
    img = rescale(AccumulationBuffer((8, 9)))
    assert img.shape == (8, 9)
    assert np.all(img.array == 0)


def test_rescale_negative_only():
    acc = AccumulationBuffer((4, 4))
    acc.add(np.array([[1, 1]]), -10)
    assert np.all(rescale(acc).array == 0)


def test_rescale_values():
    acc = AccumulationBuffer((2, 3))
    acc.add(np.array([[0, 0]]), 10)
    acc.add(np.array([[1, 0]]), 5)
    acc.add(np.array([[2, 0]]), -4)
    acc.add(np.array([[0, 1]]), 1)
    img = rescale(acc).array
    assert img[0, 0] == 255
    assert img[0, 1] == 128
    assert img[0, 2] == 0
    assert img[1, 0] == 26
    assert img[1, 1] == 0


class TestReconstructor:
    def setup_method(self, method):
        self.cfg = ScanConfiguration(angular_step=5, detector_count=64, fan_width=30)
        self.geom = FanBeamGeometry((64, 64), self.cfg)
        phantom = create_circular_phantom((64, 64), [20, 8], [100, 220])
        self.image = PixelBuffer(phantom, readonly=True)
        self.sino = SinogramSynthesizer(self.geom).project(self.image)

    def test_row_values(self):
        sino = PixelBuffer.zeros((72, 64))
        sino.set_row(0, np.array([2, 3, 10] + [0] * 61))
        values = BackprojectionReconstructor(self.geom).row_values(sino, 0)
        assert values.dtype == np.int64
        assert values[0:3].tolist() == [2, 5, 31]

    def test_row_values_filtered(self):
        unfiltered = BackprojectionReconstructor(self.geom).row_values(self.sino, 0)
        filtered = BackprojectionReconstructor(self.geom, filtering=True).row_values(self.sino, 0)
        assert filtered.shape == (64,)
        assert not np.array_equal(filtered, unfiltered)

    def test_bounded(self):
        for filtering in (False, True):
            recon = BackprojectionReconstructor(self.geom, filtering=filtering)
            img = recon.reconstruct(self.sino).array
            assert img.shape == (64, 64)
            assert img.dtype == np.uint8
            assert img.max() == 255
            # pixels outside the scan circle are crossed by no ray
            assert img[0, 0] == 0 and img[63, 63] == 0 and img[0, 63] == 0

    def test_skip_near_emitter(self):
        recon = BackprojectionReconstructor(self.geom)
        acc = AccumulationBuffer((64, 64))
        recon.back_project_row(self.sino, acc, 0)
        emitter = self.geom.emitter_position(0)
        assert acc.array[emitter[1], emitter[0]] == 0
        ray = self.geom.ray(0, 0)
        far = ray.pixels[self.geom.first_pixels_to_skip]
        assert acc.array[far[1], far[0]] > 0

    @pytest.mark.slow
    def test_rows_accumulate(self):
        recon = BackprojectionReconstructor(self.geom, max_workers=4)
        full = recon.back_project(self.sino).array
        acc = AccumulationBuffer((64, 64))
        for row in range(71, -1, -1):
            recon.back_project_row(self.sino, acc, row)
        np.testing.assert_array_equal(acc.array, full)

    def test_reset_between_passes(self):
        recon = BackprojectionReconstructor(self.geom)
        acc = recon.back_project(self.sino)
        first = acc.array
        recon.back_project(self.sino, acc)
        np.testing.assert_array_equal(acc.array, first)

    def test_filtering_changes_result(self):
        plain = BackprojectionReconstructor(self.geom).back_project(self.sino).array
        filt = BackprojectionReconstructor(self.geom, filtering=True).back_project(self.sino).array
        assert not np.array_equal(plain, filt)

    def test_empty_sinogram(self):
        recon = BackprojectionReconstructor(self.geom)
        img = recon.reconstruct(PixelBuffer.zeros((72, 64)))
        assert np.all(img.array == 0)

    def test_invalid(self):
        recon = BackprojectionReconstructor(self.geom)
        acc = AccumulationBuffer((64, 64))
        with pytest.raises(IndexError):
            recon.back_project_row(self.sino, acc, 72)
        with pytest.raises(ValueError):
            recon.back_project_row(PixelBuffer.zeros((72, 32)), acc, 0)
        with pytest.raises(ValueError):
            recon.back_project_row(self.sino, AccumulationBuffer((32, 32)), 0)
