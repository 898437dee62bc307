import threading

import numpy as np

import pytest

from ctscan import AccumulationBuffer, PixelBuffer, rgb2gray, to_greyscale


def test_rgb2gray():
    rgb = np.zeros((2, 3, 3), dtype=np.uint8)
    rgb[0, 0] = (10, 20, 31)
    rgb[1, 2] = (255, 255, 255)
    gry = rgb2gray(rgb)
    assert gry.shape == (2, 3)
    assert gry.dtype == np.uint8
    assert gry[0, 0] == 20
    assert gry[1, 2] == 255
    assert gry[1, 0] == 0


def test_rgb2gray_alpha_ignored():
    rgba = np.full((4, 4, 4), 90, dtype=np.uint8)
    rgba[..., 3] = 0
    assert np.all(rgb2gray(rgba) == 90)


def test_rgb2gray_grey_passthrough():
    gry = np.arange(12, dtype=np.uint8).reshape(3, 4)
    np.testing.assert_array_equal(rgb2gray(gry), gry)


def test_rgb2gray_bad_shape():
    with pytest.raises(ValueError):
        rgb2gray(np.zeros((4, 4, 2)))
    with pytest.raises(ValueError):
        rgb2gray(np.zeros(4))


def test_to_greyscale_inplace():
    rgba = np.zeros((2, 2, 4), dtype=np.uint8)
    rgba[0, 1] = (30, 60, 90, 10)
    gry = to_greyscale(rgba, inplace=True)
    assert gry[0, 1] == 60
    assert rgba[0, 1].tolist() == [60, 60, 60, 255]
    assert np.all(rgba[..., 3] == 255)


def test_to_greyscale_copy():
    rgb = np.zeros((2, 2, 3), dtype=np.uint8)
    rgb[1, 1] = (3, 6, 9)
    gry = to_greyscale(rgb)
    assert gry[1, 1] == 6
    assert rgb[1, 1].tolist() == [3, 6, 9]


class TestPixelBuffer:
    def setup_method(self, method):
        self.data = np.arange(12, dtype=np.uint8).reshape(3, 4)
        self.buf = PixelBuffer(self.data)

    def test_shape(self):
        assert self.buf.shape == (3, 4)
        assert self.buf.width == 4
        assert self.buf.height == 3
        assert not self.buf.readonly

    def test_get_set(self):
        assert self.buf.get(1, 2) == self.data[2, 1]
        self.buf.set(1, 2, 200)
        assert self.buf.get(1, 2) == 200
        # buffer holds a copy of its data
        assert self.data[2, 1] == 9

    @pytest.mark.parametrize("point", [(-1, 0), (0, -1), (4, 0), (0, 3)])
    def test_bounds(self, point):
        with pytest.raises(IndexError):
            self.buf.get(*point)
        with pytest.raises(IndexError):
            self.buf.set(*point, 1)

    def test_value_range(self):
        with pytest.raises(ValueError):
            self.buf.set(0, 0, 256)
        with pytest.raises(ValueError):
            self.buf.set(0, 0, -1)
        with pytest.raises(ValueError):
            PixelBuffer(np.full((2, 2), 300))
        with pytest.raises(ValueError):
            PixelBuffer(np.zeros((2, 2, 2)))

    def test_readonly(self):
        buf = PixelBuffer(self.data, readonly=True)
        assert buf.readonly
        with pytest.raises(ValueError):
            buf.set(0, 0, 1)
        with pytest.raises(ValueError):
            buf.set_row(0, np.zeros(4))
        with pytest.raises(ValueError):
            buf.array[0, 0] = 1

    def test_array_view_readonly(self):
        with pytest.raises(ValueError):
            self.buf.array[0, 0] = 1

    def test_take(self):
        vals = self.buf.take([0, 3], [0, 2])
        assert vals.dtype == np.int64
        assert vals.tolist() == [0, 11]
        with pytest.raises(IndexError):
            self.buf.take([4], [0])
        with pytest.raises(IndexError):
            self.buf.take([0], [-1])

    def test_rows(self):
        np.testing.assert_array_equal(self.buf.row(1), self.data[1])
        self.buf.set_row(1, [9, 8, 7, 6])
        assert self.buf.row(1).tolist() == [9, 8, 7, 6]
        with pytest.raises(IndexError):
            self.buf.row(3)
        with pytest.raises(ValueError):
            self.buf.set_row(0, [1, 2])
        with pytest.raises(ValueError):
            self.buf.set_row(0, [1, 2, 3, 256])

    def test_copy_eq(self):
        other = self.buf.copy()
        assert other == self.buf
        other.set(0, 0, 100)
        assert other != self.buf

    def test_zeros(self):
        buf = PixelBuffer.zeros((5, 7))
        assert buf.shape == (5, 7)
        assert buf.array.sum() == 0


class TestAccumulationBuffer:
    def test_add(self):
        acc = AccumulationBuffer((4, 5))
        acc.add(np.array([[0, 0], [4, 3], [4, 3]]), 7)
        arr = acc.array
        assert arr[0, 0] == 7
        assert arr[3, 4] == 14
        assert arr.sum() == 21
        assert acc.max() == 14

    def test_add_empty(self):
        acc = AccumulationBuffer((4, 5))
        acc.add(np.zeros((0, 2), dtype=int), 3)
        assert acc.max() == 0

    def test_bounds(self):
        acc = AccumulationBuffer((4, 5))
        with pytest.raises(IndexError):
            acc.add(np.array([[5, 0]]), 1)
        with pytest.raises(IndexError):
            acc.add(np.array([[0, -1]]), 1)

    def test_max_non_positive(self):
        acc = AccumulationBuffer((3, 3))
        assert acc.max() == 0
        acc.add(np.array([[1, 1]]), -5)
        assert acc.max() == 0

    def test_reset(self):
        acc = AccumulationBuffer((3, 3))
        acc.add(np.array([[1, 1], [2, 2]]), 5)
        acc.reset()
        assert np.all(acc.array == 0)

    def test_wide_sums(self):
        acc = AccumulationBuffer((2, 2))
        for _ in range(4):
            acc.add(np.array([[0, 0]]), 2**40)
        assert acc.array[0, 0] == 2**42

    def test_stripes(self):
        assert AccumulationBuffer((3, 3)).num_stripes == 3
        assert AccumulationBuffer((200, 3)).num_stripes == 64
        assert AccumulationBuffer((10, 3), num_stripes=100).num_stripes == 10
        with pytest.raises(ValueError):
            AccumulationBuffer((0, 3))

    def test_concurrent_add(self):
        acc = AccumulationBuffer((16, 16), num_stripes=4)
        # every thread adds along the same diagonal and a full column, so
        # that writers overlap on many cells
        diag = np.stack((np.arange(16), np.arange(16)), axis=1)
        col = np.stack((np.full(16, 3), np.arange(16)), axis=1)
        nthreads, nrep = 8, 50

        def worker():
            for _ in range(nrep):
                acc.add(diag, 1)
                acc.add(col, 2)

        threads = [threading.Thread(target=worker) for _ in range(nthreads)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        arr = acc.array
        total = nthreads * nrep
        assert arr[0, 0] == total
        assert arr[3, 3] == 3 * total
        assert arr[10, 3] == 2 * total
        assert arr[0, 1] == 0
        assert arr.sum() == total * (16 + 2 * 16)
