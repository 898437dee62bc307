# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Pixel storage: greyscale images and the backprojection accumulator."""

import threading
from typing import Optional

import numpy as np

from .typing import Array, Shape


def rgb2gray(rgb: Array) -> np.ndarray:
    """Convert an RGB(A) raster to a single channel intensity image.

    The intensity is the unweighted mean of the red, green and blue
    channels, truncated to an integer. Any alpha channel is ignored.

    Args:
        rgb: Raster as an Nr x Nc greyscale array, or an Nr x Nc x 3
            (RGB) or Nr x Nc x 4 (RGBA) array of byte values.

    Returns:
        Greyscale image as an Nr x Nc array of dtype `uint8`.

    Raises:
        ValueError: If the raster shape is not one of those listed above.
    """
    rgb = np.asarray(rgb)
    if rgb.ndim == 2:
        return np.clip(rgb, 0, 255).astype(np.uint8)
    if rgb.ndim != 3 or rgb.shape[2] not in (3, 4):
        raise ValueError(f"Expected an Nr x Nc, Nr x Nc x 3 or Nr x Nc x 4 raster; got {rgb.shape}")
    chan = np.clip(rgb[..., 0:3], 0, 255).astype(np.uint16)
    return (np.sum(chan, axis=2) // 3).astype(np.uint8)


def to_greyscale(raster: np.ndarray, inplace: bool = False) -> np.ndarray:
    """Normalize a raster to greyscale, optionally in place.

    When `inplace` is ``True`` and `raster` has color channels, each
    pixel's red, green and blue channels are overwritten by its
    intensity and any alpha channel is set to opaque, so that the raster
    remains displayable as a color image.

    Args:
        raster: Raster accepted by :func:`rgb2gray`.
        inplace: Flag indicating whether the color channels of `raster`
            should be overwritten.

    Returns:
        Greyscale image as an Nr x Nc array of dtype `uint8`.
    """
    grey = rgb2gray(raster)
    if inplace and raster.ndim == 3:
        raster[..., 0:3] = grey[..., np.newaxis]
        if raster.shape[2] == 4:
            raster[..., 3] = 255
    return grey


class PixelBuffer:
    """A 2D grid of intensities in the range [0, 255].

    Pixels are addressed as `(x, y)` with `x` the column and `y` the
    row, and are stored in an array of shape `(height, width)`. All
    accessors are bounds checked.
    """

    def __init__(self, data: Array, readonly: bool = False):
        """
        Args:
            data: 2D array of intensities. Values are copied.
            readonly: Flag indicating whether the buffer rejects writes.

        Raises:
            ValueError: If `data` is not 2D or has values outside
                [0, 255].
        """
        data = np.array(data)
        if data.ndim != 2:
            raise ValueError(f"Pixel buffer data must be 2D; got shape {data.shape}")
        if data.size and (data.min() < 0 or data.max() > 255):
            raise ValueError("Pixel buffer values must be in the range [0, 255]")
        self._data = data.astype(np.uint8)
        self._data.setflags(write=not readonly)

    @classmethod
    def zeros(cls, shape: Shape) -> "PixelBuffer":
        """Construct a buffer of the given `(height, width)` shape filled with zeros."""
        return cls(np.zeros(shape, dtype=np.uint8))

    @property
    def shape(self) -> Shape:
        """Shape `(height, width)` of the buffer."""
        return self._data.shape

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def readonly(self) -> bool:
        return not self._data.flags.writeable

    @property
    def array(self) -> np.ndarray:
        """Read-only view of the buffer contents."""
        view = self._data.view()
        view.setflags(write=False)
        return view

    def copy(self, readonly: bool = False) -> "PixelBuffer":
        """Return an independent copy of the buffer."""
        return PixelBuffer(self._data, readonly=readonly)

    def _check_point(self, x: int, y: int):
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) outside {self.width} x {self.height} buffer")

    def _check_writable(self):
        if self.readonly:
            raise ValueError("Pixel buffer is read-only")

    def get(self, x: int, y: int) -> int:
        """Get the intensity of pixel `(x, y)`."""
        self._check_point(x, y)
        return int(self._data[y, x])

    def set(self, x: int, y: int, value: int):
        """Set the intensity of pixel `(x, y)`.

        Raises:
            IndexError: If the pixel is outside the buffer.
            ValueError: If `value` is outside [0, 255] or the buffer is
                read-only.
        """
        self._check_point(x, y)
        self._check_writable()
        if not 0 <= value <= 255:
            raise ValueError(f"Intensity {value} outside the range [0, 255]")
        self._data[y, x] = value

    def take(self, xs: Array, ys: Array) -> np.ndarray:
        """Gather the intensities of many pixels.

        Args:
            xs: Column indices.
            ys: Row indices.

        Returns:
            Intensities as an `int64` array, wide enough to be summed
            without overflow.

        Raises:
            IndexError: If any pixel is outside the buffer.
        """
        xs = np.asarray(xs)
        ys = np.asarray(ys)
        if xs.size and (
            xs.min() < 0 or ys.min() < 0 or xs.max() >= self.width or ys.max() >= self.height
        ):
            raise IndexError(f"Pixel coordinates outside {self.width} x {self.height} buffer")
        return self._data[ys, xs].astype(np.int64)

    def row(self, y: int) -> np.ndarray:
        """Get a copy of row `y`."""
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} outside buffer with {self.height} rows")
        return self._data[y].copy()

    def set_row(self, y: int, values: Array):
        """Overwrite row `y` with `values`."""
        if not 0 <= y < self.height:
            raise IndexError(f"Row {y} outside buffer with {self.height} rows")
        self._check_writable()
        values = np.asarray(values)
        if values.shape != (self.width,):
            raise ValueError(f"Expected {self.width} values for row {y}; got shape {values.shape}")
        if values.size and (values.min() < 0 or values.max() > 255):
            raise ValueError("Row values must be in the range [0, 255]")
        self._data[y] = values

    def __eq__(self, other) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._data, other._data))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self.width}, height={self.height})"


class AccumulationBuffer:
    """Integer accumulator with atomic per-cell addition.

    Cells are 64 bit integers in an array of shape `(height, width)`.
    Concurrent writers are serialized by a set of locks, each guarding a
    horizontal stripe of image rows: an addition locks only the stripes
    that the added pixels fall in, so that writers touching different
    parts of the image proceed in parallel while every individual cell
    update is atomic.
    """

    def __init__(self, shape: Shape, num_stripes: Optional[int] = None):
        """
        Args:
            shape: Shape `(height, width)` of the accumulator.
            num_stripes: Number of lock stripes. Defaults to the smaller
                of the image height and 64.
        """
        if len(shape) != 2 or min(shape) < 1:
            raise ValueError(f"Accumulation buffer shape must be 2D and non-empty; got {shape}")
        self._data = np.zeros(shape, dtype=np.int64)
        if num_stripes is None:
            num_stripes = min(shape[0], 64)
        self.num_stripes = max(1, min(num_stripes, shape[0]))
        self._locks = [threading.Lock() for _ in range(self.num_stripes)]

    @property
    def shape(self) -> Shape:
        return self._data.shape

    @property
    def array(self) -> np.ndarray:
        """Copy of the current cell values.

        Only meaningful once all writers have completed.
        """
        return self._data.copy()

    def reset(self):
        """Set every cell to zero."""
        for lock in self._locks:
            lock.acquire()
        try:
            self._data[...] = 0
        finally:
            for lock in self._locks:
                lock.release()

    def add(self, pixels: Array, value: int):
        """Atomically add `value` to each pixel in `pixels`.

        Args:
            pixels: `(N, 2)` array of `(x, y)` pixel coordinates.
            value: Integer to be added to each listed cell.

        Raises:
            IndexError: If any pixel is outside the buffer.
        """
        pixels = np.asarray(pixels)
        if pixels.size == 0:
            return
        xs, ys = pixels[:, 0], pixels[:, 1]
        height, width = self._data.shape
        if xs.min() < 0 or ys.min() < 0 or xs.max() >= width or ys.max() >= height:
            raise IndexError(f"Pixel coordinates outside {width} x {height} buffer")
        stripes = ys * self.num_stripes // height
        for stripe in np.unique(stripes):
            sel = stripes == stripe
            with self._locks[stripe]:
                np.add.at(self._data, (ys[sel], xs[sel]), value)

    def max(self) -> int:
        """Largest cell value, or zero if no cell is positive."""
        return max(0, int(self._data.max()))
