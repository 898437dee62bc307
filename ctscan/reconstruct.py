# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Image reconstruction by (filtered) backprojection."""

import logging
from typing import Optional

import numpy as np

from .filter import apply_kernel, ramp_kernel
from .geometry import FanBeamGeometry
from .image import AccumulationBuffer, PixelBuffer
from .util import parallel_for

logger = logging.getLogger(__name__)


def rescale(accumulation: AccumulationBuffer) -> PixelBuffer:
    r"""Map accumulated backprojection sums to displayable intensities.

    Each cell value :math:`c` is mapped to
    :math:`\mathrm{round}(255 \, c / c_{\max})`, clipped to [0, 255],
    where :math:`c_{\max}` is the largest cell value. Negative cells,
    which can arise from filtered projections, map to zero. If no cell
    is positive the result is all zero.

    Args:
        accumulation: Accumulated sums. All writers must have completed.

    Returns:
        Reconstructed image.
    """
    raw = accumulation.array
    maxval = accumulation.max()
    if maxval == 0:
        logger.debug("Empty accumulation; reconstruction is all zero")
        return PixelBuffer(np.zeros(raw.shape, dtype=np.uint8))
    img = np.clip(np.round(raw.astype(np.float64) / maxval * 255.0), 0, 255)
    return PixelBuffer(img.astype(np.uint8))


class BackprojectionReconstructor:
    """Fan-beam backprojector.

    Each sinogram value is raised to the power 1.5, optionally ramp
    filtered along the detector axis, and added to every pixel of the
    ray it was measured on, except for the pixels nearest the emitter
    given by :attr:`FanBeamGeometry.first_pixels_to_skip`. Rays of
    different projections cross, so all additions go through the atomic
    :meth:`AccumulationBuffer.add`.
    """

    exponent = 1.5
    """Nonlinear re-emphasis applied to sinogram values."""

    def __init__(
        self, geometry: FanBeamGeometry, filtering: bool = False, max_workers: Optional[int] = None
    ):
        """
        Args:
            geometry: Scanner geometry.
            filtering: Flag indicating whether projections are ramp
                filtered before backprojection.
            max_workers: Number of worker threads for
                :meth:`back_project`.
        """
        self.geometry = geometry
        self.filtering = filtering
        self.max_workers = max_workers

    def row_values(self, sinogram: PixelBuffer, row: int) -> np.ndarray:
        """Compute the per-detector values backprojected for one row.

        Args:
            sinogram: Sinogram.
            row: Projection index.

        Returns:
            1D `int64` array with one value per detector.
        """
        values = np.trunc(sinogram.row(row).astype(np.float64) ** self.exponent).astype(np.int64)
        if self.filtering:
            # kernel recomputed on every call so that it always matches
            # the current detector count
            values = apply_kernel(values, ramp_kernel(self.geometry.detector_count))
        return values

    def back_project_row(
        self, sinogram: PixelBuffer, accumulation: AccumulationBuffer, row: int
    ):
        """Add the backprojection of one sinogram row to `accumulation`.

        Args:
            sinogram: Sinogram.
            accumulation: Accumulator, which is not reset.
            row: Projection index.

        Raises:
            IndexError: If `row` is not a valid projection index.
            ValueError: If `sinogram` or `accumulation` has the wrong
                shape.
        """
        self.geometry.check_row(row)
        expected = (self.geometry.num_projections, self.geometry.detector_count)
        if sinogram.shape != expected:
            raise ValueError(f"Sinogram shape {sinogram.shape} does not match {expected}")
        if accumulation.shape != self.geometry.image_shape:
            raise ValueError(
                f"Accumulation shape {accumulation.shape} does not match "
                f"{self.geometry.image_shape}"
            )
        values = self.row_values(sinogram, row)
        skip = self.geometry.first_pixels_to_skip
        angle = self.geometry.row_angle(row)
        for index, ray in enumerate(self.geometry.rays(angle)):
            accumulation.add(ray.pixels[skip:], int(values[index]))

    def back_project(
        self, sinogram: PixelBuffer, accumulation: Optional[AccumulationBuffer] = None
    ) -> AccumulationBuffer:
        """Backproject every sinogram row.

        The accumulator is reset before any row is added, and every row
        has been added when this method returns.

        Args:
            sinogram: Sinogram.
            accumulation: Accumulator to be used. If ``None``, a new one
                is allocated.

        Returns:
            The accumulator.
        """
        if accumulation is None:
            accumulation = AccumulationBuffer(self.geometry.image_shape)
        else:
            accumulation.reset()
        logger.debug(
            "Backprojecting %s sinogram (filtering=%s)", sinogram.shape, self.filtering
        )
        parallel_for(
            lambda row: self.back_project_row(sinogram, accumulation, row),
            self.geometry.num_projections,
            max_workers=self.max_workers,
            label="backprojection",
        )
        return accumulation

    def reconstruct(self, sinogram: PixelBuffer) -> PixelBuffer:
        """Reconstruct an image from a complete sinogram.

        Args:
            sinogram: Sinogram.

        Returns:
            Reconstructed image.
        """
        return rescale(self.back_project(sinogram))
