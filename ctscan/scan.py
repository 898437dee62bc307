# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Scan session combining sinogram synthesis and reconstruction."""

import logging
from timeit import default_timer as timer
from typing import Optional

import numpy as np

from . import metric
from .config import ScanConfiguration
from .draw import draw_system
from .geometry import FanBeamGeometry
from .image import AccumulationBuffer, PixelBuffer, to_greyscale
from .projector import SinogramSynthesizer
from .reconstruct import BackprojectionReconstructor, rescale
from .typing import Array

logger = logging.getLogger(__name__)


class CTScan:
    """Simulated scan of a single image.

    A scan session owns the greyscale source image, the sinogram, the
    backprojection accumulator and the most recent reconstruction. The
    sinogram and reconstruction may be computed in full, or one
    projection at a time for incremental display, e.g.

    >>> from ctscan import ScanConfiguration
    >>> img = np.full((64, 64), 128, dtype=np.uint8)
    >>> cfg = ScanConfiguration(angular_step=5, detector_count=64, fan_width=30)
    >>> with CTScan(img, cfg) as scan:
    ...     sino = scan.create_sinogram()
    ...     recon = scan.reconstruct()
    >>> sino.shape
    (72, 64)

    Session buffers are released by :meth:`close`, which is also called
    on exit from a ``with`` block.
    """

    def __init__(self, image: Array, config: ScanConfiguration, max_workers: Optional[int] = None):
        """
        Args:
            image: Source raster, either greyscale (Nr x Nc) or RGB(A)
                (Nr x Nc x 3 or Nr x Nc x 4), with byte values. It is
                converted to greyscale and copied.
            config: Scan configuration.
            max_workers: Number of worker threads used for full scans
                and reconstructions. If ``None``, a default based on the
                number of processors is used.

        Raises:
            DegenerateConfiguration: If the image is too small to scan.
        """
        self.config = config
        self.source = PixelBuffer(to_greyscale(np.asarray(image)), readonly=True)
        self.geometry = FanBeamGeometry(self.source.shape, config)
        self.synthesizer = SinogramSynthesizer(self.geometry, max_workers=max_workers)
        self.reconstructor = BackprojectionReconstructor(
            self.geometry, filtering=config.filtering, max_workers=max_workers
        )
        self._sinogram = PixelBuffer.zeros(self.synthesizer.sinogram_shape)
        self._accumulation = AccumulationBuffer(self.source.shape)
        self._reconstruction = PixelBuffer.zeros(self.source.shape)
        self._closed = False
        logger.debug(
            "Scan session for %s image: %d projections, %d detectors, radius %d",
            self.source.shape,
            self.geometry.num_projections,
            self.geometry.detector_count,
            self.geometry.radius,
        )

    def __enter__(self) -> "CTScan":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False

    def close(self):
        """Release the session buffers."""
        self._sinogram = None
        self._accumulation = None
        self._reconstruction = None
        self._closed = True

    def _check_open(self):
        if self._closed:
            raise RuntimeError("Scan session has been closed")

    @property
    def sinogram(self) -> PixelBuffer:
        """Current sinogram."""
        self._check_open()
        return self._sinogram

    @property
    def reconstruction(self) -> PixelBuffer:
        """Most recent reconstruction."""
        self._check_open()
        return self._reconstruction

    @property
    def accumulation(self) -> AccumulationBuffer:
        """Backprojection accumulator."""
        self._check_open()
        return self._accumulation

    def create_sinogram(self, row: Optional[int] = None) -> PixelBuffer:
        """Compute the sinogram, or a single row of it.

        Args:
            row: Projection index of the row to be computed. If
                ``None``, a new sinogram is computed in full.

        Returns:
            The sinogram.

        Raises:
            IndexError: If `row` is not a valid projection index.
        """
        self._check_open()
        if row is None:
            t0 = timer()
            self._sinogram = self.synthesizer.project(self.source)
            logger.info("Sinogram %s computed in %.3f s", self._sinogram.shape, timer() - t0)
        else:
            self.synthesizer.project_row(self.source, self._sinogram, row)
        return self._sinogram

    def reconstruct(self, row: Optional[int] = None, rescale_image: bool = True) -> PixelBuffer:
        """Reconstruct the image, or add one sinogram row to it.

        A full reconstruction discards anything accumulated so far. A
        single row is added to the existing accumulation, so stepping
        through the rows one at a time shows the reconstruction building
        up.

        Args:
            row: Projection index of the row to be backprojected. If
                ``None``, every row is backprojected.
            rescale_image: Flag indicating whether the reconstruction is
                updated after backprojecting a single row. A full
                reconstruction is always rescaled.

        Returns:
            The most recent reconstruction.

        Raises:
            IndexError: If `row` is not a valid projection index.
        """
        self._check_open()
        if row is None:
            t0 = timer()
            self.reconstructor.back_project(self._sinogram, self._accumulation)
            self._reconstruction = rescale(self._accumulation)
            logger.info(
                "Reconstruction %s computed in %.3f s", self._reconstruction.shape, timer() - t0
            )
        else:
            self.reconstructor.back_project_row(self._sinogram, self._accumulation, row)
            if rescale_image:
                self._reconstruction = rescale(self._accumulation)
        return self._reconstruction

    def reset_reconstruction(self):
        """Discard the accumulated backprojection and reconstruction."""
        self._check_open()
        self._accumulation.reset()
        self._reconstruction = PixelBuffer.zeros(self.source.shape)

    def draw_system(self, step: int) -> np.ndarray:
        """Draw the scanner at rotation `step` over the source image.

        Returns:
            An Nr x Nc x 3 RGB raster of dtype `uint8`.

        Raises:
            InvalidGeometryRequest: If the rotation angle of `step` is
                outside the range [0, 360].
        """
        self._check_open()
        return draw_system(self.source, self.geometry, step)

    def mean_squared_error(self) -> float:
        """Mean squared error of the most recent reconstruction."""
        self._check_open()
        return metric.mse(self.source, self._reconstruction)
