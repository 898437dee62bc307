# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Forward projection of an image into a sinogram."""

import logging
from typing import Optional

from .geometry import FanBeamGeometry
from .image import PixelBuffer
from .util import parallel_for

logger = logging.getLogger(__name__)


class SinogramSynthesizer:
    """Fan-beam forward projector.

    Each sinogram cell is the mean intensity, truncated to an integer,
    of the image pixels on the ray from the emitter to the corresponding
    detector. The sinogram has one row per projection angle and one
    column per detector.

    Rows depend only on the (read-only) source image and write disjoint
    sinogram cells, so they may be computed in any order or
    concurrently with identical results.
    """

    def __init__(self, geometry: FanBeamGeometry, max_workers: Optional[int] = None):
        """
        Args:
            geometry: Scanner geometry.
            max_workers: Number of worker threads for :meth:`project`.
        """
        self.geometry = geometry
        self.max_workers = max_workers

    @property
    def sinogram_shape(self):
        """Shape `(num_projections, detector_count)` of the sinogram."""
        return (self.geometry.num_projections, self.geometry.detector_count)

    def project_row(self, image: PixelBuffer, sinogram: PixelBuffer, row: int):
        """Compute a single sinogram row in place.

        Args:
            image: Source image.
            sinogram: Sinogram to be updated.
            row: Projection index.

        Raises:
            IndexError: If `row` is not a valid projection index.
            ValueError: If `image` or `sinogram` has the wrong shape.
        """
        self.geometry.check_row(row)
        if image.shape != self.geometry.image_shape:
            raise ValueError(
                f"Image shape {image.shape} does not match geometry {self.geometry.image_shape}"
            )
        if sinogram.shape != self.sinogram_shape:
            raise ValueError(
                f"Sinogram shape {sinogram.shape} does not match {self.sinogram_shape}"
            )
        angle = self.geometry.row_angle(row)
        values = []
        for ray in self.geometry.rays(angle):
            total = image.take(ray.pixels[:, 0], ray.pixels[:, 1]).sum()
            values.append(int(total) // len(ray.pixels))
        sinogram.set_row(row, values)

    def project(self, image: PixelBuffer, sinogram: Optional[PixelBuffer] = None) -> PixelBuffer:
        """Compute every sinogram row.

        Args:
            image: Source image.
            sinogram: Sinogram to be filled. If ``None``, a new one is
                allocated.

        Returns:
            The filled sinogram.
        """
        if sinogram is None:
            sinogram = PixelBuffer.zeros(self.sinogram_shape)
        logger.debug(
            "Projecting %s image into %s sinogram", image.shape, self.sinogram_shape
        )
        parallel_for(
            lambda row: self.project_row(image, sinogram, row),
            self.geometry.num_projections,
            max_workers=self.max_workers,
            label="sinogram",
        )
        return sinogram
