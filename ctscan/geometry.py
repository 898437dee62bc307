# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Fan-beam scanner geometry."""

import math
from typing import Iterator, List, NamedTuple

import numpy as np

from .config import ScanConfiguration
from .exception import DegenerateConfiguration
from .raster import bresenham_line
from .typing import Point, Shape


class Ray(NamedTuple):
    """A ray from the emitter to one detector."""

    emitter: Point
    """Integer `(x, y)` emitter position."""
    detector: Point
    """Integer `(x, y)` detector position."""
    pixels: np.ndarray
    """`(N, 2)` array of the pixels crossed, starting at the emitter."""


class FanBeamGeometry:
    r"""Emitter and detector positions on a circle around the image.

    The emitter and the detector arc rotate on a circle centered on the
    image midpoint. For a rotation `angle` (degrees) the emitter is at
    polar angle `angle` and detector `i` at polar angle

    .. math::
       \text{angle} + (180 - \lfloor w / 2 \rfloor) + i \, s \;,

    where :math:`w` is the fan width and :math:`s` the detector step,
    so that the detector arc is centered opposite the emitter. Positions
    are truncated toward zero to integer pixel coordinates.
    """

    padding = 5
    """Margin in pixels between the scan circle and the image border."""

    def __init__(self, image_shape: Shape, config: ScanConfiguration):
        """
        Args:
            image_shape: Shape `(height, width)` of the scanned image.
            config: Scan configuration.

        Raises:
            DegenerateConfiguration: If the image is too small for a
                scan circle inside the padding margin.
        """
        self.image_shape = tuple(image_shape)
        self.config = config
        height, width = self.image_shape
        self.center_x = width // 2
        self.center_y = height // 2
        self.radius = min(width, height) // 2 - self.padding
        if self.radius < 1:
            raise DegenerateConfiguration(
                f"Image of shape {self.image_shape} is too small for a scan circle "
                f"with {self.padding} pixel padding"
            )
        self.detector_step = config.detector_step
        self.num_projections = config.num_projections
        self.detector_count = config.detector_count
        # Empirical correction for the excess intensity accumulated near
        # the emitter during backprojection.
        self.first_pixels_to_skip = int(2.5 * width / config.fan_width)

    @property
    def center(self) -> Point:
        """Integer `(x, y)` center of the scan circle."""
        return self.center_x, self.center_y

    def row_angle(self, row: int) -> float:
        """Rotation angle in degrees of projection (sinogram row) `row`."""
        return row * self.config.angular_step

    def _circle_point(self, angle: float) -> Point:
        rad = math.radians(angle)
        return (
            int(self.center_x - math.cos(rad) * self.radius),
            int(self.center_y - math.sin(rad) * self.radius),
        )

    def emitter_position(self, angle: float) -> Point:
        """Position of the emitter at rotation `angle` (degrees)."""
        return self._circle_point(angle)

    def detector_angle(self, angle: float, index: int) -> float:
        """Polar angle in degrees of detector `index` at rotation `angle`."""
        return angle + (180 - self.config.fan_width // 2) + index * self.detector_step

    def detector_position(self, angle: float, index: int) -> Point:
        """Position of detector `index` at rotation `angle` (degrees)."""
        return self._circle_point(self.detector_angle(angle, index))

    def detector_positions(self, angle: float) -> List[Point]:
        """Positions of all detectors at rotation `angle` (degrees)."""
        return [self.detector_position(angle, i) for i in range(self.detector_count)]

    def ray(self, angle: float, index: int) -> Ray:
        """Ray from the emitter to detector `index` at rotation `angle`."""
        emitter = self.emitter_position(angle)
        detector = self.detector_position(angle, index)
        return Ray(emitter, detector, bresenham_line(*emitter, *detector))

    def rays(self, angle: float) -> Iterator[Ray]:
        """Rays to every detector, in detector order, at rotation `angle`."""
        for index in range(self.detector_count):
            yield self.ray(angle, index)

    def check_row(self, row: int):
        """Check that `row` indexes a projection of a full rotation.

        Raises:
            IndexError: If `row` is outside `[0, num_projections)`.
        """
        if not 0 <= row < self.num_projections:
            raise IndexError(
                f"Projection row {row} outside range [0, {self.num_projections})"
            )
