# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Diagnostic drawing of the scanner geometry over the scanned image."""

from typing import Tuple

import numpy as np

from .exception import InvalidGeometryRequest
from .geometry import FanBeamGeometry
from .image import PixelBuffer
from .raster import bresenham_line, circle_perimeter, disk

RED = (255, 0, 0)
BLUE = (0, 0, 255)
CADET_BLUE = (95, 158, 160)

point_size = 10
"""Diameter in pixels of drawn center, emitter and detector points."""
line_width = 2
"""Width in pixels of the drawn scan circle and rays."""


def _thicken(points: np.ndarray, width: int) -> np.ndarray:
    """Stamp each point with a `width` x `width` square."""
    if width <= 1:
        return points
    offs = np.array([(i, j) for i in range(width) for j in range(width)])
    return (points[:, np.newaxis, :] + offs[np.newaxis]).reshape(-1, 2)


def _plot(canvas: np.ndarray, points: np.ndarray, color: Tuple[int, int, int]):
    """Set the pixels of `canvas` at `points`, ignoring points outside it."""
    height, width = canvas.shape[0:2]
    xs, ys = points[:, 0], points[:, 1]
    inside = (xs >= 0) & (xs < width) & (ys >= 0) & (ys < height)
    canvas[ys[inside], xs[inside]] = color


def draw_system(image: PixelBuffer, geometry: FanBeamGeometry, step: int) -> np.ndarray:
    """Draw the scanner at one rotation step over an image.

    The drawing shows the scan circle, its center, the emitter, each
    detector, and the rays from the emitter to the detectors.

    Args:
        image: Scanned image.
        geometry: Scanner geometry.
        step: Rotation step, i.e. the projection index.

    Returns:
        An Nr x Nc x 3 RGB raster of dtype `uint8`.

    Raises:
        InvalidGeometryRequest: If the rotation angle of `step` is
            negative or exceeds 360 degrees.
    """
    angle = geometry.row_angle(step)
    if angle > 360 or angle < 0:
        raise InvalidGeometryRequest(
            f"Rotation angle {angle} of step {step} is outside the range [0, 360]"
        )
    canvas = np.repeat(image.array[..., np.newaxis], 3, axis=2)
    cx, cy = geometry.center
    half = point_size / 2

    _plot(canvas, _thicken(circle_perimeter(cx, cy, geometry.radius), line_width), RED)
    _plot(canvas, disk(cx, cy, half), BLUE)
    emitter = geometry.emitter_position(angle)
    _plot(canvas, disk(*emitter, half), BLUE)
    for detector in geometry.detector_positions(angle):
        _plot(canvas, disk(*detector, half), BLUE)
        _plot(canvas, _thicken(bresenham_line(*emitter, *detector), line_width), CADET_BLUE)
    return canvas
