# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Rasterization of lines, circles and disks onto the integer grid."""

import numpy as np


def bresenham_line(x1: int, y1: int, x2: int, y2: int) -> np.ndarray:
    r"""Compute the pixels of a line segment by Bresenham's algorithm.

    The line is stepped one pixel at a time along its dominant axis
    (the `y` axis when :math:`|dx| = |dy|`) using integer arithmetic
    only. The decision variable is always evaluated while travelling in
    the direction of increasing coordinate along the dominant axis, and
    the pixel sequence is reversed when the requested direction is the
    opposite one. Consequently `bresenham_line(a, b)` is exactly
    `bresenham_line(b, a)` in reverse order, so that a ray traced from
    emitter to detector covers the same pixels as the same ray traced
    from detector to emitter.

    Args:
        x1: Column of start point.
        y1: Row of start point.
        x2: Column of end point.
        y2: Row of end point.

    Returns:
        An `(N, 2)` integer array of `(x, y)` pixel coordinates with
        :math:`N = \max(|dx|, |dy|) + 1`, starting at `(x1, y1)` and
        ending at `(x2, y2)`.
    """
    x1, y1, x2, y2 = int(x1), int(y1), int(x2), int(y2)
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    if dx > dy:
        reverse = x1 > x2
    else:
        reverse = y1 > y2
    if reverse:
        x1, y1, x2, y2 = x2, y2, x1, y1
    xi = 1 if x1 < x2 else -1
    yi = 1 if y1 < y2 else -1

    x, y = x1, y1
    pixels = [(x, y)]
    if dx > dy:
        ai = (dy - dx) * 2
        bi = dy * 2
        d = bi - dx
        while x != x2:
            if d >= 0:
                y += yi
                d += ai
            else:
                d += bi
            x += xi
            pixels.append((x, y))
    else:
        ai = (dx - dy) * 2
        bi = dx * 2
        d = bi - dy
        while y != y2:
            if d >= 0:
                x += xi
                d += ai
            else:
                d += bi
            y += yi
            pixels.append((x, y))

    line = np.array(pixels, dtype=int)
    if reverse:
        line = line[::-1]
    return line


def circle_perimeter(cx: int, cy: int, radius: int) -> np.ndarray:
    """Compute the pixels of a circle by the midpoint circle algorithm.

    Args:
        cx: Column of circle center.
        cy: Row of circle center.
        radius: Circle radius in pixels.

    Returns:
        An `(N, 2)` integer array of distinct `(x, y)` pixel coordinates.
    """
    if radius < 0:
        raise ValueError(f"Radius must be non-negative; got {radius}")
    octant = []
    x, y = radius, 0
    d = 1 - radius
    while x >= y:
        octant.append((x, y))
        y += 1
        if d < 0:
            d += 2 * y + 1
        else:
            x -= 1
            d += 2 * (y - x) + 1
    octant = np.array(octant, dtype=int)
    ox, oy = octant[:, 0], octant[:, 1]
    # reflect the first octant into the other seven
    xs = np.concatenate([ox, oy, -oy, -ox, -ox, -oy, oy, ox])
    ys = np.concatenate([oy, ox, ox, oy, -oy, -ox, -ox, -oy])
    points = np.unique(np.stack((xs + cx, ys + cy), axis=1), axis=0)
    return points


def disk(cx: float, cy: float, radius: float) -> np.ndarray:
    """Compute the pixels within a given distance of a point.

    Args:
        cx: Column of disk center.
        cy: Row of disk center.
        radius: Disk radius in pixels.

    Returns:
        An `(N, 2)` integer array of `(x, y)` pixel coordinates.
    """
    r = int(np.ceil(radius))
    offs = np.arange(-r, r + 1)
    gx, gy = np.meshgrid(np.round(cx) + offs, np.round(cy) + offs, indexing="xy")
    mask = (gx - cx) ** 2 + (gy - cy) ** 2 <= radius**2
    return np.stack((gx[mask], gy[mask]), axis=1).astype(int)
