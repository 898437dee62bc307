# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Test images and image reading for example scripts."""

from typing import List, Optional

import numpy as np

import imageio.v2 as iio

from .image import rgb2gray
from .typing import Shape


def image_read(path: str) -> np.ndarray:
    """Read an image file as a greyscale raster.

    Args:
        path: Path of an image file in any format supported by
            :mod:`imageio`.

    Returns:
        Greyscale image as an Nr x Nc array of dtype `uint8`.
    """
    return rgb2gray(iio.imread(path))


def uniform_image(shape: Shape, value: int = 128) -> np.ndarray:
    """Construct an image of constant intensity.

    Args:
        shape: Shape `(height, width)` of the image.
        value: Intensity of every pixel.

    Returns:
        Image as an array of dtype `uint8`.
    """
    if not 0 <= value <= 255:
        raise ValueError(f"Intensity {value} outside the range [0, 255]")
    return np.full(shape, value, dtype=np.uint8)


def create_cone(img_shape: Shape, center: Optional[List[float]] = None) -> np.ndarray:
    """Compute a 2D map of the distance from a center pixel.

    Args:
        img_shape: Shape of the image for which the distance map is being
            computed.
        center: Tuple of center pixel coordinates. If ``None``, this is
            set to the center of the image.

    Returns:
        An image containing a 2D map of the distances.
    """
    if center is None:
        center = [(img_dim - 1) / 2 for img_dim in img_shape]
    coords = [np.arange(0, img_dim) for img_dim in img_shape]
    coord_mesh = np.meshgrid(*coords, sparse=True, indexing="ij")
    dist_map = sum([(coord_mesh[i] - center[i]) ** 2 for i in range(len(coord_mesh))])
    return np.sqrt(dist_map)


def create_circular_phantom(
    img_shape: Shape, radius_list: list, val_list: list, center: Optional[list] = None
) -> np.ndarray:
    """Construct a circular phantom with given radii and intensities.

    Rings are painted in list order, so a smaller radius should follow a
    larger one for it to remain visible.

    Args:
        img_shape: Shape of the phantom to be created.
        radius_list: List of radii of the rings in the phantom.
        val_list: List of intensity values (0 to 255) of the rings.
        center: Tuple of center pixel coordinates. If ``None``, this is
           set to the center of the image.

    Returns:
        The computed circular phantom, of dtype `uint8`.
    """
    dist_map = create_cone(img_shape, center)
    img = np.zeros(img_shape, dtype=np.uint8)
    for r, val in zip(radius_list, val_list):
        img[dist_map < r] = val
    return img
