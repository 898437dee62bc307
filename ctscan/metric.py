# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Reconstruction quality metrics."""

from typing import Optional, Tuple, Union

import jax.numpy as jnp

from .exception import DimensionMismatch
from .image import PixelBuffer
from .typing import Array

Image = Union[PixelBuffer, Array]


def _as_arrays(reference: Image, comparison: Image) -> Tuple[Array, Array]:
    """Convert a pair of images to float arrays of matching shape.

    Raises:
        DimensionMismatch: If the image shapes differ.
    """
    if isinstance(reference, PixelBuffer):
        reference = reference.array
    if isinstance(comparison, PixelBuffer):
        comparison = comparison.array
    reference = jnp.asarray(reference, dtype=jnp.float32)
    comparison = jnp.asarray(comparison, dtype=jnp.float32)
    if reference.shape != comparison.shape:
        raise DimensionMismatch(
            f"Images must have the same shape; got {reference.shape} and {comparison.shape}"
        )
    return reference, comparison


def mae(reference: Image, comparison: Image) -> float:
    """Compute Mean Absolute Error (MAE) between two images.

    Args:
        reference: Reference image.
        comparison: Comparison image.

    Returns:
        MAE between `reference` and `comparison`.
    """
    reference, comparison = _as_arrays(reference, comparison)
    return float(jnp.mean(jnp.abs(reference - comparison)))


def mse(reference: Image, comparison: Image) -> float:
    """Compute Mean Squared Error (MSE) between two images.

    Args:
        reference: Reference image.
        comparison: Comparison image.

    Returns:
        MSE between `reference` and `comparison`.

    Raises:
        DimensionMismatch: If the image shapes differ.
    """
    reference, comparison = _as_arrays(reference, comparison)
    return float(jnp.mean((reference - comparison) ** 2))


def snr(reference: Image, comparison: Image) -> float:
    """Compute Signal to Noise Ratio (SNR) of two images.

    Args:
        reference: Reference image.
        comparison: Comparison image.

    Returns:
        SNR of `comparison` with respect to `reference`.
    """
    reference, comparison = _as_arrays(reference, comparison)
    rt = jnp.var(reference) / jnp.mean((reference - comparison) ** 2)
    return float(10.0 * jnp.log10(rt))


def psnr(
    reference: Image, comparison: Image, signal_range: Optional[Union[int, float]] = 255
) -> float:
    """Compute Peak Signal to Noise Ratio (PSNR) of two images.

    Args:
        reference: Reference image.
        comparison: Comparison image.
        signal_range: Signal range, either the value to use (the
            default of 255 is the range of 8 bit intensities) or
            ``None``, in which case the actual range of the reference
            signal is used.

    Returns:
        PSNR of `comparison` with respect to `reference`. Identical
        images have infinite PSNR.
    """
    reference, comparison = _as_arrays(reference, comparison)
    if signal_range is None:
        signal_range = jnp.abs(jnp.max(reference) - jnp.min(reference))
    rt = signal_range**2 / jnp.mean((reference - comparison) ** 2)
    return float(10.0 * jnp.log10(rt))
