# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Ramp filtering of projections for filtered backprojection."""

import numpy as np

import jax.numpy as jnp

from .typing import Array, JaxArray


def ramp_kernel(width: int) -> JaxArray:
    r"""Construct a spatial domain ramp (Ram-Lak) filter kernel.

    The kernel weight at offset :math:`d` from the center is

    .. math::
       h(d) = \begin{cases} 1 & d = 0 \\ 0 & d \text{ even} \\
       -\frac{4}{\pi^2 d^2} & d \text{ odd} \end{cases} \;.

    Args:
        width: Requested kernel length. An even value is increased by
            one so that the kernel has a center tap.

    Returns:
        Kernel weights as a 1D array of odd length, centered at index
        `len(kernel) // 2`.
    """
    if width < 1:
        raise ValueError(f"Kernel width must be positive; got {width}")
    if width % 2 == 0:
        width += 1
    offset = jnp.abs(jnp.arange(width) - width // 2)
    # avoid a zero divisor at the center tap, which is overwritten below
    dsq = jnp.maximum(offset, 1).astype(jnp.float32) ** 2
    odd = -4.0 / (jnp.pi**2 * dsq)
    return jnp.where(offset == 0, 1.0, jnp.where(offset % 2 == 0, 0.0, odd))


def apply_kernel(values: Array, kernel: Array) -> np.ndarray:
    """Convolve a projection with a kernel.

    Output element `i` is the sum over kernel taps `j` of
    `values[i + j - m] * kernel[j]`, where `m = len(kernel) // 2`, with
    each product truncated toward zero. Taps that would read outside
    `values` are omitted, so the effective window narrows near the ends
    of the projection.

    Args:
        values: 1D array of projection values.
        kernel: 1D array of kernel weights of odd length.

    Returns:
        Filtered projection as a 1D `int64` array of the same length as
        `values`.
    """
    values = jnp.asarray(values, dtype=jnp.float32)
    kernel = jnp.asarray(kernel, dtype=jnp.float32)
    n = values.shape[0]
    middle = kernel.shape[0] // 2
    src = jnp.arange(n)[:, jnp.newaxis] + jnp.arange(kernel.shape[0])[jnp.newaxis, :] - middle
    valid = (src >= 0) & (src < n)
    terms = jnp.trunc(values[jnp.clip(src, 0, n - 1)] * kernel[jnp.newaxis, :])
    return np.asarray(jnp.sum(jnp.where(valid, terms, 0.0), axis=1)).astype(np.int64)
