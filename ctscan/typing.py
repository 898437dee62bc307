# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Type definitions."""

from typing import Tuple, Union

try:
    # available in python 3.10
    from typing import TypeAlias  # type: ignore
except ImportError:
    from typing_extensions import TypeAlias  # type: ignore

import numpy as np

import jax

JaxArray: TypeAlias = jax.Array
"""A jax array."""

Array: TypeAlias = Union[np.ndarray, JaxArray]
"""Either a numpy or a jax array."""

Shape: TypeAlias = Tuple[int, ...]
"""A shape of a numpy or jax array."""

Point: TypeAlias = Tuple[int, int]
"""An integer pixel coordinate `(x, y)`."""
