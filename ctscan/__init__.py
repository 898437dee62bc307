# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""CTScan is a Python package simulating a fan-beam computed tomography
scanner: sinogram synthesis by ray tracing and image reconstruction by
(filtered) backprojection.
"""

__version__ = "0.1.0"

import logging

# isort: off

# Suppress jax device warning. See https://github.com/google/jax/issues/6805
logging.getLogger("jax._src.xla_bridge").addFilter(  # jax 0.4.8 and later
    logging.Filter("No GPU/TPU found, falling back to CPU.")
)

# isort: on

from .config import ScanConfiguration
from .exception import (
    CTScanError,
    DegenerateConfiguration,
    DimensionMismatch,
    InvalidGeometryRequest,
)
from .image import AccumulationBuffer, PixelBuffer, rgb2gray, to_greyscale
from .scan import CTScan

__all__ = [
    "CTScan",
    "ScanConfiguration",
    "PixelBuffer",
    "AccumulationBuffer",
    "rgb2gray",
    "to_greyscale",
    "CTScanError",
    "DegenerateConfiguration",
    "DimensionMismatch",
    "InvalidGeometryRequest",
]
