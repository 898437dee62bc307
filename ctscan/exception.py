# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Exceptions raised by the scan simulation."""


class CTScanError(Exception):
    """Base class for errors detected by the scan simulation."""


class DegenerateConfiguration(CTScanError, ValueError):
    """Scan configuration for which the scanner geometry is undefined.

    Raised when a configuration is validated, e.g. for fewer than two
    detectors (the detector spacing would be a division by zero), so
    that the problem never surfaces as a numeric fault during a scan.
    """


class InvalidGeometryRequest(CTScanError, ValueError):
    """Requested scanner position is outside the full rotation."""


class DimensionMismatch(CTScanError, ValueError):
    """Images compared by a quality metric differ in shape."""
