# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Scan configuration."""

import math
import numbers
import warnings
from dataclasses import dataclass

from .exception import DegenerateConfiguration


@dataclass(frozen=True)
class ScanConfiguration:
    """Emitter/detector fan parameters of a scan session.

    Instances are immutable and are validated on construction, so a
    configuration that exists can always be scanned with.

    Attributes:
        angular_step: Rotation of the emitter/detector system between
            successive projections, in degrees.
        detector_count: Number of detectors on the arc opposite the
            emitter.
        fan_width: Angle spanned by the detector arc, in whole degrees.
        filtering: Flag indicating whether projections are ramp
            filtered before backprojection.
    """

    angular_step: float = 1.0
    detector_count: int = 2
    fan_width: int = 10
    filtering: bool = False

    def __post_init__(self):
        """Validate the configuration.

        Raises:
            DegenerateConfiguration: If any parameter leads to an
                undefined scanner geometry.
            TypeError: If `detector_count` or `fan_width` is not an
                integer.
        """
        for name in ("detector_count", "fan_width"):
            value = getattr(self, name)
            if not isinstance(value, numbers.Integral) or isinstance(value, bool):
                raise TypeError(f"Parameter {name} must be an int; got {value}")
        if not self.angular_step > 0:
            raise DegenerateConfiguration(
                f"Angular step must be positive; got {self.angular_step}"
            )
        if self.angular_step > 360:
            raise DegenerateConfiguration(
                f"Angular step {self.angular_step} exceeds a full rotation; "
                "no projection would be taken"
            )
        if self.detector_count < 2:
            raise DegenerateConfiguration(
                f"At least two detectors are required; got {self.detector_count}"
            )
        if self.fan_width <= 0:
            raise DegenerateConfiguration(f"Fan width must be positive; got {self.fan_width}")
        if self.fan_width > 360:
            warnings.warn(
                f"Fan width {self.fan_width} exceeds 360 degrees; detectors will overlap."
            )

    @property
    def num_projections(self) -> int:
        """Number of projections (sinogram rows) in a full rotation."""
        return int(math.floor(360 / self.angular_step))

    @property
    def detector_step(self) -> float:
        """Angular spacing between adjacent detectors, in degrees."""
        return self.fan_width / (self.detector_count - 1)
