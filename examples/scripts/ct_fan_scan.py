#!/usr/bin/env python
# -*- coding: utf-8 -*-
# This file is part of the CTScan package. Details of the copyright
# and user license can be found in the 'LICENSE' file distributed
# with the package.


r"""
Fan-Beam Scan and Filtered Backprojection
=========================================

This example simulates a fan-beam scan of a circular phantom and
compares the images reconstructed by plain and by ramp filtered
backprojection. The scanner geometry at one rotation step is drawn over
the phantom.
"""

import logging

import matplotlib.pyplot as plt

from ctscan import CTScan, ScanConfiguration, metric
from ctscan.examples import create_circular_phantom

logging.basicConfig(level=logging.INFO)


"""
Create a ground truth image.
"""
N = 128
x_gt = create_circular_phantom((N, N), [55, 40, 18, 8], [90, 160, 40, 240])


"""
Scan and reconstruct, without and with filtering.
"""
results = {}
for filtering in (False, True):
    cfg = ScanConfiguration(angular_step=2, detector_count=120, fan_width=90, filtering=filtering)
    with CTScan(x_gt, cfg) as scan:
        sino = scan.create_sinogram()
        recon = scan.reconstruct()
        geometry = scan.draw_system(20)
        results[filtering] = (sino.array.copy(), recon.array.copy())
        print(
            f"filtering={filtering}:  MSE {scan.mean_squared_error():.1f}  "
            f"PSNR {metric.psnr(x_gt, recon):.2f} dB"
        )


"""
Display the scanner geometry, the sinogram and the reconstructions.
"""
fig, ax = plt.subplots(nrows=1, ncols=4, figsize=(16, 4.5))
ax[0].imshow(geometry)
ax[0].set_title("Scanner geometry")
ax[1].imshow(results[False][0], cmap="gray", aspect="auto")
ax[1].set_title("Sinogram")
ax[1].set_xlabel("detector")
ax[1].set_ylabel("projection")
ax[2].imshow(results[False][1], cmap="gray", vmin=0, vmax=255)
ax[2].set_title("Backprojection")
ax[3].imshow(results[True][1], cmap="gray", vmin=0, vmax=255)
ax[3].set_title("Filtered backprojection")
fig.tight_layout()
plt.show()
