"""CTScan package configuration."""

import importlib.util
import os
import os.path
import site
import sys

from setuptools import find_namespace_packages, setup

# Import module ctscan._version without executing __init__.py
spec = importlib.util.spec_from_file_location("_version", os.path.join("ctscan", "_version.py"))
module = importlib.util.module_from_spec(spec)
sys.modules["_version"] = module
spec.loader.exec_module(module)
from _version import package_version

name = "ctscan"
version = package_version()
packages = find_namespace_packages(where="ctscan")
packages = ["ctscan"] + [f"ctscan.{m}" for m in packages]


longdesc = """
CTScan is a Python package that simulates a fan-beam computed tomography scanner. An emitter and an arc of detectors rotate on a circle around a greyscale image; the mean intensity along each emitter-detector ray, traced with Bresenham's algorithm, forms a sinogram, from which the image is reconstructed by (optionally ramp filtered) backprojection. Projection rows are computed concurrently, with backprojected values accumulated by atomic per-cell addition.
"""

# Set install_requires from requirements.txt file
with open("requirements.txt") as f:
    lines = f.readlines()
install_requires = [line.strip() for line in lines]

python_requires = ">=3.8"
tests_require = ["pytest"]

extra_require_files = [
    "dev_requirements.txt",
    os.path.join("examples", "examples_requirements.txt"),
]
extras_require = {"tests": tests_require}
for require_file in extra_require_files:
    extras_label = os.path.basename(require_file).partition("_")[0]
    with open(require_file) as f:
        lines = f.readlines()
    extras_require[extras_label] = [line.strip() for line in lines if line[0:2] != "-r"]

# PEP517 workaround, see https://www.scivision.dev/python-pip-devel-user-install/
site.ENABLE_USER_SITE = True

setup(
    name=name,
    version=version,
    description="Computed tomography scanner simulation: sinogram "
    "synthesis and filtered backprojection",
    long_description=longdesc,
    keywords=[
        "Computed Tomography",
        "Sinogram",
        "Fan Beam",
        "Backprojection",
        "Filtered Backprojection",
        "Ram-Lak Filter",
        "Bresenham",
    ],
    platforms="Any",
    license="BSD-3-Clause",
    author="CTScan Developers",
    packages=packages,
    include_package_data=True,
    python_requires=python_requires,
    install_requires=install_requires,
    extras_require=extras_require,
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Intended Audience :: Science/Research",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering :: Image Processing",
        "Topic :: Scientific/Engineering :: Medical Science Apps.",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    zip_safe=False,
)
