# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""Support functions for determining the package version."""

import os
import re
from ast import parse
from subprocess import PIPE, Popen
from typing import Any, Optional, Tuple, Union


def init_path() -> str:  # pragma: no cover
    """Get the path of the package `__init__.py` file."""
    return os.path.join(os.path.dirname(__file__), "__init__.py")


def assigned_value(path: str, var: str) -> Any:
    """Get the value assigned to a module level variable in a Python file.

    The file is parsed rather than imported, so that the version can be
    determined by `setup.py` before any of the package dependencies are
    installed.

    Args:
        path: Path of Python file.
        var: Name of variable.

    Returns:
        Value assigned to variable `var`.

    Raises:
        RuntimeError: If no statement assigning to `var` is found.
    """
    with open(path) as f:
        for line in f:
            if re.match(rf"^{var}\s*=", line):
                return parse(line).body[0].value.value  # type: ignore
    raise RuntimeError(f"Could not find assignment to variable {var} in {path}")


def git_hash() -> Optional[str]:  # nosec  pragma: no cover
    """Get the short git hash of the current commit.

    Returns:
       Short git hash, or ``None`` if not in a git repository.
    """
    try:
        process = Popen(
            ["git", "rev-parse", "--short", "HEAD"], shell=False, stdout=PIPE, stderr=PIPE
        )
    except OSError:
        return None
    ghash = process.communicate()[0].strip().decode("utf-8")
    return ghash if ghash else None


def package_version(split: bool = False) -> Union[str, Tuple[str, str]]:  # pragma: no cover
    """Get current package version.

    Development versions (anything other than a purely numeric version,
    possibly ending with post<n>) are extended with the git hash of the
    current commit.

    Args:
        split: Flag indicating whether to return the package version as a
           single string or as a tuple of version and git hash suffix.

    Returns:
        Package version string or tuple of strings.
    """
    version = assigned_value(init_path(), "__version__")
    suffix = ""
    if not re.match(r"^[0-9\.]+(post[0-9]+)?$", version):
        ghash = git_hash()
        if ghash:
            suffix = "+" + ghash
    if split:
        return version, suffix
    return version + suffix
