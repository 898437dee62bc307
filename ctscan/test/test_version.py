import os
import tempfile

import pytest

import ctscan
from ctscan._version import assigned_value, package_version


def test_assigned_value():
    temp_dir = tempfile.TemporaryDirectory()
    path = os.path.join(temp_dir.name, "mod.py")
    with open(path, "w") as f:
        f.write('"""Doc."""\n\nversion_info = 3\n__version__ = "1.2.3"\n')
    assert assigned_value(path, "__version__") == "1.2.3"
    with pytest.raises(RuntimeError):
        assigned_value(path, "__author__")


def test_package_version():
    assert package_version().startswith(ctscan.__version__)
    version, _ = package_version(split=True)
    assert version == ctscan.__version__
