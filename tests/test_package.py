from __future__ import annotations

import polymask


def test_package_metadata():
    assert polymask.__version__ == "0.1.0"
    assert polymask.__doc__.isascii()
    assert set(polymask.__all__) <= set(dir(polymask))
