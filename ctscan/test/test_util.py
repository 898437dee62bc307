import threading

import pytest

from ctscan.util import default_workers, parallel_for


def test_default_workers():
    assert 1 <= default_workers() <= 32


@pytest.mark.parametrize("max_workers", [None, 1, 3])
def test_parallel_for(max_workers):
    seen = []
    lock = threading.Lock()

    def func(i):
        with lock:
            seen.append(i)

    parallel_for(func, 20, max_workers=max_workers)
    assert sorted(seen) == list(range(20))


def test_parallel_for_empty():
    parallel_for(lambda i: None, 0)


@pytest.mark.parametrize("max_workers", [1, 4])
def test_parallel_for_exception(max_workers):
    def func(i):
        if i == 7:
            raise ZeroDivisionError("row 7")

    with pytest.raises(ZeroDivisionError):
        parallel_for(func, 10, max_workers=max_workers)


def test_parallel_for_workers():
    with pytest.raises(ValueError):
        parallel_for(lambda i: None, 5, max_workers=0)
