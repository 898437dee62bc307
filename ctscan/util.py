# -*- coding: utf-8 -*-
# Copyright (C) 2026 by CTScan Developers
# All rights reserved. BSD 3-clause License.
# This file is part of the CTScan package. Details of the copyright and
# user license can be found in the 'LICENSE' file distributed with the
# package.

"""General utility functions."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from timeit import default_timer as timer
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def default_workers() -> int:
    """Default number of worker threads.

    Returns:
        The default of :class:`concurrent.futures.ThreadPoolExecutor`,
        i.e. the number of processors plus four, capped at 32.
    """
    return min(32, (os.cpu_count() or 1) + 4)


def parallel_for(
    func: Callable[[int], None], count: int, max_workers: Optional[int] = None, label: str = ""
):
    """Call `func(i)` for every `i` in `range(count)` on a thread pool.

    The calls are independent units of work that run to completion in
    any order. This function returns only after every call has
    finished, so all effects of the calls are visible to the caller.
    The first exception raised by any call is re-raised here.

    Args:
        func: Function of the work item index.
        count: Number of work items.
        max_workers: Number of worker threads. If ``None``, use
            :func:`default_workers`. A value of 1 runs all items
            sequentially in the calling thread.
        label: Description of the work for log records.
    """
    if max_workers is None:
        max_workers = default_workers()
    if max_workers < 1:
        raise ValueError(f"Parameter max_workers must be at least 1; got {max_workers}")
    t0 = timer()
    if max_workers == 1 or count <= 1:
        for i in range(count):
            func(i)
    else:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            # consume the iterator so that worker exceptions propagate
            for _ in executor.map(func, range(count)):
                pass
    logger.debug(
        "%s: %d items on %d workers in %.3f s",
        label or "parallel_for",
        count,
        max_workers,
        timer() - t0,
    )
