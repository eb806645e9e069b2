# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Callable

Clock = Callable[[], int]


def current_millis() -> int:
    """Wall-clock time as integer epoch milliseconds."""

    return time.time_ns() // 1_000_000
