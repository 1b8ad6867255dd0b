"""
Timing and randomization helpers.
"""

import asyncio
import math
import random
from typing import Optional, Union

from helperkit.utils.logger import get_logger


async def sleep(min_ms: int, max_ms: Optional[int] = None) -> None:
    """
    Suspend the calling task for a fixed or random number of milliseconds.

    Args:
        min_ms (int): Delay in milliseconds, or the lower bound when max_ms is given
        max_ms (Optional[int]): Upper bound (inclusive) for a random delay
    """
    if not min_ms:
        get_logger().error("The minimum sleep time wasn't provided! Skipping!")
        return

    delay = min_ms
    if max_ms is not None:
        delay = get_random_int(min_ms, max_ms)
        if delay is False:
            return

    get_logger().log(f"Initiating sleep for: {delay}")
    await asyncio.sleep(delay / 1000)


def get_random_int(min_value: int = 0, max_value: Optional[int] = None) -> Union[int, bool]:
    """
    Random integer in [min_value, max_value], both ends inclusive.

    Either bound being falsy (including 0) is treated as missing.

    Returns:
        Union[int, bool]: The random integer, or False when a bound is missing
    """
    if not min_value or not max_value:
        get_logger().error("No parameter were specified!")
        return False

    rand = math.floor(random.random() * (max_value - min_value + 1)) + min_value
    get_logger().log(f"A random int has been generated: {rand}")
    return rand
