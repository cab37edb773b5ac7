"""Environment variable helpers"""

import logging
import os

logger = logging.getLogger(__name__)


def get_timeout(env_name: str, default: float) -> float:
    """
    Read a subprocess deadline from the environment

    Args:
        env_name: Environment variable name
        default: Deadline in seconds when unset or invalid

    Returns:
        Deadline in seconds
    """
    raw = os.environ.get(env_name)
    if not raw:
        return default

    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {env_name}={raw!r}, using {default}s")
        return default

    if value <= 0:
        logger.warning(f"Ignoring non-positive {env_name}={raw!r}, using {default}s")
        return default

    return value
