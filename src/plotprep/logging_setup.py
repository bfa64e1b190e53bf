import logging
import os
from typing import Optional

from plotprep.settings import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    """
    Minimal logging setup.
    - Uses PLOTPREP_LOG_LEVEL env (via settings) if level is None.
    - Configures a single console handler via logging.basicConfig.
    """
    level_name = (level or os.getenv("PLOTPREP_LOG_LEVEL") or get_settings().log_level).upper()
    # Fallback to INFO if user passes something weird
    level_value = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
