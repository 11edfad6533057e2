# lakernel/utils/logger.py
# ---------------------------------------------------------------
# Минимальный логгер + проверка NaN/Inf для отладки численных путей.
# ---------------------------------------------------------------

import logging

import numpy as np


def init_logger():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    return logging.getLogger("lakernel")

logger = init_logger()

def check_finite(values, context: str = "") -> bool:
    """Проверить, что все значения конечны; иначе вывести в лог."""
    arr = np.asarray(values, dtype=np.float32)
    if not np.all(np.isfinite(arr)):
        logger.error(f"Non-finite value in {arr.tolist()} [{context}]")
        return False
    return True
