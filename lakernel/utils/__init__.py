# lakernel/utils/__init__.py
"""
Пакет утилит.

Экспортируем:
    * logger        – готовый объект logging.Logger (с level INFO)
    * check_finite  – проверка NaN/Inf с записью в лог
    * Config        – допуски из JSON
"""

from .logger import logger, check_finite
from .config import Config, DEFAULT_CONFIG

__all__ = ["logger", "check_finite", "Config", "DEFAULT_CONFIG"]
