"""
Простой загрузчик/сохранитель допусков (tolerances) в формате JSON.
Если файл не найден – используются значения по‑умолчанию.
"""

import json
from pathlib import Path
from lakernel.utils.logger import logger

DEFAULT_CONFIG = {
    "norm_epsilon": 1e-6,        # is_norm(): |len - 1| < eps
    "degenerate_epsilon": 1e-6,  # Quat: вырожденные пары векторов / угол ≈ 0
    "singular_epsilon": 1e-12,   # Mat4.try_inverse(): |det| <= eps
    "compare_tolerance": 1e-6,   # isclose() по умолчанию
}

class Config:
    """Набор допусков, загружаемый из JSON‑файла."""

    def __init__(self, path: str = "lakernel.json"):
        self.path = Path(path)
        self._load()

    def _load(self):
        self.data = DEFAULT_CONFIG.copy()
        if self.path.is_file():
            try:
                with self.path.open("r", encoding="utf-8") as f:
                    self.data.update(json.load(f))
                logger.info(f"[Config] Loaded tolerances from {self.path}.")
            except (OSError, ValueError) as exc:
                logger.error(f"[Config] Failed to read config: {exc}")
                self.data = DEFAULT_CONFIG.copy()
        else:
            logger.info("[Config] No config file – using defaults.")

    def save(self):
        try:
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(self.data, f, indent=4)
            logger.info("[Config] Configuration saved.")
        except OSError as exc:
            logger.error(f"[Config] Unable to save config: {exc}")

    def __getitem__(self, key):
        return self.data.get(key, DEFAULT_CONFIG.get(key))

    def __setitem__(self, key, value):
        self.data[key] = value

    def get(self, key, default=None):
        return self.data.get(key, default)
