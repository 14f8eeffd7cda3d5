import json
import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/iconmaker.json"
ENV_PREFIX = "ICONMAKER_"


class Config:
    _instance = None  # Singleton instance

    def __new__(cls, config_path=DEFAULT_CONFIG_PATH):
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance.config_path = config_path
            cls._instance._load_config()
        return cls._instance

    @classmethod
    def reset(cls):
        """Drops the singleton so the next Config() reloads from disk."""
        cls._instance = None

    def _load_config(self):
        """Loads configuration from .env and the JSON file."""
        load_dotenv()
        self.settings = {}
        try:
            with open(self.config_path, "r", encoding="utf-8") as file:
                self.settings.update(json.load(file))
        except FileNotFoundError:
            logger.warning("%s не найден, используются значения по умолчанию.", self.config_path)

    def get(self, key, default=None):
        """Get a config value from settings or ICONMAKER_* environment variables."""
        if key in self.settings:
            return self.settings[key]
        return os.getenv(ENV_PREFIX + key.upper(), default)

    def get_int(self, key, default):
        value = self.get(key, default)
        try:
            return int(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Параметр {key} должен быть целым числом, получено {value!r}") from exc

    def get_bool(self, key, default=False):
        value = self.get(key, default)
        if isinstance(value, str):
            return value.strip().lower() in ("1", "true", "yes", "on")
        return bool(value)
