import logging
from abc import ABC, abstractmethod

from core.config import Settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


class App(ABC):
    settings: Settings

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def configure_logging(self) -> None:
        """Configure the root logger once, from ``settings.log_level``."""
        level = logging.getLevelName(self.settings.log_level.upper())
        if not isinstance(level, int):
            level = logging.INFO
        logging.basicConfig(level=level, format=LOG_FORMAT)

    @abstractmethod
    def run(self) -> None:
        raise NotImplementedError
