from typing import TYPE_CHECKING

from core.config import Settings

if TYPE_CHECKING:
    from client.app import ClientApp


class ServiceBase:
    def __init__(self, app: "ClientApp") -> None:
        self.app = app

    @property
    def settings(self) -> Settings:
        return self.app.settings
