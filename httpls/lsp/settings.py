from dataclasses import dataclass
from typing import Any


@dataclass
class ServerSettings:
    """
    Client-provided settings, read from the initialization options.

    Keys are camelCase as sent by the editor:

        {"showNotificationPopup": true, "logDocumentEvents": false}
    """

    # Show completion failures as editor notifications, not only in the log
    show_notification_popup: bool = False

    # Log every didOpen/didChange/didSave/didClose notification
    log_document_events: bool = False

    @classmethod
    def from_initialization_options(cls, options: Any) -> "ServerSettings":
        if not isinstance(options, dict):
            return cls()

        return cls(
            show_notification_popup=bool(options.get("showNotificationPopup", False)),
            log_document_events=bool(options.get("logDocumentEvents", False)),
        )
