"""Exception types raised by the event calendar engine."""


class ConfigurationError(ValueError):
    """Raised once, before any page is processed, when the calendar options are unusable.

    Pages that simply don't describe an event are never reported this way;
    they are skipped silently by the engine.
    """

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"Invalid calendar option '{key}': {message}")
