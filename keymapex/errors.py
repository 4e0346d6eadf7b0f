class KeymapExError(Exception):
    """Base class for all errors raised while editing the extended keymap"""


class ValidationError(KeymapExError):
    """A local check failed, nothing was sent to the device"""

    def __init__(self, message, field=None):
        super().__init__(message)
        self.field = field


class ShapeError(ValidationError):
    """A table does not consist of exactly 256 entry objects"""


class TransportError(KeymapExError):
    """The device answered with a non-success status or an unreadable body"""

    def __init__(self, message, status=None):
        super().__init__(message)
        self.status = status

    def __str__(self):
        msg = super().__str__()
        if self.status is not None:
            return f"HTTP {self.status}: {msg}"
        return msg


class ConfirmationAborted(KeymapExError):
    """The reset was not confirmed by the user"""


class ReloadError(TransportError):
    """The device accepted a change, only reading the table back afterwards failed"""

    def __init__(self, message, cause):
        super().__init__(f"{message}, reload failed: {cause}", None)
        self.cause = cause
