# stockalerts/core/errors.py


class StockAlertError(Exception):
    """Base class for failures surfaced to callers of the alert service.

    `error` is a short stable title, `message` a human readable detail.
    Subclasses are mapped to distinct HTTP statuses in stockalerts.main.
    """

    error = "Internal server error"

    def __init__(self, message: str = None, error: str = None):
        self.message = message or "An unexpected error occurred"
        if error is not None:
            self.error = error
        super().__init__(self.message)


class InvalidArgumentError(StockAlertError):
    error = "Invalid argument"


class NotFoundError(StockAlertError):
    error = "Not found"


class ForbiddenError(StockAlertError):
    error = "Unauthorized"


class UnavailableError(StockAlertError):
    error = "Database connection error"


class GatewayTimeoutError(StockAlertError):
    error = "Request timeout"


class InternalError(StockAlertError):
    error = "Internal server error"
