"""Grid filling errors."""


class GridFillError(Exception):
    """Base class for grid filling errors."""
    pass


class InvalidArgumentError(GridFillError, ValueError):
    """Unrecognized option or out-of-range configuration value."""
    pass


class WorkerFaultError(GridFillError):
    """One or more worker threads raised during a parallel pass.

    Raised only after every worker has been joined. ``faults`` holds all
    captured exceptions in band order; the last one is chained as the cause.
    """

    def __init__(self, message: str, faults: list[BaseException]):
        super().__init__(message)
        self.faults = faults
