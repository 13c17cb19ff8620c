from pathlib import Path


class LogSinkError(Exception):
    pass


class LogDirectoryError(LogSinkError):
    """The log directory could not be created."""

    def __init__(self, directory: Path, reason: str) -> None:
        self.directory = directory
        self.reason = reason
        super().__init__(f"Cannot create log directory '{directory}': {reason}")


class LogFileResetError(LogSinkError):
    """A log file left over from a previous run could not be deleted."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot delete old log file '{path}': {reason}")


class CaptureStateError(LogSinkError):
    """Console capture was requested while another owner holds stdout."""

    def __init__(self, owner: object) -> None:
        """
        Parameters:
            owner (object): The object currently holding the stdout handle.
        """
        self.owner = owner
        super().__init__(
            f"stdout is already captured by {owner!r}; stop that capture first"
        )
