class TransferSetError(Exception):
    """Base class for errors raised while preparing or saving a transfer set."""
    pass


class DangerousFilenameError(TransferSetError):
    """Raised when a path would end up outside of the directory it belongs to."""

    def __init__(self, path: str, root: str):
        super().__init__(f"Dangerous filename: \"{path}\" escapes \"{root}\"")
        self.path: str = path
        self.root: str = root


class DuplicateEntryError(TransferSetError):
    """Raised when two entries in one transfer set share a relative path."""

    def __init__(self, path: str):
        super().__init__(f"Duplicate entry in transfer set: \"{path}\"")
        self.path: str = path


class ReaderAlreadyUsedError(TransferSetError):
    """Raised when the content of an entry is opened a second time."""
    pass


class DestinationExistsError(TransferSetError, FileExistsError):
    """Raised when a received file would overwrite an existing one."""

    def __init__(self, path: str):
        super().__init__(f"File already exists: \"{path}\"")
        self.path: str = path


class NotARegularFileError(TransferSetError):
    """Raised when a selected file is a FIFO, device, socket or similar."""

    def __init__(self, path: str):
        super().__init__(f"Not a regular file: \"{path}\"")
        self.path: str = path
