from dataclasses import dataclass
from typing import BinaryIO, Callable

from dirshare.transfer.errors import ReaderAlreadyUsedError

class FileOpener:
    """Opens a file for reading the first time it is called.

    Nothing touches the file until the transfer client asks for its content,
    so enumerating a large tree does not keep any descriptors open.
    """

    def __init__(self, path: str):
        self.path: str = path
        self.used: bool = False

    def __call__(self) -> BinaryIO:
        if self.used:
            raise ReaderAlreadyUsedError(f"\"{self.path}\" has already been opened")

        self.used = True
        return open(self.path, "rb")

    def __repr__(self) -> str:
        return f"FileOpener({self.path!r})"

@dataclass(frozen=True)
class TransferEntry:
    path: str # Relative to the parent of the selected root
    mode: int # st_mode at enumeration time
    size: int # Bytes
    reader: Callable[[], BinaryIO]

    @property
    def key(self) -> str:
        # Paths don't need to match separators (e.g. "dir/a.txt" == "dir\a.txt")
        return self.path.replace("\\", "/")

    def open(self) -> BinaryIO:
        return self.reader()
