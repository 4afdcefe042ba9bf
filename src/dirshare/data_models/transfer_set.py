from dataclasses import dataclass, field
from typing import Iterator

from dirshare.data_models.transfer_entry import TransferEntry
from dirshare.transfer.errors import DuplicateEntryError

SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")

def format_size(size_bytes: int) -> str:
    """Human readable size in decimal units, e.g. 1500 -> "1.5 KB"."""
    size = float(size_bytes)

    for unit in SIZE_UNITS[:-1]:
        if size < 1000:
            break
        size /= 1000
    else:
        unit = SIZE_UNITS[-1]

    return f"{str(round(size, 2)).removesuffix('.0')} {unit}"

@dataclass
class TransferSet:
    name: str # Presented to the peer
    directory: bool = True # False when the set is a single file sent on its own
    entries: list[TransferEntry] = field(default_factory=list)
    _keys: set[str] = field(default_factory=set, init=False, repr=False, compare=False)

    def __post_init__(self):
        entries, self.entries = self.entries, []

        for entry in entries:
            self.add(entry)

    def add(self, entry: TransferEntry):
        if entry.key in self._keys:
            raise DuplicateEntryError(entry.path)

        self._keys.add(entry.key)
        self.entries.append(entry)

    def extend(self, entries: list[TransferEntry]):
        for entry in entries:
            self.add(entry)

    @property
    def paths(self) -> list[str]:
        return [entry.path for entry in self.entries]

    @property
    def total_size(self) -> int:
        return sum(entry.size for entry in self.entries)

    def describe(self) -> str:
        count = "1 file" if len(self.entries) == 1 else f"{len(self.entries)} files"
        return f"{self.name} ({count}, {format_size(self.total_size)})"

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[TransferEntry]:
        return iter(self.entries)
