import errno
import logging
import os
import stat

from dirshare.data_models.transfer_entry import FileOpener, TransferEntry
from dirshare.data_models.transfer_set import TransferSet
from dirshare.transfer.errors import NotARegularFileError
from dirshare.transfer.paths import common_base, ensure_within, prefix_length, strip_prefix

logger = logging.getLogger(__name__)

def _file_entry(path: str, info: os.stat_result, prefix_len: int) -> TransferEntry:
    return TransferEntry(
        path=strip_prefix(path, prefix_len),
        mode=info.st_mode,
        size=info.st_size,
        reader=FileOpener(os.path.normpath(path)),
    )

def collect_file(path: str) -> TransferSet:
    path = os.path.abspath(path)
    info = os.stat(path)

    if stat.S_ISDIR(info.st_mode):
        raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), path)
    elif not stat.S_ISREG(info.st_mode):
        raise NotARegularFileError(path)

    ensure_within(os.path.dirname(path), path)

    files = TransferSet(os.path.basename(path), directory=False)
    files.add(_file_entry(path, info, prefix_length(path)))
    return files

def collect_directory(path: str) -> TransferSet:
    path = os.path.abspath(path)
    info = os.lstat(path)

    if not stat.S_ISDIR(info.st_mode):
        raise NotADirectoryError(errno.ENOTDIR, os.strerror(errno.ENOTDIR), path)

    files = TransferSet(os.path.basename(path))
    return append_files_from_path(files, path, prefix_length(path), os.path.dirname(path))

def collect_multiple(paths: list[str]) -> TransferSet:
    if not paths:
        raise ValueError("No files selected")

    # Prefix all entries with the parent folder only
    base_dir = common_base(paths)
    prefix_len = prefix_length(base_dir)
    files = TransferSet(os.path.basename(base_dir))

    for item in paths:
        name = os.path.basename(os.path.normpath(item))
        ensure_within(base_dir, os.path.join(base_dir, name))
        path = ensure_within(base_dir, item)

        info = os.lstat(path)

        if stat.S_ISDIR(info.st_mode):
            append_files_from_path(files, path, prefix_len, base_dir)
        elif stat.S_ISREG(info.st_mode):
            files.add(_file_entry(path, info, prefix_len))
        else:
            logger.debug(f"Skipping \"{path}\", not a regular file")

    return files

def append_files_from_path(files: TransferSet, path: str, prefix_len: int, root: str) -> TransferSet:
    """Walk ``path`` depth-first and add every regular file below it to ``files``.

    Children of each directory are visited in name order. Symlinks are never
    followed, and anything that isn't a regular file or a directory is skipped.
    Errors from listing or statting propagate.
    """
    with os.scandir(path) as it:
        children = sorted(it, key=lambda child: child.name)

    for child in children:
        if child.is_dir(follow_symlinks=False):
            append_files_from_path(files, child.path, prefix_len, root)
            continue

        info = child.stat(follow_symlinks=False)

        if not stat.S_ISREG(info.st_mode):
            logger.debug(f"Skipping \"{child.path}\", not a regular file")
            continue

        ensure_within(root, child.path)
        files.add(_file_entry(child.path, info, prefix_len))

    return files
