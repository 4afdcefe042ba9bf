"""Writing received content to disk without leaving the download directory."""

import logging
import os
import shutil
import stat
import zipfile

from typing import BinaryIO

from dirshare.constants import FILE_CHUNK_SIZE
from dirshare.transfer.errors import DestinationExistsError, DuplicateEntryError
from dirshare.transfer.paths import ensure_within, is_within

logger = logging.getLogger(__name__)

def destination_for(download_path: str, name: str, overwrite_existing: bool = False) -> str:
    path = ensure_within(download_path, os.path.join(download_path, name))

    if os.path.exists(path) and not overwrite_existing:
        raise DestinationExistsError(path)

    return path

def save_file(download_path: str, name: str, reader: BinaryIO, overwrite_existing: bool = False) -> str:
    path = destination_for(download_path, name, overwrite_existing)

    with open(path, "wb") as f:
        while chunk := reader.read(FILE_CHUNK_SIZE):
            f.write(chunk)

    logger.info(f"Saved received file to \"{path}\"")
    return path

def _check_members(zf: zipfile.ZipFile, destination: str, overwrite_existing: bool) -> list[tuple[zipfile.ZipInfo, str]]:
    members: list[tuple[zipfile.ZipInfo, str]] = []
    files: set[str] = set()
    dirs: set[str] = set()
    root = os.path.normcase(os.path.abspath(destination))

    for info in zf.infolist():
        target = ensure_within(destination, os.path.join(destination, info.filename))
        key = os.path.normcase(target)

        # Every directory between the destination and the target has to be creatable
        parent = os.path.dirname(key)
        while parent != root and parent not in dirs:
            dirs.add(parent)
            parent = os.path.dirname(parent)

        if info.is_dir():
            dirs.add(key)
        elif key in files:
            raise DuplicateEntryError(info.filename)
        else:
            files.add(key)

            if os.path.isdir(target) or (os.path.exists(target) and not overwrite_existing):
                raise DestinationExistsError(target)

        members.append((info, target))

    # A name can't be both a file and a directory
    clashes = files & dirs

    if clashes:
        raise DuplicateEntryError(os.path.relpath(min(clashes), root))

    for info, target in members:
        parent = target if info.is_dir() else os.path.dirname(target)

        while is_within(destination, parent):
            if os.path.exists(parent) and not os.path.isdir(parent):
                raise DestinationExistsError(parent)

            parent = os.path.dirname(parent)

    return members

def extract_archive(archive: str | BinaryIO, destination: str, overwrite_existing: bool = False) -> list[str]:
    """Extract a received directory archive into ``destination``.

    All members are checked before anything is written: names escaping the
    destination, repeated names, a name used as both a file and a directory,
    and collisions with existing files. A bad archive leaves the destination
    untouched. Returns the paths of the written files.
    """
    written: list[str] = []

    with zipfile.ZipFile(archive) as zf:
        members = _check_members(zf, destination, overwrite_existing)

        for info, target in members:
            if info.is_dir():
                os.makedirs(target, exist_ok=True)
                continue

            os.makedirs(os.path.dirname(target), exist_ok=True)

            with zf.open(info) as src, open(target, "wb") as dst:
                shutil.copyfileobj(src, dst, FILE_CHUNK_SIZE)

            # Upper 16 bits hold st_mode when the archive was made on a unix system
            mode = stat.S_IMODE(info.external_attr >> 16)

            if mode:
                os.chmod(target, mode)

            written.append(target)

    logger.info(f"Extracted {len(written)} files to \"{destination}\"")
    return written
