"""Sending and receiving through an external transfer client.

The transfer client owns the wire protocol (rendezvous, code phrase,
encryption, chunking). This module only prepares what it is handed and
decides where received content ends up.
"""

import logging
import os
import queue

from abc import abstractmethod
from dataclasses import dataclass
from typing import BinaryIO, Callable

from dirshare.data_models.client_config import ClientConfig
from dirshare.data_models.transfer_entry import TransferEntry
from dirshare.data_models.transfer_set import TransferSet
from dirshare.transfer.enumerator import collect_directory, collect_file, collect_multiple
from dirshare.transfer.receiver import destination_for, extract_archive, save_file

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None] # (sent bytes, total bytes)

@dataclass
class SendResult:
    ok: bool
    error: Exception | None = None


class TransferClient:
    """Interface for the protocol client that does the actual sending.

    Every send returns the transfer code and a queue that receives exactly
    one SendResult once the transfer has finished or failed.
    """

    @abstractmethod
    def send_file(self, name: str, entry: TransferEntry, progress: ProgressCallback | None,
                  code: str) -> tuple[str, queue.Queue]:
        pass

    @abstractmethod
    def send_directory(self, name: str, entries: list[TransferEntry], progress: ProgressCallback | None,
                       code: str) -> tuple[str, queue.Queue]:
        pass

    @abstractmethod
    def send_text(self, text: str, progress: ProgressCallback | None, code: str) -> tuple[str, queue.Queue]:
        pass


class Client:
    def __init__(self, transfer_client: TransferClient, config: ClientConfig | None = None):
        self.transfer_client: TransferClient = transfer_client
        self.config: ClientConfig = config or ClientConfig()

    ###########
    # Sending #
    ###########

    def new_file_send(self, path: str, progress: ProgressCallback | None = None,
                      code: str = "") -> tuple[str, queue.Queue]:
        return self.send(collect_file(path), progress, code)

    def new_dir_send(self, path: str, progress: ProgressCallback | None = None,
                     code: str = "") -> tuple[str, queue.Queue]:
        return self.send(collect_directory(path), progress, code)

    def new_multiple_file_send(self, paths: list[str], progress: ProgressCallback | None = None,
                               code: str = "") -> tuple[str, queue.Queue]:
        return self.send(collect_multiple(paths), progress, code)

    def new_text_send(self, text: str, progress: ProgressCallback | None = None,
                      code: str = "") -> tuple[str, queue.Queue]:
        return self.transfer_client.send_text(text, progress, code)

    def send(self, files: TransferSet, progress: ProgressCallback | None = None,
             code: str = "") -> tuple[str, queue.Queue]:
        logger.info(f"Sending \"{files.name}\" ({len(files)} files, {files.total_size} bytes)")

        if not files.directory:
            return self.transfer_client.send_file(files.name, files.entries[0], progress, code)

        return self.transfer_client.send_directory(files.name, files.entries, progress, code)

    #############
    # Receiving #
    #############

    def save_received_file(self, name: str, reader: BinaryIO) -> str:
        return save_file(self.config.download_path, name, reader, self.config.overwrite_existing)

    def save_received_directory(self, name: str, archive: BinaryIO) -> str:
        if self.config.no_extract_directory:
            return self.save_received_file(f"{name}.zip", archive)

        target = destination_for(self.config.download_path, name, self.config.overwrite_existing)
        os.makedirs(target, exist_ok=True)
        extract_archive(archive, target, self.config.overwrite_existing)
        return target
