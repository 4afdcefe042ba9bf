import errno
import logging
import os
import queue
import threading

from PyQt6.QtCore import QObject, pyqtSignal

from dirshare.data_models.client_config import ClientConfig
from dirshare.data_models.transfer_set import TransferSet
from dirshare.transfer.enumerator import collect_directory, collect_file, collect_multiple
from dirshare.transfer.errors import DangerousFilenameError, TransferSetError
from dirshare.transport.client import Client, SendResult, TransferClient

logger = logging.getLogger(__name__)

class SendController(QObject):
    selected_file_signal: pyqtSignal = pyqtSignal(str)
    code_signal: pyqtSignal = pyqtSignal(str)
    send_pgrs_bar_signal: pyqtSignal = pyqtSignal(int)
    file_sent_signal: pyqtSignal = pyqtSignal(bool)
    download_path_signal: pyqtSignal = pyqtSignal(str)
    info_signal: pyqtSignal = pyqtSignal(str, int)

    def __init__(self, transfer_client: TransferClient, config: ClientConfig | None = None):
        super().__init__()
        self._client: Client = Client(transfer_client, config)

        self.selected_files: TransferSet | None = None
        self._result_thread: threading.Thread | None = None
        self._last_progress_percentage: int = 0

    ############
    # Requests #
    ############

    def request_select_file(self, path: str) -> bool:
        return self._select(collect_file, path)

    def request_select_directory(self, path: str) -> bool:
        return self._select(collect_directory, path)

    def request_select_files(self, paths: list[str]) -> bool:
        if len(paths) == 1:
            if os.path.isdir(paths[0]):
                return self.request_select_directory(paths[0])

            return self.request_select_file(paths[0])

        return self._select(collect_multiple, paths)

    def request_send_selected(self, code: str = "") -> bool:
        if self.selected_files is None:
            return False

        # A transfer set is handed over once and then forgotten
        files, self.selected_files = self.selected_files, None

        try:
            code, results = self._client.send(files, self._on_send_progress, code)
        except Exception as e:
            logger.error(f"Could not start sending \"{files.name}\": {e}")
            self.info_signal.emit("Could not start the transfer.", 10000)
            return False

        self._on_send_started(code, results)
        return True

    def request_send_text(self, text: str, code: str = "") -> bool:
        if not text:
            return False

        try:
            code, results = self._client.new_text_send(text, self._on_send_progress, code)
        except Exception as e:
            logger.error(f"Could not start sending text: {e}")
            self.info_signal.emit("Could not start the transfer.", 10000)
            return False

        self._on_send_started(code, results)
        return True

    def request_set_download_path(self, path: str):
        try:
            self._client.config.set_download_path(path)
        except (FileNotFoundError, NotADirectoryError):
            self.info_signal.emit("Please select a valid directory.", 10000)
            return

        self.download_path_signal.emit(self._client.config.download_path)

    def request_set_overwrite_existing(self, enabled: bool):
        self._client.config.overwrite_existing = enabled

    def request_wait_for_result(self, timeout: float | None = None):
        if self._result_thread:
            self._result_thread.join(timeout)

    #########
    # Other #
    #########

    def _select(self, collect, selection) -> bool:
        error_msg = "Could not prepare the selected files."

        try:
            files = collect(selection)
        except DangerousFilenameError as e:
            # Never send anything from a selection that tried to escape its directory
            self.selected_files = None
            self.info_signal.emit(f"Refusing to send: \"{e.path}\" points outside of the selected folder.", 10000)
            return False
        except TransferSetError as e:
            self.selected_files = None
            self.info_signal.emit(f"{error_msg} {e}", 10000)
            return False
        except OSError as e:
            self.selected_files = None

            if e.errno == errno.ENOENT:
                self.info_signal.emit(f"{error_msg} File not found.", 10000)
            elif e.errno in (errno.EACCES, errno.EPERM):
                self.info_signal.emit(f"{error_msg} Permission denied.", 10000)
            else:
                self.info_signal.emit(error_msg, 10000)

            return False
        except ValueError:
            self.selected_files = None
            self.info_signal.emit("No files selected.", 10000)
            return False

        self.selected_files = files
        self._last_progress_percentage = 0

        self.selected_file_signal.emit(files.describe())
        return True

    def _on_send_started(self, code: str, results: queue.Queue):
        self._last_progress_percentage = 0
        self.send_pgrs_bar_signal.emit(0)
        self.code_signal.emit(code)

        self._result_thread = threading.Thread(target=self._wait_for_result, args=(results,), daemon=True)
        self._result_thread.start()

    def _wait_for_result(self, results: queue.Queue):
        result: SendResult = results.get()

        if not result.ok:
            logger.error(f"Transfer failed: {result.error}")
            self.info_signal.emit(f"Transfer failed: {result.error}", 10000)

        self.file_sent_signal.emit(result.ok)

    def _on_send_progress(self, sent: int, total: int):
        if total <= 0:
            return

        # Update progress | Prevent emit spam
        progress_percentage = int((sent / total) * 100)

        if progress_percentage != self._last_progress_percentage:
            self.send_pgrs_bar_signal.emit(progress_percentage)
            self._last_progress_percentage = progress_percentage
