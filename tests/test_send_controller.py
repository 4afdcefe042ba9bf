#!/usr/bin/env python3
"""
Unit tests for SendController.

The controller is only glue: it turns selections into transfer sets, hands
them to the transfer client and reports back through Qt signals.
"""

import os
import sys
import tempfile
import unittest

from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from PyQt6.QtCore import QCoreApplication

from dirshare.controller.send_controller import SendController
from dirshare.data_models.client_config import ClientConfig
from dirshare.transport.client import SendResult
from fakes import FakeTransferClient


class TestSendController(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        """Create QCoreApplication once for all tests."""
        if not QCoreApplication.instance():
            cls.app = QCoreApplication([])
        else:
            cls.app = QCoreApplication.instance()

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

        self.dir = os.path.join(self._tmp.name, "docs")
        os.makedirs(self.dir)
        Path(self.dir, "a.txt").write_bytes(b"hello")
        Path(self.dir, "b.txt").write_bytes(b"world!")

        self.transfer_client = FakeTransferClient()
        self.controller = SendController(self.transfer_client, ClientConfig(download_path=self._tmp.name))

        self.selected, self.codes, self.sent, self.progress, self.info = [], [], [], [], []
        self.controller.selected_file_signal.connect(self.selected.append)
        self.controller.code_signal.connect(self.codes.append)
        self.controller.file_sent_signal.connect(self.sent.append)
        self.controller.send_pgrs_bar_signal.connect(self.progress.append)
        self.controller.info_signal.connect(lambda text, duration: self.info.append(text))

    def wait_for_result(self):
        self.controller.request_wait_for_result(5)
        QCoreApplication.processEvents()

    def test_select_and_send_directory(self):
        self.assertTrue(self.controller.request_select_directory(self.dir))
        self.assertEqual(self.selected, ["docs (2 files, 11 B)"])

        self.assertTrue(self.controller.request_send_selected())
        self.wait_for_result()

        self.assertEqual(self.codes, ["7-guitarist-revenge"])
        self.assertEqual(self.sent, [True])
        self.assertEqual(self.transfer_client.calls[0][0], "directory")
        self.assertIsNone(self.controller.selected_files)

    def test_send_without_selection(self):
        self.assertFalse(self.controller.request_send_selected())
        self.assertEqual(self.transfer_client.calls, [])

    def test_single_path_selection(self):
        self.controller.request_select_files([os.path.join(self.dir, "a.txt")])
        self.controller.request_select_files([self.dir])

        self.assertEqual(self.selected, ["a.txt (1 file, 5 B)", "docs (2 files, 11 B)"])
        self.assertFalse(self.info)

    def test_dangerous_selection_is_refused(self):
        crafted = [os.path.join(self.dir, "a.txt"), os.path.join(self.dir, "..", "..", "etc", "passwd")]

        self.assertFalse(self.controller.request_select_files(crafted))
        self.assertIsNone(self.controller.selected_files)
        self.assertTrue(self.info[0].startswith("Refusing to send"))
        self.assertFalse(self.controller.request_send_selected())

    def test_missing_selection(self):
        self.assertFalse(self.controller.request_select_directory(os.path.join(self.dir, "missing")))
        self.assertEqual(self.info, ["Could not prepare the selected files. File not found."])

    def test_failed_transfer(self):
        self.transfer_client.result = SendResult(False, ConnectionError("peer went away"))

        self.controller.request_send_text("hello")
        self.wait_for_result()

        self.assertEqual(self.sent, [False])
        self.assertEqual(self.info, ["Transfer failed: peer went away"])

    def test_progress_is_not_spammed(self):
        self.controller._on_send_progress(10, 100)
        self.controller._on_send_progress(10, 100)
        self.controller._on_send_progress(105, 1000)
        self.controller._on_send_progress(100, 100)

        self.assertEqual(self.progress, [10, 100])

    def test_download_path(self):
        self.controller.request_set_download_path(os.path.join(self._tmp.name, "missing"))
        self.assertEqual(self.info, ["Please select a valid directory."])


if __name__ == "__main__":
    unittest.main()
