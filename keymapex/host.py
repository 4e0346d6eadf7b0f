import logging
import os
import sys

import requests
from PyQt5.QtCore import QTimer, Qt
from PyQt5.QtGui import QPalette, QColor
from PyQt5.QtWidgets import QApplication
from platformdirs import user_log_dir

from keymapex._version import __version__
from keymapex.device.keymap_device_mock import KeymapDeviceMock
from keymapex.device.sync_client import SyncClient
from keymapex.gui.keymap_window import KeymapWindow
from keymapex.settings import KeymapExSettings

MOCK_URL = "http://keymapex-mock"
LOG_FILE_NAME = "keymapex_log.txt"


def create_client(url, mock=False):
    """SyncClient for the given device, or for an in-process device emulation"""
    if mock:
        session = requests.Session()
        session.mount(MOCK_URL, KeymapDeviceMock())
        return SyncClient(MOCK_URL, session=session, is_mock=True)
    return SyncClient(url)


class KeymapExHost(QApplication):
    def __init__(self, log_level, host=None, mock=False):
        super().__init__(sys.argv)
        log_dir = user_log_dir("KeymapEx")
        os.makedirs(log_dir, exist_ok=True)
        self.log_file = os.path.join(log_dir, LOG_FILE_NAME)
        logging.basicConfig(
            level=log_level,
            format="[%(asctime)s] {%(filename)s:%(lineno)d} %(levelname)s - %(message)s",
            handlers=[
                logging.FileHandler(filename=self.log_file, encoding="utf-8"),
                logging.StreamHandler(stream=sys.stdout),
            ],
        )
        self.log = logging.getLogger('KeymapEx')
        self.setApplicationName('KeymapEx')
        self.log.info("KeymapEx %s", __version__)
        self.settings = KeymapExSettings()

        url = host if host else self.settings.get("device_url")
        self.client = create_client(url, mock)
        self.log.info("Using device at %s", self.client.base_url)

        self.set_dark_palette()

        self.window = KeymapWindow(self.client, self.settings, self.log_file)
        self.window.show()

        if self.settings.get("device_load_on_startup"):
            QTimer.singleShot(0, self.window.reload)

    def set_dark_palette(self):
        self.setStyle("Fusion")
        palette = QPalette()
        base_color = QColor(35, 35, 35)
        window_base_color = QColor(80, 80, 80)
        text_color = QColor(200, 200, 200)
        palette.setColor(QPalette.Window, window_base_color)
        palette.setColor(QPalette.WindowText, text_color)
        palette.setColor(QPalette.Base, base_color)
        palette.setColor(QPalette.AlternateBase, window_base_color)
        palette.setColor(QPalette.ToolTipBase, base_color)
        palette.setColor(QPalette.ToolTipText, text_color)
        palette.setColor(QPalette.Text, text_color)
        palette.setColor(QPalette.Button, window_base_color)
        palette.setColor(QPalette.ButtonText, text_color)
        palette.setColor(QPalette.BrightText, Qt.red)
        palette.setColor(QPalette.Highlight, QColor(42, 130, 218))
        palette.setColor(QPalette.HighlightedText, QColor(255, 255, 255))
        self.setPalette(palette)
