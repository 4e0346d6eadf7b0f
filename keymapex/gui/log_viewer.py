import logging
import os
import subprocess
import sys

from PyQt5.QtCore import QSize
from PyQt5.QtGui import QFont, QTextCursor
from PyQt5.QtWidgets import QVBoxLayout, QPlainTextEdit, QHBoxLayout, QPushButton, QMainWindow, QWidget


class LogViewerDialog(QMainWindow):
    def __init__(self, log_file):
        super().__init__()
        self.log = logging.getLogger('KeymapEx')
        self.setWindowTitle("Log Viewer")
        self.log_file = log_file

        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 10)

        self.log_text = QPlainTextEdit(self)
        self.log_text.setReadOnly(True)
        self.log_text.setFont(QFont("Courier", 10))
        layout.addWidget(self.log_text)

        button_layout = QHBoxLayout()
        button_layout.addStretch(1)
        for caption, slot in (("Open Folder", self.open_file_directory),
                              ("Reload", self.load_log),
                              ("Close", self.close)):
            button = QPushButton(caption)
            button.clicked.connect(slot)
            button_layout.addWidget(button)
        button_layout.addStretch(1)
        layout.addLayout(button_layout)

        self.load_log()

    def sizeHint(self):
        return QSize(1200, 800)

    def load_log(self):
        try:
            with open(self.log_file, encoding='utf-8') as f:
                self.log_text.setPlainText(f.read())
            self.log_text.moveCursor(QTextCursor.End)
        except OSError as e:
            self.log_text.setPlainText(f"Failed to load log file '{self.log_file}': {e}")

    def open_file_directory(self):
        file = os.path.abspath(self.log_file)
        if sys.platform.startswith('darwin'):
            subprocess.run(['open', '-R', file])
        elif sys.platform.startswith('win'):
            subprocess.run(['explorer', '/select,', os.path.normpath(file)])
        elif sys.platform.startswith('linux'):
            subprocess.run(['xdg-open', os.path.dirname(file)])
        else:
            self.log.warning("Platform %s not supported", sys.platform)
