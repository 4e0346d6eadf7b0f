from PyQt5.QtCore import pyqtSignal, Qt
from PyQt5.QtWidgets import (
    QGroupBox, QFormLayout, QLineEdit, QCheckBox, QLabel, QPushButton, QHBoxLayout
)

from keymapex.keymap.editor_state import NO_PREVIEW
from keymapex.keymap.keymap_model import LAYERS

FIELD_CAPTIONS = {"base": "Base:", "shift": "Shift:", "altgr": "AltGr:", "ctrl": "Ctrl:"}
PREVIEW_NAMES = {"base": "pvBase", "shift": "pvShift", "altgr": "pvAltgr", "ctrl": "pvCtrl"}


class EntryEditor(QGroupBox):
    """Edit fields for the selected usage code, writes every change through to the EditorState"""
    saveRequested = pyqtSignal()
    cancelRequested = pyqtSignal()

    def __init__(self, editor_state, parent=None):
        super().__init__("Edit Key", parent)
        self.editor_state = editor_state
        self.fields = {}
        self.preview_labels = {}

        layout = QFormLayout(self)
        self.usb_label = QLabel(NO_PREVIEW)
        layout.addRow("USB Code:", self.usb_label)

        for name in LAYERS:
            edit = QLineEdit()
            edit.setMaxLength(4)
            edit.setPlaceholderText("00")
            edit.textEdited.connect(lambda text, n=name: self.on_field_edited(n, text))
            layout.addRow(FIELD_CAPTIONS[name], edit)
            self.fields[name] = edit

        self.dead_box = QCheckBox("Dead key")
        self.dead_box.toggled.connect(lambda checked: self.on_field_edited("dead", checked))
        layout.addRow("", self.dead_box)

        preview_layout = QHBoxLayout()
        for name in LAYERS:
            label = QLabel(NO_PREVIEW)
            label.setObjectName(PREVIEW_NAMES[name])
            label.setAlignment(Qt.AlignCenter)
            label.setToolTip(FIELD_CAPTIONS[name][:-1])
            preview_layout.addWidget(label)
            self.preview_labels[name] = label
        layout.addRow("Preview:", preview_layout)

        self.error_label = QLabel("")
        self.error_label.setStyleSheet("color: #e74c3c;")
        self.error_label.setWordWrap(True)
        layout.addRow(self.error_label)

        button_layout = QHBoxLayout()
        self.save_button = QPushButton("Save")
        self.save_button.clicked.connect(self.saveRequested)
        button_layout.addWidget(self.save_button)
        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.cancelRequested)
        button_layout.addWidget(self.cancel_button)
        layout.addRow(button_layout)

        self.show_state()

    def on_field_edited(self, name, value):
        self.editor_state.update_field(name, value)
        self.update_preview()

    def show_state(self):
        """Fill all widgets from the EditorState"""
        state = self.editor_state
        editing = state.is_editing()

        if editing:
            self.usb_label.setText(f"{state.usb_code} (0x{state.usb_code:02X})")
        else:
            self.usb_label.setText(NO_PREVIEW)

        for name, edit in self.fields.items():
            edit.setText(getattr(state.draft, name) if editing else "")
            edit.setEnabled(editing)

        self.dead_box.blockSignals(True)
        self.dead_box.setChecked(state.draft.dead if editing else False)
        self.dead_box.blockSignals(False)
        self.dead_box.setEnabled(editing)

        self.save_button.setEnabled(editing)
        self.cancel_button.setEnabled(editing)
        self.show_error(state.last_error)
        self.update_preview()

    def show_error(self, msg):
        self.error_label.setText(msg or "")

    def update_preview(self):
        for name, text in self.editor_state.preview().items():
            label = self.preview_labels.get(name)
            if label is not None:
                label.setText(text)
