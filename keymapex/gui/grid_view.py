from PyQt5.QtCore import pyqtSignal, QSize
from PyQt5.QtWidgets import QWidget, QGridLayout, QPushButton, QButtonGroup, QSizePolicy

from keymapex.keymap.keymap_model import TABLE_SIZE
from keymapex.keymap.validator import format_hex_byte

COLUMNS = 16

DEAD_KEY_STYLE = "QPushButton { color: #e67e22; font-weight: bold; }"
CELL_STYLE = """
    QPushButton:checked {
        background-color: #2a82da;
        color: white;
        font-weight: bold;
    }
"""


def cell_label(index, entry):
    """Mapped base code, or the cell's own usage code if the key is unmapped"""
    if entry is not None and entry.base:
        return format_hex_byte(entry.base)
    return format_hex_byte(index)


def cell_tooltip(entry):
    lines = [f"<b>USB 0x{format_hex_byte(entry.usb_code)}</b> ({entry.usb_code})"]
    for name, value in (("Base", entry.base), ("Shift", entry.shift), ("AltGr", entry.altgr), ("Ctrl", entry.ctrl)):
        lines.append(f"{name}: {format_hex_byte(value) if value else '—'}")
    if entry.dead:
        lines.append("Dead key")
    return "<br>".join(lines)


class GridView(QWidget):
    """Overview of all 256 usage codes"""
    cellSelected = pyqtSignal(int)

    def __init__(self, parent=None):
        super().__init__(parent)

        layout = QGridLayout(self)
        layout.setSpacing(2)
        layout.setContentsMargins(2, 2, 2, 2)

        self.group = QButtonGroup(self)
        self.group.setExclusive(True)

        self.cells = []
        for idx in range(TABLE_SIZE):
            btn = QPushButton(format_hex_byte(idx))
            btn.setCheckable(True)
            btn.setFixedSize(QSize(40, 28))
            btn.setSizePolicy(QSizePolicy.Fixed, QSizePolicy.Fixed)
            btn.setStyleSheet(CELL_STYLE)
            self.group.addButton(btn, idx)
            layout.addWidget(btn, idx // COLUMNS, idx % COLUMNS)
            self.cells.append(btn)

        self.group.buttonClicked.connect(self.handle_click)

    def handle_click(self, button):
        self.cellSelected.emit(self.group.id(button))

    def render_all(self, store):
        for entry in store.entries():
            self.render_cell(entry)

    def render_cell(self, entry):
        if not 0 <= entry.usb_code < TABLE_SIZE:
            return
        btn = self.cells[entry.usb_code]
        btn.setText(cell_label(entry.usb_code, entry))
        btn.setToolTip(cell_tooltip(entry))
        btn.setStyleSheet(CELL_STYLE + (DEAD_KEY_STYLE if entry.dead else ""))

    def clear_selection(self):
        # an exclusive group never unchecks its last button by itself
        self.group.setExclusive(False)
        for btn in self.cells:
            btn.setChecked(False)
        self.group.setExclusive(True)
