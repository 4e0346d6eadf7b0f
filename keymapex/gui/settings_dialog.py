import string
from collections import defaultdict

from PyQt5.QtCore import QSize, Qt
from PyQt5.QtWidgets import (
    QDialog, QFormLayout, QDialogButtonBox, QLabel, QLineEdit, QSpinBox, QCheckBox, QVBoxLayout, QGroupBox
)


def create_editor(value):
    if isinstance(value, bool):
        checkbox = QCheckBox()
        checkbox.setChecked(value)
        return checkbox
    if isinstance(value, int):
        spinbox = QSpinBox()
        spinbox.setMaximum(10_000)
        spinbox.setValue(value)
        return spinbox
    line_edit = QLineEdit()
    line_edit.setText(str(value))
    line_edit.setMinimumWidth(260)
    return line_edit


def read_editor(widget):
    if isinstance(widget, QCheckBox):
        return widget.isChecked()
    if isinstance(widget, QSpinBox):
        return widget.value()
    return widget.text().strip()


def split_setting_name(full_key):
    """'device_load_on_startup' -> ('Device', 'Load On Startup')"""
    if "_" not in full_key:
        return "General", string.capwords(full_key)
    group, name = full_key.split("_", 1)
    return string.capwords(group), string.capwords(name, sep="_").replace("_", " ")


class SettingsDialog(QDialog):
    def __init__(self, parent=None):
        super().__init__(parent)
        self.setWindowTitle("KeymapEx Settings")
        self.edit_widgets = {}

    def sizeHint(self):
        return QSize(480, 240)

    def setup(self, settings_dict):
        main_layout = QVBoxLayout(self)

        title_label = QLabel("A changed device URL is used from the next reload on.")
        title_label.setAlignment(Qt.AlignCenter)
        main_layout.addWidget(title_label)

        grouped_settings = defaultdict(list)
        for full_key, value in settings_dict.items():
            group, caption = split_setting_name(full_key)
            grouped_settings[group].append((full_key, caption, value))

        for group_name, group_items in grouped_settings.items():
            group_box = QGroupBox(group_name)
            group_layout = QFormLayout(group_box)
            group_layout.setFieldGrowthPolicy(QFormLayout.AllNonFixedFieldsGrow)
            for full_key, caption, value in group_items:
                widget = create_editor(value)
                group_layout.addRow(QLabel(caption), widget)
                self.edit_widgets[full_key] = widget
            main_layout.addWidget(group_box)

        main_layout.addStretch()

        buttons = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        buttons.accepted.connect(self.accept)
        buttons.rejected.connect(self.reject)
        main_layout.addWidget(buttons, alignment=Qt.AlignCenter)

    def get_updated_settings(self):
        return {key: read_editor(widget) for key, widget in self.edit_widgets.items()}
