import logging
import threading
import traceback

from PyQt5.QtCore import QObject, pyqtSignal, QSize
from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QAction, QMessageBox, QFileDialog, QDialog, QLabel
)

from keymapex.errors import KeymapExError, ConfirmationAborted, ReloadError
from keymapex.gui.entry_editor import EntryEditor
from keymapex.gui.grid_view import GridView
from keymapex.gui.log_viewer import LogViewerDialog
from keymapex.gui.settings_dialog import SettingsDialog
from keymapex.keymap.editor_state import EditorState
from keymapex.keymap.keymap_controller import KeymapController
from keymapex.keymap.keymap_model import KeymapStore


class OperationBridge(QObject):
    """Hands results of background operations back to the UI thread"""
    finished = pyqtSignal(str, bool, str, object)  # operation, success, message, result


class KeymapWindow(QMainWindow):
    def __init__(self, client, settings, log_file=None, parent=None):
        super().__init__(parent)
        self.log = logging.getLogger('KeymapEx')
        self.settings = settings
        self.client = client
        self.log_file = log_file
        self.log_viewer = None
        self.busy = False
        self.saved_usb_code = None

        self.store = KeymapStore()
        self.editor_state = EditorState(self.store, self.client)
        self.controller = KeymapController(self.store, self.client)

        self.bridge = OperationBridge()
        self.bridge.finished.connect(self.on_operation_finished)

        self.setWindowTitle(f"Extended Keymap - {self.client.base_url}")
        self.init_ui()

    def sizeHint(self):
        return QSize(1100, 560)

    def init_ui(self):
        toolbar = self.addToolBar("Keymap")
        toolbar.setMovable(False)
        self.network_actions = []

        for caption, tooltip, slot, needs_device in (
                ("Reload", "Load the keymap from the device", self.reload, True),
                ("Download", "Download the keymap file from the device", self.download, False),
                ("Upload...", "Replace the keymap on the device with a file", self.upload, True),
                ("Export...", "Save the loaded keymap to a local file", self.export, False),
                ("Reset...", "Restore the device's default keymap", self.reset, True),
                ("Settings...", "", self.open_settings, False),
                ("Log file...", "", self.open_log, False)):
            action = QAction(caption, parent=self)
            action.setToolTip(tooltip or caption)
            # noinspection PyUnresolvedReferences
            action.triggered.connect(slot)
            toolbar.addAction(action)
            if needs_device:
                self.network_actions.append(action)

        central = QWidget()
        layout = QHBoxLayout(central)
        self.grid = GridView()
        self.grid.cellSelected.connect(self.on_cell_selected)
        layout.addWidget(self.grid)

        self.entry_editor = EntryEditor(self.editor_state)
        self.entry_editor.saveRequested.connect(self.save_entry)
        self.entry_editor.cancelRequested.connect(self.cancel_edit)
        layout.addWidget(self.entry_editor)
        self.setCentralWidget(central)

        self.status_label = QLabel("Not loaded")
        self.statusBar().addWidget(self.status_label)

    def show_mb(self, title, msg):
        mbox = QMessageBox(self)
        mbox.setWindowTitle(title)
        mbox.setText(msg)
        mbox.setIcon(QMessageBox.Warning if title == "Error" else QMessageBox.Information)
        mbox.exec_()

    def set_busy(self, busy):
        self.busy = busy
        for action in self.network_actions:
            action.setEnabled(not busy)
        self.grid.setEnabled(not busy)
        self.entry_editor.setEnabled(not busy)

    def run_in_background(self, operation, func):
        """Run func on a worker thread, the result arrives in on_operation_finished"""
        if self.busy:
            self.log.info("Ignoring '%s', another operation is still running", operation)
            return
        self.set_busy(True)
        self.status_label.setText(f"{operation.capitalize()}...")

        def run():
            try:
                result = func()
                self.bridge.finished.emit(operation, True, "", result)
            except KeymapExError as e:
                self.bridge.finished.emit(operation, False, str(e), e)
            except Exception as e:
                self.log.error("Unexpected error in '%s': %s\n%s", operation, e, traceback.format_exc())
                self.bridge.finished.emit(operation, False, f"Unexpected error: {e}", e)

        threading.Thread(target=run, name=f"KeymapEx {operation}", daemon=True).start()

    def on_operation_finished(self, operation, success, msg, result):
        self.set_busy(False)

        if operation == "save":
            self.on_save_finished(result)
            return

        if isinstance(result, ConfirmationAborted):
            self.status_label.setText("Reset not confirmed")
            return

        if isinstance(result, ReloadError):
            # the device changed, the grid still shows the old table
            self.status_label.setText(str(result))
            self.show_mb("Info", f"{result}\nUse Reload to read the keymap again.")
            return

        if not success:
            self.status_label.setText(f"{operation.capitalize()} failed")
            self.show_mb("Error", f"{operation.capitalize()} failed:\n{msg}")
            return

        self.grid.render_all(self.store)
        self.editor_state.cancel()
        self.grid.clear_selection()
        self.entry_editor.show_state()
        texts = {
            "load": "Keymap loaded",
            "upload": "Upload done, keymap reloaded",
            "reset": "Reset done, keymap reloaded",
        }
        self.status_label.setText(texts.get(operation, "Done"))

    def on_save_finished(self, result):
        if isinstance(result, Exception):
            success, msg = False, f"Could not save: {result}"
        else:
            success, msg = result
        if success:
            self.grid.render_cell(self.store.get(self.saved_usb_code))
            self.grid.clear_selection()
            self.entry_editor.show_state()
        else:
            self.entry_editor.show_error(msg)
            self.show_mb("Error", msg)
        self.status_label.setText(msg)

    def reload(self):
        self.run_in_background("load", self.controller.load)

    def on_cell_selected(self, usb_code):
        self.editor_state.select(usb_code)
        self.entry_editor.show_state()

    def save_entry(self):
        if not self.editor_state.is_editing():
            self.show_mb("Info", "Select a key first")
            return
        self.saved_usb_code = self.editor_state.usb_code
        self.run_in_background("save", self.editor_state.save)

    def cancel_edit(self):
        self.editor_state.cancel()
        self.grid.clear_selection()
        self.entry_editor.show_state()

    def download(self):
        self.controller.download()

    def upload(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Upload keymap", "", "Keymap (*.json)")
        if not file_name:
            self.log.info("No file selected. Operation canceled.")
            return
        self.run_in_background("upload", lambda: self.controller.import_file(file_name))

    def export(self):
        if not self.store.is_loaded:
            self.show_mb("Info", "Load the keymap from the device first.")
            return
        file_name, _ = QFileDialog.getSaveFileName(self, "Export keymap", "keymap_ex.json", "Keymap (*.json)")
        if not file_name:
            self.log.info("No file selected. Operation canceled.")
            return
        try:
            self.controller.export_file(file_name)
        except OSError as e:
            self.show_mb("Error", f"Could not write '{file_name}':\n{e}")

    def reset(self):
        token = self.controller.request_reset()
        answer = QMessageBox.question(self, "Reset keymap", "Restore the default keymap on the device?",
                                      QMessageBox.Yes | QMessageBox.No, QMessageBox.No)
        if answer != QMessageBox.Yes:
            self.controller.decline_reset(token)
            return
        self.run_in_background("reset", lambda: self.controller.confirm_reset(token))

    def open_settings(self):
        dlg = SettingsDialog(self)
        dlg.setup(self.settings.get_all())
        if dlg.exec_() == QDialog.Accepted:
            self.settings.set_all(dlg.get_updated_settings())
            url = self.settings.get("device_url")
            if url and not self.client.is_mock:
                self.client.set_base_url(url)
                self.setWindowTitle(f"Extended Keymap - {self.client.base_url}")
        dlg.close()

    def open_log(self):
        if not self.log_file:
            self.show_mb("Info", "Logging to a file is not enabled.")
            return
        # assignment is needed otherwise the window would go away immediately
        self.log_viewer = LogViewerDialog(self.log_file)
        self.log_viewer.show()
