import json
import logging
import uuid

from keymapex.errors import ConfirmationAborted, ReloadError, ShapeError, TransportError


class KeymapController:
    """
    Whole-table operations: load, import, factory reset and export.
    The local table is only replaced by a fresh load after the device confirmed a change.
    """

    def __init__(self, store, client):
        self.log = logging.getLogger('KeymapEx')
        self.store = store
        self.client = client
        self._pending_reset = None

    def load(self):
        entries = self.client.load()
        self.store.replace_all(entries)
        return entries

    def import_table(self, raw_table):
        self.client.upload_all(raw_table)
        self.log.info("Import accepted by device, reloading...")
        return self._reload_after("Upload done")

    def import_file(self, filename):
        try:
            with open(filename, encoding='utf-8') as f:
                raw_table = json.load(f)
        except ValueError as e:
            raise ShapeError(f"'{filename}' is not a valid JSON file: {e}") from e
        return self.import_table(raw_table)

    def export_file(self, filename):
        """Write the locally cached table in the same format the device exports"""
        with open(filename, "w", encoding='utf-8') as f:
            json.dump(self.store.to_json_list(), f, indent=1)
        self.log.info("Exported keymap table to %s", filename)

    def download(self):
        self.client.download_all()

    def request_reset(self):
        """First step of the reset, returns the token that confirm_reset expects"""
        self._pending_reset = uuid.uuid4().hex
        return self._pending_reset

    def decline_reset(self, token):
        if token == self._pending_reset:
            self._pending_reset = None
            self.log.info("Reset declined")

    def confirm_reset(self, token):
        if token is None or token != self._pending_reset:
            raise ConfirmationAborted("Reset was not requested or already handled")
        self._pending_reset = None
        self.client.reset()
        return self._reload_after("Reset done")

    def _reload_after(self, done_msg):
        """Reload after a change the device already applied, raises ReloadError if that fails"""
        try:
            return self.load()
        except TransportError as e:
            self.log.warning("%s, but reloading the keymap failed: %s", done_msg, e)
            raise ReloadError(done_msg, e) from e
