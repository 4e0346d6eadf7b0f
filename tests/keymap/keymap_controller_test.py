import json
import os
import tempfile
import unittest
from unittest.mock import MagicMock

from keymapex.errors import ConfirmationAborted, ReloadError, ShapeError, TransportError
from keymapex.keymap.keymap_controller import KeymapController
from keymapex.keymap.keymap_model import KeymapEntry, KeymapStore


def make_entries(base):
    return [KeymapEntry(i, base=base) for i in range(256)]


class TestKeymapController(unittest.TestCase):
    def setUp(self):
        self.store = KeymapStore()
        self.client = MagicMock()
        self.client.load.return_value = make_entries(0x11)
        self.controller = KeymapController(self.store, self.client)

    def test_load_replaces_table(self):
        self.controller.load()
        self.assertTrue(self.store.is_loaded)
        self.assertEqual(self.store.get(100).base, 0x11)

    def test_failed_load_keeps_table(self):
        self.controller.load()
        self.client.load.side_effect = TransportError("Not found", 404)
        with self.assertRaises(TransportError):
            self.controller.load()
        self.assertEqual(self.store.get(100).base, 0x11)

    def test_import_reloads(self):
        raw = [{"base": 1}] * 256
        self.controller.import_table(raw)
        self.client.upload_all.assert_called_once_with(raw)
        self.client.load.assert_called_once()

    def test_failed_import_does_not_reload(self):
        self.client.upload_all.side_effect = ShapeError("300 entries")
        with self.assertRaises(ShapeError):
            self.controller.import_table([{}] * 300)
        self.client.load.assert_not_called()

    def test_import_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "map.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump([{"base": 2}] * 256, f)
            self.controller.import_file(path)
        self.client.upload_all.assert_called_once()

    def test_import_file_with_broken_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "map.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("[{")
            with self.assertRaises(ShapeError):
                self.controller.import_file(path)
        self.client.upload_all.assert_not_called()

    def test_export_file(self):
        self.controller.load()
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "out.json")
            self.controller.export_file(path)
            with open(path, encoding="utf-8") as f:
                table = json.load(f)
        self.assertEqual(len(table), 256)
        self.assertEqual(table[5]["base"], 0x11)

    def test_reset_requires_token(self):
        with self.assertRaises(ConfirmationAborted):
            self.controller.confirm_reset("made-up")
        self.client.reset.assert_not_called()

    def test_reset_confirmed(self):
        token = self.controller.request_reset()
        self.controller.confirm_reset(token)
        self.client.reset.assert_called_once_with()
        self.client.load.assert_called_once()

    def test_reload_failure_after_reset_is_not_a_failed_reset(self):
        self.controller.load()
        self.client.load.side_effect = TransportError("busy", 503)
        token = self.controller.request_reset()
        with self.assertRaises(ReloadError) as ctx:
            self.controller.confirm_reset(token)
        self.client.reset.assert_called_once_with()
        self.assertTrue(str(ctx.exception).startswith("Reset done, reload failed: HTTP 503"))
        self.assertEqual(self.store.get(100).base, 0x11)

    def test_reload_failure_after_import_is_not_a_failed_import(self):
        self.client.load.side_effect = TransportError("busy", 503)
        with self.assertRaises(ReloadError) as ctx:
            self.controller.import_table([{"base": 1}] * 256)
        self.client.upload_all.assert_called_once()
        self.assertIn("Upload done", str(ctx.exception))
        self.assertEqual(ctx.exception.cause.status, 503)

    def test_reset_token_is_single_use(self):
        token = self.controller.request_reset()
        self.controller.confirm_reset(token)
        with self.assertRaises(ConfirmationAborted):
            self.controller.confirm_reset(token)
        self.assertEqual(self.client.reset.call_count, 1)

    def test_reset_declined(self):
        token = self.controller.request_reset()
        self.controller.decline_reset(token)
        with self.assertRaises(ConfirmationAborted):
            self.controller.confirm_reset(token)
        self.client.reset.assert_not_called()

    def test_download(self):
        self.controller.download()
        self.client.download_all.assert_called_once_with()
        self.assertFalse(self.store.is_loaded)


if __name__ == "__main__":
    unittest.main()
