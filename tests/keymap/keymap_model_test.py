import unittest

from keymapex.errors import ShapeError
from keymapex.keymap.keymap_model import KeymapEntry, KeymapStore, entries_from_list


def make_table(size=256, **layers):
    return [dict({"base": 0, "shift": 0, "altgr": 0, "ctrl": 0, "dead": 0}, **layers) for _ in range(size)]


class TestKeymapEntry(unittest.TestCase):
    def test_usb_code_is_read_only(self):
        entry = KeymapEntry(4, base=0x1E)
        with self.assertRaises(AttributeError):
            entry.usb_code = 5

    def test_from_dict_defaults(self):
        entry = KeymapEntry.from_dict(7, {"base": 0x61})
        self.assertEqual(entry, KeymapEntry(7, base=0x61))
        self.assertFalse(entry.dead)

    def test_from_dict_rejects_bad_values(self):
        with self.assertRaises(ValueError):
            KeymapEntry.from_dict(0, {"base": 256})
        with self.assertRaises(ValueError):
            KeymapEntry.from_dict(0, {"shift": "41"})

    def test_constructor_rejects_out_of_range_layers(self):
        with self.assertRaises(ValueError):
            KeymapEntry(5, base=300)
        with self.assertRaises(ValueError):
            KeymapEntry(5, ctrl=-1)
        with self.assertRaises(ValueError):
            KeymapEntry(5, shift="41")

    def test_dead_flag_must_be_number_or_bool(self):
        self.assertTrue(KeymapEntry.from_dict(0, {"dead": 1}).dead)
        self.assertTrue(KeymapEntry.from_dict(0, {"dead": True}).dead)
        self.assertFalse(KeymapEntry.from_dict(0, {"dead": 0}).dead)
        with self.assertRaises(ValueError):
            KeymapEntry.from_dict(0, {"dead": "0"})

    def test_table_with_string_dead_flag_is_rejected(self):
        table = make_table()
        table[3]["dead"] = "0"
        with self.assertRaises(ShapeError):
            entries_from_list(table)

    def test_to_dict(self):
        entry = KeymapEntry(65, 0x61, 0x41, 0, 0, True)
        self.assertEqual(entry.to_dict(), {"usb": 65, "base": 0x61, "shift": 0x41, "altgr": 0, "ctrl": 0, "dead": 1})

    def test_output_for(self):
        entry = KeymapEntry(1, base=1, shift=2, altgr=3, ctrl=4)
        self.assertEqual(entry.output_for(), 1)
        self.assertEqual(entry.output_for(shift=True), 2)
        self.assertEqual(entry.output_for(shift=True, altgr=True), 3)
        self.assertEqual(entry.output_for(shift=True, altgr=True, ctrl=True), 4)

    def test_dead_key_always_outputs_base(self):
        entry = KeymapEntry(1, base=0x29, shift=2, altgr=3, ctrl=4, dead=True)
        self.assertEqual(entry.output_for(shift=True, ctrl=True), 0x29)


class TestEntriesFromList(unittest.TestCase):
    def test_position_is_usage_code(self):
        entries = entries_from_list(make_table(base=3))
        self.assertEqual([e.usb_code for e in entries], list(range(256)))

    def test_usb_field_must_match_position(self):
        table = make_table()
        table[10]["usb"] = 11
        with self.assertRaises(ShapeError):
            entries_from_list(table)

    def test_wrong_shape(self):
        for table in [make_table(255), make_table(257), {}, None, "x" * 256, [1] * 256]:
            with self.assertRaises(ShapeError):
                entries_from_list(table)


class TestKeymapStore(unittest.TestCase):
    def setUp(self):
        self.store = KeymapStore()

    def test_get_defaults(self):
        self.assertEqual(self.store.get(12), KeymapEntry(12))
        self.assertEqual(self.store.get(300), KeymapEntry(300))
        self.assertEqual(self.store.get(-1).base, 0)
        self.assertFalse(self.store.is_loaded)

    def test_set_and_get(self):
        entry = KeymapEntry(65, 0x61, 0x41)
        self.store.set(entry)
        self.assertEqual(self.store.get(65), entry)

    def test_set_out_of_range_is_ignored(self):
        before = self.store.entries()
        self.store.set(KeymapEntry(256, base=1))
        self.store.set(KeymapEntry(-1, base=1))
        self.assertEqual(self.store.entries(), before)

    def test_set_with_non_integer_code_is_ignored(self):
        before = self.store.entries()
        self.store.set(KeymapEntry("x", base=1))
        self.store.set(KeymapEntry(None, base=1))
        self.assertEqual(self.store.entries(), before)

    def test_get_returns_copy(self):
        entry = self.store.get(3)
        entry.base = 0x42
        self.assertEqual(self.store.get(3).base, 0)

    def test_replace_all(self):
        self.store.replace_all(make_table(base=0x10))
        self.assertTrue(self.store.is_loaded)
        self.assertEqual(self.store.get(255).base, 0x10)
        self.assertEqual(len(self.store.entries()), 256)

    def test_replace_all_rejects_wrong_length(self):
        self.store.replace_all(make_table(base=0x10))
        for size in (0, 255, 257, 300):
            with self.assertRaises(ShapeError):
                self.store.replace_all(make_table(size, base=0x20))
        self.assertEqual(self.store.get(0).base, 0x10)

    def test_replace_all_is_atomic(self):
        self.store.replace_all(make_table(base=0x10))
        table = make_table(base=0x20)
        table[200] = "broken"
        with self.assertRaises(ShapeError):
            self.store.replace_all(table)
        self.assertTrue(all(e.base == 0x10 for e in self.store.entries()))

    def test_to_json_list(self):
        self.store.set(KeymapEntry(1, base=2))
        table = self.store.to_json_list()
        self.assertEqual(len(table), 256)
        self.assertEqual(table[1], {"usb": 1, "base": 2, "shift": 0, "altgr": 0, "ctrl": 0, "dead": 0})


if __name__ == "__main__":
    unittest.main()
