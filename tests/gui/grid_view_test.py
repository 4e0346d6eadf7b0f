import unittest

from keymapex.gui.grid_view import cell_label, cell_tooltip
from keymapex.gui.settings_dialog import split_setting_name
from keymapex.keymap.keymap_model import KeymapEntry


class TestCellLabel(unittest.TestCase):
    def test_mapped_cell_shows_base(self):
        self.assertEqual(cell_label(65, KeymapEntry(65, base=0x61, shift=0x41)), "61")

    def test_unmapped_cell_shows_address(self):
        self.assertEqual(cell_label(10, KeymapEntry(10, shift=0x41)), "0A")
        self.assertEqual(cell_label(255, None), "FF")
        self.assertEqual(cell_label(0, KeymapEntry(0)), "00")

    def test_tooltip(self):
        tooltip = cell_tooltip(KeymapEntry(65, base=0x61, shift=0x41, dead=True))
        self.assertIn("0x41", tooltip)
        self.assertIn("Shift: 41", tooltip)
        self.assertIn("AltGr: —", tooltip)
        self.assertIn("Dead key", tooltip)


class TestSettingNames(unittest.TestCase):
    def test_split(self):
        self.assertEqual(split_setting_name("device_load_on_startup"), ("Device", "Load On Startup"))
        self.assertEqual(split_setting_name("theme"), ("General", "Theme"))


if __name__ == "__main__":
    unittest.main()
