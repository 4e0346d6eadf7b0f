import logging

from keymapex.errors import ShapeError

TABLE_SIZE = 256
LAYERS = ("base", "shift", "altgr", "ctrl")


def _check_byte(name, value):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"'{name}' must be an integer, got {value!r}")
    if not 0 <= value < TABLE_SIZE:
        raise ValueError(f"'{name}' out of range: {value}")
    return value


def _to_byte(obj, name):
    value = obj.get(name, 0)
    if value is None:
        return 0
    return _check_byte(name, value)


def _to_flag(obj, name):
    value = obj.get(name, 0)
    if value is None:
        return False
    if not isinstance(value, int):
        raise ValueError(f"'{name}' must be 0, 1 or a boolean, got {value!r}")
    return bool(value)


class KeymapEntry:
    """Output codes of one USB usage code on all four layers"""

    def __init__(self, usb_code, base=0, shift=0, altgr=0, ctrl=0, dead=False):
        self._usb_code = usb_code
        self.base = _check_byte("base", base)
        self.shift = _check_byte("shift", shift)
        self.altgr = _check_byte("altgr", altgr)
        self.ctrl = _check_byte("ctrl", ctrl)
        self.dead = bool(dead)

    @property
    def usb_code(self):
        return self._usb_code

    @classmethod
    def from_dict(cls, usb_code, obj):
        """Create an entry from its JSON object, missing layers are unmapped"""
        return cls(usb_code,
                   _to_byte(obj, "base"),
                   _to_byte(obj, "shift"),
                   _to_byte(obj, "altgr"),
                   _to_byte(obj, "ctrl"),
                   _to_flag(obj, "dead"))

    def to_dict(self):
        return {
            "usb": self._usb_code,
            "base": self.base,
            "shift": self.shift,
            "altgr": self.altgr,
            "ctrl": self.ctrl,
            "dead": 1 if self.dead else 0,
        }

    def output_for(self, shift=False, altgr=False, ctrl=False):
        """Output code for the given modifier state, resolved the way the firmware does it"""
        if self.dead:
            return self.base
        if ctrl:
            return self.ctrl
        if altgr:
            return self.altgr
        if shift:
            return self.shift
        return self.base

    def copy(self):
        return KeymapEntry(self._usb_code, self.base, self.shift, self.altgr, self.ctrl, self.dead)

    def __eq__(self, other):
        if not isinstance(other, KeymapEntry):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (f"KeymapEntry(usb={self._usb_code}, base=0x{self.base:02X}, shift=0x{self.shift:02X}, "
                f"altgr=0x{self.altgr:02X}, ctrl=0x{self.ctrl:02X}, dead={self.dead})")


def entries_from_list(items):
    """
    Convert a table as received from the device (list of JSON objects) into entries.
    The usage code is implied by the position, an explicit 'usb' field has to agree with it.
    Raises ShapeError if the table is not exactly 256 objects.
    """
    if not isinstance(items, (list, tuple)) or len(items) != TABLE_SIZE:
        size = len(items) if isinstance(items, (list, tuple)) else type(items).__name__
        raise ShapeError(f"Keymap table must be a list of {TABLE_SIZE} entries, got {size}")

    entries = []
    for idx, item in enumerate(items):
        if isinstance(item, KeymapEntry):
            entry = item
        elif isinstance(item, dict):
            try:
                entry = KeymapEntry.from_dict(idx, item)
            except ValueError as e:
                raise ShapeError(f"Entry {idx}: {e}") from e
        else:
            raise ShapeError(f"Entry {idx} is not an object: {item!r}")
        usb = item.usb_code if isinstance(item, KeymapEntry) else item.get("usb", idx)
        if usb != idx:
            raise ShapeError(f"Entry {idx} carries usage code {usb}")
        entries.append(entry)
    return entries


class KeymapStore:
    """Owns the cached copy of the device's extended keymap table"""

    def __init__(self):
        self.log = logging.getLogger('KeymapEx')
        self.keymap = [KeymapEntry(idx) for idx in range(TABLE_SIZE)]
        self.is_loaded = False

    def get(self, usb_code):
        if not isinstance(usb_code, int) or not 0 <= usb_code < TABLE_SIZE:
            return KeymapEntry(usb_code)
        return self.keymap[usb_code].copy()

    def set(self, entry):
        usb_code = entry.usb_code
        if isinstance(usb_code, bool) or not isinstance(usb_code, int) or not 0 <= usb_code < TABLE_SIZE:
            self.log.debug("Ignoring entry with usage code %s", usb_code)
            return
        self.keymap[usb_code] = entry.copy()

    def replace_all(self, entries):
        new_keymap = [e.copy() for e in entries_from_list(entries)]
        self.keymap = new_keymap
        self.is_loaded = True
        self.log.debug("Replaced keymap table (%d entries)", len(new_keymap))

    def entries(self):
        return [e.copy() for e in self.keymap]

    def to_json_list(self):
        return [e.to_dict() for e in self.keymap]
