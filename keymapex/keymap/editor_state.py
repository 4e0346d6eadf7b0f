import logging
from enum import Enum

from keymapex.errors import TransportError, ValidationError
from keymapex.keymap.keymap_model import KeymapEntry, LAYERS, TABLE_SIZE
from keymapex.keymap.validator import parse_hex_byte, format_optional_hex_byte, is_valid

NO_PREVIEW = "—"


class EditMode(Enum):
    IDLE = 0
    EDITING = 1


class Draft:
    """Unvalidated editor fields of one entry, layers hold the text as typed"""

    def __init__(self, base="", shift="", altgr="", ctrl="", dead=False):
        self.base = base
        self.shift = shift
        self.altgr = altgr
        self.ctrl = ctrl
        self.dead = dead

    @classmethod
    def from_entry(cls, entry):
        return cls(format_optional_hex_byte(entry.base),
                   format_optional_hex_byte(entry.shift),
                   format_optional_hex_byte(entry.altgr),
                   format_optional_hex_byte(entry.ctrl),
                   entry.dead)

    def as_dict(self):
        return {"base": self.base, "shift": self.shift, "altgr": self.altgr, "ctrl": self.ctrl, "dead": self.dead}


class EditorState:
    """
    Selection and edit state of the keymap editor.

    IDLE --select--> EDITING, EDITING --cancel--> IDLE, EDITING --save--> IDLE on success.
    A failed validation or a failed device request keeps the editor in EDITING with the draft intact.
    """

    def __init__(self, store, client):
        self.log = logging.getLogger('KeymapEx')
        self.store = store
        self.client = client
        self.mode = EditMode.IDLE
        self.usb_code = None
        self.draft = None
        self.last_error = None

    def is_editing(self):
        return self.mode == EditMode.EDITING

    def select(self, usb_code):
        if not isinstance(usb_code, int) or not 0 <= usb_code < TABLE_SIZE:
            raise ValueError(f"Usage code out of range: {usb_code}")
        self.usb_code = usb_code
        self.draft = Draft.from_entry(self.store.get(usb_code))
        self.mode = EditMode.EDITING
        self.last_error = None
        self.log.debug("Editing 0x%02X: %s", usb_code, self.draft.as_dict())

    def update_field(self, name, value):
        if not self.is_editing():
            return
        if name == "dead":
            self.draft.dead = bool(value)
        elif name in LAYERS:
            setattr(self.draft, name, value)
        else:
            raise KeyError(name)

    def cancel(self):
        if not self.is_editing():
            return
        self.log.debug("Discarding draft for 0x%02X", self.usb_code)
        self._to_idle()

    def validate(self):
        """Parse all layer fields, raises ValidationError naming the first invalid field"""
        values = {}
        invalid = []
        for name in LAYERS:
            value = parse_hex_byte(getattr(self.draft, name))
            if not is_valid(value):
                invalid.append(name)
            values[name] = value
        if invalid:
            raise ValidationError(f"Invalid hex code in {', '.join(invalid)}: "
                                  "use 00-FF or leave the field empty for 0", field=invalid[0])
        return values

    def save(self):
        """Validate the draft and send it to the device, returns (success, message)"""
        if not self.is_editing():
            return False, "Select a key first"

        try:
            values = self.validate()
        except ValidationError as e:
            self.last_error = str(e)
            self.log.info("Not saving 0x%02X: %s", self.usb_code, self.last_error)
            return False, self.last_error

        entry = KeymapEntry(self.usb_code, values["base"], values["shift"], values["altgr"], values["ctrl"],
                            self.draft.dead)
        try:
            self.client.save_entry(entry)
        except TransportError as e:
            self.last_error = f"Could not save: {e}"
            self.log.warning("Saving 0x%02X failed: %s", self.usb_code, e)
            return False, self.last_error

        self.store.set(entry)
        self.last_error = None
        self._to_idle()
        return True, f"Saved 0x{entry.usb_code:02X}"

    def preview(self):
        """Text for the preview labels, one per layer"""
        result = {}
        for name in LAYERS:
            if not self.is_editing():
                result[name] = NO_PREVIEW
                continue
            value = parse_hex_byte(getattr(self.draft, name))
            result[name] = f"{value:02X}" if is_valid(value) and value != 0 else NO_PREVIEW
        return result

    def _to_idle(self):
        self.mode = EditMode.IDLE
        self.usb_code = None
        self.draft = None
