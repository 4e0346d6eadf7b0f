import json
import logging
from urllib.parse import urlsplit

import requests
from requests.adapters import BaseAdapter

from keymapex.device.device_settings import DeviceSettings

# USB HID usage -> XT scancode set 1, the single layer map the firmware falls back to
_LEGACY_CODES = {
    0x04: 0x1E, 0x05: 0x30, 0x06: 0x2E, 0x07: 0x20, 0x08: 0x12, 0x09: 0x21, 0x0A: 0x22,
    0x0B: 0x23, 0x0C: 0x17, 0x0D: 0x24, 0x0E: 0x25, 0x0F: 0x26, 0x10: 0x32, 0x11: 0x31,
    0x12: 0x18, 0x13: 0x19, 0x14: 0x10, 0x15: 0x13, 0x16: 0x1F, 0x17: 0x14, 0x18: 0x16,
    0x19: 0x2F, 0x1A: 0x11, 0x1B: 0x2D, 0x1C: 0x15, 0x1D: 0x2C,
    0x1E: 0x02, 0x1F: 0x03, 0x20: 0x04, 0x21: 0x05, 0x22: 0x06, 0x23: 0x07, 0x24: 0x08,
    0x25: 0x09, 0x26: 0x0A, 0x27: 0x0B,
    0x28: 0x1C, 0x29: 0x01, 0x2A: 0x0E, 0x2B: 0x0F, 0x2C: 0x39,
}

DEFAULT_LEGACY_MAP = [_LEGACY_CODES.get(i, 0) for i in range(256)]


def _byte_or(obj, name, default):
    value = obj.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value & 0xFF


class KeymapDeviceMock(BaseAdapter):
    """
    Extended keymap endpoints of the device for testing, mount it on a requests.Session:

        session.mount("http://mock", KeymapDeviceMock())
    """

    def __init__(self, legacy_map=None, persisted=True):
        super().__init__()
        self.log = logging.getLogger('KeymapEx')
        self.settings = DeviceSettings()
        self.legacy_map = list(legacy_map) if legacy_map else list(DEFAULT_LEGACY_MAP)
        self.keymap = []
        self.persisted = persisted
        self.requests = []
        self.failures = {}
        self.load_from_legacy()

    def load_from_legacy(self):
        self.keymap = [
            {"base": base, "shift": base, "altgr": base, "ctrl": base, "dead": 0}
            for base in self.legacy_map
        ]

    def fail_next(self, path, status=500):
        """Answer the next request to path with the given status"""
        self.failures[path] = status

    def requested(self, method, path):
        return (method, path) in self.requests

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        path = urlsplit(request.url).path
        self.requests.append((request.method, path))
        self.log.debug("Mock device: %s %s", request.method, path)

        if path in self.failures:
            return self._reply(request, self.failures.pop(path), {"error": "injected failure"})

        routes = {
            ("GET", self.settings.PATH_LOAD): self._get_map,
            ("POST", self.settings.PATH_SET): self._set_entry,
            ("POST", self.settings.PATH_UPLOAD): self._upload,
            ("POST", self.settings.PATH_RESET): self._reset,
            ("GET", self.settings.PATH_DOWNLOAD): self._download,
        }
        handler = routes.get((request.method, path))
        if not handler:
            return self._reply(request, 404, {"error": "not found"})
        status, body, headers = handler(request)
        return self._reply(request, status, body, headers)

    def close(self):
        pass

    @staticmethod
    def _parse(request):
        body = request.body
        if body is None:
            return None
        if isinstance(body, bytes):
            body = body.decode("utf-8")
        try:
            return json.loads(body)
        except ValueError:
            return None

    def _get_map(self, _):
        return 200, [dict(e) for e in self.keymap], None

    def _set_entry(self, request):
        doc = self._parse(request)
        if not isinstance(doc, dict):
            return 400, {"error": "bad json"}, None
        usb = doc.get("usb", -1)
        if isinstance(usb, bool) or not isinstance(usb, int) or not 0 <= usb <= 255:
            return 400, {"error": "usb out of range"}, None
        self.keymap[usb] = self._entry_from(doc)
        self.persisted = True
        return 200, {"status": "saved"}, None

    def _upload(self, request):
        doc = self._parse(request)
        if not isinstance(doc, list) or len(doc) != self.settings.TABLE_SIZE:
            return 400, {"error": "invalid array"}, None
        self.keymap = [self._entry_from(o if isinstance(o, dict) else {}) for o in doc]
        self.persisted = True
        return 200, {"status": "saved"}, None

    def _reset(self, _):
        self.load_from_legacy()
        self.persisted = True
        return 200, {"status": "reset"}, None

    def _download(self, _):
        if not self.persisted:
            return 404, {"error": "no file"}, None
        return 200, [dict(e) for e in self.keymap], {
            "Content-Disposition": "attachment; filename=keymap_ex.json"}

    @staticmethod
    def _entry_from(obj):
        # layers the request leaves out fall back to the base code
        base = _byte_or(obj, "base", 0)
        return {
            "base": base,
            "shift": _byte_or(obj, "shift", base),
            "altgr": _byte_or(obj, "altgr", base),
            "ctrl": _byte_or(obj, "ctrl", base),
            "dead": 1 if obj.get("dead") else 0,
        }

    @staticmethod
    def _reply(request, status, body, headers=None):
        response = requests.Response()
        response.status_code = status
        response.reason = "OK" if status < 400 else "Error"
        response._content = json.dumps(body).encode("utf-8")
        response.encoding = "utf-8"
        response.headers["Content-Type"] = "application/json"
        if headers:
            response.headers.update(headers)
        response.url = request.url
        response.request = request
        return response
