import logging
import webbrowser

import requests

from keymapex.device.device_settings import DeviceSettings
from keymapex.errors import ShapeError, TransportError
from keymapex.keymap.keymap_model import entries_from_list


def check_table_shape(raw_table, size):
    """Raises ShapeError unless raw_table is a list of `size` JSON objects"""
    if not isinstance(raw_table, list):
        raise ShapeError(f"The table must be an array of {size} objects, got {type(raw_table).__name__}")
    if len(raw_table) != size:
        raise ShapeError(f"The table must be an array of {size} objects, got {len(raw_table)}")
    for idx, item in enumerate(raw_table):
        if not isinstance(item, dict):
            raise ShapeError(f"Entry {idx} is not an object: {item!r}")


class SyncClient:
    """
    Talks to the extended keymap endpoints of the device.
    Every failure is reported as TransportError (or ShapeError for a bad upload),
    nothing is retried.
    """

    def __init__(self, base_url, session=None, is_mock=False):
        self.log = logging.getLogger('KeymapEx')
        self.settings = DeviceSettings()
        self.base_url = None
        self.set_base_url(base_url)
        self.session = session if session else requests.Session()
        self.is_mock = is_mock

    def set_base_url(self, base_url):
        if "://" not in base_url:
            base_url = f"http://{base_url}"
        self.base_url = base_url.rstrip("/")

    def url(self, path):
        return f"{self.base_url}{path}"

    def _request(self, method, path, **kwargs):
        url = self.url(path)
        self.log.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            self.log.warning("%s %s failed: %s", method, url, e)
            raise TransportError(f"Could not reach device at {self.base_url}: {e}") from e

        if not response.ok:
            self.log.warning("%s %s returned %d: %s", method, url, response.status_code, response.text)
            raise TransportError(response.text or response.reason or "Request failed", response.status_code)
        return response

    def load(self):
        response = self._request("GET", self.settings.PATH_LOAD)
        try:
            table = response.json()
        except ValueError as e:
            raise TransportError(f"Malformed keymap from device: {e}", response.status_code) from e
        try:
            entries = entries_from_list(table)
        except ShapeError as e:
            raise TransportError(f"Malformed keymap from device: {e}", response.status_code) from e
        self.log.info("Loaded extended keymap (%d entries)", len(entries))
        return entries

    def save_entry(self, entry):
        payload = entry.to_dict()
        self._request("POST", self.settings.PATH_SET, json=payload)
        self.log.info("Saved entry 0x%02X: %s", entry.usb_code, payload)

    def upload_all(self, raw_table):
        check_table_shape(raw_table, self.settings.TABLE_SIZE)
        self._request("POST", self.settings.PATH_UPLOAD, json=raw_table)
        self.log.info("Uploaded complete keymap table")

    def reset(self):
        self._request("POST", self.settings.PATH_RESET)
        self.log.info("Keymap reset to defaults")

    def download_url(self):
        return self.url(self.settings.PATH_DOWNLOAD)

    def download_all(self):
        url = self.download_url()
        self.log.info("Opening %s", url)
        webbrowser.open(url, new=0, autoraise=True)
