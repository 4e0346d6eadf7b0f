import logging
import os

import yaml
from platformdirs import user_config_dir

from keymapex.device.device_settings import DeviceSettings


class KeymapExSettings:
    """ Stores program specific settings """
    def __init__(self, directory=None):
        self.collection = None
        self.log = logging.getLogger('KeymapEx')
        self.APP_NAME = "KeymapEx"
        self.CONFIG_FILENAME = "settings.yaml"

        # Get the user-specific config directory
        if directory is None:
            directory = user_config_dir(self.APP_NAME)
        self.path = os.path.join(directory, self.CONFIG_FILENAME)

        # Ensure config directory exists
        os.makedirs(directory, exist_ok=True)

        # Default settings
        self.defaults = {
            "device_url": DeviceSettings().DEFAULT_URL,
            "device_load_on_startup": True,
        }

        # Load settings
        if os.path.exists(self.path):
            self.load()
        else:
            self.collection = dict(self.defaults)
        self.save()

        self.log.info("\nCurrent settings:\n====================================\n%s", yaml.dump(
            self.collection, default_flow_style=False))

    def get(self, name):
        return self.collection[name]

    def get_all(self):
        return self.collection

    def set_all(self, new_settings):
        self.collection = {k: new_settings.get(k, v) for k, v in self.defaults.items()}
        self.save()

    def load(self):
        with open(self.path, encoding='utf-8') as f:
            self.collection = yaml.safe_load(f) or {}
        for key, value in self.defaults.items():
            self.collection.setdefault(key, value)

        self.collection = {k: v for k, v in self.collection.items() if k in self.defaults}

    def save(self):
        with open(self.path, "w", encoding='utf-8') as f:
            yaml.safe_dump(self.collection, f)
        self.log.info("Saved settings to %s", self.path)
