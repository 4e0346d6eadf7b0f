class DeviceSettings:
    """All settings that are defined by the keyboard firmware, not by software"""
    _table_size = 256

    _path_load = "/api/map_ex"
    _path_set = "/api/map_ex_set"
    _path_download = "/api/map_ex_download"
    _path_upload = "/api/map_ex_upload"
    _path_reset = "/api/map_ex_reset"

    # address of the device while it runs its own access point
    _default_url = "http://192.168.4.1"

    @property
    def TABLE_SIZE(self):
        """Number of USB usage codes in the extended keymap"""
        return self._table_size

    @property
    def PATH_LOAD(self):
        return self._path_load

    @property
    def PATH_SET(self):
        return self._path_set

    @property
    def PATH_DOWNLOAD(self):
        return self._path_download

    @property
    def PATH_UPLOAD(self):
        return self._path_upload

    @property
    def PATH_RESET(self):
        return self._path_reset

    @property
    def DEFAULT_URL(self):
        return self._default_url
