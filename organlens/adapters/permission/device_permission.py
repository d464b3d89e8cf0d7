"""
Camera permission via the device itself.
On macOS the first VideoCapture open triggers the OS consent prompt; on Linux
access is whatever the /dev/video* node allows. Either way "can open" == granted.
"""
from organlens.adapters.permission.base import PermissionAdapter


class DevicePermission(PermissionAdapter):
    def __init__(self, status_store, camera):
        self.status = status_store
        self.camera = camera
        self._granted: bool | None = None

    def has_permission(self) -> bool:
        # first query probes the device, like an existing OS grant being reported
        if self._granted is None:
            return self.request_permission()
        return self._granted

    def request_permission(self) -> bool:
        self._granted = bool(self.camera.is_available())
        self.status.log(f"permission: camera {'granted' if self._granted else 'denied'}")
        return self._granted
