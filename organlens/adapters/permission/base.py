class PermissionAdapter:
    def has_permission(self) -> bool:
        raise NotImplementedError

    def request_permission(self) -> bool:
        """Prompt (or probe) for camera access; returns the resulting grant."""
        raise NotImplementedError


class GrantedPermission(PermissionAdapter):
    """For cameras that need no OS grant (mock camera, headless test rigs)."""

    def __init__(self, granted: bool = True):
        self.granted = granted

    def has_permission(self) -> bool:
        return self.granted

    def request_permission(self) -> bool:
        return self.granted
