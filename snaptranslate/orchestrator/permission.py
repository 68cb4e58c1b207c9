from snaptranslate.orchestrator.contracts import AccessState


class PermissionGate:
    """Owns the camera AccessState. Failures surface as DENIED, never raised."""

    def __init__(self, camera, status_store):
        self.camera = camera
        self.status = status_store
        self.state = AccessState.UNKNOWN

    @property
    def granted(self) -> bool:
        return self.state == AccessState.GRANTED

    async def request_access(self) -> AccessState:
        try:
            ok = await self.camera.request_permission()
        except Exception as e:
            self.status.log(f"permission: request failed {type(e).__name__}: {e}")
            ok = False
        self.state = AccessState.GRANTED if ok else AccessState.DENIED
        self.status.log(f"permission: {self.state.value}")
        return self.state
