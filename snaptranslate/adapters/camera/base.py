from abc import ABC, abstractmethod

from snaptranslate.orchestrator.contracts import Facing, Illumination


class CameraAdapter(ABC):
    @abstractmethod
    async def request_permission(self) -> bool:
        """Ask the OS for camera access. True when granted."""
        ...

    @abstractmethod
    async def capture_frame(self, facing: Facing, illumination: Illumination):
        """Capture one raw BGR frame. Returns None on failure."""
        ...

    def release(self):
        pass
