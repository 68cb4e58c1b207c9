"""Tests for PermissionGate."""

import asyncio

from snaptranslate.orchestrator.contracts import AccessState
from snaptranslate.orchestrator.permission import PermissionGate

from conftest import FakeCamera


class BrokenCamera(FakeCamera):
    async def request_permission(self):
        self.permission_calls += 1
        raise RuntimeError("prompt crashed")


class TestPermissionGate:
    def test_starts_unknown(self, status):
        assert PermissionGate(FakeCamera(), status).state == AccessState.UNKNOWN

    def test_granted(self, status):
        gate = PermissionGate(FakeCamera(granted=True), status)
        assert asyncio.run(gate.request_access()) == AccessState.GRANTED
        assert gate.granted

    def test_denied(self, status):
        gate = PermissionGate(FakeCamera(granted=False), status)
        assert asyncio.run(gate.request_access()) == AccessState.DENIED
        assert not gate.granted

    def test_exception_reported_as_denied(self, status):
        gate = PermissionGate(BrokenCamera(), status)
        assert asyncio.run(gate.request_access()) == AccessState.DENIED

    def test_one_prompt_per_call_and_retry(self, status):
        camera = FakeCamera(granted=False)
        gate = PermissionGate(camera, status)
        asyncio.run(gate.request_access())
        asyncio.run(gate.request_access())
        assert camera.permission_calls == 2
        assert gate.state == AccessState.DENIED

        camera.granted = True
        assert asyncio.run(gate.request_access()) == AccessState.GRANTED
        assert camera.permission_calls == 3
