"""Tests for perch.testing — RecordingRegistrar."""

from typing import Any

import pytest

from perch.manager import EndpointManager
from perch.testing import RecordingRegistrar


def _handler(request: Any = None) -> str:
    return "ok"


class TestRecordingRegistrar:
    def test_records_calls(self) -> None:
        registrar = RecordingRegistrar()
        EndpointManager("demo/v1", registrar=registrar).add_endpoint(
            "/items", {"methods": "GET", "callback": _handler}
        ).register_endpoints()
        assert registrar.routes == ["/items"]
        assert registrar.calls[0].namespace == "demo/v1"

    def test_fail_on_raises_after_recording(self) -> None:
        registrar = RecordingRegistrar(fail_on=frozenset({"/x"}))
        with pytest.raises(RuntimeError, match="refused"):
            registrar.register_route("demo/v1", "/x", None)  # type: ignore[arg-type]
        assert registrar.routes == ["/x"]

    def test_attach_and_init(self) -> None:
        registrar = RecordingRegistrar()
        manager = EndpointManager("demo/v1").add_endpoint(
            "/items", {"methods": "GET", "callback": _handler}
        )
        manager.attach(registrar)  # type: ignore[arg-type]
        assert registrar.calls == []
        registrar.init()
        assert registrar.routes == ["/items"]
