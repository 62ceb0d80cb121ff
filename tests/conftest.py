from __future__ import annotations

import pytest

from pseudoedit.runtime import telemetry


@pytest.fixture(autouse=True)
def quiet_telemetry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PSEUDOEDIT_DISABLE_CONSOLE", "1")
    monkeypatch.delenv("PSEUDOEDIT_LOG_FILE", raising=False)
    telemetry.configure()
