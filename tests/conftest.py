"""Minimal test fixtures - just what we actually need."""

import json
from datetime import datetime, timedelta, timezone

import pytest


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch):
    """Keep tests away from the real ~/.config/evtail."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.delenv("EVTAIL_SOURCE", raising=False)
    yield config_home


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave the evtail logger the way the import configured it."""
    from evtail.io.logger import setup_logging

    yield
    setup_logging()


@pytest.fixture
def now():
    return datetime.now(timezone.utc).replace(microsecond=0)


@pytest.fixture
def write_events(tmp_path):
    """Write event dicts to a JSON Lines file and return its path."""

    def _write(events, name="events.jsonl"):
        path = tmp_path / name
        with open(path, "w") as f:
            for event in events:
                f.write(json.dumps(event) + "\n")
        return path

    return _write


@pytest.fixture
def recent_events(now):
    """Five events from the last few minutes across three kinds."""
    kinds = [
        ("VmPoweredOnEvent", "vm01 on host esx01 is powered on"),
        ("UserLoginSessionEvent", "User admin logged in"),
        ("VmPoweredOnEvent", "vm02 on host esx02 is powered on"),
        ("AlarmStatusChangedEvent", "Alarm 'vmnic down' changed to red"),
        ("UserLoginSessionEvent", "User ops logged in"),
    ]
    return [
        {
            "key": 100 + i,
            "createdTime": (now - timedelta(minutes=5 - i)).isoformat(),
            "type": kind,
            "fullFormattedMessage": message,
            "entity": "dc1/cluster1",
            "userName": "admin",
        }
        for i, (kind, message) in enumerate(kinds)
    ]
