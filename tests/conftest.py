from collections.abc import Generator
from pathlib import Path

import pytest

from dialframe.config import Configuration, LoggingBridge


@pytest.fixture
def bridge(request: pytest.FixtureRequest) -> Generator[LoggingBridge, None, None]:
    """Bridge bound to a logger private to the running test."""
    bridge = LoggingBridge(f"dialframe.tests.{request.node.name}")
    yield bridge
    bridge.set_outputters([])
    bridge.target.setLevel(0)


@pytest.fixture
def config(bridge: LoggingBridge) -> Configuration:
    return Configuration(bridge=bridge)


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """Application folder holding a few dialplan-like files."""
    (tmp_path / "x.rb").write_text("")
    (tmp_path / "y.rb").write_text("")
    (tmp_path / "x.txt").write_text("")
    (tmp_path / "components").mkdir()
    (tmp_path / "components" / "voicemail.rb").write_text("")
    return tmp_path
