"""Global pytest fixtures for MICROBOOT."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from microboot import config
from microboot.defaults import DEFAULTS
from microboot.logging import _MANAGED, PROJECT_PREFIX

# pylint: disable=redefined-outer-name, unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()
LAYER_MARKERS = ("unit", "integration", "functional")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each item with the layer directory it lives in (`tests/<layer>/`)."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        try:
            layer = path.relative_to(TESTS_ROOT).parts[0]
        except ValueError:
            continue
        if layer in LAYER_MARKERS and not any(
            marker.name == layer for marker in item.iter_markers()
        ):
            item.add_marker(getattr(pytest.mark, layer))


def _remove_managed_handlers() -> None:
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, _MANAGED, False):
            root.removeHandler(handler)
            handler.close()


@pytest.fixture(autouse=True)
def isolate_process_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Give each test empty process defaults and a private log directory.

    Bootstrap writes into the process-wide defaults and installs root logging
    handlers; both are undone after the test.
    """
    log_dir = tmp_path / "logs"
    monkeypatch.setattr(config, "default_log_dir", lambda: log_dir)
    for name in ("MICRO_BROKER", "MICRO_REGISTRY", "MICRO_SELECTOR", "MICRO_TRANSPORT"):
        monkeypatch.delenv(name, raising=False)
    root_level = logging.getLogger().level
    DEFAULTS.reset()
    yield
    DEFAULTS.reset()
    _remove_managed_handlers()
    logging.getLogger().setLevel(root_level)
    logging.getLogger(PROJECT_PREFIX).setLevel(logging.NOTSET)


@pytest.fixture
def log_dir(tmp_path: Path) -> Path:
    """The directory bootstrap logs to when ``--log_dir`` is not given."""
    return tmp_path / "logs"
