"""Pytest configuration and fixtures for web-receipts tests."""

import pytest
from pathlib import Path
from typing import Any, Callable, Sequence

import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from web_receipts.automation.applescript import FRONTMOST_APP_SCRIPT, TAB_TITLE_SCRIPTS
from web_receipts.automation.driver import UIAutomationDriver
from web_receipts.core.config import Config
from web_receipts.core.exceptions import AutomationFailedError


class FakeDriver(UIAutomationDriver):
    """Driver double that records calls instead of scripting the UI.

    Attributes:
        frontmost: Name returned for the frontmost application query
        titles: Tab title per application name
        calls: Recorded (primitive, app, argument) tuples
        fail_on: Primitive name ("click", "key_chord", ...) that should fail
        on_click: Hook called with the clicked path, e.g. to write a file
    """

    def __init__(
        self,
        frontmost: str | None = "Safari",
        titles: dict[str, str] | None = None,
        fail_on: str | None = None,
        on_click: Callable[[Sequence[str]], None] | None = None,
    ) -> None:
        self.sleeps: list[float] = []
        super().__init__(sleep=self.sleeps.append)
        self.frontmost = frontmost
        self.titles = titles if titles is not None else {}
        self.fail_on = fail_on
        self.on_click = on_click
        self.calls: list[tuple[str, str, Any]] = []
        self.scripts: list[str] = []

    @property
    def ui_calls(self) -> list[tuple[str, str, Any]]:
        """Calls that touch the UI (everything except queries)."""
        return [c for c in self.calls if c[0] != "evaluate"]

    def _record(self, primitive: str, app: str, arg: Any) -> None:
        self.calls.append((primitive, app, arg))
        if self.fail_on == primitive:
            raise AutomationFailedError(f"{primitive} failed")

    def evaluate(self, script: str) -> str:
        self.scripts.append(script)
        self.calls.append(("evaluate", "", script))
        if script == FRONTMOST_APP_SCRIPT:
            if self.frontmost is None:
                raise AutomationFailedError("System Events got an error")
            return self.frontmost
        for app, title_script in TAB_TITLE_SCRIPTS.items():
            if script == title_script:
                if app not in self.titles:
                    raise AutomationFailedError(f"Can't get front window of {app}")
                return self.titles[app]
        return ""

    def activate(self, app: str) -> None:
        self._record("activate", app, None)

    def send_key_chord(self, app: str, key: str, modifiers: Sequence[str] = ()) -> None:
        self._record("key_chord", app, (key, tuple(modifiers)))

    def click_element(self, app: str, path: Sequence[str]) -> None:
        self._record("click", app, tuple(path))
        if self.on_click:
            self.on_click(path)

    def type_text(self, app: str, text: str) -> None:
        self._record("type_text", app, text)

    def wait(self, seconds: float) -> None:
        self.calls.append(("wait", "", seconds))
        super().wait(seconds)


@pytest.fixture
def fake_driver() -> FakeDriver:
    """FakeDriver with Safari frontmost and no titles."""
    return FakeDriver()


@pytest.fixture
def destination(tmp_path: Path) -> Path:
    """Destination folder path (not created yet)."""
    return tmp_path / "Documents" / "Web Receipts"


@pytest.fixture
def config(destination: Path) -> Config:
    """Config pointing at a temporary destination on macOS 14.5."""
    return Config(
        destination=destination,
        max_suffix=10000,
        verify_attempts=10,
        verify_interval=0.5,
        timing_scale=1.0,
        workflow_name="Save to Web Receipts",
        os_version="14.5",
        osascript_timeout=None,
        log_level="WARNING",
    )


@pytest.fixture
def sleeps() -> list[float]:
    """Collects durations passed to injected sleep functions."""
    return []
