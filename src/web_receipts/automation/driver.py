"""UI automation drivers.

A driver offers a handful of primitives over a named application. It knows
nothing about browsers or PDFs; export protocols are built on top of it.

A primitive that returns normally only means the scripting call did not
error. Whether the target application actually reacted is unobservable
from here, so callers must confirm results independently.
"""

from __future__ import annotations

import logging
import subprocess
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Sequence

from web_receipts.automation import applescript
from web_receipts.core.exceptions import AutomationFailedError

logger = logging.getLogger(__name__)

# Signature of subprocess.run, injectable for tests
CommandRunner = Callable[..., "subprocess.CompletedProcess[str]"]


class UIAutomationDriver(ABC):
    """Primitive UI automation operations.

    Every method either completes or raises AutomationFailedError.
    """

    def __init__(self, sleep: Callable[[float], None] | None = None) -> None:
        self._sleep = sleep or time.sleep

    @abstractmethod
    def evaluate(self, script: str) -> str:
        """Run a query script and return its textual result."""

    @abstractmethod
    def activate(self, app: str) -> None:
        """Bring ``app`` to the front."""

    @abstractmethod
    def send_key_chord(self, app: str, key: str, modifiers: Sequence[str] = ()) -> None:
        """Press ``key`` with ``modifiers`` held, addressed to ``app``."""

    @abstractmethod
    def click_element(self, app: str, path: Sequence[str]) -> None:
        """Click the element at structural ``path`` inside ``app``."""

    @abstractmethod
    def type_text(self, app: str, text: str) -> None:
        """Type ``text`` literally into the focused element of ``app``."""

    def wait(self, seconds: float) -> None:
        """Block the calling thread for ``seconds``."""
        if seconds > 0:
            self._sleep(seconds)


class OsaScriptDriver(UIAutomationDriver):
    """Driver that compiles each primitive to AppleScript and runs osascript.

    Requires macOS with Accessibility permission granted to the calling
    terminal or launcher.

    Example:
        driver = OsaScriptDriver()
        driver.activate("Safari")
        driver.send_key_chord("Safari", "p", ["command"])
    """

    def __init__(
        self,
        timeout: float | None = None,
        runner: CommandRunner | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        """Initialize the driver.

        Args:
            timeout: Seconds before an osascript call is abandoned. None
                waits forever, so a hung target stalls the run.
            runner: Replacement for subprocess.run
            sleep: Replacement for time.sleep
        """
        super().__init__(sleep)
        self.timeout = timeout
        self._run = runner or subprocess.run

    def evaluate(self, script: str) -> str:
        kwargs: dict[str, Any] = {"capture_output": True, "text": True}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        try:
            result = self._run(["osascript", "-e", script], **kwargs)
        except FileNotFoundError as e:
            raise AutomationFailedError("osascript not found (macOS only)") from e
        except subprocess.TimeoutExpired as e:
            raise AutomationFailedError(
                f"osascript timed out after {self.timeout}s"
            ) from e
        except OSError as e:
            raise AutomationFailedError(str(e)) from e

        if result.returncode != 0:
            message = (result.stderr or "").strip() or (
                f"osascript exited with status {result.returncode}"
            )
            logger.debug(f"osascript failed: {message}")
            raise AutomationFailedError(message)

        return (result.stdout or "").strip()

    def activate(self, app: str) -> None:
        self.evaluate(applescript.activate_script(app))

    def send_key_chord(self, app: str, key: str, modifiers: Sequence[str] = ()) -> None:
        self.evaluate(applescript.key_chord_script(app, key, modifiers))

    def click_element(self, app: str, path: Sequence[str]) -> None:
        self.evaluate(applescript.click_script(app, path))

    def type_text(self, app: str, text: str) -> None:
        self.evaluate(applescript.type_text_script(app, text))
