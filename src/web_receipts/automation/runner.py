"""Executes export protocols step by step against a driver."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from web_receipts.automation.driver import UIAutomationDriver
from web_receipts.automation.steps import AutomationStep, StepKind
from web_receipts.core.exceptions import AutomationFailedError

if TYPE_CHECKING:
    from web_receipts.protocols.base import ExportProtocol

logger = logging.getLogger(__name__)


@dataclass
class RunReport:
    """Record of a completed protocol run.

    Attributes:
        protocol: Protocol name
        steps: Bound steps, in execution order
        waited_seconds: Total time spent in WAIT steps
    """

    protocol: str
    steps: list[AutomationStep] = field(default_factory=list)
    waited_seconds: float = 0.0


class ProtocolRunner:
    """Runs a protocol's steps in order, aborting on the first failure.

    There is no retry and no recovery: a failing step leaves the target
    application wherever it was, and the error propagates to the caller.

    Example:
        runner = ProtocolRunner(OsaScriptDriver(), timing_scale=1.5)
        runner.run(protocol, {"filename": "Invoice", "destination": "/tmp"})
    """

    def __init__(self, driver: UIAutomationDriver, timing_scale: float = 1.0) -> None:
        self.driver = driver
        self.timing_scale = timing_scale

    def run(self, protocol: "ExportProtocol", values: dict[str, str]) -> RunReport:
        """Execute every step of ``protocol``.

        Args:
            protocol: Protocol to run
            values: Placeholder values ("filename", "destination", "workflow")

        Returns:
            RunReport of the executed steps

        Raises:
            AutomationFailedError: If any step fails
        """
        app = protocol.browser.app_name
        report = RunReport(protocol=protocol.name)
        logger.info(f"Running protocol {protocol.name} ({len(protocol.steps)} steps)")

        for index, template in enumerate(protocol.steps, start=1):
            step = template.bind(values).scaled(self.timing_scale)
            logger.debug(f"[{protocol.name}] step {index}: {step}")
            try:
                self._execute(app, step)
            except AutomationFailedError as e:
                e.step = str(step)
                e.details.setdefault("protocol", protocol.name)
                e.details.setdefault("step", index)
                logger.warning(f"[{protocol.name}] step {index} failed: {e.reason}")
                raise
            report.steps.append(step)
            if step.kind == StepKind.WAIT:
                report.waited_seconds += step.seconds

        return report

    def _execute(self, app: str, step: AutomationStep) -> None:
        if step.kind == StepKind.ACTIVATE:
            self.driver.activate(app)
        elif step.kind == StepKind.KEY_CHORD:
            self.driver.send_key_chord(app, step.key, [m.value for m in step.modifiers])
        elif step.kind == StepKind.CLICK:
            self.driver.click_element(app, step.path)
        elif step.kind == StepKind.TYPE_TEXT:
            self.driver.type_text(app, step.text)
        else:  # WAIT
            self.driver.wait(step.seconds)
