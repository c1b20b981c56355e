"""Scripted UI automation: steps, drivers and the protocol runner."""

from web_receipts.automation.driver import OsaScriptDriver, UIAutomationDriver
from web_receipts.automation.runner import ProtocolRunner, RunReport
from web_receipts.automation.steps import (
    AutomationStep,
    Modifier,
    StepKind,
)

__all__ = [
    # Drivers
    "UIAutomationDriver",
    "OsaScriptDriver",
    # Steps
    "AutomationStep",
    "Modifier",
    "StepKind",
    # Execution
    "ProtocolRunner",
    "RunReport",
]
