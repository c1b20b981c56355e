"""Tests for the export workflow orchestrator."""

import pytest
from pathlib import Path

from web_receipts.core.exceptions import (
    AutomationFailedError,
    DestinationUnavailableError,
    NoBrowserFoundError,
    VerificationTimeoutError,
)
from web_receipts.models.browser import Browser
from web_receipts.models.results import Status
from web_receipts.storage.filenames import FilenameAllocator
from web_receipts.verification.completion import CompletionVerifier
from web_receipts.workflows.export import ExportWorkflow

from tests.conftest import FakeDriver


def write_on_click(folder: Path, name_for_click):
    """Build an on_click hook that writes a PDF when ``name_for_click``
    returns a filename for the clicked path."""

    def hook(path):
        name = name_for_click(path)
        if name:
            folder.mkdir(parents=True, exist_ok=True)
            (folder / name).write_bytes(b"%PDF-1.4")

    return hook


@pytest.fixture
def verifier(sleeps):
    return CompletionVerifier(max_attempts=10, interval=0.5, sleep=sleeps.append)


def make_workflow(config, driver, verifier):
    return ExportWorkflow(config, driver=driver, verifier=verifier)


class TestSafariExport:
    """Safari: workflow menu pick, browser names the file."""

    def test_scenario_invoice_title(self, config, destination, verifier, sleeps):
        """Safari frontmost, 'Invoice #42: March', empty destination."""
        driver = FakeDriver(
            frontmost="Safari",
            titles={"Safari": "Invoice #42: March"},
            on_click=write_on_click(
                destination,
                lambda path: "Invoice #42- March.pdf" if "menu item" in path[-1] else None,
            ),
        )

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.status == Status.SUCCESS
        assert outcome.browser == Browser.SAFARI
        assert outcome.protocol == "safari-workflow"
        assert outcome.path == destination / "Invoice #42- March.pdf"
        assert outcome.summary == "Saved: Invoice #42- March.pdf"
        assert sum(sleeps) <= 5.0

    def test_picks_configured_workflow_menu_item(self, config, destination, verifier):
        """Test the workflow name is bound into the menu item path."""
        driver = FakeDriver(
            titles={"Safari": "Receipt"},
            on_click=write_on_click(destination, lambda path: "Receipt.pdf" if "menu item" in path[-1] else None),
        )

        make_workflow(config, driver, verifier).run()

        clicks = [c[2] for c in driver.calls if c[0] == "click"]
        assert clicks[-1][-1] == 'menu item "Save to Web Receipts"'
        assert not any(c[0] == "type_text" for c in driver.calls)

    def test_existing_file_expects_numbered_name(self, config, destination, verifier):
        """Test the expected path moves to .2 when the name is taken."""
        destination.mkdir(parents=True)
        (destination / "Receipt.pdf").write_bytes(b"old")
        driver = FakeDriver(
            titles={"Safari": "Receipt"},
            on_click=write_on_click(destination, lambda path: "Receipt.2.pdf" if "menu item" in path[-1] else None),
        )

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.is_success
        assert outcome.filename == "Receipt.2.pdf"

    def test_missing_title_watches_for_new_pdf(self, config, destination, verifier):
        """Test Safari continues without a title and reports what appeared."""
        driver = FakeDriver(
            titles={},
            on_click=write_on_click(destination, lambda path: "Named By Workflow.pdf" if "menu item" in path[-1] else None),
        )

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.is_success
        assert outcome.filename == "Named By Workflow.pdf"

    def test_legacy_macos_uses_legacy_protocol(self, config, destination, verifier):
        """Test protocol selection follows the configured macOS version."""
        config.os_version = "11.7"
        driver = FakeDriver(
            titles={"Safari": "Receipt"},
            on_click=write_on_click(destination, lambda path: "Receipt.pdf" if "menu item" in path[-1] else None),
        )

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.protocol == "safari-workflow-legacy"
        clicks = [c[2] for c in driver.calls if c[0] == "click"]
        assert clicks[0] == ("front window", "sheet 1", 'menu button "PDF"')


class TestChromeExport:
    """Chrome: manual save panel navigation."""

    def save_hook(self, driver, destination):
        def name_for_click(path):
            if path[-1] == 'button "Save"':
                typed = [c[2] for c in driver.calls if c[0] == "type_text"]
                return f"{typed[0]}.pdf"
            return None

        return write_on_click(destination, name_for_click)

    def test_success(self, config, destination, verifier):
        """Test filename and folder are typed and the file is verified."""
        driver = FakeDriver(frontmost="Google Chrome", titles={"Google Chrome": "Order 7/12: Shoes"})
        driver.on_click = self.save_hook(driver, destination)

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.is_success
        assert outcome.protocol == "chrome-system-dialog"
        assert outcome.filename == "Order 7-12- Shoes.pdf"
        typed = [c[2] for c in driver.calls if c[0] == "type_text"]
        assert typed == ["Order 7-12- Shoes", str(destination)]

    def test_scenario_silent_click_times_out(self, config, destination, verifier, sleeps):
        """Final click reports success but no file appears."""
        driver = FakeDriver(frontmost="Google Chrome", titles={"Google Chrome": "Receipt"})

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.status == Status.FAILED
        assert outcome.error_kind == VerificationTimeoutError.__name__
        assert "Receipt.pdf" in outcome.message
        assert outcome.browser == Browser.CHROME
        assert sleeps == [0.5] * 10

    def test_missing_title_is_fatal(self, config, destination, verifier):
        """Test Chrome cannot proceed without a filename to type."""
        driver = FakeDriver(frontmost="Google Chrome", titles={})

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.error_kind == "TitleUnavailableError"
        assert driver.ui_calls == []


class TestFailures:
    """Failure paths shared by both browsers."""

    def test_scenario_unsupported_frontmost_app(self, config, destination, verifier, sleeps):
        """Finder frontmost: no automation, no filesystem writes."""
        driver = FakeDriver(frontmost="Finder")

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.status == Status.FAILED
        assert outcome.error_kind == NoBrowserFoundError.__name__
        assert outcome.message == "No supported browser (Safari or Chrome) is frontmost"
        assert driver.ui_calls == []
        assert not destination.exists()
        assert sleeps == []

    def test_automation_failure_aborts(self, config, destination, verifier, sleeps):
        """Test a failing click stops the run before verification."""
        driver = FakeDriver(titles={"Safari": "Receipt"}, fail_on="click")

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.error_kind == AutomationFailedError.__name__
        assert outcome.protocol == "safari-workflow"
        assert [c[0] for c in driver.ui_calls].count("click") == 1
        assert driver.sleeps == [0.3, 1.0]
        assert sleeps == []

    def test_unregistered_os_variant(self, config, destination, verifier):
        """Test a missing protocol variant is reported."""
        from web_receipts.protocols import SAFARI_WORKFLOW
        from web_receipts.protocols.registry import ProtocolRegistry

        config.os_version = "11.0"
        workflow = ExportWorkflow(
            config,
            driver=FakeDriver(titles={"Safari": "Receipt"}),
            registry=ProtocolRegistry([SAFARI_WORKFLOW]),
            verifier=verifier,
        )

        outcome = workflow.run()

        assert outcome.error_kind == "ProtocolNotFoundError"

    def test_destination_created_with_parents(self, config, destination, verifier):
        """Test the destination folder is created before the protocol runs."""
        driver = FakeDriver(frontmost="Google Chrome", titles={"Google Chrome": "Receipt"})

        make_workflow(config, driver, verifier).run()

        assert destination.is_dir()

    def test_timing_scale_applies_to_protocol_waits(self, config, destination, verifier):
        """Test the configured scale stretches protocol waits."""
        config.timing_scale = 2.0
        driver = FakeDriver(titles={"Safari": "Receipt"}, fail_on="click")

        make_workflow(config, driver, verifier).run()

        assert driver.sleeps == [pytest.approx(0.6), pytest.approx(2.0)]

    def test_outcome_records_duration(self, config, verifier):
        outcome = make_workflow(config, FakeDriver(frontmost="Finder"), verifier).run()
        assert outcome.duration_seconds >= 0


class TestDestinationErrors:
    """Filesystem problems with the destination folder."""

    def test_destination_is_a_regular_file(self, config, destination, verifier):
        """Test a file in the way fails the run before any UI step."""
        destination.parent.mkdir(parents=True)
        destination.write_text("not a folder")
        driver = FakeDriver(titles={"Safari": "Receipt"})

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.status == Status.FAILED
        assert outcome.error_kind == DestinationUnavailableError.__name__
        assert str(destination) in outcome.message
        assert outcome.browser == Browser.SAFARI
        assert driver.ui_calls == []

    def test_unreadable_folder_during_allocation(self, config, destination, verifier):
        """Test a permission error while probing names is reported."""

        def denied(path):
            raise PermissionError(13, "Permission denied")

        workflow = ExportWorkflow(
            config,
            driver=FakeDriver(frontmost="Google Chrome", titles={"Google Chrome": "Receipt"}),
            verifier=verifier,
            allocator=FilenameAllocator(destination, exists=denied),
        )

        outcome = workflow.run()

        assert outcome.error_kind == DestinationUnavailableError.__name__
        assert "Permission denied" in outcome.message

    def test_unreadable_folder_during_verification(self, config, destination, sleeps):
        """Test a permission error while polling is reported."""

        def denied(path):
            raise PermissionError(13, "Permission denied")

        verifier = CompletionVerifier(sleep=sleeps.append, exists=denied)
        driver = FakeDriver(frontmost="Google Chrome", titles={"Google Chrome": "Receipt"})

        outcome = make_workflow(config, driver, verifier).run()

        assert outcome.error_kind == DestinationUnavailableError.__name__
        assert outcome.protocol == "chrome-system-dialog"
        assert sleeps == [0.5]
