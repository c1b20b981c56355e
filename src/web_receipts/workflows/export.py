"""Export workflow orchestrator."""

import logging
import time
from pathlib import Path

from web_receipts.automation.driver import OsaScriptDriver, UIAutomationDriver
from web_receipts.automation.runner import ProtocolRunner
from web_receipts.browser.detector import BrowserDetector
from web_receipts.browser.tabs import fetch_tab_title
from web_receipts.core.config import Config
from web_receipts.core.exceptions import (
    DestinationUnavailableError,
    NoBrowserFoundError,
    TitleUnavailableError,
    VerificationTimeoutError,
    WebReceiptsError,
)
from web_receipts.models.browser import Browser
from web_receipts.models.request import ExportRequest
from web_receipts.models.results import ExportOutcome
from web_receipts.protocols.base import ExportProtocol
from web_receipts.protocols.registry import ProtocolRegistry
from web_receipts.storage.filenames import FilenameAllocator
from web_receipts.verification.completion import CompletionVerifier, list_pdfs

logger = logging.getLogger(__name__)


class ExportWorkflow:
    """Saves the frontmost browser's active tab as a PDF.

    Runs strictly in order, with no branching back once a protocol starts:
    1. Detect the frontmost browser
    2. Select the export protocol for that browser and macOS version
    3. Read the tab title and allocate a free filename
    4. Run the protocol
    5. Poll the destination folder until the PDF appears

    Only step 5 decides success. Every failure is terminal and nothing is
    cleaned up.

    Example:
        >>> workflow = ExportWorkflow(Config.from_env())
        >>> outcome = workflow.run()
        >>> print(outcome.summary)
        Saved: Invoice #42- March.pdf
    """

    def __init__(
        self,
        config: Config | None = None,
        driver: UIAutomationDriver | None = None,
        registry: ProtocolRegistry | None = None,
        verifier: CompletionVerifier | None = None,
        allocator: FilenameAllocator | None = None,
    ) -> None:
        """Initialize the workflow.

        Args:
            config: Configuration (destination, budgets, timing)
            driver: UI automation driver, osascript by default
            registry: Protocol registry, built-in protocols by default
            verifier: Completion verifier, built from config by default
            allocator: Filename allocator, built from config by default
        """
        self.config = config or Config.from_env()
        self.driver = driver or OsaScriptDriver(timeout=self.config.osascript_timeout)
        self.registry = registry or ProtocolRegistry.default()
        self.verifier = verifier or CompletionVerifier(
            max_attempts=self.config.verify_attempts,
            interval=self.config.verify_interval,
        )
        self.allocator = allocator or FilenameAllocator(
            self.config.destination, max_suffix=self.config.max_suffix
        )
        self.detector = BrowserDetector(self.driver)
        self.runner = ProtocolRunner(self.driver, timing_scale=self.config.timing_scale)

        self._browser: Browser | None = None
        self._protocol: ExportProtocol | None = None

    @property
    def destination(self) -> Path:
        return self.config.destination

    def run(self) -> ExportOutcome:
        """Run the whole pipeline once.

        Returns:
            ExportOutcome, SUCCESS with the written path or FAILED with the
            error kind and message
        """
        self._browser = None
        self._protocol = None
        started = time.monotonic()

        try:
            outcome = self._export()
        except WebReceiptsError as e:
            logger.info(f"Export failed ({type(e).__name__}): {e}")
            outcome = ExportOutcome.failure(
                e,
                browser=self._browser,
                protocol=self._protocol.name if self._protocol else "",
            )

        outcome.duration_seconds = time.monotonic() - started
        return outcome

    def _export(self) -> ExportOutcome:
        browser = self.detector.detect_frontmost()
        if browser is None:
            raise NoBrowserFoundError(app_name=self.detector.last_app_name)
        self._browser = browser

        protocol = self.registry.select(browser, self.config.os_version)
        self._protocol = protocol

        request = self._build_request(browser, protocol)

        before = self._prepare_destination()

        self.runner.run(protocol, self._placeholder_values(request))

        if request.expected_path is not None:
            result = self.verifier.verify(request.expected_path)
        else:
            result = self.verifier.verify_new_file(self.destination, before)

        if not result.passed:
            raise VerificationTimeoutError(
                str(result.path),
                attempts=result.attempts,
                interval=self.verifier.interval,
                details={"protocol": protocol.name},
            )

        logger.info(f"Saved {result.path}")
        return ExportOutcome.success(
            result.path,
            browser=browser,
            protocol=protocol.name,
            message=f"Saved {result.path}",
        )

    def _prepare_destination(self) -> set[str]:
        """Create the destination folder and snapshot the PDFs already in it."""
        try:
            self.destination.mkdir(parents=True, exist_ok=True)
            return list_pdfs(self.destination)
        except OSError as e:
            raise DestinationUnavailableError(
                str(self.destination), e.strerror or str(e)
            ) from e

    def _build_request(self, browser: Browser, protocol: ExportProtocol) -> ExportRequest:
        """Read the tab title and allocate the output name.

        A missing title is fatal only when the protocol types the filename.
        Otherwise the run continues and the verifier watches for any new PDF.
        """
        try:
            title = fetch_tab_title(self.driver, browser)
        except TitleUnavailableError as e:
            if protocol.names_file:
                raise
            logger.warning(f"{e}; will watch for any new PDF instead")
            return ExportRequest(browser=browser, destination=self.destination)

        candidate = self.allocator.candidate_for(title)
        logger.info(f"Exporting {browser.label} tab as {candidate.filename}")
        return ExportRequest(
            browser=browser,
            destination=self.destination,
            base_name=candidate.base_name,
        )

    def _placeholder_values(self, request: ExportRequest) -> dict[str, str]:
        values = {
            "destination": str(request.destination),
            "workflow": self.config.workflow_name,
        }
        if request.base_name is not None:
            values["filename"] = request.base_name
        return values
