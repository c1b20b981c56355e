"""Safari export protocols.

Safari prints through the native macOS print stack, which honors PDF
workflows registered in ~/Library/PDF Services. A single menu pick in the
print sheet hands the document to the "Save to Web Receipts" workflow, and
the workflow decides the file name and folder.
The run still polls the configured destination, so the workflow has to save
into that same folder.
"""

from web_receipts.automation.steps import Modifier, activate, click, key_chord, wait
from web_receipts.models.browser import Browser
from web_receipts.protocols.base import ExportProtocol

# Print sheet on macOS 12+: the PDF menu button sits in the second group of
# the sheet's splitter group.
SHEET_PDF_MENU = ("front window", "sheet 1", "splitter group 1", "group 2", "menu button 1")

# Older print sheet: the PDF menu button is a direct child of the sheet.
LEGACY_SHEET_PDF_MENU = ("front window", "sheet 1", 'menu button "PDF"')


def _workflow_steps(pdf_menu: tuple[str, ...]) -> tuple:
    return (
        activate(note="bring Safari to the front"),
        wait(0.3),
        key_chord("p", Modifier.COMMAND, note="open print sheet"),
        wait(1.0),
        click(*pdf_menu, note="open PDF menu"),
        wait(0.3),
        click(*pdf_menu, "menu 1", "menu item {workflow}", note="choose PDF workflow"),
        wait(0.5, note="let the print sheet dismiss"),
    )


SAFARI_WORKFLOW = ExportProtocol(
    name="safari-workflow",
    browser=Browser.SAFARI,
    steps=_workflow_steps(SHEET_PDF_MENU),
    min_os=(12,),
    description="Print sheet, PDF menu, registered workflow",
)

SAFARI_WORKFLOW_LEGACY = ExportProtocol(
    name="safari-workflow-legacy",
    browser=Browser.SAFARI,
    steps=_workflow_steps(LEGACY_SHEET_PDF_MENU),
    max_os=(12,),
    description="Pre-Monterey print sheet, PDF menu, registered workflow",
)

PROTOCOLS = (SAFARI_WORKFLOW, SAFARI_WORKFLOW_LEGACY)
