"""Chrome export protocols.

Chrome runs its own print pipeline. Picking a registered PDF workflow from
the system dialog reports success but never writes a file, because Chrome
does not honor the workflow callback. The only path that works is to save
as PDF and drive the save panel by hand: type the name, jump to the
destination folder with Go to Folder, and press Save.
"""

from web_receipts.automation.steps import (
    Modifier,
    activate,
    click,
    key_chord,
    type_text,
    wait,
)
from web_receipts.models.browser import Browser
from web_receipts.protocols.base import ExportProtocol

# Cmd+Option+P opens the system print dialog as a separate "Print" window.
PRINT_PDF_MENU = ('window "Print"', "splitter group 1", "group 2", "menu button 1")
SAVE_AS_PDF_ITEM = PRINT_PDF_MENU + ("menu 1", 'menu item "Save as PDF…"')
SAVE_BUTTON = ('window "Print"', "sheet 1", 'button "Save"')


CHROME_SYSTEM_DIALOG = ExportProtocol(
    name="chrome-system-dialog",
    browser=Browser.CHROME,
    steps=(
        activate(note="bring Chrome to the front"),
        wait(0.3),
        key_chord("p", Modifier.COMMAND, Modifier.OPTION, note="open system print dialog"),
        wait(1.5),
        click(*PRINT_PDF_MENU, note="open PDF menu"),
        wait(0.3),
        click(*SAVE_AS_PDF_ITEM, note="choose Save as PDF"),
        wait(1.0, note="save panel"),
        key_chord("a", Modifier.COMMAND, note="select filename"),
        type_text("{filename}", note="type filename"),
        wait(0.2),
        key_chord("g", Modifier.COMMAND, Modifier.SHIFT, note="open Go to Folder"),
        wait(0.5),
        type_text("{destination}", note="type destination folder"),
        wait(0.2),
        key_chord("return", note="confirm folder"),
        wait(0.5),
        click(*SAVE_BUTTON, note="save"),
        wait(1.0, note="let the dialog dismiss"),
    ),
    names_file=True,
    description="System print dialog, Save as PDF, manual save panel",
)

PROTOCOLS = (CHROME_SYSTEM_DIALOG,)
