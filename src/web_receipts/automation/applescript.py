"""AppleScript source builders for the osascript driver."""

from typing import Iterable, Sequence

# Keys that cannot be sent with ``keystroke`` and need a virtual key code.
KEY_CODES = {
    "return": 36,
    "tab": 48,
    "space": 49,
    "delete": 51,
    "escape": 53,
    "down": 125,
    "up": 126,
}

FRONTMOST_APP_SCRIPT = """
tell application "System Events"
    set frontApp to name of first application process whose frontmost is true
end tell
return frontApp
"""

TAB_TITLE_SCRIPTS = {
    "Safari": 'tell application "Safari" to return name of current tab of front window',
    "Google Chrome": 'tell application "Google Chrome" to return title of active tab of front window',
}


def quote(value: str) -> str:
    """Return ``value`` as an AppleScript string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def element_reference(path: Sequence[str]) -> str:
    """Render an outermost-first element path as an AppleScript reference.

    >>> element_reference(("front window", "sheet 1", "button 1"))
    'button 1 of sheet 1 of front window'
    """
    if not path:
        raise ValueError("Element path must not be empty")
    return " of ".join(reversed(path))


def _in_process(app: str, body: str) -> str:
    return (
        'tell application "System Events"\n'
        f"    tell process {quote(app)}\n"
        f"        {body}\n"
        "    end tell\n"
        "end tell"
    )


def activate_script(app: str) -> str:
    return f"tell application {quote(app)} to activate"


def key_chord_script(app: str, key: str, modifiers: Iterable[str]) -> str:
    mods = [f"{m} down" for m in modifiers]
    using = f" using {{{', '.join(mods)}}}" if mods else ""
    code = KEY_CODES.get(key.lower())
    if code is not None:
        return _in_process(app, f"key code {code}{using}")
    return _in_process(app, f"keystroke {quote(key)}{using}")


def click_script(app: str, path: Sequence[str]) -> str:
    return _in_process(app, f"click {element_reference(path)}")


def type_text_script(app: str, text: str) -> str:
    return _in_process(app, f"keystroke {quote(text)}")
