"""Step definitions for scripted export protocols.

An export protocol is an ordered list of these steps. Steps are plain data:
they name what to do (activate, press a chord, click an element, type text,
wait) and leave the how to the driver. Text and element paths may contain
placeholders that are bound from the export request just before running:

- ``{filename}``: allocated base name (no extension)
- ``{destination}``: absolute destination folder
- ``{workflow}``: name of the registered PDF workflow
"""

from dataclasses import dataclass, replace
from enum import Enum

from web_receipts.automation.applescript import quote

PLACEHOLDERS = ("filename", "destination", "workflow")


class StepKind(str, Enum):
    """Primitive operations understood by the driver."""

    ACTIVATE = "activate"
    KEY_CHORD = "key_chord"
    CLICK = "click"
    TYPE_TEXT = "type_text"
    WAIT = "wait"


class Modifier(str, Enum):
    """Keyboard modifiers, named as AppleScript expects them."""

    COMMAND = "command"
    OPTION = "option"
    SHIFT = "shift"
    CONTROL = "control"


# A structural path, outermost container first, e.g.
# ("front window", "sheet 1", "splitter group 1", "group 2", "menu button 1")
ElementPath = tuple[str, ...]


@dataclass(frozen=True)
class AutomationStep:
    """One scripted UI interaction.

    Attributes:
        kind: Which driver primitive runs this step
        key: Key for KEY_CHORD steps ("p", "a", "return", ...)
        modifiers: Modifiers held for KEY_CHORD steps
        path: Element path for CLICK steps
        text: Literal text for TYPE_TEXT steps
        seconds: Duration for WAIT steps, before timing scale is applied
        note: Short label used in logs and error messages
    """

    kind: StepKind
    key: str = ""
    modifiers: tuple[Modifier, ...] = ()
    path: ElementPath = ()
    text: str = ""
    seconds: float = 0.0
    note: str = ""

    def __str__(self) -> str:
        if self.note:
            return f"{self.kind.value}: {self.note}"
        if self.kind == StepKind.KEY_CHORD:
            return f"{self.kind.value}: {'+'.join([m.value for m in self.modifiers] + [self.key])}"
        if self.kind == StepKind.CLICK:
            return f"{self.kind.value}: {self.path[-1] if self.path else '?'}"
        if self.kind == StepKind.WAIT:
            return f"{self.kind.value}: {self.seconds}s"
        return self.kind.value

    @property
    def placeholders(self) -> set[str]:
        """Placeholders referenced by this step's text or path."""
        haystack = " ".join((self.text,) + self.path)
        return {name for name in PLACEHOLDERS if f"{{{name}}}" in haystack}

    def bind(self, values: dict[str, str]) -> "AutomationStep":
        """Substitute placeholders.

        Text receives the raw value, since it is typed literally. Path
        segments receive a quoted AppleScript string literal.
        """
        if not self.placeholders:
            return self
        text = self.text
        path = list(self.path)
        for name, value in values.items():
            token = f"{{{name}}}"
            text = text.replace(token, value)
            path = [segment.replace(token, quote(value)) for segment in path]
        return replace(self, text=text, path=tuple(path))

    def scaled(self, scale: float) -> "AutomationStep":
        """Return a WAIT step with its duration multiplied by ``scale``."""
        if self.kind != StepKind.WAIT or scale == 1.0:
            return self
        return replace(self, seconds=self.seconds * scale)


def activate(note: str = "") -> AutomationStep:
    return AutomationStep(StepKind.ACTIVATE, note=note)


def key_chord(key: str, *modifiers: Modifier, note: str = "") -> AutomationStep:
    return AutomationStep(StepKind.KEY_CHORD, key=key, modifiers=tuple(modifiers), note=note)


def click(*path: str, note: str = "") -> AutomationStep:
    return AutomationStep(StepKind.CLICK, path=tuple(path), note=note)


def type_text(text: str, note: str = "") -> AutomationStep:
    return AutomationStep(StepKind.TYPE_TEXT, text=text, note=note)


def wait(seconds: float, note: str = "") -> AutomationStep:
    return AutomationStep(StepKind.WAIT, seconds=seconds, note=note)
