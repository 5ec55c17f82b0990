"""Form controller: focus cycling, phases and the create request snapshot"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from droplet_form.field import Field
from droplet_form.spinner import Spinner

if TYPE_CHECKING:
    from droplet_form.submission import SubmissionOutcome

CANCEL_KEYS = frozenset({"ctrl+c", "esc"})
ADVANCE_KEYS = frozenset({"tab", "down"})
RETREAT_KEYS = frozenset({"shift+tab", "up"})
INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class Phase(enum.Enum):
    EDITING = "editing"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (Phase.SUCCEEDED, Phase.FAILED)


class Effect(enum.Enum):
    """What the application has to do after a key was handled"""

    NONE = "none"
    QUIT = "quit"
    SUBMIT = "submit"


@dataclass(frozen=True)
class CreationRequest:
    name: str
    region: str
    size: str
    image: int | str

    @property
    def image_is_id(self) -> bool:
        return isinstance(self.image, int)

    def to_body(self) -> dict[str, Any]:
        """JSON body for POST /v2/droplets"""
        return {
            "name": self.name,
            "region": self.region,
            "size": self.size,
            "image": self.image,
        }


def resolve_image(image: str) -> int | str:
    """Numeric image ID when the value is a base-10 integer, otherwise a slug"""
    if INTEGER_RE.fullmatch(image):
        return int(image)
    return image


def default_fields() -> list[Field]:
    return [
        Field("Name: ", "web-001", character_limit=64),
        Field("Region: ", "nyc3"),
        Field("Size: ", "s-1vcpu-1gb"),
        Field("Image: ", "ubuntu-20-04-x64"),
    ]


def build_request(fields: list[Field]) -> CreationRequest:
    """Snapshot resolved values in the fixed order name, region, size, image"""
    name, region, size, image = (field.resolved_value() for field in fields)
    return CreationRequest(name=name, region=region, size=size, image=resolve_image(image))


class FormController:
    """Owns the form fields, the focused control and the submission phase"""

    def __init__(self, fields: list[Field] | None = None, spinner: Spinner | None = None) -> None:
        self.fields: list[Field] = fields if fields is not None else default_fields()
        self.spinner: Spinner = spinner or Spinner()
        self.focus_index: int = 0
        self.phase: Phase = Phase.EDITING
        self.result_message: str | None = None
        self.request: CreationRequest | None = None
        self.outcome: SubmissionOutcome | None = None
        self._sync_focus()

    @property
    def submit_focused(self) -> bool:
        return self.focus_index == len(self.fields)

    @property
    def focused_field(self) -> Field | None:
        if self.submit_focused:
            return None
        return self.fields[self.focus_index]

    def handle_key(self, key: str) -> Effect:
        """Apply one keystroke and report the side effect the caller must run"""
        if key in CANCEL_KEYS:
            return Effect.QUIT

        if self.phase is not Phase.EDITING:
            return Effect.NONE

        if key == "enter":
            if self.submit_focused:
                self.submit()
                return Effect.SUBMIT
            self.advance_focus()
        elif key in ADVANCE_KEYS:
            self.advance_focus()
        elif key in RETREAT_KEYS:
            self.retreat_focus()
        elif key == "backspace":
            field = self.focused_field
            if field is not None:
                field.delete_backward()
        elif len(key) == 1:
            field = self.focused_field
            if field is not None and key.isprintable():
                field.insert(key)
        return Effect.NONE

    def paste(self, text: str) -> None:
        field = self.focused_field
        if self.phase is Phase.EDITING and field is not None:
            field.insert_text(text)

    def advance_focus(self) -> None:
        self.focus_index = (self.focus_index + 1) % (len(self.fields) + 1)
        self._sync_focus()

    def retreat_focus(self) -> None:
        self.focus_index = (self.focus_index - 1 + len(self.fields) + 1) % (len(self.fields) + 1)
        self._sync_focus()

    def submit(self) -> CreationRequest:
        """Freeze the field values into a request and enter the submitting phase"""
        if self.phase is not Phase.EDITING:
            raise RuntimeError(f"Cannot submit while {self.phase.value}")
        self.request = build_request(self.fields)
        self.phase = Phase.SUBMITTING
        self.spinner.reset()
        return self.request

    def tick(self) -> bool:
        if self.phase is not Phase.SUBMITTING:
            return False
        self.spinner.tick()
        return True

    def finish(self, outcome: SubmissionOutcome) -> bool:
        """Record the single completion event of the submission"""
        if self.phase is not Phase.SUBMITTING:
            return False
        self.phase = Phase.SUCCEEDED if outcome.succeeded else Phase.FAILED
        self.result_message = outcome.message
        self.outcome = outcome
        return True

    def _sync_focus(self) -> None:
        for index, field in enumerate(self.fields):
            field.set_focus(index == self.focus_index)
