"""Single editable text field of the Droplet form"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_CHARACTER_LIMIT = 32


@dataclass
class Field:
    """Text input with a label, a placeholder default and a length limit"""

    label: str
    placeholder: str = ""
    character_limit: int = DEFAULT_CHARACTER_LIMIT
    value: str = ""
    focused: bool = False

    def insert(self, character: str) -> bool:
        """Append one character; returns False when the input was rejected"""
        if not self.focused or len(self.value) >= self.character_limit:
            return False
        self.value += character
        return True

    def insert_text(self, text: str) -> int:
        """Insert pasted text, stopping at the character limit"""
        inserted = 0
        for character in text:
            if not character.isprintable() or not self.insert(character):
                break
            inserted += 1
        return inserted

    def delete_backward(self) -> bool:
        if not self.focused or not self.value:
            return False
        self.value = self.value[:-1]
        return True

    def resolved_value(self) -> str:
        """Value used at submission time, falling back to the placeholder"""
        return self.value or self.placeholder

    def set_focus(self, focused: bool) -> None:
        self.focused = focused
