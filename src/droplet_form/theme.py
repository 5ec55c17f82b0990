"""Colors used by the form and result views"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Color choices handed to the view functions; valid for prompt_toolkit and rich"""

    focused: str = "#0080FF"
    blurred: str = "#5B6987"
    placeholder: str = "#99A1B3"
    error: str = "#FF5F5F"

    @property
    def cursor(self) -> str:
        return f"reverse {self.focused}"


DEFAULT_THEME = Theme()
