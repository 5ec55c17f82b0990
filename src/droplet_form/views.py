"""Rendering of the form screen and of the final result"""

from __future__ import annotations

from prompt_toolkit.formatted_text import StyleAndTextTuples
from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from droplet_form.field import Field
from droplet_form.form import FormController, Phase
from droplet_form.submission import FAILURE_HEADLINE, SUCCESS_HEADLINE
from droplet_form.theme import DEFAULT_THEME, Theme

HELP_TEXT = "tab/shift+tab to move • enter to create • esc to quit"
SUBMITTING_TEXT = "Creating Droplet..."


def _field_fragments(field: Field, theme: Theme) -> StyleAndTextTuples:
    prompt_style = theme.focused if field.focused else ""
    fragments: StyleAndTextTuples = [(prompt_style, field.label)]
    if field.value:
        fragments.append((prompt_style, field.value))
        if field.focused:
            fragments.append((theme.cursor, " "))
    elif field.focused:
        # Cursor sits on the first placeholder character.
        head, tail = field.placeholder[:1] or " ", field.placeholder[1:]
        fragments.append((theme.cursor, head))
        fragments.append((theme.placeholder, tail))
    else:
        fragments.append((theme.placeholder, field.placeholder))
    return fragments


def render_form(controller: FormController, theme: Theme = DEFAULT_THEME) -> StyleAndTextTuples:
    """prompt_toolkit fragments for the current phase of the form"""
    if controller.phase is Phase.SUBMITTING:
        return [
            (theme.focused, controller.spinner.frame),
            ("", "  "),
            (theme.placeholder, SUBMITTING_TEXT),
            ("", "\n\n"),
        ]

    if controller.phase.is_terminal:
        return [("", controller.result_message or "")]

    fragments: StyleAndTextTuples = []
    for index, field in enumerate(controller.fields):
        fragments.extend(_field_fragments(field, theme))
        if index < len(controller.fields) - 1:
            fragments.append(("", "\n"))

    fragments.append(("", "\n\n"))
    if controller.submit_focused:
        fragments.append((f"bold {theme.focused}", "[ Create ]"))
    else:
        fragments.append(("", "[ "))
        fragments.append((theme.blurred, "Create"))
        fragments.append(("", " ]"))
    fragments.append(("", "\n\n"))
    fragments.append((theme.blurred, HELP_TEXT))
    return fragments


def kv_table(rows: list[tuple[str, str]], theme: Theme) -> Table:
    table = Table(box=None, show_header=False, pad_edge=False)
    table.add_column("key", style=theme.focused)
    table.add_column("value", style=theme.placeholder)
    for key, value in rows:
        table.add_row(key, value)
    return table


def render_result(controller: FormController, theme: Theme) -> Panel | None:
    """rich renderable for a finished submission, ``None`` before that"""
    outcome = controller.outcome
    if not controller.phase.is_terminal or outcome is None:
        return None

    if outcome.summary is not None:
        headline = Text(f"🎉 💧 {SUCCESS_HEADLINE}", style=f"bold {theme.focused}")
        body = Group(headline, Text(""), kv_table(outcome.summary.rows(), theme))
        return Panel.fit(body, border_style=theme.focused)

    headline = Text(f"😞 {FAILURE_HEADLINE}", style=f"bold {theme.error}")
    body = Group(headline, Text(""), Text(outcome.error or outcome.message, style=theme.placeholder))
    return Panel.fit(body, border_style=theme.error)
