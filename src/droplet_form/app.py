"""Full-screen prompt_toolkit application driving the Droplet form"""

from __future__ import annotations

import asyncio
import threading

from prompt_toolkit import Application
from prompt_toolkit.input import Input
from prompt_toolkit.key_binding import KeyBindings, KeyPressEvent
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.output import Output

from droplet_form.console import log_debug, log_status
from droplet_form.form import CreationRequest, Effect, FormController, Phase
from droplet_form.submission import SubmissionOutcome, SubmissionTask
from droplet_form.theme import DEFAULT_THEME, Theme
from droplet_form.views import render_form

# prompt_toolkit key name -> controller key name
KEY_NAMES = {
    "c-c": "ctrl+c",
    "escape": "esc",
    "tab": "tab",
    "s-tab": "shift+tab",
    "up": "up",
    "down": "down",
    "enter": "enter",
    "backspace": "backspace",
}


class FormApp:
    """Routes keystrokes to the controller and runs the submission off the event loop"""

    def __init__(
        self,
        controller: FormController | None = None,
        task: SubmissionTask | None = None,
        theme: Theme = DEFAULT_THEME,
        input: Input | None = None,
        output: Output | None = None,
    ) -> None:
        self.controller: FormController = controller or FormController()
        self.task: SubmissionTask = task or SubmissionTask()
        self.theme: Theme = theme
        self.application: Application = Application(
            layout=Layout(
                Window(
                    FormattedTextControl(lambda: render_form(self.controller, self.theme), show_cursor=False),
                    wrap_lines=True,
                )
            ),
            key_bindings=self._key_bindings(),
            full_screen=True,
            input=input,
            output=output,
        )

    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        for pt_key, name in KEY_NAMES.items():
            kb.add(pt_key, eager=pt_key == "escape")(self._make_handler(name))

        @kb.add(Keys.Any)
        def _(event: KeyPressEvent) -> None:
            self._dispatch(event, event.data)

        @kb.add(Keys.BracketedPaste)
        def _(event: KeyPressEvent) -> None:
            self.controller.paste(event.data)

        return kb

    def _make_handler(self, name: str):
        def handler(event: KeyPressEvent) -> None:
            self._dispatch(event, name)

        return handler

    def _dispatch(self, event: KeyPressEvent, key: str) -> None:
        effect = self.controller.handle_key(key)
        if effect is Effect.QUIT:
            if self.controller.phase.is_terminal:
                # The outcome has already been handed to exit().
                return
            log_debug(f"Cancelled while {self.controller.phase.value}")
            event.app.exit(result=None)
        elif effect is Effect.SUBMIT and self.controller.request is not None:
            event.app.create_background_task(self._submit(self.controller.request))
            event.app.create_background_task(self._animate())

    async def _submit(self, request: CreationRequest) -> None:
        loop = asyncio.get_running_loop()
        done: asyncio.Future[SubmissionOutcome] = loop.create_future()

        def deliver(outcome: SubmissionOutcome) -> None:
            if not done.done():
                done.set_result(outcome)

        def worker() -> None:
            outcome = self.task.run(request)
            try:
                loop.call_soon_threadsafe(deliver, outcome)
            except RuntimeError:
                # Event loop already closed: the user cancelled mid-submission.
                log_debug("Submission finished after the form was closed")

        log_status(f"Submitting {request.to_body()}")
        threading.Thread(target=worker, name="droplet-submit", daemon=True).start()

        outcome = await done
        self.controller.finish(outcome)
        self.application.exit(result=outcome)

    async def _animate(self) -> None:
        while self.controller.phase is Phase.SUBMITTING:
            self.application.invalidate()
            await asyncio.sleep(self.controller.spinner.interval)
            self.controller.tick()

    def run(self) -> SubmissionOutcome | None:
        """Run the session; ``None`` means the user cancelled"""
        return self.application.run()
