from __future__ import annotations

import unittest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from droplet_form.form import (  # noqa: E402
    CreationRequest,
    Effect,
    FormController,
    Phase,
    resolve_image,
)
from droplet_form.submission import SubmissionOutcome, SubmissionTask  # noqa: E402


def focused_count(controller: FormController) -> int:
    return sum(field.focused for field in controller.fields) + int(controller.submit_focused)


class FocusTests(unittest.TestCase):
    def test_initial_state(self):
        controller = FormController()
        self.assertEqual(controller.focus_index, 0)
        self.assertIs(controller.phase, Phase.EDITING)
        self.assertIsNone(controller.result_message)
        self.assertTrue(controller.fields[0].focused)
        self.assertEqual([f.value for f in controller.fields], ["", "", "", ""])

    def test_focus_stays_in_range_with_one_focused_element(self):
        controller = FormController()
        for key in ["tab", "down", "up", "shift+tab", "shift+tab", "tab", "down", "down", "up", "tab", "tab", "tab"]:
            controller.handle_key(key)
            self.assertGreaterEqual(controller.focus_index, 0)
            self.assertLessEqual(controller.focus_index, len(controller.fields))
            self.assertEqual(focused_count(controller), 1)

    def test_advance_cycles_back_to_start(self):
        controller = FormController()
        controller.handle_key("tab")
        start = controller.focus_index
        for _ in range(len(controller.fields) + 1):
            controller.handle_key("tab")
        self.assertEqual(controller.focus_index, start)

    def test_retreat_from_first_field_focuses_submit(self):
        controller = FormController()
        controller.handle_key("shift+tab")
        self.assertEqual(controller.focus_index, len(controller.fields))
        self.assertTrue(controller.submit_focused)
        self.assertFalse(any(field.focused for field in controller.fields))

    def test_enter_on_field_advances_focus(self):
        controller = FormController()
        self.assertIs(controller.handle_key("enter"), Effect.NONE)
        self.assertEqual(controller.focus_index, 1)
        self.assertIs(controller.phase, Phase.EDITING)


class InputTests(unittest.TestCase):
    def test_characters_go_to_focused_field_only(self):
        controller = FormController()
        controller.handle_key("tab")
        for ch in "sfo3":
            controller.handle_key(ch)
        self.assertEqual(controller.fields[0].value, "")
        self.assertEqual(controller.fields[1].value, "sfo3")

    def test_submit_control_ignores_characters(self):
        controller = FormController()
        controller.handle_key("up")
        controller.handle_key("x")
        self.assertEqual([f.value for f in controller.fields], ["", "", "", ""])

    def test_backspace(self):
        controller = FormController()
        for ch in "web":
            controller.handle_key(ch)
        controller.handle_key("backspace")
        self.assertEqual(controller.fields[0].value, "we")

    def test_name_limit_is_64(self):
        controller = FormController()
        for _ in range(70):
            controller.handle_key("a")
        self.assertEqual(len(controller.fields[0].value), 64)

    def test_paste_goes_to_focused_field(self):
        controller = FormController()
        controller.paste("db-01")
        self.assertEqual(controller.fields[0].value, "db-01")


class SubmitTests(unittest.TestCase):
    def _submit(self, controller: FormController) -> Effect:
        while not controller.submit_focused:
            controller.handle_key("tab")
        return controller.handle_key("enter")

    def test_empty_form_submits_placeholders(self):
        controller = FormController()
        self.assertIs(self._submit(controller), Effect.SUBMIT)
        self.assertIs(controller.phase, Phase.SUBMITTING)
        self.assertEqual(
            controller.request,
            CreationRequest(name="web-001", region="nyc3", size="s-1vcpu-1gb", image="ubuntu-20-04-x64"),
        )
        self.assertFalse(controller.request.image_is_id)

    def test_numeric_image_submitted_as_id(self):
        controller = FormController()
        controller.fields[3].value = "12345"
        self._submit(controller)
        self.assertEqual(controller.request.image, 12345)
        self.assertEqual(controller.request.to_body()["image"], 12345)

    def test_keys_ignored_while_submitting(self):
        controller = FormController()
        self._submit(controller)
        index = controller.focus_index
        for key in ["tab", "up", "a", "backspace", "enter"]:
            self.assertIs(controller.handle_key(key), Effect.NONE)
        self.assertEqual(controller.focus_index, index)
        self.assertIs(controller.phase, Phase.SUBMITTING)

    def test_cancel_honored_in_editing_and_submitting(self):
        controller = FormController()
        self.assertIs(controller.handle_key("esc"), Effect.QUIT)
        self.assertIs(controller.handle_key("ctrl+c"), Effect.QUIT)
        self._submit(controller)
        self.assertIs(controller.handle_key("esc"), Effect.QUIT)
        self.assertIs(controller.handle_key("ctrl+c"), Effect.QUIT)
        self.assertIsNone(controller.result_message)

    def test_submit_twice_is_an_error(self):
        controller = FormController()
        controller.submit()
        with self.assertRaises(RuntimeError):
            controller.submit()

    def test_finish_success_is_terminal(self):
        controller = FormController()
        controller.submit()
        self.assertTrue(controller.finish(SubmissionOutcome(True, "Success!")))
        self.assertIs(controller.phase, Phase.SUCCEEDED)
        self.assertEqual(controller.result_message, "Success!")
        self.assertFalse(controller.finish(SubmissionOutcome(False, "late")))
        self.assertEqual(controller.result_message, "Success!")
        self.assertIs(controller.handle_key("tab"), Effect.NONE)

    def test_finish_ignored_before_submit(self):
        controller = FormController()
        self.assertFalse(controller.finish(SubmissionOutcome(False, "boom")))
        self.assertIs(controller.phase, Phase.EDITING)

    def test_tick_only_while_submitting(self):
        controller = FormController()
        self.assertFalse(controller.tick())
        controller.submit()
        first = controller.spinner.frame
        self.assertTrue(controller.tick())
        self.assertNotEqual(controller.spinner.frame, first)

    def test_missing_token_fails_the_form(self):
        controller = FormController()
        request = controller.submit()
        calls = []
        task = SubmissionTask(client_factory=lambda token: calls.append(token))
        task.settings.token_env = "DROPLET_FORM_TEST_UNSET_TOKEN"
        controller.finish(task.run(request))
        self.assertIs(controller.phase, Phase.FAILED)
        self.assertIn("DROPLET_FORM_TEST_UNSET_TOKEN", controller.result_message)
        self.assertEqual(calls, [])


class ResolveImageTests(unittest.TestCase):
    def test_numeric(self):
        self.assertEqual(resolve_image("12345"), 12345)

    def test_slug(self):
        self.assertEqual(resolve_image("ubuntu-20-04-x64"), "ubuntu-20-04-x64")

    def test_not_quite_numeric(self):
        self.assertEqual(resolve_image("12 345"), "12 345")
        self.assertEqual(resolve_image("1_000"), "1_000")


if __name__ == "__main__":
    unittest.main()
