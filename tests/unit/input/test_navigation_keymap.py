from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from lazyslides.errors import OutOfRange
from lazyslides.input import (
    DEFAULT_KEYMAP,
    NavigationCommand,
    build_keymap,
    dispatch_command,
)
from lazyslides.runtime import ShownImage, ViewerSession


class BuildKeymapTests(unittest.TestCase):
    def test_default_bindings(self) -> None:
        self.assertIs(DEFAULT_KEYMAP["RIGHT"], NavigationCommand.NEXT_IMAGE)
        self.assertIs(DEFAULT_KEYMAP["LEFT"], NavigationCommand.PREV_IMAGE)
        self.assertIs(DEFAULT_KEYMAP["DOWN"], NavigationCommand.NEXT_DIRECTORY)
        self.assertIs(DEFAULT_KEYMAP["UP"], NavigationCommand.PREV_DIRECTORY)
        self.assertIs(DEFAULT_KEYMAP["PGDN"], NavigationCommand.SKIP_FORWARD)
        self.assertIs(DEFAULT_KEYMAP["q"], NavigationCommand.QUIT)

    def test_action_names_are_case_insensitive(self) -> None:
        keymap = build_keymap({"n": "next_image", "p": " Prev_Directory "})
        self.assertEqual(
            keymap,
            {"n": NavigationCommand.NEXT_IMAGE, "p": NavigationCommand.PREV_DIRECTORY},
        )

    def test_invalid_entries_are_dropped(self) -> None:
        keymap = build_keymap({"x": "EXPLODE", "": "QUIT", 3: "QUIT", "y": 5, "z": "RELOAD"})
        self.assertEqual(keymap, {"z": NavigationCommand.RELOAD})

    def test_from_name_rejects_unknown(self) -> None:
        self.assertIsNone(NavigationCommand.from_name("nope"))
        self.assertIs(NavigationCommand.from_name("quit"), NavigationCommand.QUIT)


class DispatchCommandTests(unittest.TestCase):
    def setUp(self) -> None:
        self.session = mock.Mock(spec=ViewerSession)
        self.landing = Path("/photos/a.png")
        self.session.show.return_value = ShownImage(path=self.landing, payload="", position=(1, 1))
        for name in ("step_next_directory", "step_prev_directory", "move_first", "move_last", "reload"):
            getattr(self.session, name).return_value = self.landing

    def test_image_commands_render_through_show(self) -> None:
        cases = [
            (NavigationCommand.NEXT_IMAGE, 1),
            (NavigationCommand.PREV_IMAGE, -1),
            (NavigationCommand.SKIP_FORWARD, 7),
            (NavigationCommand.SKIP_BACKWARD, -7),
        ]
        for command, offset in cases:
            with self.subTest(command=command):
                self.session.show.reset_mock()
                self.assertEqual(dispatch_command(self.session, command, skip_step=7), self.landing)
                self.session.show.assert_called_once_with(offset)

    def test_directory_and_edge_commands_call_session(self) -> None:
        cases = {
            NavigationCommand.NEXT_DIRECTORY: "step_next_directory",
            NavigationCommand.PREV_DIRECTORY: "step_prev_directory",
            NavigationCommand.FIRST_IMAGE: "move_first",
            NavigationCommand.LAST_IMAGE: "move_last",
            NavigationCommand.RELOAD: "reload",
        }
        for command, method in cases.items():
            with self.subTest(command=command):
                self.assertEqual(dispatch_command(self.session, command), self.landing)
                getattr(self.session, method).assert_called_once_with()
        self.session.show.assert_not_called()

    def test_quit_returns_none_without_touching_session(self) -> None:
        self.assertIsNone(dispatch_command(self.session, NavigationCommand.QUIT))
        self.assertEqual(self.session.method_calls, [])

    def test_navigation_errors_propagate(self) -> None:
        self.session.step_next_directory.side_effect = OutOfRange("forward")
        with self.assertRaises(OutOfRange):
            dispatch_command(self.session, NavigationCommand.NEXT_DIRECTORY)


if __name__ == "__main__":
    unittest.main()
