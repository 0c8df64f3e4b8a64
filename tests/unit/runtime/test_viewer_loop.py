"""Tests for the interactive loop wiring with a fake terminal."""

from __future__ import annotations

import base64
import contextlib
import io
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyslides.errors import AccessError, NoParentDirectory, OutOfRange
from lazyslides.file_tree_model import FilterSpec, walk
from lazyslides.input import DEFAULT_KEYMAP
from lazyslides.runtime import ViewerSession
from lazyslides.runtime.logs import LoggingConfig, configure_logging
from lazyslides.runtime.loop import build_status_line, describe_error, run_viewer_loop
from lazyslides.runtime.terminal import TerminalController, kitty_png_sequence

PNG = FilterSpec.from_extensions(["png"])


class _FakeTerminal:
    def __init__(self) -> None:
        self.status_rows: list[tuple[str, int, int]] = []
        self.clears = 0
        self.raw_entered = 0
        self.raw_exited = 0

    def supports_kitty_graphics(self) -> bool:
        return False

    def clear_screen(self) -> None:
        self.clears += 1

    def write_status(self, text: str, row: int, width: int) -> None:
        self.status_rows.append((text, row, width))

    @contextlib.contextmanager
    def raw_mode(self):
        self.raw_entered += 1
        try:
            yield
        finally:
            self.raw_exited += 1


def _keys(*keys: str):
    remaining = iter(keys)
    return lambda: next(remaining, "")


def _size() -> os.terminal_size:
    return os.terminal_size((80, 24))


class RunViewerLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve()
        for rel in ("a/1.png", "a/2.png", "b/1.png", "b/2.png", "b/3.png"):
            path = self.root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"x")
        self.session = ViewerSession.open(self.root / "a/1.png", PNG, root=self.root, renderer=lambda p: p.name)
        self.terminal = _FakeTerminal()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_loop(self, *keys: str) -> Path:
        return run_viewer_loop(
            self.session,
            self.terminal,
            read_key=_keys(*keys),
            keymap=DEFAULT_KEYMAP,
            skip_step=3,
            terminal_size=_size,
        )

    def test_keys_drive_navigation_until_quit(self) -> None:
        final = self.run_loop("RIGHT", "RIGHT", "DOWN", "q", "RIGHT")

        self.assertEqual(final, self.root / "b" / "1.png")
        self.assertEqual(self.terminal.raw_entered, 1)
        self.assertEqual(self.terminal.raw_exited, 1)
        self.assertEqual(len(self.terminal.status_rows), 4)

    def test_end_of_input_and_ctrl_c_exit(self) -> None:
        self.assertEqual(self.run_loop("PGDN"), self.root / "b" / "2.png")
        self.assertEqual(self.run_loop("LEFT", "CTRL_C", "LEFT"), self.root / "b" / "1.png")

    def test_unbound_keys_are_ignored(self) -> None:
        self.assertEqual(self.run_loop("z", "ENTER", "l"), self.root / "a" / "2.png")

    def test_failed_move_reports_status_and_keeps_position(self) -> None:
        final = self.run_loop("UP", "q")

        self.assertEqual(final, self.root / "a" / "1.png")
        last_text, row, width = self.terminal.status_rows[-1]
        self.assertTrue(last_text.endswith("| Cannot move further"))
        self.assertEqual((row, width), (24, 80))

    def test_status_clears_after_successful_move(self) -> None:
        self.run_loop("UP", "RIGHT")
        self.assertNotIn("Cannot move further", self.terminal.status_rows[-1][0])


class ConsoleLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        root_logger = logging.getLogger()
        self._saved_handlers = list(root_logger.handlers)
        self._saved_level = root_logger.level
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name).resolve() / "tree"
        for rel in ("a/1.png", "b/1.png"):
            path = self.root / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(b"x")
        self.log_file = Path(self._tmp.name).resolve() / "viewer.log"

    def tearDown(self) -> None:
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            if handler not in self._saved_handlers:
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.handlers[:] = self._saved_handlers
        root_logger.setLevel(self._saved_level)
        self._tmp.cleanup()

    def test_walker_warnings_stay_off_stderr_while_viewing(self) -> None:
        stderr = io.StringIO()
        with mock.patch("sys.stderr", stderr):
            configure_logging(LoggingConfig(level="WARNING", log_file=self.log_file), force=True)
        session = ViewerSession.open(self.root / "a/1.png", PNG, root=self.root, renderer=lambda p: p.name)
        real_list_subdirectories = walk.list_subdirectories

        def flaky(directory: Path) -> tuple[Path, ...]:
            if directory == self.root / "a":
                raise AccessError(directory, "Permission denied")
            return real_list_subdirectories(directory)

        with mock.patch.object(walk, "list_subdirectories", side_effect=flaky):
            final = run_viewer_loop(
                session,
                _FakeTerminal(),
                read_key=_keys("DOWN"),
                keymap=DEFAULT_KEYMAP,
                terminal_size=_size,
            )

        self.assertEqual(final, self.root / "b" / "1.png")
        self.assertEqual(stderr.getvalue(), "")
        for handler in logging.getLogger().handlers:
            handler.flush()
        self.assertIn("Skipping unreadable directory", self.log_file.read_text(encoding="utf-8"))

        logging.getLogger("lazyslides.file_tree_model.walk").warning("after the viewer")
        self.assertEqual(stderr.getvalue(), "WARNING | after the viewer\n")


class StatusTextTests(unittest.TestCase):
    def test_status_line_format(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "x.png").write_bytes(b"x")
            (root / "y.png").write_bytes(b"x")
            session = ViewerSession.open(root / "y.png", PNG, root=root)

            self.assertEqual(build_status_line(session), f"[2/2] {root / 'y.png'} (png)")
            self.assertEqual(build_status_line(session, "hi"), f"[2/2] {root / 'y.png'} (png) | hi")

    def test_error_descriptions(self) -> None:
        self.assertEqual(describe_error(OutOfRange("forward")), "Cannot move further")
        self.assertEqual(describe_error(NoParentDirectory(Path("/"))), "Cannot move further")
        self.assertEqual(
            describe_error(AccessError(Path("/x"), "Permission denied")),
            "Cannot read /x: Permission denied",
        )


class TerminalOutputTests(unittest.TestCase):
    def test_kitty_sequence_references_file_by_path(self) -> None:
        sequence = kitty_png_sequence(Path("/photos/a.png"), row=0, col=3, columns=80, rows=23)
        encoded = base64.b64encode(b"/photos/a.png")
        self.assertTrue(sequence.startswith(b"\x1b7\x1b[1;3H\x1b_Ga=T,t=f,f=100,q=2,c=80,r=23;"))
        self.assertIn(encoded, sequence)
        self.assertTrue(sequence.endswith(b"\x1b\\\x1b8"))

    def test_status_row_is_padded_and_clipped(self) -> None:
        read_fd, write_fd = os.pipe()
        self.addCleanup(os.close, read_fd)
        self.addCleanup(os.close, write_fd)
        with mock.patch("lazyslides.runtime.terminal.termios.tcgetattr", return_value=[]):
            terminal = TerminalController(read_fd, write_fd)

        terminal.write_status("abcdef", row=5, width=4)
        terminal.write_status("ab", row=0, width=4)
        self.assertEqual(os.read(read_fd, 1024), b"\x1b[5;1H\x1b[7mabcd\x1b[0m\x1b[1;1H\x1b[7mab  \x1b[0m")


if __name__ == "__main__":
    unittest.main()
