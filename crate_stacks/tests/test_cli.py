import io
import logging
import os
import pathlib
import sys
import tempfile
import types
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from crate_stacks.cli import main

SAMPLE_PATH = str(pathlib.Path(__file__).parent / "data" / "sample.txt")


class TestCrateStacksCLI(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger("crate_stacks")
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)

    def _run(self, argv, stdin=None):
        stdout_buffer = io.StringIO()
        stderr_buffer = io.StringIO()
        with redirect_stdout(stdout_buffer), redirect_stderr(stderr_buffer):
            if stdin is None:
                exit_code = main(argv)
            else:
                with mock.patch("sys.stdin", io.StringIO(stdin)):
                    exit_code = main(argv)
        return exit_code, stdout_buffer.getvalue(), stderr_buffer.getvalue()

    def _write_puzzle(self, text):
        with tempfile.NamedTemporaryFile("w", delete=False, encoding="utf-8", suffix=".txt") as tmp:
            tmp.write(text)
        self.addCleanup(os.remove, tmp.name)
        return tmp.name

    def test_reports_both_modes_by_default(self):
        exit_code, out, _ = self._run([SAMPLE_PATH])
        self.assertEqual(exit_code, 0)
        self.assertEqual(out.strip().splitlines(), ["single: CMZ", "block: MCD"])

    def test_reads_from_stdin(self):
        with open(SAMPLE_PATH, encoding="utf-8") as f:
            sample = f.read()
        exit_code, out, _ = self._run(["--mode", "block"], stdin=sample)
        self.assertEqual(exit_code, 0)
        self.assertEqual(out.strip(), "block: MCD")

    def test_trace_and_final_diagram(self):
        exit_code, out, _ = self._run([SAMPLE_PATH, "-m", "single", "--trace", "--show-final"])
        self.assertEqual(exit_code, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], "  #0 move 1 from 2 to 1 [single] moved=D")
        self.assertIn("  #1 move 3 from 1 to 3 [single] moved=DNZ", lines)
        self.assertIn(" 1   2   3", lines)
        self.assertEqual(lines[-1], "single: CMZ")

    def test_empty_stack_is_reported(self):
        path = self._write_puzzle("[A]\n 1   2\n")
        exit_code, out, err = self._run([path, "--mode", "single"])
        self.assertEqual(exit_code, 1)
        self.assertEqual(out, "")
        self.assertIn("single: stack 2 is empty", err)

    def test_malformed_instruction(self):
        path = self._write_puzzle("[A]\n 1   2\n\nmove from 1 to 2\n")
        exit_code, _, err = self._run([path])
        self.assertEqual(exit_code, 1)
        self.assertIn("crate-stacks failed: line 4: malformed instruction", err)

    def test_debug_prints_traceback(self):
        path = self._write_puzzle("[A]\n 1   2\n\nmove 2 from 9 to 1\n")
        exit_code, _, err = self._run([path, "--debug"])
        self.assertEqual(exit_code, 1)
        self.assertIn("Traceback", err)
        self.assertIn("InvalidStackIndex", err)

    def test_missing_file(self):
        exit_code, _, err = self._run([os.path.join(tempfile.gettempdir(), "no-such-puzzle.txt")])
        self.assertEqual(exit_code, 1)
        self.assertIn("No such file", err)

    def test_undecodable_file_is_reported(self):
        with tempfile.NamedTemporaryFile("wb", delete=False, suffix=".txt") as tmp:
            tmp.write(b"[\xff]\n 1 \n")
        self.addCleanup(os.remove, tmp.name)
        exit_code, out, err = self._run([tmp.name])
        self.assertEqual(exit_code, 1)
        self.assertEqual(out, "")
        self.assertIn("crate-stacks failed:", err)
        self.assertNotIn("Traceback", err)

    def test_unwritable_log_file_is_reported(self):
        log_path = os.path.join(tempfile.gettempdir(), "no-such-dir-for-crate-stacks", "run.log")
        exit_code, out, err = self._run([SAMPLE_PATH, "--log-file", log_path])
        self.assertEqual(exit_code, 1)
        self.assertEqual(out, "")
        self.assertIn("crate-stacks failed:", err)

    def test_gui_failure_falls_back_to_curses(self):
        broken_gui = types.ModuleType("crate_stacks.visualizer")
        broken_gui.StackVisualizer = mock.Mock(side_effect=RuntimeError("No available video device"))
        with mock.patch.dict(sys.modules, {"crate_stacks.visualizer": broken_gui}):
            with mock.patch("crate_stacks.visualizer_headless.StackVisualizer") as mock_vis:
                exit_code, _, _ = self._run([SAMPLE_PATH, "--visualize", "gui"])
        self.assertEqual(exit_code, 0)
        broken_gui.StackVisualizer.assert_called_once()
        mock_vis.assert_called_once()
        mock_vis.return_value.run.assert_called_once()

    def test_visualize_curses_mode(self):
        with mock.patch("crate_stacks.visualizer_headless.StackVisualizer") as mock_vis:
            mock_vis.return_value.run.return_value = None
            exit_code, _, _ = self._run([SAMPLE_PATH, "--visualize", "curses", "--mode", "block"])
        self.assertEqual(exit_code, 0)
        mock_vis.assert_called_once()
        engine = mock_vis.call_args[0][0]
        self.assertEqual(engine.mode.value, "block")
        self.assertEqual(len(engine.instructions), 4)


if __name__ == "__main__":
    unittest.main()
