import io
import logging
import os
import tempfile
import unittest

from control.shell import PROMPT, CommandShell
from control import shell
from memory import allocator, telemetrics
from memory.allocator import ContiguousAllocator
from memory.errors import InsufficientMemory


class CommandShellTests(unittest.TestCase):
    def setUp(self) -> None:
        self.out = io.StringIO()
        self.shell = CommandShell(ContiguousAllocator(80), out=self.out)
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def write_script(self, name: str, text: str) -> str:
        path = os.path.join(self.tmp.name, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def lines(self):
        return self.out.getvalue().splitlines()

    def test_dispatch_and_messages(self) -> None:
        for line in ["a a 20 f", "a b 90 f", "a c 5 x", "q", "f a", "s"]:
            self.shell.run_line(line)
        self.assertEqual(self.lines(), ["Not enough memory", "Unknown algorithm", "Invalid command", "." * 80])
        self.assertEqual(self.shell.stats["allocations"], 1)
        self.assertEqual(self.shell.stats["alloc_fail_memory"], 1)
        self.assertEqual(self.shell.stats["alloc_fail_algorithm"], 1)
        self.assertEqual(self.shell.stats["invalid"], 1)
        self.assertEqual(self.shell.stats["releases"], 1)

    def test_read_echoes_and_runs_each_line(self) -> None:
        path = self.write_script("Demo.txt", "A A 20 F\na b 30 b\nS\n")
        self.shell.run_line(f"r {path}")
        self.assertEqual(self.lines(), ["A A 20 F", "a b 30 b", "S", "A" * 20 + "B" * 30 + "." * 30])

    def test_missing_file(self) -> None:
        self.shell.run_line("R " + os.path.join(self.tmp.name, "nope.txt"))
        self.assertEqual(self.lines(), ["Could not open file"])
        self.assertFalse(self.shell.exited)

    def test_exit_inside_file_stops_everything(self) -> None:
        inner = self.write_script("inner.txt", "A A 10 F\nE\nA B 10 F\n")
        outer = self.write_script("outer.txt", f"R {inner}\nA C 10 F\n")
        self.shell.run_line(f"R {outer}")
        self.assertTrue(self.shell.exited)
        self.assertEqual(self.shell.alloc.render(), "A" * 10 + "." * 70)
        self.assertEqual(self.lines(), [f"R {inner}", "A A 10 F", "E"])

    def test_interactive_session(self) -> None:
        stream = io.StringIO("a a 20 f\n\nc\ns\ne\ns\n")
        self.shell.interactive(stream)
        text = self.out.getvalue()
        self.assertTrue(text.startswith(PROMPT + "A A 20 F\n"))
        self.assertIn("A" * 20 + "." * 60, text)
        self.assertTrue(self.shell.exited)
        self.assertEqual(text.count(PROMPT), 5)

    def test_interactive_end_of_input(self) -> None:
        self.shell.interactive(io.StringIO("a a 5 f\n"))
        self.assertFalse(self.shell.exited)
        self.assertEqual(self.shell.stats["commands"], 1)
        self.assertEqual(self.shell.alloc.used(), 5)

    def test_compact_counts_moved_units(self) -> None:
        for line in ["A A 10 F", "A B 10 F", "F A", "C"]:
            self.shell.run_line(line)
        self.assertEqual(self.shell.stats["compactions"], 1)
        self.assertEqual(self.shell.stats["units_moved"], 10)

    def test_undecodable_bytes_do_not_end_the_session(self) -> None:
        path = os.path.join(self.tmp.name, "bad.txt")
        with open(path, "wb") as f:
            f.write(b"A A 10 F\nA \xff 5 F\nS\n")
        self.shell.interactive(io.StringIO(f"R {path}\nF A\nS\nE\n"))
        self.assertTrue(self.shell.exited)
        self.assertEqual(self.shell.stats["read_fail"], 0)
        self.assertEqual(self.shell.stats["allocations"], 2)
        self.assertEqual(self.shell.alloc.used(), 5)
        self.assertEqual(self.shell.alloc.render(), "." * 10 + "\ufffd" * 5 + "." * 65)

    def test_script_reading_itself_is_refused(self) -> None:
        path = os.path.join(self.tmp.name, "loop.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"A A 10 F\nR {path}\nA B 10 F\n")
        self.shell.interactive(io.StringIO(f"R {path}\nS\nE\n"))
        self.assertTrue(self.shell.exited)
        self.assertEqual(self.shell.stats["read_fail"], 1)
        self.assertIn("Could not open file", self.lines())
        self.assertEqual(self.shell.alloc.render(), "A" * 10 + "B" * 10 + "." * 60)
        # the guard is released once the file is done
        self.assertTrue(self.shell.read_file(path))


class SetLoggerTests(unittest.TestCase):
    def tearDown(self) -> None:
        telemetrics.set_logger(logging.getLogger("memsim"))

    def test_redirects_core_and_shell_loggers(self) -> None:
        telemetrics.set_logger(logging.getLogger("custom"))
        self.assertEqual(allocator.LOGGER.name, "custom.Allocator")
        self.assertEqual(shell.LOGGER.name, "custom.Shell")
        with self.assertLogs("custom.Allocator", level="INFO"):
            with self.assertRaises(InsufficientMemory):
                ContiguousAllocator(10).allocate("A", 11, "F")


if __name__ == "__main__":
    unittest.main()
