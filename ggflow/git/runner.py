"""Git command runner.

Three ways to invoke git:
- run_git(): capture all output, return a GitResult.
- start_git(): stream stdout through a GitProcess (a context manager).
- run_git_interactive(): inherit the terminal, for commands that may open an editor.
"""

import logging
import os
import subprocess
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from ggflow.lib.errors import GitError, StatusQueryError, git_subcommand

logger = logging.getLogger(__name__)

GIT_EXE = "git"
READ_SIZE = 64 * 1024


@dataclass
class GitResult:
    """Result of a git command."""
    args: list[str]
    returncode: int
    stdout: str
    stderr: str

    @property
    def success(self) -> bool:
        return self.returncode == 0

    def check(self) -> "GitResult":
        """Raise GitError unless the command succeeded."""
        if not self.success:
            raise GitError(self.args, self.returncode, self.stderr)
        return self


def format_command(cmd: list[str]) -> str:
    """Render a command line for logs, quoting arguments that contain spaces."""
    return " ".join(f'"{a}"' if " " in a else a for a in cmd)


def _command(args: list[str], cwd: Path) -> list[str]:
    cmd = [GIT_EXE, "-C", str(cwd)] + args
    logger.debug(f"exec: {format_command(cmd)}")
    return cmd


def run_git(args: list[str], cwd: Path) -> GitResult:
    """
    Run a git command and capture its output.

    Args:
        args: Git command arguments (e.g., ["rev-parse", "--show-toplevel"])
        cwd: Working directory for the command

    Returns:
        GitResult with returncode, stdout and stderr
    """
    result = subprocess.run(
        _command(args, cwd),
        capture_output=True,
        text=True,
        errors="surrogateescape",
    )
    return GitResult(
        args=args,
        returncode=result.returncode,
        stdout=result.stdout,
        stderr=result.stderr,
    )


def check_output(args: list[str], cwd: Path) -> str:
    """Run a git command, raising GitError on failure. Returns stdout."""
    return run_git(args, cwd).check().stdout


def one_line(args: list[str], cwd: Path) -> str:
    """Run a git command that prints a single line and return that line."""
    out = check_output(args, cwd)
    line, _, rest = out.partition("\n")
    if rest:
        raise GitError(args, 0, message=f"git {git_subcommand(args)}: expected one line, got {out!r}")
    return line


def run_git_interactive(args: list[str], cwd: Path) -> None:
    """Run git attached to the terminal. Raises GitError on non-zero exit."""
    cmd = _command(args, cwd)
    result = subprocess.run(cmd)
    if result.returncode != 0:
        raise GitError(args, result.returncode)


class GitProcess:
    """A running git command whose stdout is read incrementally.

    Must be closed on every path out of the caller; use it as a context
    manager. close() is idempotent: it kills git if it is still running,
    reaps it and releases both pipes exactly once. wait() drains the rest
    of stdout and raises GitError if git exited non-zero.
    """

    def __init__(self, args: list[str], cwd: Path):
        self.args = args
        self.returncode: int | None = None
        self.stderr = ""
        self._closed = False
        self._stderr_file = tempfile.TemporaryFile()
        try:
            self._proc = subprocess.Popen(
                _command(args, cwd),
                stdout=subprocess.PIPE,
                stderr=self._stderr_file,
            )
        except OSError:
            self._stderr_file.close()
            raise

    def __enter__(self) -> "GitProcess":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._closed

    def chunks(self) -> Iterator[bytes]:
        """Yield raw stdout chunks until EOF."""
        while not self._closed:
            chunk = self._proc.stdout.read1(READ_SIZE)
            if not chunk:
                return
            yield chunk

    def fields(self, sep: bytes = b"\0") -> Iterator[bytes]:
        """Yield each sep-terminated field of stdout, without the terminator.

        Trailing bytes with no terminator mean git's output was cut short.
        """
        buf = b""
        for chunk in self.chunks():
            buf += chunk
            parts = buf.split(sep)
            buf = parts.pop()
            yield from parts
        if buf:
            self.wait()
            raise StatusQueryError(
                f"git {git_subcommand(self.args)}: unexpected EOF in output",
                args=self.args,
            )

    def lines(self) -> Iterator[str]:
        """Yield decoded stdout lines."""
        for field in self.fields(b"\n"):
            yield os.fsdecode(field)

    def wait(self) -> None:
        """Drain stdout, reap git, and raise GitError on non-zero exit."""
        if not self._closed:
            self._proc.stdout.read()
            self._proc.wait()
            self._release()
        if self.returncode != 0:
            raise GitError(self.args, self.returncode, self.stderr)

    def close(self) -> None:
        """Release the process without checking its exit status."""
        if self._closed:
            return
        if self._proc.poll() is None:
            self._proc.kill()
        self._proc.wait()
        self._release()

    def _release(self) -> None:
        self._closed = True
        self.returncode = self._proc.returncode
        self._proc.stdout.close()
        self._stderr_file.seek(0)
        self.stderr = self._stderr_file.read().decode(errors="replace")
        self._stderr_file.close()


def start_git(args: list[str], cwd: Path) -> GitProcess:
    """Start a git command and return a streaming handle on its stdout."""
    return GitProcess(args, cwd)
