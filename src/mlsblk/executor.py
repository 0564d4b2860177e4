"""
Command execution abstraction.

Inspectors never call subprocess directly. They use the provided executor
so that tests can serve captured diskutil output instead of running it.
"""

from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass
class RunResult:
    """Result of running a command (or reading a fixture)."""

    stdout: str
    stderr: str
    returncode: int


class Executor(Protocol):
    """Protocol for command execution. Implementations may run commands or read fixtures."""

    def __call__(self, cmd: List[str]) -> RunResult:
        ...


def subprocess_executor(cmd: List[str], *, timeout: Optional[float] = None) -> RunResult:
    """Default implementation: run the command and read its output to the end.

    Launch failures are reported as a RunResult, never raised: 127 when the
    command does not exist, 126 when it exists but cannot be executed, -1 on
    timeout.
    """
    import subprocess
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
        return RunResult(
            stdout=result.stdout or "",
            stderr=result.stderr or "",
            returncode=result.returncode,
        )
    except subprocess.TimeoutExpired as e:
        return RunResult(
            stdout=e.stdout.decode() if isinstance(e.stdout, bytes) else (e.stdout or ""),
            stderr=f"Command timed out after {e.timeout}s",
            returncode=-1,
        )
    except FileNotFoundError:
        return RunResult(stdout="", stderr="Command not found", returncode=127)
    except OSError as e:
        return RunResult(stdout="", stderr=e.strerror or str(e), returncode=126)


def make_executor(timeout: Optional[float] = None) -> Executor:
    """Create the default executor. No timeout unless one is given."""
    def run(cmd: List[str]) -> RunResult:
        return subprocess_executor(cmd, timeout=timeout)
    return run
