"""Executor Runtime.

Runs ``httpcli`` with synthesized argument tokens. The tokens already
carry their own shell quoting, so the command line is assembled as a
single string and handed to the shell.
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Outcome of one executor invocation.

    ``error`` is set when the command could not run or exited non-zero;
    stdout and stderr are kept either way.
    """

    stdout: str = ""
    stderr: str = ""
    error: str | None = None
    return_code: int | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"stdout": self.stdout, "stderr": self.stderr}
        if self.error is not None:
            data["error"] = self.error
        return data


class Executor(Protocol):
    """Anything that can run an argument list and report the result."""

    async def execute(self, args: list[str]) -> ExecutionResult:
        ...


class HttpCliExecutor:
    """Invokes the ``httpcli`` binary.

    There is no timeout and no cancellation: each call waits for the
    process to exit.
    """

    def __init__(self, executable: str = "httpcli"):
        self.executable = executable

    def check_installed(self) -> bool:
        """Check if the executor binary can be found."""
        if shutil.which(self.executable):
            return True

        go_bin = Path.home() / "go" / "bin" / self.executable
        if go_bin.exists():
            self.executable = str(go_bin)
            return True

        return False

    def build_command(self, args: list[str]) -> str:
        return " ".join([self.executable, *args])

    async def execute(self, args: list[str]) -> ExecutionResult:
        """Run the executor and collect its output."""
        command = self.build_command(args)
        logger.info(f"Executing command: {command}")

        try:
            proc = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout_bytes, stderr_bytes = await proc.communicate()
        except OSError as e:
            logger.error(f"Command execution error: {e}")
            return ExecutionResult(error=str(e))

        stdout = stdout_bytes.decode("utf-8", errors="replace")
        stderr = stderr_bytes.decode("utf-8", errors="replace")

        if proc.returncode:
            message = f"Command failed: {command}"
            if stderr.strip():
                message = f"{message}\n{stderr.strip()}"
            logger.error(f"Command exited with code {proc.returncode}")
            return ExecutionResult(
                stdout=stdout,
                stderr=stderr,
                error=message,
                return_code=proc.returncode,
            )

        logger.info("Command executed successfully")
        return ExecutionResult(stdout=stdout, stderr=stderr, return_code=0)
