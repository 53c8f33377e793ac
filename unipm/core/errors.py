from typing import List, Optional


class UnipmError(Exception):
    """Base class for every error raised by unipm."""


class BinaryNotFound(UnipmError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Executable '{name}' not found on PATH.")
        self.name = name


class SubprocessFailure(UnipmError):
    """The package manager exited non-zero, timed out or could not be started (returncode is None)."""

    def __init__(self, command: List[str], returncode: Optional[int], stdout: str = "", stderr: str = "", reason: Optional[str] = None) -> None:
        if reason is None:
            reason = "timed out" if returncode is None else f"exited with code {returncode}"

        message = f"Command '{' '.join(command)}' {reason}"
        if stderr.strip():
            message += f": {stderr.strip()}"

        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
