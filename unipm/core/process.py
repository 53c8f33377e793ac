import logging
import os
import shutil
import subprocess
from typing import List, Optional

from unipm.core.errors import BinaryNotFound, SubprocessFailure
from unipm.core.model import DEFAULT_OPTIONS, ProcessOptions


def locate(name: str) -> str:
    """Resolves an executable name to its absolute path on PATH."""
    path = shutil.which(name)
    if not path:
        raise BinaryNotFound(name)

    logging.debug(f"Located {name} at {path}")
    return path


def execute(executable: str, args: List[str], options: Optional[ProcessOptions] = None) -> str:
    """
    Runs the executable with args (no shell) and returns its stdout.
    Raises SubprocessFailure on a non-zero exit or a timeout.
    """
    options = options or DEFAULT_OPTIONS
    command = [executable, *args]

    env = None
    if options.env:
        env = {**os.environ, **options.env}

    logging.debug(f"Executing: {' '.join(command)}")

    try:
        completed = subprocess.run(
            command,
            cwd=options.cwd,
            env=env,
            timeout=options.timeout,
            capture_output=options.capture,
            text=True,
            check=False,
        )
    except FileNotFoundError as e:
        # Also raised for a missing cwd
        if not os.path.exists(executable):
            raise BinaryNotFound(executable) from e
        logging.error(f"Cannot spawn {' '.join(command)}: {e}")
        raise SubprocessFailure(command, None, "", str(e), reason="could not be started") from e
    except subprocess.TimeoutExpired as e:
        logging.error(f"Timeout after {options.timeout}s: {' '.join(command)}")
        raise SubprocessFailure(command, None, _as_text(e.stdout), _as_text(e.stderr)) from e
    except OSError as e:
        logging.error(f"Cannot spawn {' '.join(command)}: {e}")
        raise SubprocessFailure(command, None, "", str(e), reason="could not be started") from e

    stdout = completed.stdout or ""
    stderr = completed.stderr or ""

    if completed.returncode != 0:
        logging.error(f"Command failed ({completed.returncode}): {' '.join(command)}")
        raise SubprocessFailure(command, completed.returncode, stdout, stderr)

    return stdout


def _as_text(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(errors="replace")
    return value
