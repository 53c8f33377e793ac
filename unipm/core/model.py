from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional


class PackageManagerName(str, Enum):
    NPM = "npm"
    CNPM = "cnpm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"
    DENO = "deno"

    @classmethod
    def parse(cls, value: str) -> Optional["PackageManagerName"]:
        """Returns the matching member, or None for names we don't know."""
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class ProcessOptions:
    cwd: Optional[str] = None
    # Merged over os.environ
    env: Optional[Dict[str, str]] = None
    timeout: Optional[float] = None

    # When False the child writes straight to the terminal
    capture: bool = True


DEFAULT_OPTIONS = ProcessOptions()
