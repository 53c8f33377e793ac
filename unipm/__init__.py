"""
Run npm, cnpm, yarn, pnpm, bun and deno through one API.

    import unipm

    unipm.add("lodash")           # whatever the project uses
    unipm.pm("deno").run("build") # deno task build

The module-level functions are bound to the manager detected for the
current directory the first time one of them is called.
"""
from functools import lru_cache
from typing import Optional

from unipm.__version__ import __version__
from unipm.core.errors import BinaryNotFound, SubprocessFailure, UnipmError
from unipm.core.model import PackageManagerName, ProcessOptions
from unipm.core.specifiers import Args, is_jsr, to_jsr, un_jsr
from unipm.managers import detect_manager, get_manager
from unipm.managers.base import PackageManager


def pm(name: str) -> PackageManager:
    return get_manager(name)


@lru_cache(maxsize=None)
def default_manager() -> PackageManager:
    return detect_manager()


def name() -> str:
    return default_manager().name


def realname() -> str:
    return default_manager().realname


def install(options: Optional[ProcessOptions] = None) -> str:
    return default_manager().install(options)


def i(options: Optional[ProcessOptions] = None) -> str:
    return default_manager().i(options)


def create(app: Args, options: Optional[ProcessOptions] = None) -> str:
    return default_manager().create(app, options)


def add(packages: Args, options: Optional[ProcessOptions] = None) -> str:
    return default_manager().add(packages, options)


def remove(packages: Args, options: Optional[ProcessOptions] = None) -> str:
    return default_manager().remove(packages, options)


def rm(packages: Args, options: Optional[ProcessOptions] = None) -> str:
    return default_manager().rm(packages, options)


def uninstall(packages: Args, options: Optional[ProcessOptions] = None) -> str:
    return default_manager().uninstall(packages, options)


def run(script: Args, options: Optional[ProcessOptions] = None) -> str:
    return default_manager().run(script, options)


def exec(command: Args, options: Optional[ProcessOptions] = None) -> str:
    return default_manager().exec(command, options)


def dlx(binary: Args, options: Optional[ProcessOptions] = None) -> str:
    return default_manager().dlx(binary, options)


def x(executable: Args, options: Optional[ProcessOptions] = None) -> str:
    return default_manager().x(executable, options)


__all__ = [
    "__version__",
    "BinaryNotFound",
    "PackageManager",
    "PackageManagerName",
    "ProcessOptions",
    "SubprocessFailure",
    "UnipmError",
    "add",
    "create",
    "default_manager",
    "detect_manager",
    "dlx",
    "exec",
    "i",
    "install",
    "is_jsr",
    "name",
    "pm",
    "realname",
    "remove",
    "rm",
    "run",
    "to_jsr",
    "un_jsr",
    "uninstall",
    "x",
]
