import logging
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Tuple

from unipm.core.errors import BinaryNotFound, SubprocessFailure
from unipm.core.model import PackageManagerName, ProcessOptions
from unipm.core.process import execute, locate
from unipm.core.specifiers import Args, is_jsr, split_args, un_jsr, un_npm

JSR_ADD = ("add", "install", "i")
JSR_REMOVE = ("remove", "uninstall", "r")
JSR_RUN = ("run", "exec")
JSR_DLX = ("dlx", "x")


class PackageManager(ABC):
    """
    Base class inherited by all JavaScript package managers.

    Subclasses only fill in the translation table below; the `*_args` methods
    are pure and the matching methods without the suffix run the result
    against the manager binary.
    """

    run_prefix: Tuple[str, ...] = ("run",)
    exec_prefix: Tuple[str, ...] = ("x",)
    dlx_prefix: Tuple[str, ...] = ("x",)
    add_verb: str = "add"
    remove_verb: str = "remove"
    jsr_bridge: str = "x"

    # x() tries exec first and retries with dlx when it fails
    x_falls_back_to_dlx: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Executable name (e.g., npm, pnpm, deno)."""
        pass

    @property
    @abstractmethod
    def lock_files(self) -> List[str]:
        """Files whose presence marks a project managed by this tool."""
        pass

    def detect(self, files: List[str]) -> bool:
        for lock_file in self.lock_files:
            if lock_file in files:
                return True
        return False

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    @property
    def identity(self) -> Optional[PackageManagerName]:
        return PackageManagerName.parse(self.name)

    def is_(self, name: str) -> bool:
        return self.name == name

    def in_(self, names: Iterable[str]) -> bool:
        return self.name in names

    @property
    def realname(self) -> str:
        return locate(self.name)

    def run_command(self) -> str:
        return " ".join([self.name, *self.run_prefix])

    # --- TRANSLATION ---

    def install_args(self) -> List[str]:
        return ["install"]

    def add_args(self, packages: Args) -> List[str]:
        packages = split_args(packages)
        if packages and is_jsr(packages[0]):
            return self.jsr_args("add", packages)

        return [self.add_verb, *[un_npm(pkg) for pkg in packages]]

    def remove_args(self, packages: Args) -> List[str]:
        packages = split_args(packages)
        if packages and is_jsr(packages[0]):
            return self.jsr_args("remove", packages)

        return [self.remove_verb, *packages]

    def run_args(self, script: Args) -> List[str]:
        args = split_args(script)
        if args and is_jsr(args[0]):
            return self.jsr_args("run", args)

        return [*self.run_prefix, *args]

    def exec_args(self, command: Args) -> List[str]:
        args = split_args(command)
        if args and is_jsr(args[0]):
            return self.jsr_args("exec", args)

        return [*self.exec_prefix, *args]

    def dlx_args(self, binary: Args) -> List[str]:
        args = split_args(binary)
        if args and is_jsr(args[0]):
            return self.jsr_args("dlx", args)

        return [*self.dlx_prefix, *args]

    def x_args(self, executable: Args) -> List[str]:
        """First attempt of x(); see x_falls_back_to_dlx."""
        args = split_args(executable)
        if args and is_jsr(args[0]):
            return self.jsr_args("dlx", args)

        if self.x_falls_back_to_dlx:
            return self.exec_args(args)
        return ["x", *args]

    def create_args(self, app: Args) -> List[str]:
        args = split_args(app)
        if not args:
            raise ValueError("create needs a template name.")

        return ["create", *args]

    def jsr_args(self, command: str, args: Args) -> List[str]:
        """Routes jsr: specifiers through the `jsr` CLI bridge."""
        args = [un_jsr(arg) for arg in split_args(args)]
        sub = "run" if command in JSR_RUN + JSR_DLX else command

        return [self.jsr_bridge, "jsr", sub, *args]

    # --- EXECUTION ---

    def command(self, args: Args, options: Optional[ProcessOptions] = None) -> str:
        """Runs raw arguments against the manager binary."""
        argv = split_args(args)
        logging.debug(f"{self.name}: {argv}")
        return execute(self.realname, argv, options)

    def version(self) -> str:
        return self.command(["--version"]).strip()

    def help(self) -> str:
        return self.command(["--help"])

    def is_installed(self) -> bool:
        try:
            self.version()
            return True
        except (BinaryNotFound, SubprocessFailure):
            return False

    def install(self, options: Optional[ProcessOptions] = None) -> str:
        return self.command(self.install_args(), options)

    def i(self, options: Optional[ProcessOptions] = None) -> str:
        return self.install(options)

    def create(self, app: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.command(self.create_args(app), options)

    def add(self, packages: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.command(self.add_args(packages), options)

    def remove(self, packages: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.command(self.remove_args(packages), options)

    def rm(self, packages: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.remove(packages, options)

    def uninstall(self, packages: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.remove(packages, options)

    def run(self, script: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.command(self.run_args(script), options)

    def task(self, script: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.run(script, options)

    def exec(self, command: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.command(self.exec_args(command), options)

    def dlx(self, binary: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.command(self.dlx_args(binary), options)

    def x(self, executable: Args, options: Optional[ProcessOptions] = None) -> str:
        """
        Runs a binary whether or not it's installed locally.

        Managers that split local exec from remote dlx try exec first and only
        retry with dlx when exec ran and failed; a missing manager binary is
        raised as is.
        """
        args = split_args(executable)
        if not self.x_falls_back_to_dlx or (args and is_jsr(args[0])):
            return self.command(self.x_args(args), options)

        try:
            return self.exec(args, options)
        except SubprocessFailure as e:
            logging.warning(f"{self.name} exec failed ({e.returncode}), retrying with dlx")
            return self.dlx(args, options)

    def jsr(self, command: str, args: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.command(self.jsr_args(command, args), options)

    def jsr_add(self, packages: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.jsr("add", packages, options)

    def jsr_remove(self, packages: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.jsr("remove", packages, options)

    def jsr_run(self, script: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.jsr("run", script, options)

    def jsr_exec(self, command: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.jsr("exec", command, options)

    def jsr_dlx(self, binary: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.jsr("dlx", binary, options)

    def jsr_x(self, executable: Args, options: Optional[ProcessOptions] = None) -> str:
        return self.jsr("x", executable, options)
