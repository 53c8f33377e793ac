from typing import List

from unipm.core.specifiers import Args, is_jsr, split_args, to_jsr, to_npm
from unipm.managers.base import JSR_ADD, JSR_DLX, JSR_REMOVE, JSR_RUN, PackageManager

ALLOW_ALL = ("run", "-A")


class DenoManager(PackageManager):
    run_prefix = ("task",)
    exec_prefix = ALLOW_ALL
    dlx_prefix = (*ALLOW_ALL, "-r")
    x_falls_back_to_dlx = True

    @property
    def name(self) -> str:
        return "deno"

    @property
    def lock_files(self) -> list[str]:
        return ["deno.lock", "deno.json", "deno.jsonc"]

    def run_command(self) -> str:
        return "deno run -A"

    def add_args(self, packages: Args) -> List[str]:
        packages = split_args(packages)
        if packages and is_jsr(packages[0]):
            return self.jsr_args("add", packages)

        # Bare names resolve against jsr in deno, so pin them to npm
        return ["add", *[to_npm(pkg) for pkg in packages]]

    def create_args(self, app: Args) -> List[str]:
        args = split_args(app)
        if not args:
            raise ValueError("create needs a template name.")

        # "app my-org/my-template" -> npm:my-org/create-my-template
        if len(args) == 1:
            template, rest = args[0], []
        else:
            template, rest = args[1], args[2:]

        parts = template.split("/")[:2]
        if len(parts) == 2 and parts[1]:
            specifier = f"npm:{parts[0]}/create-{parts[1]}"
        else:
            specifier = f"npm:create-{parts[0]}"

        return [*ALLOW_ALL, specifier, *rest]

    def jsr_args(self, command: str, args: Args) -> List[str]:
        args = [to_jsr(arg) for arg in split_args(args)]

        if command in JSR_ADD:
            return ["add", *args]
        if command in JSR_REMOVE:
            return ["uninstall", *args]
        if command in JSR_RUN:
            return [*ALLOW_ALL, *args]
        if command in JSR_DLX:
            return [*self.dlx_prefix, *args]

        return [command, *args]
