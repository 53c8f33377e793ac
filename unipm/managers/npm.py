from unipm.managers.base import PackageManager


class NpmManager(PackageManager):
    add_verb = "install"
    remove_verb = "uninstall"

    @property
    def name(self) -> str:
        return "npm"

    @property
    def lock_files(self) -> list[str]:
        return ["package-lock.json", "npm-shrinkwrap.json"]
