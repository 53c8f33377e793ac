from unipm.managers.base import PackageManager


class CnpmManager(PackageManager):
    """cnpm writes no lock file of its own, so it's only picked explicitly."""

    @property
    def name(self) -> str:
        return "cnpm"

    @property
    def lock_files(self) -> list[str]:
        return []
