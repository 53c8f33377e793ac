from unipm.managers.base import PackageManager


class GenericManager(PackageManager):
    """Any name we don't know: keeps the default table and never detects."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def lock_files(self) -> list[str]:
        return []

    def run_command(self) -> str:
        # Only the known run-prefixed tools get " run"
        return self.name
