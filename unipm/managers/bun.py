from unipm.managers.base import PackageManager


class BunManager(PackageManager):
    @property
    def name(self) -> str:
        return "bun"

    @property
    def lock_files(self) -> list[str]:
        return ["bun.lockb", "bun.lock"]
