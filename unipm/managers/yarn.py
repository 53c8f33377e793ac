from unipm.managers.base import PackageManager


class YarnManager(PackageManager):
    run_prefix = ()
    exec_prefix = ("exec",)
    dlx_prefix = ("dlx",)
    jsr_bridge = "dlx"
    x_falls_back_to_dlx = True

    @property
    def name(self) -> str:
        return "yarn"

    @property
    def lock_files(self) -> list[str]:
        return ["yarn.lock"]
