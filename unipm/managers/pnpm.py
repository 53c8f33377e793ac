from unipm.managers.base import PackageManager


class PnpmManager(PackageManager):
    run_prefix = ()
    exec_prefix = ("exec",)
    dlx_prefix = ("dlx",)
    jsr_bridge = "dlx"
    x_falls_back_to_dlx = True

    @property
    def name(self) -> str:
        return "pnpm"

    @property
    def lock_files(self) -> list[str]:
        return ["pnpm-lock.yaml", "pnpm-workspace.yaml"]
