import logging
from typing import Callable, Dict, List, Optional, Tuple

from rich.markup import escape
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal
from textual.widgets import Footer, Header, Input, Label, RichLog

from unipm.__version__ import __version__
from unipm.core.errors import BinaryNotFound, SubprocessFailure
from unipm.managers import detect_manager
from unipm.managers.base import PackageManager

# Log Configuration
logging.basicConfig(
    filename="debug.log",
    level=logging.DEBUG,
    filemode="w",
    format="%(asctime)s - %(levelname)s - %(message)s",
)

# operation -> (translation, execution)
OPERATIONS: Dict[str, Tuple[Callable, Callable]] = {
    "install": (lambda m, a: m.install_args(), lambda m, a: m.install()),
    "i": (lambda m, a: m.install_args(), lambda m, a: m.i()),
    "add": (lambda m, a: m.add_args(a), lambda m, a: m.add(a)),
    "remove": (lambda m, a: m.remove_args(a), lambda m, a: m.remove(a)),
    "rm": (lambda m, a: m.remove_args(a), lambda m, a: m.rm(a)),
    "uninstall": (lambda m, a: m.remove_args(a), lambda m, a: m.uninstall(a)),
    "run": (lambda m, a: m.run_args(a), lambda m, a: m.run(a)),
    "task": (lambda m, a: m.run_args(a), lambda m, a: m.task(a)),
    "exec": (lambda m, a: m.exec_args(a), lambda m, a: m.exec(a)),
    "dlx": (lambda m, a: m.dlx_args(a), lambda m, a: m.dlx(a)),
    "x": (lambda m, a: m.x_args(a), lambda m, a: m.x(a)),
    "create": (lambda m, a: m.create_args(a), lambda m, a: m.create(a)),
}


def parse_command(line: str) -> Tuple[str, List[str]]:
    """Splits "add lodash react" into ("add", ["lodash", "react"])."""
    parts = line.split()
    if not parts:
        raise ValueError("Empty command.")

    operation, args = parts[0], parts[1:]
    if operation not in OPERATIONS:
        raise ValueError(f"Unknown operation '{operation}'. Try one of: {', '.join(OPERATIONS)}")

    return operation, args


def describe_failure(error: Exception) -> str:
    if isinstance(error, SubprocessFailure) and error.returncode is not None:
        return f"[bold red]Exit {error.returncode}[/]\n{escape(error.stderr or error.stdout)}"
    if isinstance(error, (BinaryNotFound, SubprocessFailure)):
        return f"[bold red]{escape(str(error))}[/]"
    return f"[bold red]Fatal Error:[/]\n{escape(f'{type(error).__name__}: {error}')}"


class UnipmApp(App):
    TITLE = "unipm"
    SUB_TITLE = f"v{__version__}"

    DEFAULT_CSS = """
    Screen { layout: vertical; }

    #info-bar {
        height: 3;
        dock: top;
        background: $surface;
        border-bottom: solid $primary;
        align: left middle;
        padding: 0 1;
    }

    .info-label {
        width: auto;
        height: 1;
        padding: 0 2;
        color: $text;
    }

    #output { height: 1fr; margin: 0 1; background: $surface; }
    #command { dock: bottom; margin: 0 1; }
    """

    BINDINGS = [
        # The input line takes printable keys
        Binding("ctrl+q", "quit", "Quit"),
        Binding("ctrl+l", "clear_log", "Clear"),
    ]

    manager_name: str = "..."
    binary_path: str = "..."
    manager_version: str = "..."

    def __init__(self, initial_command: Optional[str] = None) -> None:
        super().__init__()
        self.initial_command = initial_command
        self.manager: Optional[PackageManager] = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)

        with Horizontal(id="info-bar"):
            yield Label(f"[b]Manager:[/b] [cyan]{self.manager_name}[/]", id="lbl-manager", classes="info-label")
            yield Label(f"[b]Binary:[/b] [blue]{self.binary_path}[/]", id="lbl-binary", classes="info-label")
            yield Label(f"[b]Version:[/b] [green]{self.manager_version}[/]", id="lbl-version", classes="info-label")

        yield RichLog(id="output", markup=True, wrap=True)
        yield Input(placeholder="add lodash · run build · dlx create-vite", id="command")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#command", Input).focus()
        self.inspect_manager()

    # --- ACTIONS ---

    def action_clear_log(self) -> None:
        self.query_one("#output", RichLog).clear()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        line = event.value.strip()
        event.input.value = ""
        if line:
            self.submit(line)

    # --- LOGIC ---

    def append_output(self, message: str) -> None:
        self.query_one("#output", RichLog).write(message)

    def update_dashboard_ui(self) -> None:
        self.query_one("#lbl-manager", Label).update(f"[b]Manager:[/b] [cyan]{escape(self.manager_name)}[/]")
        self.query_one("#lbl-binary", Label).update(f"[b]Binary:[/b] [blue]{escape(self.binary_path)}[/]")
        self.query_one("#lbl-version", Label).update(f"[b]Version:[/b] [green]{escape(self.manager_version)}[/]")

    def submit(self, line: str) -> None:
        if self.manager is None:
            self.notify("Still detecting the package manager.", severity="warning")
            return

        try:
            operation, args = parse_command(line)
            argv = OPERATIONS[operation][0](self.manager, args)
        except ValueError as e:
            self.append_output(f"[bold red]{escape(str(e))}[/]")
            return

        self.append_output(f"[b]$ {escape(' '.join([self.manager.name, *argv]))}[/]")
        self.run_operation(operation, args)

    @work(thread=True)
    def inspect_manager(self) -> None:
        manager = detect_manager()
        logging.info(f"Manager: {manager.name}")

        try:
            binary = manager.realname
            version = manager.version()
        except BinaryNotFound:
            binary, version = "not found", "-"
        except SubprocessFailure as e:
            logging.warning(f"{manager.name} --version failed: {e}")
            binary, version = manager.realname, "?"

        self.call_from_thread(self._manager_ready, manager, binary, version)

    def _manager_ready(self, manager: PackageManager, binary: str, version: str) -> None:
        self.manager = manager
        self.manager_name = manager.name
        self.binary_path = binary
        self.manager_version = version
        self.update_dashboard_ui()

        if self.initial_command:
            self.submit(self.initial_command)

    @work(thread=True)
    def run_operation(self, operation: str, args: List[str]) -> None:
        execute = OPERATIONS[operation][1]

        try:
            output = execute(self.manager, args)
        except Exception as e:
            logging.exception("Operation failed:")
            self.call_from_thread(self.append_output, describe_failure(e))
            return

        self.call_from_thread(self.append_output, escape(output.rstrip()) or "[dim](no output)[/]")
