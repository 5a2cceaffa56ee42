"""reqcheck console - themed console singleton with semantic message methods."""

from typing import Optional

from rich.console import Console as RichConsole
from rich.panel import Panel

from .theme import REQCHECK_THEME, SYMBOLS


class ReqcheckConsole:
    """Themed console; errors go to stderr."""

    _instance: Optional['ReqcheckConsole'] = None

    def __new__(cls) -> 'ReqcheckConsole':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._console = RichConsole(theme=REQCHECK_THEME)
            cls._instance._err_console = RichConsole(theme=REQCHECK_THEME, stderr=True)
        return cls._instance

    def print(self, *args, **kwargs) -> None:
        self._console.print(*args, **kwargs)

    def success(self, message: str) -> None:
        self._console.print(f"[success_symbol]{SYMBOLS['success']}[/] [success]{message}[/]")

    def error(self, message: str, details: Optional[str] = None) -> None:
        self._err_console.print(f"[error_symbol]{SYMBOLS['error']}[/] [error]{message}[/]")
        if details:
            self._err_console.print(f"  [secondary]{details}[/]")

    def warning(self, message: str) -> None:
        self._console.print(f"[warning_symbol]{SYMBOLS['warning']}[/]  [warning]{message}[/]")

    def error_panel(self, content: str, title: str = "") -> None:
        panel = Panel(content, title=f"─ {title} " if title else None, border_style="error",
                      title_align="left", padding=(1, 2))
        self._err_console.print(panel)


console = ReqcheckConsole()
