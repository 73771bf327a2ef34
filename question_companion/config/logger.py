"""
Logging Module for Question Companion
Provides rich console output and file logging
"""
import logging
import logging.handlers
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .settings import get_config

# Rich console for beautiful output
console = Console()


class CompanionLogger:
    """Custom logger with rich formatting"""

    def __init__(self, name: str = "question_companion"):
        self.config = get_config()
        self.name = name

        level = getattr(logging, self.config.logging.level.upper(), logging.INFO)
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)

        # Prevent duplicate handlers
        if not self.logger.handlers:
            self._setup_handlers(level)

    def reconfigure(self, config) -> None:
        """Re-apply level and handlers from *config*."""
        self.config = config
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        level = getattr(logging, config.logging.level.upper(), logging.INFO)
        self.logger.setLevel(level)
        self._setup_handlers(level)

    def _setup_handlers(self, level: int):
        """Setup console and (optional) file handlers"""
        console_handler = RichHandler(
            console=console,
            show_time=True,
            show_path=False,
            rich_tracebacks=True,
        )
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        if not self.config.logging.file:
            return

        log_file = Path(self.config.logging.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=self.config.logging.max_file_size * 1024 * 1024,
            backupCount=self.config.logging.backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        ))
        self.logger.addHandler(file_handler)

    def debug(self, msg: str, *args, **kwargs):
        self.logger.debug(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self.logger.info(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self.logger.warning(msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self.logger.error(msg, *args, **kwargs)

    def exception(self, msg: str, *args, **kwargs):
        self.logger.exception(msg, *args, **kwargs)


# Logger cache
_loggers = {}


def get_logger(name: str = "question_companion") -> CompanionLogger:
    """Get or create a logger instance"""
    if name not in _loggers:
        _loggers[name] = CompanionLogger(name)
    return _loggers[name]


def configure_logging(config=None) -> None:
    """Apply the logging section of *config* to every logger created so far.

    Loggers are built at import time from whatever config was current then;
    call this once --config and --set have produced the final config.
    """
    config = config or get_config()
    for instance in _loggers.values():
        instance.reconfigure(config)


# =============================================================================
# RICH OUTPUT HELPERS
# =============================================================================

def print_header(title: str, subtitle: str = None):
    """Print a styled header"""
    text = Text()
    text.append(f"🧭 {title}", style="bold cyan")
    if subtitle:
        text.append(f"\n{subtitle}", style="dim")

    console.print(Panel(text, border_style="cyan"))


def print_success(message: str):
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str):
    console.print(f"[red]✗[/red] {message}")


def print_warning(message: str):
    console.print(f"[yellow]⚠[/yellow] {message}")


def print_info(message: str):
    console.print(f"[blue]ℹ[/blue] {message}")


def print_progress(progress: int, steps: list, active_index: int):
    """Print the context score with a step indicator"""
    dots = " ".join(
        "[cyan]━━━[/cyan]" if i <= active_index else "[dim]──[/dim]"
        for i in range(len(steps))
    )
    console.print(f"[bold]Context score:[/bold] [cyan]{progress}%[/cyan]   {dots}")


def print_insights(insights: list):
    """Print a table of insights, colored by tone"""
    table = Table(title="Insight pulses", border_style="cyan", show_header=False)
    table.add_column("Title", style="bold", no_wrap=True)
    table.add_column("Description")

    for insight in insights:
        color = "green" if insight.tone == "positive" else "yellow"
        table.add_row(f"[{color}]{insight.title}[/{color}]", insight.description)

    console.print(table)


def print_prompts(prompts: List[str], all_set_message: str):
    """Print reflective prompts, or the all-set message when there are none"""
    if not prompts:
        console.print(Panel(all_set_message, border_style="green"))
        return

    body = "\n".join(f"• {p}" for p in prompts)
    console.print(Panel(body, title="Reflective prompts", border_style="magenta"))


def print_summary(summary: str, placeholder: Optional[str] = None):
    """Print the shareable summary"""
    console.print(Panel(
        Text(summary or placeholder or ""),
        title="Shareable summary",
        border_style="green",
    ))
