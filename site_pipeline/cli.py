"""
Command-line interface for the site pipeline.

Uses Typer to expose each pass as a standalone batch command. Every
option has a default, so `site-pipeline inject-faqs` with no flags
processes the configured directories under the current directory.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from .config import AppConfig, load_config
from .core.repository import FileSystemRepository
from .logging_utils import setup_logging
from .runner import run_indexes, run_inject_faqs, run_retemplate, run_sitemap

app = typer.Typer(add_completion=False, help="Static-site content pipeline for article pages.")
console = Console()

DEFAULT_CONFIG_FILE = Path("config.yaml")


def _load(
    config: Path | None,
    root: Path | None,
    log_level: str | None,
    log_file: bool | None,
) -> tuple[AppConfig, Path]:
    """Load configuration, apply CLI overrides and resolve the content root.

    Exits with code 1 when the content root does not exist.
    """
    if config is None and DEFAULT_CONFIG_FILE.is_file():
        config = DEFAULT_CONFIG_FILE
    cfg = load_config(str(config) if config else None)

    if root is not None:
        cfg.content.root_dir = str(root)
    if log_level:
        cfg.logging.level = log_level
    if log_file is not None:
        cfg.logging.file = log_file

    content_root = Path(cfg.content.root_dir)
    if not content_root.is_dir():
        console.print(f"[bold red]Content root not found:[/bold red] {content_root}")
        raise typer.Exit(code=1)
    return cfg, content_root


def _repository(cfg: AppConfig, content_root: Path) -> FileSystemRepository:
    return FileSystemRepository(
        content_root,
        suffix=cfg.content.page_suffix,
        exclude_files=cfg.content.exclude_files,
    )


RootOption = typer.Option(None, "--root", "-r", help="Content root directory (default: config or '.').")
ConfigOption = typer.Option(
    None, "--config", "-c", exists=True, help="YAML config file (default: ./config.yaml if present)."
)
LogLevelOption = typer.Option(None, "--log-level", help="Logging level.")
LogFileOption = typer.Option(None, "--log-file/--no-log-file", help="Enable or disable file logging.")


@app.command("inject-faqs")
def inject_faqs(
    root: Path | None = RootOption,
    config: Path | None = ConfigOption,
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = LogLevelOption,
    log_file: bool | None = LogFileOption,
):
    """Inject FAQ sections and FAQPage schema into every article.

    Extracts secondary headings and their first paragraph, turns up to five
    headings into questions and rewrites each page in place. Re-running on
    already processed pages replaces the earlier FAQ output.
    """
    cfg, content_root = _load(config, root, log_level, log_file)
    logger = setup_logging(cfg.logging, content_root)
    run_inject_faqs(_repository(cfg, content_root), cfg, logger, console, show_progress=progress)


@app.command()
def retemplate(
    root: Path | None = RootOption,
    config: Path | None = ConfigOption,
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = LogLevelOption,
    log_file: bool | None = LogFileOption,
):
    """Rebuild every article page inside the site shell.

    Keeps each page's title, description, JSON-LD blocks and article body.
    """
    cfg, content_root = _load(config, root, log_level, log_file)
    logger = setup_logging(cfg.logging, content_root)
    run_retemplate(_repository(cfg, content_root), cfg, logger, console, show_progress=progress)


@app.command()
def indexes(
    root: Path | None = RootOption,
    config: Path | None = ConfigOption,
    progress: bool = typer.Option(True, "--progress/--no-progress"),
    log_level: str | None = LogLevelOption,
    log_file: bool | None = LogFileOption,
):
    """Generate the articles hub page and an index page for each category."""
    cfg, content_root = _load(config, root, log_level, log_file)
    logger = setup_logging(cfg.logging, content_root)
    run_indexes(_repository(cfg, content_root), cfg, logger, console, show_progress=progress)


@app.command()
def sitemap(
    root: Path | None = RootOption,
    config: Path | None = ConfigOption,
    log_level: str | None = LogLevelOption,
    log_file: bool | None = LogFileOption,
):
    """Generate sitemap.xml and sitemap-index.xml for the content tree."""
    cfg, content_root = _load(config, root, log_level, log_file)
    logger = setup_logging(cfg.logging, content_root)
    run_sitemap(content_root, cfg, logger, console)


if __name__ == "__main__":
    app()
