import os
import sys
from pathlib import Path
from typing import NoReturn, Optional
from urllib.parse import urlparse

import click
from rich.console import Console

from .environment import UserscriptEnvironment
from .exceptions import HostCommandError, ReadabilityError
from .extractor import ReadabilityExtractor
from .host import HostCommands
from .logging_setup import LOG_LEVEL_ENV, configure_logging
from .pipeline import ReaderView, write_page
from .template import render_markdown, render_page, render_text
from .theme import load_theme

console = Console()

DEFAULT_OUTPUTS = {
    "html": "readability.html",
    "markdown": "readability.md",
    "txt": "readability.txt",
}


@click.group(invoke_without_command=True)
@click.option("-v", "--verbose", is_flag=True, help="Log debug output")
@click.option("--log-level", envvar=LOG_LEVEL_ENV, help="Log level (default WARNING)")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_level: Optional[str]):
    """qute-readability - open the readable part of a page in a new tab.

    Without a command it runs as a qutebrowser userscript.
    """
    configure_logging("DEBUG" if verbose else log_level)
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
def run():
    """Userscript mode: read QUTE_* variables and open the reader tab"""
    host = HostCommands(os.environ.get("QUTE_FIFO"))
    try:
        environment = UserscriptEnvironment.from_environ()
        path = ReaderView(environment, host=host).run()
    except ReadabilityError as e:
        _fail(e, host)

    console.print(f"[green]✓ Opened: {path}[/green]")


@cli.command()
@click.argument("source")
@click.option("-u", "--url", help="Original page URL when SOURCE is a saved HTML file")
@click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output file path")
@click.option(
    "--format", "output_format", type=click.Choice(["html", "markdown", "txt"]), default="html", help="Output format"
)
@click.option(
    "--config-dir", type=click.Path(file_okay=False), envvar="QUTE_CONFIG_DIR", help="qutebrowser config directory"
)
@click.option("--open/--no-open", "open_result", default=False, help="Open the result with the system handler")
@click.option("--timeout", default=10, show_default=True, help="Download timeout in seconds")
def render(
    source: str,
    url: Optional[str],
    output: Optional[str],
    output_format: str,
    config_dir: Optional[str],
    open_result: bool,
    timeout: int,
):
    """Extract SOURCE (a URL or an HTML file) outside the browser"""
    extractor = ReadabilityExtractor(timeout=timeout)
    try:
        with console.status("[bold green]Extracting article...", spinner="dots"):
            if _is_web_url(source):
                article = extractor.extract_from_url(source)
            else:
                article = extractor.extract_from_file(source, url or Path(source).resolve().as_uri())

        if output_format == "html":
            text = render_page(article, load_theme(config_dir))
        elif output_format == "markdown":
            text = render_markdown(article)
        else:
            text = render_text(article)
        path = write_page(text, output or DEFAULT_OUTPUTS[output_format])
    except ReadabilityError as e:
        _fail(e)

    console.print(f"\n[bold cyan]Title:[/bold cyan] {article.title}")
    console.print(f"[bold]Source:[/bold] {article.subtitle} ({article.url})")
    console.print(f"[green]✓ Saved to: {path}[/green]")

    if open_result:
        HostCommands().open_tab(path)


def _is_web_url(source: str) -> bool:
    return urlparse(source).scheme in {"http", "https"}


def _fail(error: ReadabilityError, host: Optional[HostCommands] = None) -> NoReturn:
    console.print(f"[red]Error: {error}[/red]")
    if host is not None and host.attached:
        try:
            host.message_error(f"readability: {error}")
        except HostCommandError as e:
            console.print(f"[red]Error: {e}[/red]")
    sys.exit(1)


def main():
    cli()


if __name__ == "__main__":
    main()
