# pyright: reportUnusedFunction=false
"""The command-line interface for WOODC."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from woodc.component import Component
from woodc.config import ProjectConfig, load_config
from woodc.dom import serialize
from woodc.exceptions import WoodError
from woodc.project import Project
from woodc.utils import create_cli_logger

from ._shared import ExitCode, exit_with_error

_HELP = "Build-time compiler for component based site sources."


def _open_project(project_root: Path | None, command: str) -> Project:
    root = project_root if project_root is not None else Path.cwd()
    config: ProjectConfig = load_config(root)
    logger = create_cli_logger(
        level=config.logging.level.value,
        log_format=config.logging.format.value,  # type: ignore[arg-type]
        log_file=config.logging.file,
        command=command,
    )
    logger.info("project opened", root=str(root), name=config.name)
    return Project(root, config)


def _manifest_table(component: Component) -> Table:
    table = Table(title=escape(component.display), show_header=True, box=None)
    table.add_column("Kind", style="bold")
    table.add_column("Value")
    for style in component.style_files:
        table.add_row("style", escape(style.value))
    for link in component.links:
        table.add_row("link", escape(link.key))
    for script in component.scripts:
        table.add_row("script", escape(script.key))
    for meta in component.metas:
        table.add_row("meta", escape(meta.key))
    return table


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Create the CLI application.

    Args:
        console: Console for command output.
        error_console: Console for error messages.
        exit_on_error: Whether cyclopts exits on parsing errors.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="woodc",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.command(name="compo")
    def _compo(
        path: str,
        /,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Project root")
        ] = None,
        locale: Annotated[
            str | None, Parameter(name="--locale", help="Build language")
        ] = None,
    ) -> None:
        """Build a component and print its consolidated layout

        Args:
            path: Component path, e.g. res/page/index
            project_root: Project root directory, the working directory by default
            locale: Build language, the project default locale by default
        """
        try:
            project = _open_project(project_root, "compo")
            component = project.component(path, locale)
        except WoodError as e:
            exit_with_error(str(e), ExitCode.BUILD_ERROR, console=error_console)

        console.print(
            serialize(component.root), markup=False, highlight=False, soft_wrap=True
        )
        console.print()
        console.print(_manifest_table(component))

    @app.command(name="style")
    def _style(
        path: str,
        /,
        project_root: Annotated[
            Path | None, Parameter(name="--project-root", help="Project root")
        ] = None,
        locale: Annotated[
            str | None, Parameter(name="--locale", help="Build language")
        ] = None,
    ) -> None:
        """Print a stylesheet merged with its media variants

        Args:
            path: Base style file, e.g. res/page/index/index.css
            project_root: Project root directory, the working directory by default
            locale: Build language, the project default locale by default
        """
        try:
            project = _open_project(project_root, "style")
            text = project.style(project.file_path(path), locale)
        except WoodError as e:
            exit_with_error(str(e), ExitCode.BUILD_ERROR, console=error_console)

        console.print(text, markup=False, highlight=False, soft_wrap=True, end="")

    return app


def main() -> None:
    """Default entrypoint for the `woodc` CLI."""
    app = create_app()
    app()


if __name__ == "__main__":
    main()
