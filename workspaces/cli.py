import click

from workspaces import __version__

LOG_LEVELS = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]


def _prompt_picker(records):
    """Numbered terminal menu; ``None`` when cancelled or empty."""
    if not records:
        click.echo("No workspaces registered.", err=True)
        return None

    width = max(10, *(len(r.name) + 2 for r in records))
    for index, record in enumerate(records, start=1):
        click.echo(f"{index:>3}  {record.name:<{width}}{record.path}", err=True)
    try:
        choice = click.prompt("Open workspace", type=click.IntRange(1, len(records)), err=True)
    except click.Abort:
        return None
    return records[choice - 1]


def _print_and_change(path: str, cd_type) -> None:
    """Change directory, then print the path so a shell wrapper can ``cd`` to it."""
    from workspaces.app import change_directory

    change_directory(path, cd_type)
    click.echo(path)


@click.group(invoke_without_command=True)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Log level (default: from WORKSPACES_LOG_LEVEL or WARNING).",
)
@click.version_option(__version__, prog_name="workspaces")
@click.pass_context
def main(ctx: click.Context, log_level: str | None) -> None:
    """Workspaces - named bookmarks for project directories."""
    from workspaces.app import Workspaces
    from workspaces.log import setup_logging
    from workspaces.settings import WorkspacesSettings

    settings = WorkspacesSettings()
    setup_logging(log_level or settings.log_level)

    app = Workspaces(settings, picker=_prompt_picker, changer=_print_and_change)
    ctx.obj = app

    if ctx.invoked_subcommand is None and not app.start():
        click.echo(ctx.get_help())


# ---------------------------------------------------------------------------
# Workspaces
# ---------------------------------------------------------------------------


@main.command()
@click.argument("name", required=False)
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.pass_context
def add(ctx: click.Context, name: str | None, path: str | None) -> None:
    """Register PATH (default: the current directory) as NAME.

    A single argument containing a path separator is taken as PATH.
    """
    if ctx.obj.add(path, name) is None:
        ctx.exit(1)


@main.command()
@click.argument("name", required=False)
@click.pass_context
def remove(ctx: click.Context, name: str | None) -> None:
    """Remove workspace NAME (default: the current directory's workspace)."""
    if ctx.obj.remove(name) is None and name is not None:
        ctx.exit(1)


@main.command()
@click.argument("name")
@click.argument("new_name")
@click.pass_context
def rename(ctx: click.Context, name: str, new_name: str) -> None:
    """Rename workspace NAME to NEW_NAME."""
    if ctx.obj.rename(name, new_name) is None:
        ctx.exit(1)


@main.command(name="list")
@click.pass_context
def list_(ctx: click.Context) -> None:
    """List registered workspaces."""
    for record in ctx.obj.get():
        click.echo(f"{record.name} {record.path}")


@main.command(name="open")
@click.argument("name", required=False)
@click.pass_context
def open_(ctx: click.Context, name: str | None) -> None:
    """Open workspace NAME and print its path.  Prompts when NAME is omitted.

    Use from a shell function, e.g. ``cd "$(workspaces open proj)"``.
    """
    if not ctx.obj.open(name):
        ctx.exit(1)


# ---------------------------------------------------------------------------
# Custom data
# ---------------------------------------------------------------------------


@main.command(name="set-custom")
@click.argument("name")
@click.argument("data")
@click.pass_context
def set_custom(ctx: click.Context, name: str, data: str) -> None:
    """Attach an opaque DATA string to workspace NAME."""
    if not ctx.obj.set_custom(name, data):
        ctx.exit(1)


@main.command(name="get-custom")
@click.argument("name")
@click.pass_context
def get_custom(ctx: click.Context, name: str) -> None:
    """Print the custom data stored on workspace NAME."""
    app = ctx.obj
    if app.manager.find(name) is None:
        app.notifier.warn(f"workspace '{name}' does not exist")
        ctx.exit(1)
    data = app.get_custom(name)
    if data is not None:
        click.echo(data)


# ---------------------------------------------------------------------------
# Directories
# ---------------------------------------------------------------------------


@main.command(name="add-dir")
@click.argument("path", required=False, type=click.Path(file_okay=False))
@click.pass_context
def add_dir(ctx: click.Context, path: str | None) -> None:
    """Register PATH (default: the current directory) and its subfolders."""
    if ctx.obj.add_dir(path) is None:
        ctx.exit(1)


@main.command(name="remove-dir")
@click.argument("name", required=False)
@click.pass_context
def remove_dir(ctx: click.Context, name: str | None) -> None:
    """Remove directory NAME and every workspace registered under it."""
    if ctx.obj.remove_dir(name) is None and name is not None:
        ctx.exit(1)


@main.command(name="list-dirs")
@click.pass_context
def list_dirs(ctx: click.Context) -> None:
    """List registered directories."""
    for record in ctx.obj.get_dirs():
        click.echo(f"{record.name} {record.path}")


@main.command(name="sync-dirs")
@click.pass_context
def sync_dirs(ctx: click.Context) -> None:
    """Reconcile directory workspaces with the folders on disk."""
    for result in ctx.obj.sync_dirs():
        if result.changed:
            click.echo(f"{result.directory.name}: +{len(result.added)} -{len(result.removed)}")


if __name__ == "__main__":
    main()
