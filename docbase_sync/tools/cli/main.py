"""
Entry point of `docbase-sync` CLI.

Each command operates on a single document and reports its outcome as a
one-line notification. Failures exit with code 1 and leave the document as it
was.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import dotenv
from typer import Argument, Context, Exit, Option

from ...core import Client, DocBaseSyncError, pull, push
from ..config import CONFIG_FILENAME, Config, ConfigStore
from . import config
from ._utils import MainTyper, console, get_root_context, logger

dotenv.load_dotenv()

app = MainTyper(
    "docbase-sync",
    help="Sync markdown documents with DocBase notes",
)


@app.callback()
def main(
    ctx: Context,
    token: str
    | None = Option(
        None,
        help="DocBase access token, overrides config file",
        envvar="DOCBASE_TOKEN",
    ),
    team: str
    | None = Option(
        None,
        help="DocBase team id, overrides config file",
        envvar="DOCBASE_TEAM",
    ),
    config_file: Path = Option(
        CONFIG_FILENAME,
        help=".yaml file containing access token and team id",
        envvar="DOCBASE_SYNC_CONFIG_FILE",
        dir_okay=False,
    ),
    verbose: bool = Option(
        False,
        "-v",
        "--verbose",
        help="Log requests sent to DocBase",
    ),
):
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    ctx.obj = RootContext(
        ctx=ctx,
        store=ConfigStore(config_file),
        token=token,
        team=team,
    )


app.add_typer(config.app)


@app.command(name="pull")
def pull_(
    ctx: Context,
    path: Path = Argument(
        help="Document linked to a DocBase note by `docbase_note_id`",
        exists=True,
        dir_okay=False,
    ),
    dry_run: bool = Option(
        False,
        "--dry-run",
        help="Don't update document, only print what would be written",
    ),
):
    """
    Overwrite document with its DocBase note
    """
    root_context = get_root_context(ctx)
    client = root_context.create_client()

    try:
        text = pull(path, client, logger=logger, dry_run=dry_run)
    except DocBaseSyncError as e:
        logger.error(f"Failed to pull note into '{path}': {e}")
        raise Exit(code=1)

    if dry_run:
        console.print(text, markup=False, highlight=False, emoji=False)
    else:
        logger.info(f"Pulled DocBase note into '{path}'")


@app.command(name="push")
def push_(
    ctx: Context,
    path: Path = Argument(
        help="Document to send to DocBase",
        exists=True,
        dir_okay=False,
    ),
    create: bool = Option(
        False,
        "--create",
        help="Create a new note if the document has no `docbase_note_id`, then link it",
    ),
    dry_run: bool = Option(
        False,
        "--dry-run",
        help="Only log the request which would be sent",
    ),
):
    """
    Update document's DocBase note, optionally creating it
    """
    root_context = get_root_context(ctx)
    client = root_context.create_client()

    try:
        remote_note = push(
            path, client, logger=logger, create=create, dry_run=dry_run
        )
    except DocBaseSyncError as e:
        logger.error(f"Failed to push '{path}': {e}")
        raise Exit(code=1)

    if remote_note is not None:
        url = f": {remote_note.url}" if remote_note.url else ""
        logger.info(f"Pushed '{path}' to note {remote_note.note_id}{url}")


def run():
    app()


@dataclass(kw_only=True)
class RootContext:
    ctx: Context
    store: ConfigStore
    token: str | None
    team: str | None

    def load_config(self) -> Config:
        """
        Get stored config with command-line overrides applied.
        """
        try:
            stored = self.store.load()
        except DocBaseSyncError as e:
            logger.error(str(e))
            raise Exit(code=1)

        return stored.merge(access_token=self.token, team_id=self.team)

    def create_client(self) -> Client:
        try:
            return self.load_config().create_client(logger=logger)
        except DocBaseSyncError as e:
            logger.error(
                f"{e}: set with `docbase-sync config set` or --token/--team"
            )
            raise Exit(code=1)


if __name__ == "__main__":
    app()
