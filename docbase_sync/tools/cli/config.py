"""
Manage stored DocBase credentials.
"""
from __future__ import annotations

from typer import BadParameter, Context, Exit, Option

from ...core import DocBaseSyncError
from ._utils import MainTyper, get_root_context, logger, mask_token

app = MainTyper(
    "config",
    help="Manage stored access token and team id",
)


@app.command(name="set")
def set_(
    ctx: Context,
    token: str
    | None = Option(
        None,
        "--token",
        help="DocBase access token",
    ),
    team: str
    | None = Option(
        None,
        "--team",
        help="DocBase team id",
    ),
):
    """
    Store access token and/or team id in config file
    """
    if not (token or team):
        raise BadParameter(
            "at least one of --token or --team must be provided", ctx=ctx
        )

    root_context = get_root_context(ctx)

    try:
        config = root_context.store.load()
    except DocBaseSyncError as e:
        logger.error(str(e))
        raise Exit(code=1)

    config = config.merge(access_token=token, team_id=team)
    root_context.store.save(config)

    logger.info(f"Saved config to '{root_context.store.path}'")


@app.command()
def show(ctx: Context):
    """
    Show configuration in effect, with the access token masked
    """
    root_context = get_root_context(ctx)
    config = root_context.load_config()

    logger.info(f"Config file: '{root_context.store.path}'")
    logger.info(f"Team id: {config.team_id or '(not set)'}")
    logger.info(f"Access token: {mask_token(config.access_token)}")
