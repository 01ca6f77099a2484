"""
ec-fdk command line interface.

    ec-fdk login
    ec-fdk entryList -d 83cc6374 -m muffin -s 10 --sort -_created
    echo '{"name": "blueberry"}' | ec-fdk createEntry -d 83cc6374 -m muffin
    ec-fdk describe getEntry

JSON goes to stdout, messages to stderr. Exit codes: 0 ok, 1 runtime or API
error, 2 usage error.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Coroutine, Dict, List, Optional, TypeVar

import click

from ec_fdk.core.config import fdk_from_env, load_env_config
from ec_fdk.core.errors import FdkError
from ec_fdk.core.logging import setup_logging
from ec_fdk.core.sdk import Fdk
from ec_fdk.models import COMMAND_MODELS

T = TypeVar("T")


# --- Helpers --------------------------------------------------------------- #


def run_async_cli(coro: Coroutine[Any, Any, T]) -> T:
    """Run one SDK coroutine; SDK failures become exit code 1."""
    try:
        return asyncio.run(coro)
    except FdkError as exc:
        raise click.ClickException(str(exc)) from exc


def output_result(result: Any) -> None:
    click.echo(json.dumps(result, indent=2, default=str, ensure_ascii=False))


def _md_cell(value: Any) -> str:
    if isinstance(value, (dict, list)):
        value = json.dumps(value, default=str, ensure_ascii=False)
    elif value is None:
        value = ""
    return str(value).replace("|", "\\|").replace("\n", " ")


def render_markdown(items: List[Dict[str, Any]]) -> str:
    """Render list items as a markdown table; columns in first-seen order."""
    columns: List[str] = []
    for item in items:
        for key in item:
            if key not in columns:
                columns.append(key)
    if not columns:
        return ""
    lines = [
        "| " + " | ".join(columns) + " |",
        "| " + " | ".join("---" for _ in columns) + " |",
    ]
    for item in items:
        lines.append("| " + " | ".join(_md_cell(item.get(c)) for c in columns) + " |")
    return "\n".join(lines)


def output_list(result: Dict[str, Any], md: bool) -> None:
    if md:
        click.echo(render_markdown(result.get("items") or []))
    else:
        output_result(result)


def read_json_data(data: Optional[str]) -> Dict[str, Any]:
    """JSON object from --data, else from piped stdin."""
    if data is None:
        stdin = click.get_text_stream("stdin")
        if stdin.isatty():
            raise click.UsageError("Provide --data or pipe JSON via stdin")
        data = stdin.read()
        if not data.strip():
            raise click.UsageError("No data provided via stdin")
    try:
        value = json.loads(data)
    except ValueError as exc:
        raise click.BadParameter(
            f"must be valid JSON ({exc})", param_hint="--data"
        ) from exc
    if not isinstance(value, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--data")
    return value


def list_options(
    size: Optional[int], page: Optional[int], sort: Optional[str]
) -> Dict[str, Any]:
    options: Dict[str, Any] = {}
    if size:
        options["size"] = size
    if page:
        options["page"] = page
    if sort:
        options["sort"] = [sort]
    return options


def _sdk(ctx: click.Context, raw: bool = False) -> Fdk:
    return ctx.obj.clean(not raw)


# --- Shared options -------------------------------------------------------- #

dm_option = click.option("-d", "--dm", required=True, help="DataManager short ID")
model_option = click.option("-m", "--model", required=True, help="Model name")
id_option = click.option("-i", "--id", "id_", required=True, help="Entry ID")
data_option = click.option("--data", help="JSON data (or pipe via stdin)")
raw_option = click.option(
    "--raw", is_flag=True, help="Include _links and _embedded in output"
)
md_option = click.option("--md", is_flag=True, help="Print lists as a markdown table")
size_option = click.option("-s", "--size", type=int, help="Page size")
page_option = click.option("-p", "--page", type=int, help="Page number")
sort_option = click.option("--sort", help="Sort field, prefix with - to reverse")
dm_id_option = click.option(
    "--dm-id", required=True, help="DataManager long ID (UUID)"
)
group_option = click.option("-g", "--asset-group", required=True, help="Asset group")


# --- Commands -------------------------------------------------------------- #


@click.group()
@click.option(
    "-e",
    "--env",
    type=click.Choice(["stage", "live"]),
    envvar="FDK_ENV",
    help="Environment (default: stage, or FDK_ENV)",
)
@click.pass_context
def cli(ctx: click.Context, env: Optional[str]) -> None:
    """Command line client for the entrecode datamanager API."""
    ctx.obj = fdk_from_env(env=env)


@cli.command(name="login")
@click.option("--email", prompt="Email", help="ec account email")
@click.option("--password", prompt="Password", hide_input=True)
@click.pass_obj
def login(sdk: Fdk, email: str, password: str) -> None:
    """Log in with ec credentials; the token is stored for later commands."""
    run_async_cli(sdk.login_admin(email, password))
    click.echo(f"Logged in to {sdk.config.env} successfully.", err=True)


@cli.command(name="logout")
@click.pass_obj
def logout(sdk: Fdk) -> None:
    """Invalidate and forget the stored token."""
    if not run_async_cli(sdk.has_admin_token()):
        click.echo(f"Not logged in to {sdk.config.env}.", err=True)
        return
    run_async_cli(sdk.logout_admin())
    click.echo(f"Logged out of {sdk.config.env}.", err=True)


@cli.command(name="entryList")
@dm_option
@model_option
@size_option
@page_option
@sort_option
@raw_option
@md_option
@click.pass_context
def entry_list(ctx, dm, model, size, page, sort, raw, md) -> None:
    """List entries of a model."""
    chain = _sdk(ctx, raw).dm(dm).model(model)
    result = run_async_cli(chain.entry_list(list_options(size, page, sort)))
    output_list(result, md)


@cli.command(name="getEntry")
@dm_option
@model_option
@id_option
@raw_option
@click.pass_context
def get_entry(ctx, dm, model, id_, raw) -> None:
    """Get a single entry."""
    chain = _sdk(ctx, raw).dm(dm).model(model)
    output_result(run_async_cli(chain.get_entry(id_)))


@cli.command(name="createEntry")
@dm_option
@model_option
@data_option
@raw_option
@click.pass_context
def create_entry(ctx, dm, model, data, raw) -> None:
    """Create an entry."""
    value = read_json_data(data)
    chain = _sdk(ctx, raw).dm(dm).model(model)
    output_result(run_async_cli(chain.create_entry(value)))


@cli.command(name="editEntry")
@dm_option
@model_option
@id_option
@data_option
@raw_option
@click.pass_context
def edit_entry(ctx, dm, model, id_, data, raw) -> None:
    """Edit an entry (PUT)."""
    value = read_json_data(data)
    chain = _sdk(ctx, raw).dm(dm).model(model)
    output_result(run_async_cli(chain.edit_entry(id_, value)))


@cli.command(name="deleteEntry")
@dm_option
@model_option
@id_option
@click.pass_context
def delete_entry(ctx, dm, model, id_) -> None:
    """Delete an entry."""
    chain = _sdk(ctx).dm(dm).model(model)
    run_async_cli(chain.delete_entry(id_))
    click.echo("Entry deleted.", err=True)


@cli.command(name="getSchema")
@dm_option
@model_option
@click.pass_context
def get_schema(ctx, dm, model) -> None:
    """Get a model's field schema."""
    chain = _sdk(ctx).dm(dm).model(model)
    output_result(run_async_cli(chain.get_schema()))


@cli.command(name="assetList")
@dm_option
@group_option
@size_option
@page_option
@sort_option
@raw_option
@md_option
@click.pass_context
def asset_list(ctx, dm, asset_group, size, page, sort, raw, md) -> None:
    """List assets of an asset group."""
    chain = _sdk(ctx, raw).dm(dm).asset_group(asset_group)
    result = run_async_cli(chain.asset_list(list_options(size, page, sort)))
    output_list(result, md)


@cli.command(name="getAsset")
@dm_option
@group_option
@click.option("-i", "--id", "id_", required=True, help="Asset ID")
@raw_option
@click.pass_context
def get_asset(ctx, dm, asset_group, id_, raw) -> None:
    """Get a single asset."""
    chain = _sdk(ctx, raw).dm(dm).asset_group(asset_group)
    output_result(run_async_cli(chain.get_asset(id_)))


@cli.command(name="deleteAsset")
@dm_option
@group_option
@click.option("-i", "--id", "id_", required=True, help="Asset ID")
@click.pass_context
def delete_asset(ctx, dm, asset_group, id_) -> None:
    """Delete an asset."""
    chain = _sdk(ctx).dm(dm).asset_group(asset_group)
    run_async_cli(chain.delete_asset(id_))
    click.echo("Asset deleted.", err=True)


@cli.command(name="dmList")
@size_option
@page_option
@raw_option
@md_option
@click.pass_context
def dm_list(ctx, size, page, raw, md) -> None:
    """List datamanagers (needs login)."""
    result = run_async_cli(_sdk(ctx, raw).dm_list(list_options(size, page, None)))
    output_list(result, md)


@cli.command(name="modelList")
@dm_id_option
@size_option
@page_option
@raw_option
@md_option
@click.pass_context
def model_list(ctx, dm_id, size, page, raw, md) -> None:
    """List models of a datamanager (needs login)."""
    chain = _sdk(ctx, raw).dm_id(dm_id)
    result = run_async_cli(chain.model_list(list_options(size, page, None)))
    output_list(result, md)


@cli.command(name="getDatamanager")
@dm_id_option
@raw_option
@click.pass_context
def get_datamanager(ctx, dm_id, raw) -> None:
    """Get a datamanager (needs login)."""
    output_result(run_async_cli(_sdk(ctx, raw).get_datamanager(dm_id)))


@cli.command(name="describe")
@click.argument("command", required=False)
def describe(command: Optional[str]) -> None:
    """Print the JSON schema of a command's result."""
    if not command:
        click.echo("Available commands:")
        for name in sorted(COMMAND_MODELS):
            click.echo(f"  {name}")
        return
    if command not in COMMAND_MODELS:
        raise click.UsageError(
            f"Unknown command: {command}. "
            f"Try one of {', '.join(sorted(COMMAND_MODELS))}"
        )
    model = COMMAND_MODELS[command]
    if model is None:
        click.echo("This command returns no data.")
        return
    output_result(model.model_json_schema(by_alias=True))


def main() -> None:
    setup_logging(load_env_config().log_level)
    cli()


if __name__ == "__main__":
    main()
