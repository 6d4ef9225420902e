"""CLI entry point for the SoroSave SDK."""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import datetime, timezone
from typing import Awaitable, Callable, TypeVar

import click
from stellar_sdk.exceptions import BaseRequestError

from sorosave.amounts import from_display, to_display
from sorosave.config import load_config
from sorosave.errors import SoroSaveError
from sorosave.models.config import AppConfig
from sorosave.models.group import CreateGroupParams
from sorosave.notify.bot import run_bot
from sorosave.stellar.client import SoroSaveClient
from sorosave.utils import get_status_label

T = TypeVar("T")


def _require_contract(cfg: AppConfig) -> None:
    """Exit with error if no contract ID is configured."""
    if not cfg.contract_id:
        click.echo("Error: No contract ID configured.", err=True)
        click.echo("Set SOROSAVE_CONTRACT_ID or contract_id in config.", err=True)
        sys.exit(1)


def _timestamp(seconds: int) -> str:
    if not seconds:
        return "-"
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


def _with_client(ctx: click.Context, action: Callable[[SoroSaveClient], Awaitable[T]]) -> T:
    """Run ``action`` against a configured client, exiting 1 on SDK and RPC errors."""
    cfg = load_config(ctx.obj["config_path"])
    _require_contract(cfg)

    async def _run() -> T:
        async with SoroSaveClient(cfg.to_client_config(), strict_status=cfg.strict_status) as client:
            return await action(client)

    try:
        return asyncio.run(_run())
    except SoroSaveError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    except BaseRequestError as exc:
        click.echo(f"Error: RPC request failed: {exc}", err=True)
        sys.exit(1)


def _emit_envelope(envelope) -> None:
    """Print the unsigned envelope as base64 XDR for external signing."""
    click.echo(envelope.to_xdr())


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """sorosave - client for the SoroSave rotating-savings contract."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show effective configuration."""
    cfg = load_config(ctx.obj["config_path"])
    click.echo(f"Network:    {cfg.network}")
    click.echo(f"RPC URL:    {cfg.rpc_url}")
    click.echo(f"Passphrase: {cfg.passphrase or '(not set)'}")
    click.echo(f"Contract:   {cfg.contract_id or '(not set)'}")
    click.echo(f"Strict:     {cfg.strict_status}")
    click.echo(f"Bot token:  {'***configured***' if cfg.telegram.bot_token else '(not set)'}")


# ── Queries ────────────────────────────────────────────


@cli.command()
@click.argument("group_id", type=int)
@click.pass_context
def group(ctx: click.Context, group_id: int) -> None:
    """Show a savings group."""
    g = _with_client(ctx, lambda c: c.get_group(group_id))
    click.echo(f"Group:        #{g.id} {g.name}")
    click.echo(f"Status:       {get_status_label(g.status)}")
    click.echo(f"Admin:        {g.admin}")
    click.echo(f"Token:        {g.token}")
    click.echo(f"Contribution: {to_display(g.contribution_amount)}")
    click.echo(f"Pot size:     {to_display(g.pot_size)}")
    click.echo(f"Cycle:        {g.cycle_length}s")
    click.echo(f"Members:      {len(g.members)}/{g.max_members}")
    click.echo(f"Round:        {g.current_round}/{g.total_rounds}")
    click.echo(f"Created:      {_timestamp(g.created_at)}")
    for i, member in enumerate(g.payout_order, start=1):
        click.echo(f"  payout #{i}: {member}")


@cli.command(name="round")
@click.argument("group_id", type=int)
@click.argument("round_number", type=int)
@click.pass_context
def round_status(ctx: click.Context, group_id: int, round_number: int) -> None:
    """Show the status of one contribution round."""
    r = _with_client(ctx, lambda c: c.get_round_status(group_id, round_number))
    click.echo(f"Round:       #{r.round_number}")
    click.echo(f"Recipient:   {r.recipient}")
    click.echo(f"Contributed: {to_display(r.total_contributed)}")
    click.echo(f"Complete:    {r.is_complete}")
    click.echo(f"Deadline:    {_timestamp(r.deadline)}")
    for member, paid in r.contributions.items():
        click.echo(f"  {'[x]' if paid else '[ ]'} {member}")


@cli.command(name="member-groups")
@click.argument("member")
@click.pass_context
def member_groups(ctx: click.Context, member: str) -> None:
    """List the groups a member belongs to."""
    ids = _with_client(ctx, lambda c: c.get_member_groups(member))
    if not ids:
        click.echo("No groups")
    for group_id in ids:
        click.echo(str(group_id))


# ── Transactions (unsigned XDR output) ─────────────────


@cli.command(name="create-group")
@click.option("--admin", required=True, help="Admin address")
@click.option("--name", required=True, help="Group display name")
@click.option("--token", required=True, help="Token contract address")
@click.option("--amount", required=True, help="Contribution per round (e.g. 100.5)")
@click.option("--cycle-length", type=int, required=True, help="Round length in seconds")
@click.option("--max-members", type=int, required=True, help="Member cap")
@click.option("--source", default=None, help="Transaction source (defaults to admin)")
@click.pass_context
def create_group(
    ctx: click.Context,
    admin: str,
    name: str,
    token: str,
    amount: str,
    cycle_length: int,
    max_members: int,
    source: str | None,
) -> None:
    """Build a create_group transaction."""
    try:
        contribution = from_display(amount)
    except SoroSaveError as exc:
        raise click.BadParameter(str(exc), param_hint="--amount")
    params = CreateGroupParams(
        admin=admin,
        name=name,
        token=token,
        contribution_amount=contribution,
        cycle_length=cycle_length,
        max_members=max_members,
    )
    _emit_envelope(_with_client(ctx, lambda c: c.create_group(params, source or admin)))


def _member_command(name: str, method: str, role: str, help_text: str) -> None:
    """Register a ``<role> GROUP_ID`` transaction command."""

    @cli.command(name=name, help=help_text)
    @click.argument("address")
    @click.argument("group_id", type=int)
    @click.option("--source", default=None, help=f"Transaction source (defaults to {role})")
    @click.pass_context
    def _command(ctx: click.Context, address: str, group_id: int, source: str | None) -> None:
        _emit_envelope(
            _with_client(
                ctx, lambda c: getattr(c, method)(address, group_id, source or address),
            )
        )


_member_command("join", "join_group", "member", "Build a join_group transaction.")
_member_command("leave", "leave_group", "member", "Build a leave_group transaction.")
_member_command("contribute", "contribute", "member", "Build a contribute transaction.")
_member_command("start", "start_group", "admin", "Build a start_group transaction.")
_member_command("pause", "pause_group", "admin", "Build a pause_group transaction.")
_member_command("resume", "resume_group", "admin", "Build a resume_group transaction.")


@cli.command()
@click.argument("group_id", type=int)
@click.option("--source", required=True, help="Transaction source address")
@click.pass_context
def payout(ctx: click.Context, group_id: int, source: str) -> None:
    """Build a distribute_payout transaction."""
    _emit_envelope(_with_client(ctx, lambda c: c.distribute_payout(group_id, source)))


@cli.command()
@click.argument("member")
@click.argument("group_id", type=int)
@click.argument("reason")
@click.option("--source", default=None, help="Transaction source (defaults to member)")
@click.pass_context
def dispute(ctx: click.Context, member: str, group_id: int, reason: str, source: str | None) -> None:
    """Build a raise_dispute transaction."""
    _emit_envelope(
        _with_client(ctx, lambda c: c.raise_dispute(member, group_id, reason, source or member))
    )


# ── Notification bot ───────────────────────────────────


@cli.command()
@click.pass_context
def bot(ctx: click.Context) -> None:
    """Run the Telegram notification bot."""
    cfg = load_config(ctx.obj["config_path"])
    if not cfg.telegram.bot_token:
        click.echo("Error: No Telegram bot token configured.", err=True)
        click.echo("Set TELEGRAM_BOT_TOKEN or bot_token in the [telegram] section.", err=True)
        sys.exit(1)

    click.echo("Starting SoroSave notification bot")
    asyncio.run(run_bot(cfg.telegram))


if __name__ == "__main__":
    cli()
