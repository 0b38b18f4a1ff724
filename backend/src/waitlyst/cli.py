"""Command-line interface for WaitLyst."""

import random
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from waitlyst.admin import AdminGate, dashboard_stats, filter_entries
from waitlyst.errors import WaitlistError
from waitlyst.launch import calculate_time_left, days_until_launch
from waitlyst.logging_config import get_logger, setup_logging
from waitlyst.referral import ReferralLedger
from waitlyst.rewards import REWARD_TIERS, is_unlocked, next_tier, tier_progress
from waitlyst.seeding import DEFAULT_DEMO_COUNT, seed_demo_data
from waitlyst.settings import settings
from waitlyst.sharing import build_referral_link, parse_referral_code, share_messages
from waitlyst.storage import WaitlistStore, build_store
from waitlyst.storage.exporter import (
    entries_to_jsonl,
    export_filename,
    export_to_csv,
    export_to_jsonl,
    write_csv_export,
)
from waitlyst.validators import validate_email

# Configure logging
setup_logging()
logger = get_logger(__name__)

# Create Typer app
app = typer.Typer(
    name="waitlyst",
    help="WaitLyst - waitlist with referral rewards",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()

PasswordOption = Annotated[
    str,
    typer.Option("--password", "-p", prompt=True, hide_input=True, help="Admin password"),
]


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logs")] = False,
    json_logs: Annotated[bool, typer.Option("--json-logs", help="Emit logs as JSON")] = False,
) -> None:
    """WaitLyst - waitlist with referral rewards."""
    if verbose or json_logs:
        setup_logging(
            level="DEBUG" if verbose else None,
            log_format="json" if json_logs else None,
        )


def get_store() -> WaitlistStore:
    """Store over the configured backend."""
    return build_store(settings)


def require_admin(password: str) -> None:
    """Exit unless the admin password matches."""
    gate = AdminGate()
    if not gate.authenticate(password):
        console.print("[bold red]✗[/bold red] Incorrect password. Try again.")
        raise typer.Exit(1)


def print_referral_summary(store: WaitlistStore, ledger: ReferralLedger) -> None:
    """Show the current user's place, link and reward progress."""
    user = store.refresh_current_user()
    if not user:
        console.print("[yellow]You haven't joined the waitlist yet[/yellow]")
        return

    status = ledger.queue_status(user)
    link = build_referral_link(user.referral_code)

    console.print(f"[bold]You're #{status.position:,}[/bold] ({user.email})")
    console.print(f"  {status.behind:,} people behind you · {status.total:,} total on the waitlist")
    console.print(f"  Referral link: [cyan]{link}[/cyan]")
    console.print(f"  Referrals: [bold]{user.referral_count}[/bold]")

    upcoming = next_tier(user.referral_count)
    if upcoming:
        console.print(
            f"  Next reward: {upcoming.icon} {upcoming.title} "
            f"({user.referral_count}/{upcoming.referrals_needed}, "
            f"{tier_progress(upcoming, user.referral_count):.0f}%)"
        )
    else:
        console.print("  [green]All rewards unlocked[/green]")


@app.command("join")
def join_waitlist(
    email: Annotated[str, typer.Argument(help="Email address to sign up")],
    ref: Annotated[str | None, typer.Option("--ref", "-r", help="Referral code of the friend who invited you")] = None,
    link: Annotated[str | None, typer.Option("--link", help="Invite link carrying a ?ref= code")] = None,
) -> None:
    """Join the waitlist."""
    referred_by = ref or (parse_referral_code(link) if link else None)
    referred_by = (referred_by.strip() or None) if referred_by else None

    store = get_store()
    ledger = ReferralLedger(store)

    try:
        entry = ledger.signup(validate_email(email), referred_by)
    except WaitlistError as e:
        logger.info("join_rejected", reason=str(e))
        console.print(f"[bold red]✗[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[bold green]✓[/bold green] You're on the waitlist! Position [bold]#{entry.position}[/bold]")
    if referred_by and not store.find_by_referral_code(referred_by):
        console.print(f"[yellow]Referral code {referred_by} was not recognised[/yellow]")
    print_referral_summary(store, ledger)


@app.command("status")
def show_status() -> None:
    """Show your position, referral link and reward progress."""
    store = get_store()
    print_referral_summary(store, ReferralLedger(store))


@app.command("share")
def show_share_messages() -> None:
    """Print ready-to-send share messages for your referral link."""
    store = get_store()
    user = store.get_current_user()
    if not user:
        console.print("[yellow]Join the waitlist first to get a referral link[/yellow]")
        raise typer.Exit(1)

    messages = share_messages(build_referral_link(user.referral_code))
    for channel, text in messages.items():
        console.print(f"[bold]{channel}[/bold]")
        console.print(text, markup=False)
        console.print()


@app.command("logout")
def logout() -> None:
    """Forget the current user."""
    get_store().clear_current_user()
    console.print("[bold green]✓[/bold green] Signed out")


@app.command("tiers")
def list_tiers() -> None:
    """List reward tiers and which ones you have unlocked."""
    user = get_store().get_current_user()
    count = user.referral_count if user else 0

    table = Table(title="Reward Tiers")
    table.add_column("", justify="center")
    table.add_column("Reward", style="green")
    table.add_column("Referrals", justify="right")
    table.add_column("Status")

    for tier in REWARD_TIERS:
        if is_unlocked(tier, count):
            state = "[green]Unlocked[/green]"
        elif user:
            state = f"{tier_progress(tier, count):.0f}%"
        else:
            state = ""
        table.add_row(tier.icon, f"{tier.title}\n[dim]{tier.description}[/dim]", str(tier.referrals_needed), state)

    console.print(table)


@app.command("countdown")
def show_countdown() -> None:
    """Show time left until launch."""
    left = calculate_time_left(settings.launch_date)
    console.print(f"[bold]Launch:[/bold] {settings.launch_date:%Y-%m-%d %H:%M}")
    console.print(
        f"  {left.days}d {left.hours:02d}h {left.minutes:02d}m {left.seconds:02d}s "
        f"({days_until_launch(settings.launch_date)} days until launch)"
    )


@app.command("seed")
def seed(
    count: Annotated[int, typer.Option("--count", "-c", help="Number of demo entries")] = DEFAULT_DEMO_COUNT,
    seed_value: Annotated[int | None, typer.Option("--seed", help="Random seed for reproducible data")] = None,
) -> None:
    """Fill an empty waitlist with demo data."""
    rng = random.Random(seed_value) if seed_value is not None else None
    written = seed_demo_data(get_store(), count=count, rng=rng)

    if not written:
        console.print("[yellow]Waitlist already has entries, nothing seeded[/yellow]")
        return
    console.print(f"[bold green]✓[/bold green] Seeded {written} demo entries")


@app.command("list")
def list_entries(
    password: PasswordOption,
    search: Annotated[str | None, typer.Option("--search", "-s", help="Filter by email or referral code")] = None,
) -> None:
    """List waitlist entries (admin)."""
    require_admin(password)

    entries = filter_entries(get_store().list_all(), search)
    if not entries:
        console.print("[yellow]No entries found[/yellow]")
        return

    table = Table(title="Waitlist")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Email", style="green")
    table.add_column("Referral Code")
    table.add_column("Referrals", justify="right")
    table.add_column("Referred By")
    table.add_column("Joined")

    for entry in entries:
        table.add_row(
            str(entry.position),
            entry.email,
            entry.referral_code,
            str(entry.referral_count),
            entry.referred_by or "-",
            entry.created_at.astimezone().strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@app.command("stats")
def show_stats(password: PasswordOption) -> None:
    """Show waitlist statistics (admin)."""
    require_admin(password)

    stats = dashboard_stats(get_store().list_all())

    console.print(f"[bold]Total signups:[/bold] {stats.total:,}")
    console.print(f"[bold]Today:[/bold] {stats.today_signups:,}")
    console.print(f"[bold]Total referrals:[/bold] {stats.total_referrals:,}")
    if stats.top_referrer:
        console.print(
            f"[bold]Top referrer:[/bold] {stats.top_referrer.email} "
            f"({stats.top_referrer.referral_count} referrals)"
        )
    else:
        console.print("[bold]Top referrer:[/bold] N/A")


@app.command("export")
def export_entries(
    password: PasswordOption,
    output_dir: Annotated[Path | None, typer.Option("--output-dir", "-o", help="Directory for the export file")] = None,
    format: Annotated[str, typer.Option("--format", "-f", help="Export format (csv or jsonl)")] = "csv",
    stdout: Annotated[bool, typer.Option("--stdout", help="Print the export instead of writing a file")] = False,
) -> None:
    """Export the waitlist (admin)."""
    require_admin(password)

    if format not in ("csv", "jsonl"):
        console.print(f"[red]Unknown format: {format}[/red]")
        raise typer.Exit(1)

    entries = get_store().list_all()

    if stdout:
        if format == "csv":
            typer.echo(export_to_csv(entries))
        else:
            typer.echo(entries_to_jsonl(entries), nl=False)
        return

    if format == "csv":
        path = write_csv_export(entries, output_dir)
    else:
        target_dir = Path(output_dir or settings.exports_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        path = target_dir / export_filename(extension="jsonl")
        if not export_to_jsonl(entries, path):
            console.print("[yellow]No entries to export[/yellow]")
            return

    console.print(f"[bold green]✓[/bold green] Exported {len(entries)} entries to {path}")


if __name__ == "__main__":
    app()
