"""Command-line surface for SpendTrack."""

from __future__ import annotations

import functools
from datetime import date

import click

from .config import BaseConfig, DevConfig
from .context import AppContext, create_app_context
from .errors import SpendTrackError
from .logging_config import setup_logging, teardown_logging
from .services import ledger_service
from .services.aggregation import totals_for_month
from .services.validation import validate_month
from .utils.format import format_eur
from .utils.months import month_bounds, month_key, month_label, recent_months


def _current_month() -> str:
    return month_key(date.today())


def _report_errors(func):
    """Turn application errors into click errors (exit code 1, message on stderr)."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except SpendTrackError as exc:
            raise click.ClickException(str(exc)) from exc

    return wrapper


@click.group()
@click.option("--dev", is_flag=True, help="Verbose console logging.")
@click.pass_context
def cli(ctx: click.Context, dev: bool) -> None:
    """Track spending and monthly budgets per category."""

    config = DevConfig() if dev else BaseConfig()
    setup_logging(config)
    app = create_app_context(config)
    ctx.obj = app
    ctx.call_on_close(app.close)
    ctx.call_on_close(teardown_logging)


@cli.command("init")
@click.pass_obj
def init_command(app: AppContext) -> None:
    """Create the database tables if they do not exist yet."""

    click.echo(f"Database ready: {app.engine.url.render_as_string(hide_password=True)}")
    click.echo(f"Categories: {', '.join(app.categories)}")


@cli.command("add")
@click.argument("amount")
@click.argument("category")
@click.option("--label", default=None, help="Optional free text label.")
@click.option("--date", "txn_date", default=None, help="YYYY-MM-DD, defaults to today.")
@click.pass_obj
@_report_errors
def add_command(app: AppContext, amount: str, category: str, label: str | None, txn_date: str | None) -> None:
    """Record a transaction."""

    txn = app.insert_transaction(amount, category, label, txn_date or date.today())
    click.echo(f"Added #{txn.id}: {txn.date} {txn.category} {format_eur(txn.amount)}")


@cli.command("edit")
@click.argument("transaction_id", type=int)
@click.argument("amount")
@click.argument("category")
@click.argument("txn_date", metavar="DATE")
@click.option("--label", default=None, help="Replacement label; omitted clears it.")
@click.pass_obj
@_report_errors
def edit_command(
    app: AppContext, transaction_id: int, amount: str, category: str, txn_date: str, label: str | None
) -> None:
    """Replace every field of a transaction."""

    txn = app.update_transaction(transaction_id, amount, category, label, txn_date)
    click.echo(f"Updated #{txn.id}: {txn.date} {txn.category} {format_eur(txn.amount)}")


@cli.command("delete")
@click.argument("transaction_ids", nargs=-1, type=int)
@click.pass_obj
@_report_errors
def delete_command(app: AppContext, transaction_ids: tuple[int, ...]) -> None:
    """Delete transactions by id."""

    removed = app.delete_transactions(transaction_ids)
    click.echo(f"Deleted {removed} transaction(s).")


@cli.command("list")
@click.option("--month", default=None, help="Only show YYYY-MM.")
@click.pass_obj
@_report_errors
def list_command(app: AppContext, month: str | None) -> None:
    """List transactions, newest first."""

    if month:
        start, end = month_bounds(validate_month(month))
        rows = ledger_service.list_transactions(
            repository=app.transaction_repo, month_start=start, month_end=end
        )
    else:
        rows = app.list_transactions()
    if not rows:
        click.echo("No transactions yet.")
        return
    for txn in rows:
        click.echo(
            f"#{txn.id:<5} {txn.date}  {txn.category:<12} {format_eur(txn.amount):>14}  {txn.label or '-'}"
        )


@cli.command("totals")
@click.option("--month", default=None, help="YYYY-MM, defaults to the current month.")
@click.pass_obj
@_report_errors
def totals_command(app: AppContext, month: str | None) -> None:
    """Show spending per category for a month."""

    totals = totals_for_month(
        month or _current_month(), repository=app.transaction_repo, categories=app.categories
    )
    for category, total in totals.items():
        click.echo(f"{category:<12} {format_eur(total)}")


@cli.group("budget")
def budget_group() -> None:
    """Inspect and change monthly budgets."""


@budget_group.command("show")
@click.option("--month", default=None, help="YYYY-MM, defaults to the current month.")
@click.pass_obj
@_report_errors
def budget_show(app: AppContext, month: str | None) -> None:
    """Show the effective budget of each category."""

    for category, budget in app.resolve_budgets(month or _current_month()).items():
        source = "set" if budget.exact else "inherited"
        click.echo(f"{category:<12} {format_eur(budget.amount):>14}  ({source})")


@budget_group.command("set")
@click.argument("month")
@click.argument("category")
@click.argument("amount")
@click.pass_obj
@_report_errors
def budget_set(app: AppContext, month: str, category: str, amount: str) -> None:
    """Set the budget of CATEGORY for MONTH (YYYY-MM)."""

    value = app.set_budget(month, category, amount)
    click.echo(f"Budget updated: {category} {month_label(month)} {format_eur(value)}")


@budget_group.command("reset")
@click.argument("month")
@click.argument("category")
@click.pass_obj
@_report_errors
def budget_reset(app: AppContext, month: str, category: str) -> None:
    """Drop the budget set for MONTH so it inherits from earlier months."""

    if app.reset_budget(month, category):
        click.echo(f"Budget reset for {category} in {month_label(month)}.")
    else:
        click.echo(f"No budget was set for {category} in {month_label(month)}; nothing to reset.")


@cli.command("overview")
@click.option("--month", default=None, help="YYYY-MM, defaults to the current month.")
@click.pass_obj
@_report_errors
def overview_command(app: AppContext, month: str | None) -> None:
    """Spent vs expected per category."""

    overview = app.overview(month or _current_month())
    click.echo(overview.label)
    for item in overview.categories:
        click.echo(
            f"{item.category:<12} {item.percent:6.1f}%  {item.color}  "
            f"Spent {format_eur(item.spent)} / Expected {format_eur(item.budget)}"
        )


@cli.command("months")
@click.option("--count", default=12, show_default=True, type=click.IntRange(min=0))
def months_command(count: int) -> None:
    """List recent months selectable for budgets."""

    for key in recent_months(date.today(), count):
        click.echo(f"{key}  {month_label(key)}")


def main() -> None:  # pragma: no cover - console script entry point
    cli()
