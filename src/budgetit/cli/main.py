"""Main CLI entry point."""

import logging

import click
from budgetit.database.factories import create_sqlite_database

# Import and register all commands at module level
from budgetit.cli.commands import (
    plan,
    account,
    category,
    init_categories,
    add,
    transaction,
    budget,
    template,
    report,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BUDGETIT_DB_PATH environment variable)",
    envvar="BUDGETIT_DB_PATH",
)
@click.option(
    "--plan",
    "plan_ref",
    help="Plan name or ID to work on (defaults to the first plan)",
    envvar="BUDGETIT_PLAN",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="BUDGETIT_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, plan_ref: str | None, log_level: str):
    """Budgetit - envelope budgeting ledger.

    Record transactions against accounts, give every dollar a job in
    monthly category envelopes, and keep balances and envelopes in step.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["plan"] = plan_ref

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
plan.register_commands(cli)
account.register_commands(cli)
category.register_commands(cli)
init_categories.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)
template.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
