"""CLI commands for order-line change batches."""

from __future__ import annotations

from decimal import InvalidOperation
from pathlib import Path

import click

from storefront.application.process_record_changes import ProcessRecordChangesHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.change_batch import Phase, TriggerContext
from storefront.infrastructure.bootstrap import order_totals_repository, product_repository
from storefront.infrastructure.persistence.json_change_batch import load_change_batch


@click.command("apply")
@click.option(
    "--phase",
    required=True,
    type=click.Choice([p.value for p in Phase]),
    help="Lifecycle point the batch is delivered at.",
)
@click.option(
    "--file", "batch_file", required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON document holding new_records / old_records.",
)
def changes_apply(phase: str, batch_file: Path) -> None:
    """Run a change batch through the pipeline."""
    handler = ProcessRecordChangesHandler(
        product_repo=product_repository(),
        order_totals_repo=order_totals_repository(),
    )

    try:
        batch = load_change_batch(batch_file)
        report = handler.handle(batch, TriggerContext.for_phase(Phase(phase)))
    except DomainException as exc:
        raise click.ClickException(str(exc))
    except (ValueError, KeyError, InvalidOperation) as exc:
        raise click.ClickException(f"Malformed change batch: {exc}")

    click.echo(f"Phase: {report.phase}")
    click.echo(f"  {'Record':<10} {'Result':<8} {'Line Total':>12}  Reason")
    click.echo(f"  {'-'*50}")
    for outcome in report.outcomes:
        result = "ok" if outcome.valid else "invalid"
        click.echo(
            f"  {outcome.record_id:<10} {result:<8} {outcome.line_total or '-':>12}  {outcome.reason or ''}"
        )
    if report.skipped_ids:
        click.echo(f"Unchanged: {', '.join(report.skipped_ids)}")
    for order_id, total in report.order_totals.items():
        click.echo(f"Order {order_id} total: {total}")
