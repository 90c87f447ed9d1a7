"""
Flask CLI commands: sheet pull and schedule cleanup.
"""

from __future__ import annotations

import time

import click
from flask import Flask

from .common.datetime_utils import now_local
from .core.constants import DEFAULT_AUTO_SYNC_MINUTES
from .core.exceptions import ConnectivityError
from .container import Container


def register(app: Flask, container: Container) -> None:
    def _pull_once(sheet_id: str) -> bool:
        try:
            report = container.sync_service.pull_students(sheet_id or None)
        except ConnectivityError as e:
            click.echo(f"Sync failed: {e}", err=True)
            return False

        click.echo(
            f"Sync finished: {report.total_rows} rows, {report.created} created, "
            f"{report.updated} updated, {len(report.failures)} failed"
        )
        for failure in report.failures:
            click.echo(f"  row {failure.row_number}: {failure.reason}")
        return True

    @app.cli.command("sync-students")
    @click.option("--sheet-id", default="", help="Sheet to pull from (defaults to GOOGLE_SHEET_ID).")
    @click.option(
        "--every",
        "every_minutes",
        type=int,
        default=None,
        is_flag=False,
        flag_value=DEFAULT_AUTO_SYNC_MINUTES,
        help="Repeat the pull every N minutes until interrupted.",
    )
    def sync_students_command(sheet_id: str, every_minutes):
        """Pull ENROLLMENT rows from the sheet into the student store."""
        if not every_minutes:
            if not _pull_once(sheet_id):
                raise SystemExit(1)
            return

        click.echo(f"Pulling every {every_minutes} minute(s). Press Ctrl+C to stop.")
        try:
            while True:
                _pull_once(sheet_id)
                time.sleep(every_minutes * 60)
        except KeyboardInterrupt:
            click.echo("Stopped.")

    @app.cli.command("cleanup-schedules")
    def cleanup_schedules_command():
        """Delete stale, inactive and long-finished lesson schedules."""
        deleted = container.schedule_service.cleanup_stale(now_local().date())
        click.echo(f"Removed {deleted} schedule(s).")
