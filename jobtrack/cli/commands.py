"""CLI command implementations — `log`, `sync` and `view`."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from pathlib import Path

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from jobtrack.config import ConfigError, Settings
from jobtrack.intake.flow import IntakeError, IntakeFlow, IntakeForm, UrlWatcher
from jobtrack.intake.sources import OTHER_SOURCE, SOURCE_CHOICES
from jobtrack.macos.shortcuts import ShortcutError, ShortcutRunner
from jobtrack.matching.email_parser import build_gmail_search_query
from jobtrack.notion.database import ApplicationsDatabase, NotionError, database_url
from jobtrack.storage.prefs import AUTO_REFRESH_DEFAULT, AUTO_REFRESH_KEY, PreferenceStore
from jobtrack.sync.flow import SyncFlow, summary_lines

logger = logging.getLogger(__name__)
console = Console(width=200)


def _open_database(settings: Settings) -> ApplicationsDatabase:
    settings.require_notion()
    return ApplicationsDatabase.from_token(settings.notion_token, settings.database_id)


# ── jobtrack log ─────────────────────────────────────────────────────────────────


@click.command()
@click.option(
    "--auto-refresh/--no-auto-refresh",
    default=None,
    help="Parse the posting with AI when the form opens. Remembered for next time.",
)
@click.pass_obj
def log(settings: Settings, auto_refresh: bool | None) -> None:
    """Log the job posting open in the browser to Notion."""
    asyncio.run(_log_async(settings, auto_refresh))


def _resolve_auto_refresh(settings: Settings, override: bool | None) -> bool:
    prefs = PreferenceStore(settings.prefs_path)
    try:
        if override is not None:
            prefs.set_bool(AUTO_REFRESH_KEY, override)
            return override
        return prefs.get_bool(AUTO_REFRESH_KEY, AUTO_REFRESH_DEFAULT)
    finally:
        prefs.close()


async def _log_async(settings: Settings, auto_refresh_override: bool | None) -> None:
    try:
        database = _open_database(settings)
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        return

    auto_refresh = _resolve_auto_refresh(settings, auto_refresh_override)
    flow = IntakeFlow(settings, database, ShortcutRunner())
    parse_with_ai = auto_refresh

    while True:
        status_text = "Parsing job with AI..." if parse_with_ai else "Reading browser tab..."
        with console.status(status_text):
            try:
                form = await flow.load(parse_with_ai)
            except IntakeError as exc:
                console.print(f"[red]Error: {exc}[/red]")
                return

        _print_form_header(form)
        # Tab changes only matter when the form would be re-parsed for the new page.
        watcher: UrlWatcher | None = None
        if auto_refresh and form.url:
            watcher = UrlWatcher(
                form.url,
                flow.current_url,
                on_change=lambda url: console.print(
                    f"\n[yellow]Browser tab changed to {url}[/yellow]"
                ),
            )
            watcher.start()
        try:
            edited = await asyncio.to_thread(_prompt_form, form, flow.resumes)
            action = await asyncio.to_thread(
                click.prompt,
                "Submit? (y)es / (r)efresh / (n)o",
                type=click.Choice(["y", "r", "n"], case_sensitive=False),
                default="y",
            )
        finally:
            if watcher is not None:
                await watcher.stop()

        action = action.lower()
        if action == "n":
            flow.cancel()
            console.print("[dim]Cancelled.[/dim]")
            return

        if action == "r":
            flow.form = edited
            parse_with_ai = True
            continue

        if (
            watcher is not None
            and watcher.changed.is_set()
            and click.confirm(
                "The browser tab changed. Reload the form for the new page?", default=True
            )
        ):
            flow.form = edited
            parse_with_ai = True
            continue

        await _submit(flow, edited)
        return


def _print_form_header(form: IntakeForm) -> None:
    console.print(
        Panel(
            f"[bold]{form.company or '—'}[/bold]  {form.role}\n"
            f"[dim]{form.url}[/dim]\n"
            f"Source: {form.source}",
            title="[bold]Log Application[/bold]",
            border_style="blue",
        )
    )


def _prompt_form(form: IntakeForm, resumes: list[str]) -> IntakeForm:
    """Ask for every field, offering the loaded values as defaults."""
    company = click.prompt("Company", default=form.company)
    role = click.prompt("Role", default=form.role)
    location = click.prompt("Location", default=form.location, show_default=bool(form.location))
    timezone = click.prompt("Timezone", default=form.timezone, show_default=bool(form.timezone))
    source = click.prompt(
        "Source",
        type=click.Choice(SOURCE_CHOICES, case_sensitive=False),
        default=form.source or OTHER_SOURCE,
        show_choices=False,
    )
    resume, dropped_file = _choose_resume(form.resume, resumes)
    return replace(
        form,
        company=company.strip(),
        role=role.strip(),
        location=location.strip(),
        timezone=timezone.strip(),
        source=source,
        resume=resume,
        dropped_file=dropped_file,
    )


def _choose_resume(current: str, resumes: list[str]) -> tuple[str, str | None]:
    """Pick a listed resume by number or give a path to a new PDF.

    Returns ``(resume_name, dropped_file)``; ``dropped_file`` is set only for
    a PDF that still has to be copied into the resume folder.
    """
    if resumes:
        table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("#", style="dim", width=3)
        table.add_column("Resume")
        for i, name in enumerate(resumes, start=1):
            table.add_row(str(i), name)
        console.print(table)

    default = str(resumes.index(current) + 1) if current in resumes else ""
    while True:
        answer = click.prompt(
            "Resume (number, or path to a PDF; blank for none)",
            default=default,
            show_default=bool(default),
        ).strip()
        if not answer:
            return "", None
        if answer.isdigit() and 1 <= int(answer) <= len(resumes):
            return resumes[int(answer) - 1], None
        path = Path(answer).expanduser()
        if path.is_file() and path.suffix.lower() == ".pdf":
            return path.name, str(path)
        console.print(f"[red]Not a listed resume or a PDF file: {answer}[/red]")


async def _submit(flow: IntakeFlow, form: IntakeForm) -> None:
    with console.status("Logging to Notion..."):
        try:
            result = await flow.submit(form)
        except IntakeError as exc:
            console.print(f"[red]{exc}[/red]")
            return

    if result.resume_copied:
        console.print(f"[dim]Resume copied to folder: {result.resume}[/dim]")
    console.print(f"[green]✅ Logged![/green] {form.company} — {form.role}")


# ── jobtrack sync ────────────────────────────────────────────────────────────────


@click.command()
@click.option("--show-query", is_flag=True, help="Print the Gmail search query and exit.")
@click.option("--days", default=14, show_default=True, help="Days of mail the query covers.")
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Apply updates without asking.")
@click.pass_obj
def sync(settings: Settings, show_query: bool, days: int, assume_yes: bool) -> None:
    """Update application statuses from recent job emails."""
    if show_query:
        click.echo(build_gmail_search_query(days))
        return
    asyncio.run(_sync_async(settings, assume_yes))


async def _sync_async(settings: Settings, assume_yes: bool) -> None:
    try:
        database = _open_database(settings)
    except ConfigError as exc:
        console.print(f"[red]{exc}[/red]")
        return

    flow = SyncFlow(ShortcutRunner(), database)
    try:
        with console.status("Checking job emails..."):
            plan = await flow.prepare()
    except (ShortcutError, NotionError) as exc:
        console.print(f"[red]❌ Sync failed: {exc}[/red]")
        return

    reason = plan.skip_reason
    if reason is not None:
        flow.cancel()
        console.print(f"[yellow]{reason}[/yellow]")
        return

    table = Table(box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("Company", max_width=30)
    table.add_column("Role", max_width=34)
    table.add_column("From email", max_width=30)
    table.add_column("New status", width=12)
    for pending in plan.pending:
        table.add_row(
            pending.application_company,
            pending.application_role,
            pending.update.company,
            f"[bold]{pending.new_status.value}[/bold]",
        )
    console.print(table)
    console.print(f"[dim]{summary_lines(plan)[-1]}[/dim]")

    if not assume_yes and not click.confirm(
        f"Update {len(plan.pending)} application(s)?", default=True
    ):
        flow.cancel()
        console.print("[dim]Cancelled.[/dim]")
        return

    report = await flow.apply(plan)
    if report.succeeded:
        console.print(
            f"[green]✅ Updated {report.succeeded}/{report.total}:[/green] "
            + ", ".join(report.details)
        )
    else:
        console.print("[yellow]No updates applied[/yellow]")
    if report.failed:
        console.print(f"[red]{report.failed} update(s) failed[/red]")


# ── jobtrack view ────────────────────────────────────────────────────────────────


@click.command()
@click.pass_obj
def view(settings: Settings) -> None:
    """Open the applications database in the Notion app."""
    if settings.database_id:
        url = database_url(settings.database_id)
    elif settings.database_url:
        url = settings.database_url
    else:
        console.print("[red]Missing setting(s): NOTION_DATABASE_ID[/red]")
        return
    click.launch(url)
    console.print("📋 Opening Job Tracker...")
