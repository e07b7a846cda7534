"""Command-line interface for the translation workbench."""

import asyncio
import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .clients.glotpress_client import GlotPressClient
from .clients.store_client import TranslationStoreClient
from .config import config
from .constants import LOCALES, PROJECTS, get_locale, get_project
from .errors import FetchError, LingoError
from .logging_config import setup_logging
from .models.session import SessionState, StartSessionOptions, TranslationForPreview
from .models.submission import TranslationFilters
from .preview.playground import (
    PreviewConfig,
    generate_preview_url,
    generate_translation_po,
    map_locale_to_wp_locale,
)
from .session.tracker import SessionTracker

console = Console()

SKIP_COMMAND = "/skip"
QUIT_COMMAND = "/quit"


def _resolve_project(project: str) -> tuple[str, Optional[str]]:
    """Map a project id to its GlotPress slug; unknown values are used as slugs."""
    known = get_project(project)
    if known:
        return known.slug, known.name
    return project, None


@click.group()
@click.version_option(version="0.1.0")
@click.option("--log-level", default=None, help="Log level (defaults to LINGO_LOG_LEVEL)")
def cli(log_level: Optional[str]):
    """Wappu Lingo: translate WordPress strings a few at a time."""
    setup_logging(log_level, console=Console(stderr=True))


@cli.command()
@click.option(
    "--project", "-p",
    default=lambda: config.default_project,
    help="Project id (e.g. 'woocommerce') or GlotPress slug"
)
@click.option(
    "--locale", "-l",
    default=lambda: config.default_locale,
    help="GlotPress locale code (e.g. 'pt-br')"
)
@click.option(
    "--count", "-n",
    type=click.IntRange(min=1),
    default=lambda: config.strings_per_session,
    help="Number of strings in the session"
)
@click.option("--user-id", "-u", default=None, help="User id to store translations under")
@click.option("--user-email", default=None, help="User email stored with translations")
@click.option(
    "--no-persist",
    is_flag=True,
    help="Do not send translations to the store"
)
@click.option(
    "--preview",
    is_flag=True,
    help="Print a WordPress Playground preview URL at the end"
)
@click.option(
    "--output", "-o",
    "output_path",
    type=click.Path(),
    help="Write the session's translations to a .po file"
)
def translate(
    project: str,
    locale: str,
    count: int,
    user_id: Optional[str],
    user_email: Optional[str],
    no_persist: bool,
    preview: bool,
    output_path: Optional[str],
):
    """Translate a random sample of untranslated strings."""
    errors = config.validate()
    if errors:
        console.print("[red]Configuration errors:[/red]")
        for error in errors:
            console.print(f"  - {error}")
        raise click.Abort()

    project_slug, project_name = _resolve_project(project)
    options = StartSessionOptions(
        project_slug=project_slug,
        locale_slug=locale,
        sample_size=count,
        project_name=project_name,
        user_id=user_id,
        user_email=user_email,
    )

    if not user_id and not no_persist:
        console.print("[yellow]No --user-id given: translations will not be stored[/yellow]")

    tracker = asyncio.run(_run_session(options, persist=not no_persist))

    if tracker.state == SessionState.ERROR:
        console.print(f"[red]Failed to load strings:[/red] {tracker.error}")
        raise click.Abort()

    if tracker.stats.total == 0:
        console.print(f"[green]No untranslated strings for {project_slug} ({locale})[/green]")
        return

    _print_session_summary(tracker)

    translations = tracker.translations_for_preview()
    if not translations:
        return

    known_locale = get_locale(locale)
    wp_locale = known_locale.wp_locale if known_locale else map_locale_to_wp_locale(locale)

    if output_path:
        path = Path(output_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(generate_translation_po(translations, wp_locale), encoding="utf-8")
        console.print(f"[blue]Wrote:[/blue] {output_path}")

    if preview:
        _print_preview_url(project_slug, locale, translations)


async def _run_session(options: StartSessionOptions, persist: bool) -> SessionTracker:
    """Run an interactive session until every string is handled or the user quits."""
    async with GlotPressClient() as glotpress, TranslationStoreClient() as store:
        tracker = SessionTracker(glotpress.fetch_session_strings, store if persist else None)

        with console.status(f"Fetching strings for {options.project_slug} ({options.locale_slug})..."):
            await tracker.start_session(options)

        if tracker.state != SessionState.ACTIVE:
            return tracker

        console.print(
            f"[dim]Type a translation and press Enter. "
            f"Empty input or {SKIP_COMMAND} skips, {QUIT_COMMAND} stops.[/dim]\n"
        )

        while tracker.current_unit is not None:
            unit = tracker.current_unit
            _print_unit(tracker)

            # Prompt in a thread so pending store writes keep running
            text = await asyncio.to_thread(
                click.prompt, "Translation", default="", show_default=False
            )
            text = text.strip()

            if text == QUIT_COMMAND:
                break
            if not text or text == SKIP_COMMAND:
                tracker.skip()
                continue

            tracker.submit(text)
            if unit.plural:
                console.print("[dim]Used for every plural form[/dim]")

        if tracker.pending_tasks:
            with console.status("Saving translations..."):
                await tracker.drain()

        return tracker


def _print_unit(tracker: SessionTracker):
    """Print the current string."""
    unit = tracker.current_unit
    lines = [f"[bold]{escape(unit.singular)}[/bold]"]
    if unit.plural:
        lines.append(f"[cyan]Plural:[/cyan] {escape(unit.plural)}")
    if unit.context:
        lines.append(f"[cyan]Context:[/cyan] {escape(unit.context)}")
    if unit.references:
        lines.append(f"[dim]{escape(', '.join(unit.references[:3]))}[/dim]")

    title = f"{tracker.current_index + 1}/{tracker.stats.total} ({tracker.progress_percent}%)"
    if unit.priority == "high":
        title += " [red]high priority[/red]"

    console.print(Panel("\n".join(lines), title=title))


def _print_session_summary(tracker: SessionTracker):
    """Print session statistics."""
    stats = tracker.stats
    total = stats.total

    table = Table(title="Session Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Percentage", justify="right")

    table.add_row("Total", str(total), "100%")
    table.add_row("Translated", str(stats.completed), f"{stats.completed/total*100:.1f}%")
    table.add_row("Skipped", str(stats.skipped), f"{stats.skipped/total*100:.1f}%")
    remaining = total - stats.completed - stats.skipped
    table.add_row("Not reached", str(remaining), f"{remaining/total*100:.1f}%")

    console.print(table)


def _print_preview_url(project_slug: str, locale: str, translations: list[TranslationForPreview]):
    try:
        url = generate_preview_url(PreviewConfig(
            project_slug=project_slug,
            locale=locale,
            translations=translations,
        ))
    except LingoError as e:
        console.print(f"[yellow]Preview unavailable:[/yellow] {e.message}")
        return

    console.print(Panel(url, title="WordPress Playground preview"))


@cli.command()
@click.option("--project", "-p", default=lambda: config.default_project, help="Project id or slug")
@click.option("--locale", "-l", default=lambda: config.default_locale, help="GlotPress locale code")
@click.option(
    "--limit",
    type=int,
    default=10,
    help="Number of sample strings to show"
)
def untranslated(project: str, locale: str, limit: int):
    """Show the untranslated count and a random sample of strings."""
    project_slug, _ = _resolve_project(project)

    async def _fetch():
        async with GlotPressClient() as glotpress:
            total = await glotpress.get_untranslated_count(project_slug, locale)
            units = await glotpress.fetch_session_strings(project_slug, locale, limit)
            return total, units

    try:
        total, units = asyncio.run(_fetch())
    except FetchError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise click.Abort()

    console.print(f"[cyan]Untranslated strings in {project_slug} ({locale}):[/cyan] {total}")

    if not units:
        console.print("[green]All strings are translated![/green]")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="dim")
    table.add_column("String", max_width=60)
    table.add_column("Context", max_width=30)
    table.add_column("Priority")

    for unit in units:
        table.add_row(unit.id, escape(unit.singular[:60]), escape(unit.context or ""), unit.priority)

    console.print(table)


@cli.command()
@click.option("--user-id", "-u", required=True, help="User id")
@click.option("--project", default=None, help="Filter by project slug")
@click.option("--locale", default=None, help="Filter by locale")
@click.option(
    "--status",
    type=click.Choice(["pending", "submitted", "approved", "rejected"]),
    default=None,
    help="Filter by status"
)
@click.option("--limit", type=int, default=50, help="Page size")
@click.option("--offset", type=int, default=0, help="Page offset")
def history(
    user_id: str,
    project: Optional[str],
    locale: Optional[str],
    status: Optional[str],
    limit: int,
    offset: int,
):
    """List translations you have submitted."""
    filters = TranslationFilters(
        project=project, locale=locale, status=status, limit=limit, offset=offset
    )

    async def _fetch():
        async with TranslationStoreClient() as store:
            return await store.fetch_user_translations(user_id, filters)

    try:
        data = asyncio.run(_fetch())
    except LingoError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise click.Abort()

    rows = data.get("translations") or []
    if not rows:
        console.print("[yellow]No translations found[/yellow]")
        return

    table = Table(title=f"Translations by {user_id}")
    table.add_column("Date", style="dim")
    table.add_column("Project")
    table.add_column("Locale")
    table.add_column("Original", max_width=40)
    table.add_column("Translation", max_width=40)
    table.add_column("Status")

    for row in rows:
        table.add_row(
            (row.get("created_at") or "")[:10],
            row.get("project_slug", ""),
            row.get("locale", ""),
            escape(row.get("original_string") or ""),
            escape(row.get("translation") or ""),
            row.get("status", ""),
        )

    console.print(table)

    meta = data.get("meta") or {}
    console.print(f"[dim]Showing {len(rows)} (offset {meta.get('offset', offset)})[/dim]")


@cli.command()
@click.option("--user-id", "-u", required=True, help="User id")
def stats(user_id: str):
    """Show statistics for your submitted translations."""

    async def _fetch():
        async with TranslationStoreClient() as store:
            return await store.fetch_user_stats(user_id)

    try:
        user_stats = asyncio.run(_fetch())
    except LingoError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise click.Abort()

    console.print(Panel(f"[bold]Total translations:[/bold] {user_stats.total}", title=user_id))

    for title, counts in (
        ("By project", user_stats.by_project),
        ("By locale", user_stats.by_locale),
        ("By status", user_stats.by_status),
        ("By day", user_stats.by_date),
    ):
        if not counts:
            continue
        table = Table(title=title)
        table.add_column("Key", style="cyan")
        table.add_column("Count", justify="right")
        for key, value in sorted(counts.items(), key=lambda item: item[1], reverse=True):
            table.add_row(str(key), str(value))
        console.print(table)


@cli.command()
@click.option("--project", "-p", required=True, help="Project id or slug")
@click.option("--locale", "-l", required=True, help="GlotPress locale code")
@click.option(
    "--input", "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True),
    help="JSON file with a list of {original, translation, context?, plural?}"
)
@click.option(
    "--query",
    is_flag=True,
    help="Carry the blueprint as a base64 query parameter instead of the URL fragment"
)
def preview(project: str, locale: str, input_path: str, query: bool):
    """Build a WordPress Playground preview URL from a translations file."""
    project_slug, _ = _resolve_project(project)

    try:
        records = json.loads(Path(input_path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Invalid JSON:[/red] {e}")
        raise click.Abort()

    try:
        translations = [
            TranslationForPreview(
                original=record["original"],
                translation=record["translation"],
                context=record.get("context"),
                plural=record.get("plural"),
                references=tuple(record.get("references") or ()),
            )
            for record in records
        ]
    except (KeyError, TypeError, AttributeError):
        console.print("[red]Each record needs \"original\" and \"translation\"[/red]")
        raise click.Abort()

    try:
        url = generate_preview_url(
            PreviewConfig(project_slug=project_slug, locale=locale, translations=translations),
            use_query=query,
        )
    except LingoError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        raise click.Abort()

    console.print(url)


@cli.command()
def projects():
    """List the projects available for translation."""
    table = Table(title="Projects")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("GlotPress slug", style="dim")
    table.add_column("Description")

    for project in PROJECTS:
        table.add_row(project.id, project.name, project.slug, project.description)

    console.print(table)


@cli.command()
def locales():
    """List the supported locales."""
    table = Table(title="Locales")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("WordPress locale", style="dim")

    for locale in LOCALES:
        table.add_row(locale.code, locale.name, locale.wp_locale)

    console.print(table)


if __name__ == "__main__":
    cli()
