"""Typer CLI for Question Companion."""
import asyncio
from typing import List, Optional

import typer
from rich.prompt import Confirm, Prompt

from question_companion.config.settings import apply_overrides, get_config, load_config, set_config
from question_companion.config.logger import (
    configure_logging,
    console,
    print_error,
    print_header,
    print_info,
    print_insights,
    print_progress,
    print_prompts,
    print_success,
    print_summary,
    print_warning,
)
from question_companion.config.types import StepKey
from question_companion.infra.clipboard import UnknownClipboardBackend
from question_companion.pipeline._catalog import get_message, get_steps
from question_companion.pipeline.service import CompanionSession

app = typer.Typer(
    name="question-companion",
    help="Shape your question into a laser-focused brief",
    add_completion=False,
)


@app.callback()
def main(
    config_file: Optional[str] = typer.Option(
        None,
        "--config", "-c",
        help="Path to configuration file",
    ),
    overrides: Optional[List[str]] = typer.Option(
        None,
        "--set", "-s",
        help="Config override as dotted.key=value (repeatable)",
    ),
) -> None:
    """Walk through question, background, goal and constraints, then share a summary."""
    config = load_config(config_file) if config_file else get_config()
    if overrides:
        try:
            config = apply_overrides(config, _parse_overrides(overrides))
        except (KeyError, ValueError) as e:
            print_error(f"Invalid override: {e}")
            raise typer.Exit(1)
    set_config(config)
    configure_logging(config)


@app.command()
def ask(
    copy: Optional[bool] = typer.Option(
        None,
        "--copy/--no-copy",
        help="Copy the summary when done (asks if not given)",
    ),
) -> None:
    """Interactive four-step wizard."""
    print_header(
        "Question Companion",
        "Move through each step, capture the missing pieces, and share a complete context package.",
    )
    try:
        session = CompanionSession()
    except UnknownClipboardBackend as e:
        print_error(str(e))
        raise typer.Exit(1)

    with session:
        asyncio.run(_run_wizard(session, copy))


@app.command()
def summarize(
    question: str = typer.Option("", "--question", "-q", help="The question you are trying to answer"),
    background: str = typer.Option("", "--background", "-b", help="Relevant context"),
    goal: str = typer.Option("", "--goal", "-g", help="What success looks like"),
    constraints: str = typer.Option("", "--constraints", "-k", help="Deadlines, tools, approvals"),
    keywords: Optional[List[str]] = typer.Option(None, "--keyword", "-t", help="Keyword tag (repeatable)"),
    as_json: bool = typer.Option(False, "--json", help="Print the full derived view as JSON"),
    copy: bool = typer.Option(False, "--copy", help="Copy the summary to the clipboard"),
) -> None:
    """Build a summary from options without prompting."""
    try:
        session = CompanionSession()
    except UnknownClipboardBackend as e:
        print_error(str(e))
        raise typer.Exit(1)

    store = session.store
    store.set_question(question)
    store.set_background(background)
    store.set_goal(goal)
    store.set_constraints(constraints)
    for keyword in keywords or []:
        store.toggle_keyword(keyword)

    view = store.view()
    if as_json:
        typer.echo(view.model_dump_json(indent=2))
    else:
        print_info(f"Context score: {view.progress}%")
        print_prompts(view.recommended_prompts, get_message("all_set"))
        print_summary(view.summary, get_message("empty_summary"))

    if copy:
        if asyncio.run(_copy_and_close(session)):
            print_success(get_message("copy_done"))
        else:
            print_warning("Could not copy to clipboard")
            raise typer.Exit(1)
    else:
        session.close()


@app.command()
def steps() -> None:
    """List the wizard steps and keyword chips."""
    for index, step in enumerate(get_steps(), start=1):
        console.print(f"[bold cyan]Step {index}: {step.title}[/bold cyan] [dim]({step.key})[/dim]")
        console.print(f"  {step.description}")
    print_info(f"Keywords: {', '.join(get_config().keywords.catalog)}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", "-H", help="Host to bind"),
    port: int = typer.Option(8000, "--port", "-p", help="Port to bind"),
) -> None:
    """Launch the JSON web API."""
    import uvicorn
    from question_companion.adapters.web.app import create_app

    print_info(f"Starting Question Companion API: http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def _run_wizard(session: CompanionSession, copy: Optional[bool]) -> None:
    store = session.store
    steps = get_steps()

    for index, step in enumerate(steps):
        store.set_stage(step.key)
        view = store.view()
        print_progress(view.progress, steps, view.active_step_index)
        console.print(f"\n[bold magenta]━━━ Step {index + 1}: {step.title} ━━━[/bold magenta]")
        console.print(f"[dim]{step.description}[/dim]")
        console.print(f"[dim italic]{step.placeholder}[/dim italic]")

        current = store.state.field_value(StepKey(step.key))
        value = await _ask(step.label, default=current)
        store.set_field(step.key, value)
        print_insights([store.view().insights[index]])

    catalog = get_config().keywords.catalog
    raw = await _ask(f"Quick keywords ({', '.join(catalog)})", default="")
    for keyword in _split_keywords(raw):
        store.toggle_keyword(keyword)

    view = store.view()
    print_progress(view.progress, steps, view.active_step_index)
    print_insights(view.insights)
    print_prompts(view.recommended_prompts, get_message("all_set"))
    print_summary(view.summary, get_message("empty_summary"))

    if copy is None:
        copy = await asyncio.to_thread(
            Confirm.ask, f"{get_message('copy_idle')}?", default=True, console=console
        )
    if not copy:
        return

    if await session.copy_summary():
        print_success(get_message("copy_done"))
    else:
        print_warning("Could not copy to clipboard. Copy the summary above by hand.")


async def _ask(label: str, default: str = "") -> str:
    # Prompt in a worker thread so the copied-flag timer keeps running
    return await asyncio.to_thread(
        Prompt.ask,
        f"[bold cyan]{label}[/bold cyan]",
        console=console,
        default=default,
        show_default=False,
    )


async def _copy_and_close(session: CompanionSession) -> bool:
    try:
        return await session.copy_summary()
    finally:
        session.close()


def _split_keywords(raw: str) -> List[str]:
    """Split a comma-separated keyword answer, dropping blanks and repeats."""
    seen = []
    for part in raw.split(","):
        keyword = part.strip().lower()
        if keyword and keyword not in seen:
            seen.append(keyword)
    return seen


def _parse_overrides(pairs: List[str]) -> dict:
    overrides = {}
    for pair in pairs:
        if "=" not in pair:
            raise ValueError(f"expected dotted.key=value, got '{pair}'")
        key, value = pair.split("=", 1)
        overrides[key.strip()] = value.strip()
    return overrides


if __name__ == "__main__":
    app()
