"""Command-line interface for the dossier engine."""

import asyncio
import json
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from .config import create_from_profile, list_profiles, load_config
from .exceptions import DossierError
from .orchestration import AgentState, GenerationSettings, SynthesizedResearch

app = typer.Typer(
    name="dossier",
    help="Multi-agent research dossiers and book drafts.",
    add_completion=False,
)

_STATUS_MARKS = {
    "PENDING": " ",
    "RUNNING": "~",
    "COMPLETED": "+",
    "FAILED": "x",
}


def _print_progress(states: list[AgentState]) -> None:
    """Render one progress line per status change on stderr."""
    line = "  ".join(f"[{_STATUS_MARKS[s.status.value]}] {s.name}" for s in states)
    typer.echo(line, err=True)


def _fail(error: Exception) -> NoReturn:
    """Report a failure on stderr and exit with status 1."""
    # KeyError quotes its message
    message = error.args[0] if isinstance(error, KeyError) and error.args else error
    stage = getattr(error, "stage", None) or getattr(error, "details", {}).get("stage")
    prefix = f"Error ({stage})" if stage else "Error"
    typer.echo(f"{prefix}: {message}", err=True)
    raise typer.Exit(1)


def _write(payload: dict, output: Path | None) -> None:
    text = json.dumps(payload, indent=2, ensure_ascii=False)
    if output:
        output.write_text(text)
        typer.echo(f"Wrote {output}", err=True)
    else:
        typer.echo(text)


def _print_research(research: SynthesizedResearch) -> None:
    typer.echo(f"Summary:\n  {research.summary}\n")
    typer.echo(f"Ethical rating: {research.ethical_rating}/10")
    typer.echo(f"Profit potential: {research.profit_potential}\n")

    if research.market_stats:
        typer.echo("Market stats:")
        for stat in research.market_stats:
            typer.echo(f"  - {stat.label}: {stat.value} ({stat.context})")
        typer.echo()

    if research.hidden_costs:
        typer.echo("Hidden costs:")
        for cost in research.hidden_costs:
            typer.echo(f"  - {cost.label}: {cost.value}")
        typer.echo()

    for case in research.case_studies:
        typer.echo(f"[{case.type}] {case.name}: {case.outcome} ({case.revenue})")


@app.command()
def research(
    topic: Annotated[str, typer.Argument(help="Topic to investigate")],
    profile: Annotated[
        str,
        typer.Option("--profile", "-p", help="Configuration profile"),
    ] = None,
    output_format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = "text",
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Write JSON to this file"),
    ] = None,
):
    """
    Run every research agent on TOPIC and print the synthesized dossier.

    Examples:

        dossier research "dropshipping"

        dossier research "crypto trading bots" --format json -o dossier.json

        dossier research "print on demand" --profile test
    """
    if output_format not in ("text", "json"):
        typer.echo("Error: Format must be one of: text, json", err=True)
        raise typer.Exit(1)

    try:
        result = asyncio.run(_research_async(topic, profile))
    except (DossierError, KeyError, ValueError) as e:
        _fail(e)

    if output_format == "json" or output:
        _write(result.model_dump(by_alias=True), output)
    else:
        _print_research(result)


async def _research_async(topic: str, profile: str | None) -> SynthesizedResearch:
    """Async implementation of research."""
    config = load_config(profile)
    backend, coordinator, _ = create_from_profile(config)

    async with backend:
        return await coordinator.execute(topic, on_progress=_print_progress)


@app.command()
def draft(
    topic: Annotated[str, typer.Argument(help="Book topic")],
    profile: Annotated[
        str,
        typer.Option("--profile", "-p", help="Configuration profile"),
    ] = None,
    length: Annotated[
        int,
        typer.Option("--length", "-l", min=1, max=3, help="1 nano, 2 standard, 3 extensive"),
    ] = 2,
    images: Annotated[
        int,
        typer.Option("--images", "-i", min=1, max=3, help="1 minimal, 2 standard, 3 heavy"),
    ] = 2,
    tech: Annotated[
        int,
        typer.Option("--tech", min=0, max=5, help="Technical depth 0-5"),
    ] = 2,
    word_count: Annotated[
        str,
        typer.Option("--word-count", help="Target word count"),
    ] = None,
    tone: Annotated[str, typer.Option("--tone", help="Writing tone")] = None,
    visual_style: Annotated[
        str,
        typer.Option("--visual-style", help="Visual design direction"),
    ] = None,
    custom_spec: Annotated[
        str,
        typer.Option("--spec", help="Custom specification text"),
    ] = None,
    front_cover: Annotated[
        str,
        typer.Option("--front-cover", help="Front cover art instructions"),
    ] = None,
    back_cover: Annotated[
        str,
        typer.Option("--back-cover", help="Back cover art instructions"),
    ] = None,
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Write JSON to this file"),
    ] = None,
):
    """
    Research TOPIC, then write a book draft from the dossier (JSON output).

    Examples:

        dossier draft "dropshipping" --length 1 --images 3

        dossier draft "affiliate marketing" --tone "Deadpan" -o book.json

        dossier draft "crypto" --front-cover "Neon skyline" --back-cover "Empty wallet"
    """
    settings = GenerationSettings(
        length_level=length,
        image_density=images,
        tech_level=tech,
        target_word_count=word_count,
        tone=tone,
        visual_style=visual_style,
        custom_spec=custom_spec,
        front_cover_prompt=front_cover,
        back_cover_prompt=back_cover,
    )

    try:
        result = asyncio.run(_draft_async(topic, profile, settings))
    except (DossierError, KeyError, ValueError) as e:
        _fail(e)

    _write(result, output)


async def _draft_async(topic: str, profile: str | None, settings: GenerationSettings) -> dict:
    """Async implementation of draft."""
    config = load_config(profile)
    backend, coordinator, author = create_from_profile(config)

    async with backend:
        research = await coordinator.execute(topic, on_progress=_print_progress)
        typer.echo("Research complete, writing draft...", err=True)
        book = await author.generate_draft(topic, research, settings)

    return {
        "research": research.model_dump(by_alias=True),
        "draft": book.model_dump(by_alias=True),
    }


@app.command()
def profiles():
    """List available configuration profiles."""
    typer.echo("Available profiles:\n")
    for name, profile in list_profiles().items():
        typer.echo(f"  {name}")
        typer.echo(f"    Backend: {profile.service.backend}")
        typer.echo(f"    Model: {profile.service.model or 'default'}")
        typer.echo(f"    Agents: {', '.join(profile.research.agents)}")
        typer.echo(f"    Retries: {profile.retry.max_retries} (initial delay {profile.retry.initial_delay}s)")
        typer.echo()


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
