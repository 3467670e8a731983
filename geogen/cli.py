"""
CLI for GeoGen.

Each command drives one flow of a GeoGenSession and renders the result with
Rich.
"""

import logging
import sys
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from geogen import __version__
from geogen import config as config_module
from geogen.config import Config
from geogen.deeplink import DEFAULT_BASE_URL
from geogen.display import display
from geogen.errors import GeoGenError
from geogen.models import (
    GenerationRequest,
    LocationRecord,
    MapPoint,
    MapsSource,
    PerspectiveOption,
    QualityOption,
    StyleOption,
    WebSource,
)
from geogen.prompts import build_prompt
from geogen.session import GeoGenSession

console = Console()


def _enum_option(enum_cls):
    """click callback turning a loose string into an enum member."""
    def convert(ctx, param, value):
        if value is None:
            return None
        try:
            return enum_cls.from_string(value)
        except ValueError as e:
            raise click.BadParameter(str(e))
    return convert


def selection_options(func):
    """Shared --perspective/--style/--quality/--custom-style options."""
    func = click.option("--custom-style", "custom_style", default=None,
                        help="Free-text style, used with --style custom")(func)
    func = click.option("--quality", "-q", callback=_enum_option(QualityOption), default=None,
                        help="standard, high or ultra")(func)
    func = click.option("--style", "-s", callback=_enum_option(StyleOption), default=None,
                        help="Art style, e.g. cyberpunk, low-poly, custom (see 'geogen options')")(func)
    func = click.option("--perspective", "-p", callback=_enum_option(PerspectiveOption), default=None,
                        help="aerial, street or isometric")(func)
    return func


def _session(
    query: str,
    perspective: Optional[PerspectiveOption] = None,
    style: Optional[StyleOption] = None,
    quality: Optional[QualityOption] = None,
    custom_style: Optional[str] = None,
    link: Optional[str] = None,
) -> GeoGenSession:
    """Session seeded from config defaults, then a deep link, then explicit flags."""
    session = GeoGenSession(config=Config.load())
    if link:
        session.apply_deep_link(link)
    session.select(
        query=query or None,
        perspective=perspective,
        style=style,
        quality=quality,
        custom_style=custom_style,
    )
    return session


def _fail(session: Optional[GeoGenSession], error: Exception) -> None:
    """Report a failed flow and exit."""
    console.print(f"[red]Error:[/red] {escape(str(error))}")
    if session is not None:
        _print_logs(session, limit=3)
    sys.exit(1)


def _print_location(record: LocationRecord) -> None:
    console.print(Panel(Text(record.raw_text.strip()), title=f"[bold]{escape(record.name)}[/bold]", title_align="left"))

    if not record.grounding_sources:
        console.print("[dim]No grounding sources retrieved.[/dim]")
        return

    table = Table(title="Sources", show_lines=False)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Type")
    table.add_column("Title")
    table.add_column("URI", style="cyan", overflow="fold")
    for i, source in enumerate(record.grounding_sources, 1):
        if isinstance(source, WebSource):
            table.add_row(str(i), "web", escape(source.title or "Web Source"), escape(source.uri))
        elif isinstance(source, MapsSource):
            title = source.title or source.place_id or "Maps Source"
            if source.review_snippets:
                title += f" ({len(source.review_snippets)} reviews)"
            table.add_row(str(i), "maps", escape(title), escape(source.uri))
    console.print(table)


def _print_selection(session: GeoGenSession) -> None:
    state = session.state
    lines = [
        f"Location:    {escape(state.query)}",
        f"Perspective: {state.perspective.value}",
        f"Style:       {state.style.value}",
        f"Quality:     {state.quality.value}",
    ]
    if state.style is StyleOption.CUSTOM:
        lines.append(f"Custom:      {escape(state.custom_style) or '[red](empty)[/red]'}")
    console.print(Panel.fit("\n".join(lines), title="Mission Parameters"))


def _print_logs(session: GeoGenSession, limit: int = 10) -> None:
    for line in session.state.logs[:limit]:
        style = "dim"
        if "Error" in line or "failed" in line:
            style = "red"
        elif "Recommendation" in line:
            style = "magenta"
        elif "complete" in line or "acquired" in line:
            style = "green"
        console.print(f"[{style}]{escape(line)}[/{style}]")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """GeoGen - AI-powered search and stylized 3D map visualization."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


@main.command()
@click.argument("query", nargs=-1, required=True)
@click.option("--lat", type=float, default=None, help="Your latitude (optional)")
@click.option("--lon", type=float, default=None, help="Your longitude (optional)")
def resolve(query: tuple, lat: Optional[float], lon: Optional[float]):
    """Look up grounded visual context for a place."""
    session = _session(" ".join(query))
    if lat is not None and lon is not None:
        session.select(coordinates=MapPoint(latitude=lat, longitude=lon))

    try:
        with Progress(SpinnerColumn(), TextColumn("{task.description}"), console=console, transient=True) as progress:
            progress.add_task("SCANNING GLOBAL NETWORK", total=None)
            record = session.fetch_location()
    except (GeoGenError, ValueError) as e:
        _fail(session, e)

    _print_location(record)
    _print_logs(session, limit=2)


@main.command()
@click.argument("query", nargs=-1, required=True)
def recommend(query: tuple):
    """Ask the model for the best perspective and art style for a place."""
    session = _session(" ".join(query))

    try:
        with Progress(SpinnerColumn(), TextColumn("{task.description}"), console=console, transient=True) as progress:
            progress.add_task("ANALYZING VISUAL COMPOSITION", total=None)
            recommendation = session.auto_configure()
    except (GeoGenError, ValueError) as e:
        _fail(session, e)

    console.print(Panel.fit(
        f"[bold]Perspective:[/bold] {recommendation.perspective.value}\n"
        f"[bold]Style:[/bold] {recommendation.style.value}\n\n"
        f"{escape(recommendation.reasoning)}",
        title=f"AI Recommendation: {escape(session.state.location.name)}",
    ))
    console.print(f"[dim]Share:[/dim] {session.share_link()}")


@main.command()
@click.argument("query", nargs=-1, required=False)
@selection_options
@click.option("--auto", is_flag=True, help="Let the model pick perspective and style first")
@click.option("--link", default=None, help="Load settings from a shared deep link")
@click.option("--output", "-o", type=click.Path(), default=None,
              help="Output file or directory (default: configured output_dir)")
@click.option("--inline", is_flag=True, default=False, help="Show the render inline (iTerm2/Kitty/WezTerm)")
@click.option("--show-prompt", is_flag=True, help="Print the prompt sent to the image model")
def generate(
    query: tuple,
    perspective: Optional[PerspectiveOption],
    style: Optional[StyleOption],
    quality: Optional[QualityOption],
    custom_style: Optional[str],
    auto: bool,
    link: Optional[str],
    output: Optional[str],
    inline: bool,
    show_prompt: bool,
):
    """Render a stylized image of a place."""
    session = _session(" ".join(query), perspective, style, quality, custom_style, link)
    if not session.state.query.strip():
        console.print("[red]Error: Give a location, either as an argument or via --link.[/red]")
        sys.exit(1)

    try:
        with Progress(SpinnerColumn(), TextColumn("{task.description}"), console=console, transient=True) as progress:
            task = progress.add_task("SCANNING GLOBAL NETWORK", total=None)

            if auto:
                progress.update(task, description="ANALYZING VISUAL COMPOSITION")
                session.auto_configure()

            progress.update(task, description=f"RENDERING {session.state.perspective.value.upper()} VISUAL")
            image = session.generate_visual()
    except (GeoGenError, ValueError) as e:
        _fail(session, e)

    _print_selection(session)
    if show_prompt:
        console.print(Panel(Text(session.state.prompt), title="Prompt", title_align="left"))

    target = output or session.config.defaults.output_dir
    saved = display.save(image, target, session.state.location.name)
    console.print(f"\n[green]Render saved:[/green] {saved}  [dim]({image.route} / {image.model})[/dim]")

    if inline and not display.show(saved, max_width=80):
        console.print("[dim]Inline preview not supported in this terminal.[/dim]")

    _print_logs(session, limit=4)


@main.command()
@click.argument("query", nargs=-1, required=True)
@click.option("--description", "-d", default="", help="Visual description to ground the prompt with")
@selection_options
def prompt(
    query: tuple,
    description: str,
    perspective: Optional[PerspectiveOption],
    style: Optional[StyleOption],
    quality: Optional[QualityOption],
    custom_style: Optional[str],
):
    """Print the image prompt for a configuration without calling the backend."""
    session = _session(" ".join(query), perspective, style, quality, custom_style)
    state = session.state

    request = GenerationRequest(
        location_name=state.query,
        description=description,
        perspective=state.perspective,
        style=state.style,
        quality=state.quality,
        custom_style_text=state.custom_style,
    )
    for issue in request.validate():
        console.print(f"[yellow]Warning:[/yellow] {issue}")

    click.echo(build_prompt(request))


@main.command()
@click.argument("query", nargs=-1, required=True)
@selection_options
@click.option("--base-url", default=DEFAULT_BASE_URL, show_default=True, help="Base URL for the link")
def share(
    query: tuple,
    perspective: Optional[PerspectiveOption],
    style: Optional[StyleOption],
    quality: Optional[QualityOption],
    custom_style: Optional[str],
    base_url: str,
):
    """Print a deep link that reproduces these settings."""
    session = _session(" ".join(query), perspective, style, quality, custom_style)
    click.echo(session.share_link(base_url=base_url))


@main.command()
def options():
    """List the accepted perspectives, styles and quality levels."""
    for title, enum_cls in (
        ("Perspectives", PerspectiveOption),
        ("Art Styles", StyleOption),
        ("Quality", QualityOption),
    ):
        table = Table(title=title)
        table.add_column("Flag value", style="cyan")
        table.add_column("Name")
        for member in enum_cls:
            table.add_row(member.name.lower().replace("_", "-"), member.value)
        console.print(table)


@main.command("setup-keys")
@click.option("--gemini", "gemini_key", required=True, help="Gemini API key")
def setup_keys(gemini_key: str):
    """Store the Gemini API key in the config file."""
    cfg = Config.load()
    cfg.api_keys.gemini = gemini_key
    cfg.save()

    console.print(f"[green]API key saved to {config_module.GLOBAL_CONFIG_FILE}[/green]")


@main.command("check-keys")
def check_keys():
    """Check configuration status."""
    cfg = Config.load()
    issues = cfg.validate()

    console.print(Panel.fit(
        f"[bold]Configuration[/bold]\n\n"
        f"Config file: {config_module.GLOBAL_CONFIG_FILE}\n\n"
        f"[bold]API Key[/bold]\n"
        f"  Gemini: {'[green]configured[/green]' if cfg.api_keys.gemini else '[red]missing[/red]'}\n\n"
        f"[bold]Models[/bold]\n"
        f"  Search: {cfg.models.search}\n"
        f"  Recommend: {cfg.models.recommend}\n"
        f"  Standard image: {cfg.models.inline_image}\n"
        f"  High/Ultra image: {cfg.models.image}\n\n"
        f"[bold]Defaults[/bold]\n"
        f"  Perspective: {cfg.defaults.perspective}\n"
        f"  Style: {cfg.defaults.style}\n"
        f"  Quality: {cfg.defaults.quality}\n"
        f"  Output dir: {cfg.defaults.output_dir}",
        title="GeoGen Config",
    ))

    if issues:
        console.print("\n[red]Issues:[/red]")
        for issue in issues:
            console.print(f"  - {issue}")
        sys.exit(1)
    else:
        console.print("\n[green]All required keys configured![/green]")


if __name__ == "__main__":
    main()
