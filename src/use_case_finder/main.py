import json

from typer import Typer, Option, Exit
from typing import Annotated, Optional
from rich.markdown import Markdown
from rich.panel import Panel
from rich.console import Console

from .config import configure_logging, load_settings
from .errors import UseCaseFinderError, ValidationError
from .models import SearchQuery, UseCaseSearchResponse
from .pipeline import build_pipeline

app = Typer(help="Find partner use cases similar to a company description.")


def render_results(console: Console, response: UseCaseSearchResponse) -> None:
    if not response.use_cases:
        console.print("[bold yellow]No matching use cases found.[/]")
        return
    for rank, use_case in enumerate(response.use_cases, start=1):
        header = f"**Partner:** {use_case.partner_name or 'n/a'}"
        if use_case.url:
            header += f"  \n**Link:** {use_case.url}"
        panel = Panel(
            Markdown(f"{header}\n\n{use_case.text}"),
            title_align="left",
            title=f"{rank}. {use_case.title or 'Untitled'} ({use_case.match_percent} match)",
            border_style="bold green",
        )
        console.print(panel)
    console.print(f"[bold]Found {response.count} relevant use cases[/]")


@app.command()
def search(
    description: Annotated[
        str,
        Option(
            "--description",
            "-d",
            help="Description of the company to find similar use cases for.",
        ),
    ],
    company: Annotated[
        Optional[str],
        Option("--company", "-c", help="Optional company name."),
    ] = None,
    as_json: Annotated[
        bool,
        Option("--json", help="Print the raw JSON response instead of panels."),
    ] = False,
) -> None:
    """Search the use case index once and print the matches."""
    console = Console()
    try:
        settings = load_settings()
        configure_logging(settings.log_level)
        query = SearchQuery(company_name=company, description=description)
        if not query.has_description():
            raise ValidationError("description is required")
        with console.status(status="Searching for similar use cases..."):
            response = build_pipeline(settings).search(query)
    except ValidationError as exc:
        console.print(f"[bold red]{exc.message}[/]")
        raise Exit(code=2)
    except UseCaseFinderError as exc:
        console.print(f"[bold red]Error:[/] {exc.message}")
        raise Exit(code=1)

    if as_json:
        console.print_json(json.dumps(response.to_payload()))
    else:
        render_results(console, response)


@app.command()
def serve(
    host: Annotated[str, Option("--host", help="Interface to bind.")] = "127.0.0.1",
    port: Annotated[int, Option("--port", "-p", help="Port to listen on.")] = 8000,
) -> None:
    """Run the HTTP API."""
    from .server import run_server

    run_server(host=host, port=port)
