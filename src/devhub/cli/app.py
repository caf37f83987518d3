import json
from pathlib import Path

import typer
import uvicorn
from rich.console import Console
from rich.table import Table

from devhub.core.config import DevhubConfig
from devhub.core.exceptions import DevhubError, EntityNotFoundError
from devhub.core.logging import configure_logging
from devhub.core.repository import ContentRepository
from devhub.core.seed import load_promo_or_empty, load_seed

app = typer.Typer(name="devhub", help="Serve the content hub from a seed document.", no_args_is_help=True)

console = Console()

SiteRootOption = typer.Option(None, "--site-root", help="Site root holding .devhub.toml and the content files.")


def _load_config(site_root: Path | None) -> DevhubConfig:
    return DevhubConfig.load(site_root)


@app.command()
def serve(
    site_root: Path | None = SiteRootOption,
    host: str | None = typer.Option(None, "--host", help="Bind address (overrides config)."),
    port: int | None = typer.Option(None, "--port", help="Bind port (overrides config)."),
    log_level: str | None = typer.Option(None, "--log-level", help="Logging level, e.g. DEBUG."),
):
    """
    Load the content and serve it over HTTP.
    """
    from devhub.web.app import create_app

    configure_logging(log_level)
    config = _load_config(site_root)
    overrides = {key: value for key, value in (("host", host), ("port", port)) if value is not None}
    if overrides:
        config = config.model_copy(update={"server": config.server.model_copy(update=overrides)})

    try:
        application = create_app(config)
    except (DevhubError, OSError) as e:
        console.print(f"[bold red]Startup failed:[/] {e}")
        raise typer.Exit(code=1) from e

    console.print(f"Listening on http://{config.server.host}:{config.server.port}")
    uvicorn.run(application, host=config.server.host, port=config.server.port, log_config=None)


@app.command()
def check(site_root: Path | None = SiteRootOption):
    """
    Validate the seed document and report dangling references.
    """
    config = _load_config(site_root)
    try:
        seed = load_seed(config.paths.abs_seed_path)
    except DevhubError as e:
        console.print(f"[bold red]Seed check failed:[/] {e}")
        raise typer.Exit(code=1) from e

    repository = ContentRepository(seed)
    promo = load_promo_or_empty(config.paths.abs_promo_path)

    table = Table(title="Content")
    table.add_column("Collection", style="bold cyan")
    table.add_column("Entries", justify="right")
    for name, size in (
        ("ecosystems", len(repository.ecosystems)),
        ("tools", len(repository.tools)),
        ("events", len(repository.events)),
        ("learning_paths", len(repository.learning_paths)),
        ("creators", len(repository.creators)),
        ("posts", len(repository.posts)),
        ("resources", len(repository.resources)),
        ("job_sources", len(repository.job_sources)),
        ("jobs", len(repository.jobs)),
        ("labels", len(repository.labels)),
        ("promo slides", len(promo.slides)),
    ):
        table.add_row(name, str(size))
    console.print(table)

    dangling = repository.dangling_references()
    if not dangling:
        console.print("[bold green]✔[/bold green] All references resolve.")
        return

    report = Table(title="Dangling references")
    report.add_column("Referenced from", style="bold")
    report.add_column("Collection")
    report.add_column("Slug", style="yellow")
    for ref in dangling:
        report.add_row(ref.owner, ref.collection.value, ref.slug)
    console.print(report)
    console.print(f"[bold yellow]![/bold yellow] {len(dangling)} dangling reference(s); they are skipped when pages render.")


@app.command()
def show(
    page: str = typer.Argument(..., help="Route section: home, ecosystems, tools, events, learn, creators, news, jobs."),
    slug: str | None = typer.Argument(None, help="Entity slug for single pages."),
    site_root: Path | None = SiteRootOption,
):
    """
    Print the JSON context of one page.
    """
    from devhub.web.app import build_site

    config = _load_config(site_root)
    try:
        site = build_site(config)
        context = site.composer.compose(page, slug)
    except EntityNotFoundError as e:
        console.print(f"[bold red]Not found:[/] {e}")
        raise typer.Exit(code=1) from e
    except (DevhubError, OSError) as e:
        console.print(f"[bold red]Error:[/] {e}")
        raise typer.Exit(code=1) from e

    typer.echo(json.dumps(context.to_context(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    app()
