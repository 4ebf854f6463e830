from typing import Optional

import typer

from casewatch.domain.scoring import intensity_band
from casewatch.infra.database import resolve_engine
from casewatch.infra.db.hotspots_repository import HotspotsRepository
from casewatch.infra.db.tables import metadata
from casewatch.infra.log_config import configure_logging
from casewatch.jobs.recompute_hotspots import recompute_hotspots

app = typer.Typer(help="CLI for the case hotspot engine")


@app.callback()
def main(log_level: Optional[str] = typer.Option(None, help="Log level (default CASEWATCH_LOG_LEVEL or INFO)")):
    configure_logging(log_level)


@app.command("recompute")
def cli_recompute(
    database_url: Optional[str] = typer.Option(None, help="DATABASE_URL override"),
):
    summary = recompute_hotspots(database_url=database_url)
    if not summary["success"]:
        typer.echo(f"Recompute failed: {summary['message']}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"{summary['hotspotCount']} hotspots ({summary['message']})")


@app.command("hotspots")
def cli_hotspots(
    min_intensity: float = typer.Option(0.0, min=0.0, max=1.0, help="Minimum intensity"),
    limit: int = typer.Option(20, min=1, help="Number of hotspots to show"),
    database_url: Optional[str] = typer.Option(None, help="DATABASE_URL override"),
):
    engine = resolve_engine(database_url=database_url)
    metadata.create_all(engine)
    hotspots = HotspotsRepository(engine).list_hotspots(min_intensity=min_intensity, limit=limit)
    if not hotspots:
        typer.echo("No hotspots stored")
        raise typer.Exit(code=0)
    typer.echo("lat\tlon\tintensity\tband\treports\tlast_report")
    for hs in hotspots:
        typer.echo(
            f"{hs.location.latitude:.5f}\t{hs.location.longitude:.5f}\t{hs.intensity:.2f}\t"
            f"{intensity_band(hs.intensity)}\t{hs.report_count}\t{hs.last_report_date.isoformat()}"
        )


if __name__ == "__main__":
    app()
