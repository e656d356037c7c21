"""Link Audit CLI — entry-point for audit runs and the validation service.

Usage:
    python cli/main.py --help

Commands:
    audit   → fetch content, extract links and stream validation results
    serve   → run the link validation service (POST /ping)
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from linkaudit.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import logging
from typing import Optional

import typer

from cli.rendering import render_group, render_heading
from linkaudit.config import configure_logging, settings
from linkaudit.errors import LinkAuditError, NoEligibleContentError, NoLinksFoundError
from linkaudit.links.models import LinkGroup
from linkaudit.pipeline import AuditOptions, run_audit

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="linkaudit",
    help="Audit external links in rich-text content.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="Logging level (default: LOG_LEVEL or INFO)."),
) -> None:
    configure_logging(log_level)


# ---------------------------------------------------------------------------
# audit
# ---------------------------------------------------------------------------
@app.command("audit")
def audit(
    project: str = typer.Option(..., "--project", help="Project (environment) ID."),
    language: Optional[str] = typer.Option(None, help="Language codename to audit."),
    preview_key: Optional[str] = typer.Option(
        None, "--preview-key", envvar="PREVIEW_API_KEY", help="Preview API key; audits unpublished content."
    ),
    service_url: Optional[str] = typer.Option(None, "--service-url", help="Validation service /ping URL."),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", min=1, help="Content items per request."),
) -> None:
    """Check every external link in the project's rich-text elements."""
    options = AuditOptions(
        project_id=project,
        language=language,
        preview_key=preview_key,
        service_url=service_url,
        chunk_size=chunk_size,
    )

    def on_found(count: int) -> None:
        typer.secho(f"[audit] {count} URLs found for testing", fg=typer.colors.GREEN)
        typer.echo(render_heading())

    def on_group(group: LinkGroup, content_url: str) -> None:
        for line in render_group(group, content_url):
            typer.echo(line)

    try:
        report = run_audit(options, on_group=on_group, on_found=on_found)
    except (NoEligibleContentError, NoLinksFoundError) as exc:
        logger.warning("Audit stopped: %s", exc)
        typer.secho(f"[audit] {exc}", fg=typer.colors.YELLOW)
        return
    except LinkAuditError as exc:
        logger.exception("Audit failed")
        typer.secho(f"[audit] {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    typer.echo("")
    typer.echo(f"[audit] Checked {report.link_count} URL(s) in {len(report.groups)} content item(s).")
    failing = [g for g in report.groups if any(link.outcome != "ok" for link in g.links)]
    for group in failing:
        typer.echo(f"  {group.content_item_name}: {report.content_url(group)}")


# ---------------------------------------------------------------------------
# serve
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: SERVER_HOST)."),
    port: Optional[int] = typer.Option(None, help="Port (default: SERVER_PORT)."),
) -> None:
    """Run the link validation service."""
    import uvicorn

    bind_host = host or settings.server_host
    bind_port = port or settings.server_port
    typer.echo(f"[serve] Listening on {bind_host}:{bind_port}")
    uvicorn.run("linkaudit.api.app:app", host=bind_host, port=bind_port)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
