"""Plain string renderers for deployment reports (Jinja2-free)."""
from html import escape
from pathlib import Path
from template_deployer import __version__
from template_deployer.schemas.deployment import DeploymentReport

FORMATS = ("json", "markdown", "html")
_SUFFIXES = {"json": ".json", "markdown": ".md", "html": ".html"}


def render_json(report: DeploymentReport) -> str:
    return report.model_dump_json(indent=2)


def render_markdown(report: DeploymentReport) -> str:
    """Render a Markdown report.

    Args:
        report: DeploymentReport to render
    """
    lines = [
        "# Deployment Report",
        "",
        f"**Client:** {report.client}  ",
        f"**Tier:** {report.tier}  ",
        f"**Build:** {report.build_id or '-'}  ",
        f"**Generated:** {report.summary.timestamp.isoformat()}  ",
        f"**Status:** {report.status}  ",
        "",
        "## Summary",
        "",
        f"- **Resources Created:** {report.created_resources}",
        f"- **Databases:** {report.databases}",
        f"- **Pages:** {report.pages}",
        f"- **Deployment Time:** {report.deployment_time_ms}ms",
        f"- **Completed Steps:** {len(report.completed_steps)}",
        f"- **Errors:** {report.errors}",
        "",
        "## Resources Created",
        "",
    ]
    lines.extend(f"- {r.type}: {r.name or r.id}" for r in report.resources)

    if report.error_details:
        lines += ["", "## Errors", ""]
        lines.extend(f"- [{e.phase}] {e.resource}: {e.error}" for e in report.error_details)

    lines += ["", "## Recommendations", ""]
    lines.extend(f"- {r}" for r in report.recommendations)
    lines += ["", "---", f"*Generated by construction-template-deployer v{__version__}*", ""]
    return "\n".join(lines)


def render_html(report: DeploymentReport) -> str:
    """Render a standalone HTML report."""
    status_class = "success" if report.errors == 0 else "error"
    metrics = [
        (report.created_resources, "Resources Created"),
        (report.databases, "Databases"),
        (f"{report.deployment_time_ms}ms", "Deployment Time"),
        (report.errors, "Errors"),
    ]
    lines = [
        "<!DOCTYPE html>",
        "<html>",
        "<head>",
        f"  <title>Deployment Report - {escape(report.client)}</title>",
        "  <style>",
        "    body { font-family: Arial, sans-serif; margin: 20px; }",
        "    .header { background: #f5f5f5; padding: 20px; border-radius: 5px; }",
        "    .summary { display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); gap: 15px; margin: 20px 0; }",
        "    .metric { background: white; border: 1px solid #ddd; padding: 15px; border-radius: 5px; }",
        "    .success { color: green; }",
        "    .error { color: red; }",
        "  </style>",
        "</head>",
        "<body>",
        '  <div class="header">',
        "    <h1>Construction Template Deployment Report</h1>",
        f"    <p><strong>Client:</strong> {escape(report.client)}</p>",
        f"    <p><strong>Tier:</strong> {escape(report.tier)}</p>",
        f"    <p><strong>Generated:</strong> {report.summary.timestamp.isoformat()}</p>",
        f'    <p><strong>Status:</strong> <span class="{status_class}">{escape(report.status)}</span></p>',
        "  </div>",
        '  <div class="summary">',
    ]
    for value, label in metrics:
        lines.append(f'    <div class="metric"><h3>{value}</h3><p>{label}</p></div>')
    lines += ["  </div>", "  <h2>Recommendations</h2>", "  <ul>"]
    lines.extend(f"    <li>{escape(r)}</li>" for r in report.recommendations)
    lines += [
        "  </ul>",
        f"  <footer><p><em>Generated by construction-template-deployer v{__version__}</em></p></footer>",
        "</body>",
        "</html>",
        "",
    ]
    return "\n".join(lines)


_RENDERERS = {"json": render_json, "markdown": render_markdown, "html": render_html}


def render_report(report: DeploymentReport, fmt: str = "json") -> str:
    if fmt not in _RENDERERS:
        raise ValueError(f"Unknown report format: {fmt}")
    return _RENDERERS[fmt](report)


def save_report(report: DeploymentReport, output: Path, fmt: str = "json") -> Path:
    """Write ``report`` in ``fmt``; the output suffix follows the format."""
    path = Path(output).with_suffix(_SUFFIXES[fmt]) if fmt in _SUFFIXES else Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(report, fmt), encoding="utf-8")
    return path
