"""Command line entry point: ``template-deployer <command>``."""
import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional
import uvicorn
from template_deployer.core.config import settings
from template_deployer.core.engine import DeploymentOrchestrator
from template_deployer.core.errors import ArtifactNotFoundError, DeploymentAbortedError, TemplateDeployerError
from template_deployer.core.estimator import compare_tiers, estimate_cost
from template_deployer.core.health import perform_health_check, quick_health_check
from template_deployer.core.logging import configure_logging
from template_deployer.core.notion import NotionClient
from template_deployer.core.report import report_from_snapshot
from template_deployer.core.validation import validate_inputs
from template_deployer.generators.report_gen.render import FORMATS, save_report
from template_deployer.generators.template_gen import ArtifactStore, compile_template
from template_deployer.generators.template_gen.schema_validation import validate_schemas
from template_deployer.phases.base import DeploymentInputs

log = logging.getLogger(__name__)


def _bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes"):
        return True
    if lowered in ("false", "0", "no"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def in_ci() -> bool:
    return bool(os.getenv("CI"))


def cmd_build(args: argparse.Namespace) -> int:
    package = compile_template(
        args.client,
        args.tier,
        args.sample_data,
        schemas_dir=Path(args.schemas_dir) if args.schemas_dir else None,
    )
    path = ArtifactStore(Path(args.dist_dir)).save_build(package)

    print(f"Build package: {path}")
    print(f"  Databases: {package.metadata.database_count}")
    print(f"  Views: {package.metadata.view_count}")
    print(f"  Sample records: {package.metadata.sample_record_count}")
    if package.metadata.defaulted_schemas:
        print(f"  Default schemas used for: {', '.join(package.metadata.defaulted_schemas)}")
    if in_ci():
        print(f"BUILD_ID={package.build_id}")
    return 0


def cmd_deploy(args: argparse.Namespace) -> int:
    inputs = DeploymentInputs(
        client=args.client or settings.client_name,
        tier=args.tier or settings.deployment_tier,
        token=settings.notion_token,
        include_sample_data=settings.include_sample_data,
    )
    orchestrator = DeploymentOrchestrator(inputs, ArtifactStore(Path(args.dist_dir)))
    try:
        report = asyncio.run(orchestrator.deploy())
    except DeploymentAbortedError as e:
        print(f"Deployment aborted in {e.phase}: {e}", file=sys.stderr)
        if e.cleanup_candidates:
            print("Created resources (manual cleanup may be required):", file=sys.stderr)
            for resource in e.cleanup_candidates:
                print(f"  - {resource.type}: {resource.name} ({resource.id})", file=sys.stderr)
        return 1

    print(report.model_dump_json(indent=2))
    return 1 if report.errors > 0 else 0


def cmd_estimate(args: argparse.Namespace) -> int:
    include = not args.no_sample_data
    if args.compare:
        estimates = compare_tiers(include)
        if in_ci():
            for tier, est in estimates.items():
                print(f"{tier}={est.total_units}")
            return 0
        print(f"{'Tier':<14}| {'Units':<8}| {'Time':<10}")
        print("-" * 36)
        for tier, est in estimates.items():
            print(f"{tier:<14}| {est.total_units:<8}| {est.estimated_time.formatted:<10}")
        return 0

    estimate = estimate_cost(args.tier, include)
    if in_ci():
        print(estimate.total_units)
        return 0
    print(estimate.model_dump_json(indent=2))
    return 0


def cmd_validate_schemas(args: argparse.Namespace) -> int:
    report = validate_schemas(Path(args.dir))
    for result in report.files:
        print(f"{'OK ' if result.valid else 'ERR'} {result.file}")
        for error in result.errors:
            print(f"      - {error}")
    for warning in report.warnings:
        print(f"WARN {warning}")
    print(f"Total: {report.total}  Valid: {report.valid}  Invalid: {report.invalid}")
    return 0 if report.ok else 1


def cmd_validate_inputs(args: argparse.Namespace) -> int:
    tier_config = validate_inputs(
        args.tier,
        args.client,
        args.token,
        custom_domain=args.custom_domain,
        integration_config=args.integration_config,
    )
    print(f"All inputs valid: {tier_config.tier_id} tier for {args.client.strip()}")
    return 0


def _notion_client() -> NotionClient:
    if not settings.notion_token:
        raise TemplateDeployerError("NOTION_TOKEN environment variable is required")
    return NotionClient(token=settings.notion_token)


def cmd_health(args: argparse.Namespace) -> int:
    client = _notion_client()
    if args.mode == "quick":
        result = asyncio.run(quick_health_check(client))
        print(result.model_dump_json(indent=2))
        return 0 if result.healthy else 1

    report = asyncio.run(perform_health_check(client))
    print(report.model_dump_json(indent=2))
    if args.output:
        Path(args.output).write_text(report.model_dump_json(indent=2), encoding="utf-8")
    return 0 if report.overall_status == "healthy" else 1


def cmd_report(args: argparse.Namespace) -> int:
    snapshot = ArtifactStore(Path(args.dist_dir)).latest_deployment()
    if snapshot is None:
        raise ArtifactNotFoundError("No deployment metadata found. Run the deploy command first.")
    path = save_report(report_from_snapshot(snapshot), Path(args.output), args.format)
    print(f"Deployment report generated: {path}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    uvicorn.run("template_deployer.main:app", host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="template-deployer", description="Construction template builder and deployer")
    parser.add_argument("--dist-dir", default=settings.dist_dir, help="Artifact directory")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("build", help="Compile a build package")
    p.add_argument("--tier", default=settings.deployment_tier)
    p.add_argument("--client", default=settings.client_name, required=settings.client_name is None)
    p.add_argument("--sample-data", type=_bool, default=True, metavar="true|false")
    p.add_argument("--schemas-dir", default=None)
    p.set_defaults(func=cmd_build)

    p = sub.add_parser("deploy", help="Deploy the latest build package to Notion")
    p.add_argument("--tier", default=None)
    p.add_argument("--client", default=None)
    p.set_defaults(func=cmd_deploy)

    p = sub.add_parser("estimate-cost", help="Estimate deployment cost and time")
    p.add_argument("--tier", default=settings.deployment_tier)
    p.add_argument("--no-sample-data", action="store_true")
    p.add_argument("--compare", action="store_true", help="Compare all tiers")
    p.set_defaults(func=cmd_estimate)

    p = sub.add_parser("validate-schemas", help="Validate schema documents")
    p.add_argument("--dir", default=settings.schemas_dir)
    p.set_defaults(func=cmd_validate_schemas)

    p = sub.add_parser("validate-inputs", help="Validate deployment inputs")
    p.add_argument("--tier", required=True)
    p.add_argument("--client", required=True)
    p.add_argument("--token", required=True)
    p.add_argument("--custom-domain", default=None)
    p.add_argument("--integration-config", default=None, help="JSON object keyed by integration")
    p.set_defaults(func=cmd_validate_inputs)

    p = sub.add_parser("health", help="Check workspace health")
    p.add_argument("mode", nargs="?", choices=["full", "quick"], default="full")
    p.add_argument("--output", default=None, help="Also write the full report to this file")
    p.set_defaults(func=cmd_health)

    p = sub.add_parser("report", help="Render a report for the latest deployment")
    p.add_argument("--format", choices=FORMATS, default="json")
    p.add_argument("--output", default="deployment-report.json")
    p.set_defaults(func=cmd_report)

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", default=settings.api_host)
    p.add_argument("--port", type=int, default=settings.api_port)
    p.set_defaults(func=cmd_serve)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(settings.log_level)
    try:
        return args.func(args)
    except TemplateDeployerError as e:
        log.error("%s", e)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
