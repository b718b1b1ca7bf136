"""Workspace health checks against the Notion API."""
import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, List
from template_deployer.core.notion import NotionClient
from template_deployer.schemas.deployment import utcnow
from template_deployer.schemas.health import CheckResult, HealthReport, QuickHealth

log = logging.getLogger(__name__)

Timer = Callable[[], float]

CHECK_NAMES = ("notion_connectivity", "database_access", "data_integrity", "api_performance", "error_rates")

_UNHEALTHY_ADVICE = {
    "notion_connectivity": "Check Notion API token and network connectivity",
    "database_access": "Verify database permissions and integration setup",
    "data_integrity": "Review and repair corrupted data entries",
    "api_performance": "Consider optimizing API calls or checking for rate limiting",
    "error_rates": "Investigate high error rates and implement proper error handling",
}
_WARNING_ADVICE = {
    "database_access": "Consider setting up additional databases for better organization",
    "api_performance": "Monitor API performance and consider caching strategies",
}

ERROR_RATE_PROBES = 5


async def quick_health_check(client: NotionClient) -> QuickHealth:
    try:
        await client.identity_probe()
    except Exception as e:
        return QuickHealth(healthy=False, timestamp=utcnow(), error=str(e))
    return QuickHealth(healthy=True, timestamp=utcnow())


async def _connectivity(client: NotionClient, timer: Timer) -> tuple:
    user = await client.identity_probe()
    return "healthy", f"Connected as {user.get('name') or user.get('id', 'unknown')}"


async def _database_access(client: NotionClient, timer: Timer) -> tuple:
    found = await client.search(object_type="database", page_size=10)
    if not found:
        return "warning", "No databases found"
    return "healthy", f"Found {len(found)} accessible databases"


async def _data_integrity(client: NotionClient, timer: Timer) -> tuple:
    pages = await client.search(object_type="page", page_size=5)
    issues = 0
    for page_id in pages:
        try:
            await client.retrieve_page(page_id)
        except Exception as e:
            log.warning("Page %s could not be retrieved: %s", page_id, e)
            issues += 1
    if issues:
        return "warning", f"Found {issues} pages with issues"
    return "healthy", f"Checked {len(pages)} pages, no issues found"


async def _api_performance(client: NotionClient, timer: Timer) -> tuple:
    async def timed(call: Callable[[], Awaitable]) -> int:
        start = timer()
        await call()
        return int((timer() - start) * 1000)

    durations = await asyncio.gather(
        timed(client.identity_probe),
        timed(lambda: client.search(object_type="database", page_size=1)),
        timed(lambda: client.search(object_type="page", page_size=1)),
    )
    avg = sum(durations) / len(durations)
    status = "healthy"
    message = f"Average response time: {avg:.0f}ms"
    if avg > 2000:
        status = "unhealthy"
        message += " (too slow)"
    elif avg > 1000:
        status = "warning"
        message += " (slow)"
    return status, f"{message}, max: {max(durations)}ms"


async def _error_rates(client: NotionClient, timer: Timer) -> tuple:
    failures = 0
    for _ in range(ERROR_RATE_PROBES):
        try:
            await client.identity_probe()
        except Exception:
            failures += 1
    rate = failures * 100 / ERROR_RATE_PROBES
    status = "healthy"
    if rate > 20:
        status = "unhealthy"
    elif rate > 5:
        status = "warning"
    return status, f"Error rate: {rate:.0f}% ({failures}/{ERROR_RATE_PROBES} calls failed)"


_CHECKS = {
    "notion_connectivity": _connectivity,
    "database_access": _database_access,
    "data_integrity": _data_integrity,
    "api_performance": _api_performance,
    "error_rates": _error_rates,
}


def overall_health(checks: Dict[str, CheckResult]) -> tuple:
    statuses = [c.status for c in checks.values()]
    healthy = statuses.count("healthy")
    warning = statuses.count("warning")
    score = round((healthy * 100 + warning * 50) / len(statuses)) if statuses else 0
    if "unhealthy" in statuses:
        return "unhealthy", score
    if warning:
        return "warning", score
    return "healthy", score


def health_recommendations(checks: Dict[str, CheckResult]) -> List[str]:
    recs = []
    for name, result in checks.items():
        if result.status == "unhealthy" and name in _UNHEALTHY_ADVICE:
            recs.append(_UNHEALTHY_ADVICE[name])
        elif result.status == "warning" and name in _WARNING_ADVICE:
            recs.append(_WARNING_ADVICE[name])
    return recs


async def perform_health_check(client: NotionClient, timer: Timer = time.perf_counter) -> HealthReport:
    """
    Run the five workspace checks sequentially.

    A check that raises is reported as unhealthy; the remaining checks
    still run.

    Args:
        client: NotionClient bound to the token under test
        timer: Monotonic clock in seconds

    Returns:
        HealthReport with per-check results, overall status and score
    """
    started = timer()
    checks: Dict[str, CheckResult] = {}
    for name in CHECK_NAMES:
        check_start = timer()
        try:
            status, message = await _CHECKS[name](client, timer)
        except Exception as e:
            status, message = "unhealthy", f"{name.replace('_', ' ').capitalize()} check failed: {e}"
        checks[name] = CheckResult(
            status=status,
            message=message,
            duration_ms=int((timer() - check_start) * 1000),
        )
        log.info("Health check %s: %s", name, status)

    status, score = overall_health(checks)
    return HealthReport(
        timestamp=utcnow(),
        overall_status=status,
        overall_score=score,
        total_duration_ms=int((timer() - started) * 1000),
        checks=checks,
        recommendations=health_recommendations(checks),
    )
