"""Synthetic seed records.

Record keys are property names from the bundled schemas. Dates are offsets
from ``now``, so a fixed clock gives byte-identical output.
"""
from datetime import datetime, timedelta
from typing import Any, Dict, List

SEED_COUNTS: Dict[str, Dict[str, int]] = {
    "starter": {"projects": 2, "tasks": 10, "clients": 1},
    "professional": {"projects": 5, "tasks": 25, "clients": 1, "materials": 3, "vendors": 3},
    "enterprise": {"projects": 8, "tasks": 40, "clients": 1, "materials": 3, "vendors": 3},
}

TASK_TYPES = ["Foundation", "Framing", "Electrical", "Plumbing", "Roofing", "Finishing"]

SAMPLE_MATERIALS = [
    {"Name": "Concrete", "Unit": "cubic yards", "Unit Cost": 120, "Supplier": "ABC Concrete"},
    {"Name": "Steel Rebar", "Unit": "tons", "Unit Cost": 800, "Supplier": "Steel Supply Co"},
    {"Name": "2x4 Lumber", "Unit": "board feet", "Unit Cost": 0.75, "Supplier": "Lumber Depot"},
]

SAMPLE_VENDORS = [
    {"Name": "ABC Concrete", "Vendor Type": "Material Supplier", "Contact Email": "orders@abcconcrete.com"},
    {"Name": "Steel Supply Co", "Vendor Type": "Material Supplier", "Contact Email": "sales@steelsupply.com"},
    {"Name": "Elite Electrical", "Vendor Type": "Subcontractor", "Contact Email": "jobs@eliteelectric.com"},
]


def seed_record_total(tier: str) -> int:
    return sum(SEED_COUNTS.get(tier, {}).values())


def _day(now: datetime, offset_days: int) -> str:
    return (now + timedelta(days=offset_days)).date().isoformat()


def generate_projects(count: int, client: str, now: datetime) -> List[Dict[str, Any]]:
    projects = []
    for i in range(1, count + 1):
        if i == 1:
            status = "In Progress"
        elif i == 2:
            status = "Planning"
        else:
            status = "Not Started"
        projects.append({
            "Name": f"{client} Project {i}",
            "Status": status,
            "Project Type": "Commercial Construction",
            "Budget": 100000 * i,
            "Start Date": _day(now, i * 7),
            "Description": f"Sample construction project {i} for {client}",
        })
    return projects


def generate_tasks(count: int, now: datetime) -> List[Dict[str, Any]]:
    tasks = []
    for i in range(1, count + 1):
        if i % 3 == 0:
            status = "Completed"
        elif i % 3 == 1:
            status = "In Progress"
        else:
            status = "Not Started"
        tasks.append({
            "Name": f"{TASK_TYPES[i % len(TASK_TYPES)]} - Task {i}",
            "Status": status,
            "Priority": "High" if i % 4 == 0 else "Normal",
            "Due Date": _day(now, i),
        })
    return tasks


def generate_clients(client: str) -> List[Dict[str, Any]]:
    return [{
        "Name": client,
        "Client Type": "Primary Client",
        "Contact Email": "project@example.com",
        "Phone": "(555) 123-4567",
        "Relationship": "Active",
    }]


def generate_sample_data(tier: str, client: str, now: datetime) -> Dict[str, List[Dict[str, Any]]]:
    """
    Generate seed records for every resource type the tier seeds.

    Args:
        tier: Tier identifier
        client: Client display name, used in record titles
        now: Reference time for date fields

    Returns:
        Mapping of resource-type name to a list of records
    """
    counts = SEED_COUNTS[tier]
    generators = {
        "projects": lambda n: generate_projects(n, client, now),
        "tasks": lambda n: generate_tasks(n, now),
        "clients": lambda n: generate_clients(client)[:n],
        "materials": lambda n: [dict(m) for m in SAMPLE_MATERIALS[:n]],
        "vendors": lambda n: [dict(v) for v in SAMPLE_VENDORS[:n]],
    }
    return {name: generators[name](count) for name, count in counts.items()}
