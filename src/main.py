"""CLI entry point: connection plan and readiness report for element definitions.

Resolves every element of a visualisation file through one dataset-scoped
connection pool, applies any payloads bundled in the file, and reports
which connections are shared and which elements are ready.
"""

import argparse
import os
import sys
from collections import Counter
from typing import Any

from dotenv import find_dotenv, load_dotenv

from src.core.config import config
from src.core.dataset import Dataset
from src.core.models import DimensionHierarchy
from src.core.visualisation import Element
from src.utils.file_io import ElementDefinitionError, load_element_definitions, write_json_file
from src.utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def load_environment() -> None:
    """Load ``.env`` from the working directory and re-read configuration.

    The config singleton is created on import, before any ``.env`` values
    are in the environment, so it is reloaded here.
    """
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=False)
    config.reload()


def build_dataset(definition: dict[str, Any], dataset_id: str | None = None) -> Dataset:
    """Create a Dataset from the ``dataset`` block of a visualisation file."""
    hierarchies = {
        dim: DimensionHierarchy.from_dict(dim, data)
        for dim, data in (definition.get("hierarchies") or {}).items()
    }
    return Dataset(
        id=dataset_id or str(definition.get("id", "dataset")),
        cut=definition.get("cut"),
        hierarchies=hierarchies,
    )


def build_report(
    dataset: Dataset, elements: list[Element], payloads: dict[str, Any]
) -> dict[str, Any]:
    """Apply payloads to pooled connections and summarise the result.

    Args:
        dataset: Dataset owning the pool.
        elements: Elements built on the dataset.
        payloads: Loaded data keyed by connection fingerprint.

    Returns:
        Report dict with ``connections`` and ``elements`` entries.
    """
    for connection in dataset.pool:
        if connection.id in payloads:
            connection.set_data(payloads[connection.id])

    users: Counter[str] = Counter()
    for element in elements:
        for connection in element.connections:
            users[connection.id] += 1

    return {
        "dataset": dataset.id,
        "connections": [
            {
                "id": conn.id,
                "url": conn.url(),
                "users": users[conn.id],
                "loaded": conn.is_loaded(),
            }
            for conn in dataset.pool
        ],
        "elements": [
            {
                "id": element.get("id"),
                "url": element.url(),
                "connections": len(element.connections),
                "loaded_count": element.loaded_count,
                "ready": element.is_loaded(),
            }
            for element in elements
        ],
    }


def format_report(report: dict[str, Any]) -> str:
    lines = [f"Dataset: {report['dataset']}", "", "Connections:"]
    for conn in report["connections"]:
        status = "loaded" if conn["loaded"] else "pending"
        lines.append(f"  {conn['id']:<50} users={conn['users']:<3} {status}")
    lines.extend(["", "Elements:"])
    for el in report["elements"]:
        status = "ready" if el["ready"] else "not ready"
        lines.append(
            f"  {el['id']!s:<20} connections={el['connections']:<3} "
            f"notifications={el['loaded_count']:<3} {status}"
        )
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    """Main CLI workflow."""
    load_environment()

    parser = argparse.ArgumentParser(
        description="Show how element data requests collapse onto shared connections"
    )
    parser.add_argument("definitions", help="Visualisation JSON file (dataset + elements)")
    parser.add_argument(
        "--dataset-id",
        default=os.getenv("DATASET_ID"),
        help="Override the dataset id used in URLs (default: from the file)",
    )
    parser.add_argument(
        "--visualisation-id",
        default=os.getenv("VISUALISATION_ID", "default"),
        help="Visualisation id used in element URLs",
    )
    parser.add_argument("--output", help="Also write the report as JSON to this path")
    parser.add_argument("--log-level", help="Logging level (default: LOG_LEVEL or INFO)")

    args = parser.parse_args(argv)
    setup_logging(level=args.log_level)

    for issue in config.validate():
        logger.warning("Configuration issue: %s", issue)

    try:
        definitions = load_element_definitions(args.definitions)
    except ElementDefinitionError as e:
        logger.error("Invalid element definitions: %s", e)
        return 1

    dataset = build_dataset(definitions["dataset"], args.dataset_id)
    elements = [
        Element(attrs, dataset, visualisation_id=args.visualisation_id)
        for attrs in definitions["elements"]
    ]
    payloads = definitions["dataset"].get("payloads") or {}

    report = build_report(dataset, elements, payloads)
    print(format_report(report))

    if args.output:
        write_json_file(report, args.output)
        logger.info("Report written to %s", args.output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
