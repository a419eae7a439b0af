#!/usr/bin/env python3
"""
Mutation Request Preparation

Normalizes a batch of mutation operations and packages it, with the
partial_failure / validate_only options, into the request handed to the
GoogleAdsService.Mutate executor. Nothing is sent from here.

Usage:
    ads-ops-prepare ops/new_labels.json                   # validate_only (default)
    ads-ops-prepare ops/new_labels.json --execute         # validate_only=false
    ads-ops-prepare ops/new_labels.json --customer-id 123-456-7890

Output:
    ops/<name>.mutation.json
    ops/<name>.mutation.md
"""

import json
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from ads_ops.transform.errors import OperationFormatError
from ads_ops.transform.normalize_operations import (
    ENTITIES_REQUIRING_RESOURCE_NAME_IN_CREATE,
    normalize_operations,
)

# =============================================================================
# CONFIGURATION
# =============================================================================

SCRIPT_DIR = Path(__file__).parent
PACKAGE_DIR = SCRIPT_DIR.parent
PROJECT_ROOT = PACKAGE_DIR.parent
CONFIGS_DIR = PACKAGE_DIR / "configs"

PREPARE_VERSION = "M1.0"


class MutationRequestError(Exception):
    """Raised when mutation parameters are invalid."""
    pass


# =============================================================================
# ENVIRONMENT
# =============================================================================


def load_env() -> bool:
    """Load environment variables from the first .env file found."""
    env_paths = [
        PROJECT_ROOT / ".env",
        Path.home() / ".ads-ops" / ".env",
    ]
    for env_path in env_paths:
        if env_path.exists():
            load_dotenv(env_path)
            return True
    return False


def env_flag(name: str, default: bool) -> bool:
    """Read a true/false environment flag."""
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    return value.strip().lower() == "true"


def load_exempt_entities(path: Optional[Path] = None) -> set:
    """Load entity types that keep resource_name on create.

    Falls back to the built-in set if the config file does not exist.
    """
    path = path or CONFIGS_DIR / "create_resource_name_entities.json"
    if not path.exists():
        return set(ENTITIES_REQUIRING_RESOURCE_NAME_IN_CREATE)
    with open(path) as f:
        entities = json.load(f)
    if not isinstance(entities, list) or not all(isinstance(e, str) for e in entities):
        raise MutationRequestError(f"Config {path} must be a JSON list of entity types")
    return set(ENTITIES_REQUIRING_RESOURCE_NAME_IN_CREATE) | set(entities)


# =============================================================================
# REQUEST BUILDER
# =============================================================================


def prepare_mutation(params: dict[str, Any], exempt_entities: Optional[set] = None) -> dict:
    """
    Validate mutation parameters and normalize the operations.

    Args:
        params: Dictionary containing:
            - customer_id: Google Ads customer ID (default: GOOGLE_ADS_CUSTOMER_ID)
            - operations: List of operations (native and/or canonical format)
            - partial_failure: Allow partial failure (default: ADS_OPS_PARTIAL_FAILURE or true)
            - dry_run: Validate only, don't execute (default: ADS_OPS_DRY_RUN or true)
        exempt_entities: Extra entity types whose create payload keeps resource_name

    Returns:
        Request dict for the mutate executor, plus warnings and a summary.

    Raises:
        MutationRequestError: missing customer_id or empty operations
        OperationFormatError: an operation could not be normalized
    """
    customer_id = params.get("customer_id") or os.getenv("GOOGLE_ADS_CUSTOMER_ID")
    operations = params.get("operations")
    partial_failure = params.get("partial_failure")
    dry_run = params.get("dry_run")

    if partial_failure is None:
        partial_failure = env_flag("ADS_OPS_PARTIAL_FAILURE", True)
    if dry_run is None:
        dry_run = env_flag("ADS_OPS_DRY_RUN", True)

    if not customer_id:
        raise MutationRequestError(
            "customer_id is required (either as parameter or GOOGLE_ADS_CUSTOMER_ID env var)"
        )

    if not operations or not isinstance(operations, list):
        raise MutationRequestError(
            "operations array is required and must contain at least one operation"
        )

    normalized = normalize_operations(operations, exempt_entities=exempt_entities)
    ops = normalized["operations"]

    by_entity = {}
    by_operation = {}
    for op in ops:
        by_entity[op["entity"]] = by_entity.get(op["entity"], 0) + 1
        op_type = op.get("operation", "UNKNOWN")
        by_operation[op_type] = by_operation.get(op_type, 0) + 1

    return {
        "customer_id": str(customer_id).replace("-", ""),
        "operations": ops,
        "options": {
            "partial_failure": bool(partial_failure),
            "validate_only": bool(dry_run),
        },
        "warnings": normalized["warnings"],
        "summary": {
            "operations_count": len(ops),
            "transformed_count": len(normalized["warnings"]),
            "by_entity": by_entity,
            "by_operation": by_operation,
        },
    }


# =============================================================================
# REQUEST WRITER
# =============================================================================


class RequestWriter:
    """Writes the prepared mutation request to files."""

    def __init__(self, source_path: Path, output_dir: Path):
        self.source_path = source_path
        self.output_dir = output_dir
        self.request_id = source_path.stem

    def write_request(self, request: dict):
        """Write request to JSON and markdown files."""
        self.output_dir.mkdir(parents=True, exist_ok=True)

        json_path = self.output_dir / f"{self.request_id}.mutation.json"
        with open(json_path, "w") as f:
            json.dump(request, f, indent=2)

        md_path = self.output_dir / f"{self.request_id}.mutation.md"
        with open(md_path, "w") as f:
            f.write(self._generate_markdown(request))

        return json_path, md_path

    def _generate_markdown(self, request: dict) -> str:
        """Generate markdown summary of the request."""
        options = request.get("options", {})
        summary = request.get("summary", {})

        lines = []
        lines.append(f"# Mutation Request: {self.request_id}")
        lines.append("")
        lines.append(f"**Generated:** {datetime.now(timezone.utc).isoformat()}")
        lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append("| Field | Value |")
        lines.append("|-------|-------|")
        lines.append(f"| Source | `{self.source_path}` |")
        lines.append(f"| Customer ID | `{request.get('customer_id')}` |")
        lines.append(f"| Validate Only | `{options.get('validate_only')}` |")
        lines.append(f"| Partial Failure | `{options.get('partial_failure')}` |")
        lines.append(f"| Operations | `{summary.get('operations_count', 0)}` |")
        lines.append(f"| Transformed | `{summary.get('transformed_count', 0)}` |")
        lines.append("")

        lines.append("## Operations by Entity")
        lines.append("")
        lines.append("| Entity | Count |")
        lines.append("|--------|-------|")
        for entity, count in sorted(summary.get("by_entity", {}).items()):
            lines.append(f"| {entity} | {count} |")
        lines.append("")

        warnings = request.get("warnings", [])
        if warnings:
            lines.append("## Transformations")
            lines.append("")
            for warning in warnings:
                lines.append(f"- {warning}")
            lines.append("")

        return "\n".join(lines)


# =============================================================================
# CLI
# =============================================================================


def load_operations(path: Path) -> list:
    """Load operations from a JSON list or an {"operations": [...]} object."""
    if not path.exists():
        raise MutationRequestError(f"Operations file not found: {path}")
    with open(path) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("operations")
    if not isinstance(data, list):
        raise MutationRequestError(
            f"{path} must contain a list of operations or an object with an 'operations' list"
        )
    return data


def print_usage():
    print("""
Usage: ads-ops-prepare <operations_path> [OPTIONS]

ARGUMENTS:
    operations_path         Path to operations JSON file (required)

OPTIONS:
    --customer-id ID        Google Ads customer ID (default: GOOGLE_ADS_CUSTOMER_ID)
    --execute               Prepare a live request (validate_only=false)
    --no-partial-failure    Fail the whole request on the first error

INPUT FORMATS (may be mixed):
    { "create": {...} }  { "update": {...} }  { "remove": "customers/..." }
    { "entity": "label", "operation": "create", "resource": {...} }

ENVIRONMENT (.env):
    GOOGLE_ADS_CUSTOMER_ID    Default customer ID
    ADS_OPS_PARTIAL_FAILURE   true/false (default: true)
    ADS_OPS_DRY_RUN           true/false (default: true)
""")


def main(argv: Optional[list] = None) -> int:
    args = sys.argv[1:] if argv is None else argv

    ops_path = None
    customer_id = None
    dry_run = None
    partial_failure = None

    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--execute":
            dry_run = False
        elif arg == "--no-partial-failure":
            partial_failure = False
        elif arg == "--customer-id":
            if i + 1 >= len(args):
                print("ERROR: --customer-id requires a value")
                print_usage()
                return 1
            customer_id = args[i + 1]
            i += 1
        elif arg in ("--help", "-h"):
            print_usage()
            return 0
        elif not arg.startswith("-"):
            ops_path = Path(arg)
        else:
            print(f"Unknown option: {arg}")
            print_usage()
            return 1
        i += 1

    if not ops_path:
        print("ERROR: Operations path is required")
        print_usage()
        return 1

    print("=" * 70)
    print(f"MUTATION REQUEST PREPARATION - {PREPARE_VERSION}")
    print("=" * 70)
    print()

    load_env()

    try:
        print(f"Loading operations: {ops_path}")
        operations = load_operations(ops_path)
        print(f"  Operations: {len(operations)}")

        request = prepare_mutation(
            {
                "customer_id": customer_id,
                "operations": operations,
                "partial_failure": partial_failure,
                "dry_run": dry_run,
            },
            exempt_entities=load_exempt_entities(),
        )
    except (MutationRequestError, OperationFormatError) as e:
        print(f"\nERROR: {e}")
        return 1
    except json.JSONDecodeError as e:
        print(f"\nERROR: Invalid JSON in {ops_path}: {e}")
        return 1

    for warning in request["warnings"]:
        print(f"  [TRANSFORM] {warning}")

    print("\nWriting request...")
    writer = RequestWriter(ops_path, ops_path.parent)
    json_path, md_path = writer.write_request(request)
    print(f"  JSON: {json_path}")
    print(f"  Markdown: {md_path}")

    summary = request["summary"]
    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Mode: {'VALIDATE_ONLY' if request['options']['validate_only'] else 'LIVE'}")
    print(f"Total operations: {summary['operations_count']}")
    print(f"Transformed: {summary['transformed_count']}")
    for entity, count in sorted(summary["by_entity"].items()):
        print(f"  {entity}: {count}")
    print()
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
