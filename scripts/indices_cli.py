#!/usr/bin/env python3
"""
CLI tool for computing PSYS indices from a JSON payload file
"""
import argparse
import json
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from psys.core.results import CompositeReport
from psys.services.index_service import get_index_service
from psys.utils.exceptions import PayloadError
from psys.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def load_json_object(path: Path) -> dict:
    """Read a JSON file that must contain an object"""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise PayloadError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, dict):
        raise PayloadError(f"{path} must contain a JSON object", details={"found": type(data).__name__})
    return data


def display_report(report: CompositeReport, input_path: str):
    """Display index results in a nice format"""
    print(f"\n{'='*70}")
    print(f"PSYS INDEX REPORT")
    print(f"{'='*70}")
    print(f"Input: {input_path}")
    print(f"Computed at: {report.computed_at.isoformat()}")
    print(f"{'='*70}")

    for name, result in report.indices().items():
        label = name.replace("_", " ").title()
        if result.needed:
            print(f"{label:>20}:   -  (needs {result.needed}) [{result.reliability}]")
            continue
        print(f"{label:>20}: {result.value:3d}  {result.type} [{result.reliability}]")
        for signal in result.signals:
            print(f"{'':>22}- {signal}")

    print(f"\n{'='*70}\n")


def main():
    parser = argparse.ArgumentParser(
        description="Compute the seven PSYS indices for an assessment payload",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print a formatted report
  python scripts/indices_cli.py payload.json

  # Override configuration
  python scripts/indices_cli.py payload.json --config config.json

  # Raw JSON output
  python scripts/indices_cli.py payload.json --json
        """
    )

    parser.add_argument("payload_path", help="Path to the JSON payload")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to a JSON file with index configuration overrides")
    parser.add_argument("--json", action="store_true",
                        help="Print the raw JSON report")
    parser.add_argument("--log-level", type=str, default="WARNING",
                        help="Log level for messages written to stderr")

    args = parser.parse_args()
    setup_logging(level=args.log_level, log_format="text", stream=sys.stderr)

    payload_path = Path(args.payload_path)
    if not payload_path.exists():
        print(f"Error: Payload file not found: {payload_path}")
        return 1

    try:
        payload = load_json_object(payload_path)
        config = None
        if args.config:
            config_path = Path(args.config)
            if not config_path.exists():
                print(f"Error: Config file not found: {config_path}")
                return 1
            config = load_json_object(config_path)
    except PayloadError as e:
        print(f"Error: {e.message}")
        return 1

    report = get_index_service().compute_all_indices(payload, config)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        display_report(report, str(payload_path))

    return 0


if __name__ == "__main__":
    sys.exit(main())
