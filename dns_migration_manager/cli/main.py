#!/usr/bin/env python3
"""
DNS Migration Manager - Command Line Interface

Main entry point for the DNS Migration Manager CLI.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, List

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.dns_manager import DNSManager
from ..core.exceptions import ConfigurationError, ConfigurationMissingError, DNSManagerError
from ..parsers.zone_file import ZoneFileParser
from ..utils.config import config_logger, load_config

console = Console()
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="DNS Migration Manager - DNS record management and domain migration"
    )
    parser.add_argument(
        "--config",
        "-c",
        default="configs/config.yaml",
        help="Configuration file path (default: configs/config.yaml)",
    )
    parser.add_argument("--zone-id", "-z", help="Zone ID (defaults to the configured zone)")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list-records", help="List DNS records")
    p.add_argument("--name", help="Filter by record name")
    p.add_argument("--type", dest="record_type", help="Filter by record type")

    p = sub.add_parser("get-record", help="Show one DNS record")
    p.add_argument("record_id")

    p = sub.add_parser("create-record", help="Create a DNS record")
    _add_record_arguments(p, required=True)

    p = sub.add_parser("update-record", help="Update a DNS record")
    p.add_argument("record_id")
    _add_record_arguments(p, required=False)

    p = sub.add_parser("delete-record", help="Delete a DNS record")
    p.add_argument("record_id")

    p = sub.add_parser("create-zone", help="Create a zone")
    p.add_argument("name")
    p.add_argument("--zone-type", choices=["full", "partial"], default="full")
    p.add_argument("--jump-start", action="store_true", help="Let the provider scan for records")

    sub.add_parser("get-zone", help="Show the zone")

    p = sub.add_parser("list-zones", help="List zones")
    p.add_argument("--name", help="Filter by zone name")

    p = sub.add_parser("export-records", help="Export records as YAML")
    p.add_argument("--output-file", "-o", help="Write to this file instead of stdout")

    p = sub.add_parser("import-records", help="Import records from a YAML or JSON list")
    p.add_argument("records_file")

    p = sub.add_parser("export-zone-file", help="Export records as a zone file")
    p.add_argument("--output-file", "-o", help="Write to this file instead of stdout")

    p = sub.add_parser("import-zone-file", help="Import records from a zone file")
    p.add_argument("zone_file")

    p = sub.add_parser("detect", help="Detect a domain's public DNS records")
    p.add_argument("domain")

    p = sub.add_parser("replicate", help="Copy a domain's detected records into the zone")
    p.add_argument("source_domain")

    p = sub.add_parser("start-migration", help="Create a zone and import records from a file")
    p.add_argument("domain")
    p.add_argument("--records-file", help="YAML or JSON list of records to import")
    p.add_argument("--zone-type", choices=["full", "partial"], default="full")

    p = sub.add_parser("migrate", help="Create a zone and replicate detected records")
    p.add_argument("domain")
    p.add_argument("--zone-type", choices=["full", "partial"], default="full")

    p = sub.add_parser("check-propagation", help="Check nameserver delegation")
    p.add_argument("domain")
    p.add_argument("nameservers", nargs="+")

    p = sub.add_parser("validate-zone", help="Validate a migrated zone")
    p.add_argument("validate_zone_id", metavar="zone_id")

    return parser


def _add_record_arguments(parser: argparse.ArgumentParser, required: bool):
    parser.add_argument("--type", dest="record_type", required=required)
    parser.add_argument("--name", required=required)
    parser.add_argument("--content", required=required)
    parser.add_argument("--ttl", type=int)
    parser.add_argument("--priority", type=int)
    proxied = parser.add_mutually_exclusive_group()
    proxied.add_argument("--proxied", dest="proxied", action="store_true", default=None)
    proxied.add_argument("--no-proxied", dest="proxied", action="store_false")


def _record_fields(args) -> Dict:
    fields = {
        "type": args.record_type,
        "name": args.name,
        "content": args.content,
        "ttl": args.ttl,
        "priority": args.priority,
        "proxied": args.proxied,
    }
    return {key: value for key, value in fields.items() if value is not None}


def load_records_file(path: str) -> List[Dict]:
    """Load a list of record mappings from a YAML (or JSON) file."""
    with open(path, "r") as f:
        records = yaml.safe_load(f)
    if not isinstance(records, list):
        raise ValueError(f"{path} must contain a list of records")
    return records


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if not Path(args.config).exists():
        logger.warning(f"Configuration file '{args.config}' not found, using defaults")

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    if args.verbose:
        config.setdefault("logging", {})["level"] = "DEBUG"
    config_logger(config)

    try:
        dns_manager = DNSManager(config)
        result = run_command(dns_manager, args)
    except ConfigurationMissingError as e:
        console.print(f"[red]Configuration incomplete: {escape(str(e))}[/red]")
        sys.exit(2)
    except (DNSManagerError, ValueError, OSError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        if args.verbose:
            console.print_exception()
        sys.exit(1)

    render(result, args)
    sys.exit(0 if _succeeded(result) else 1)


def run_command(dns_manager: DNSManager, args):
    """Dispatch a parsed command to the DNS manager and return its result."""
    zone_id = args.zone_id
    command = args.command

    if command == "list-records":
        return dns_manager.list_records(args.name, args.record_type, zone_id)
    if command == "get-record":
        return dns_manager.get_record(args.record_id, zone_id)
    if command == "create-record":
        return dns_manager.create_record(_record_fields(args), zone_id)
    if command == "update-record":
        return dns_manager.update_record(args.record_id, _record_fields(args), zone_id)
    if command == "delete-record":
        dns_manager.delete_record(args.record_id, zone_id)
        return f"Deleted record {args.record_id}"
    if command == "create-zone":
        return dns_manager.create_zone(args.name, args.zone_type, args.jump_start)
    if command == "get-zone":
        return dns_manager.get_zone(zone_id)
    if command == "list-zones":
        return dns_manager.list_zones(args.name)
    if command == "export-records":
        records = [record.to_dict() for record in dns_manager.export_records(zone_id)]
        return _write_output(yaml.safe_dump(records, sort_keys=False), args.output_file)
    if command == "import-records":
        return dns_manager.import_records(load_records_file(args.records_file), zone_id)
    if command == "export-zone-file":
        return _write_output(dns_manager.export_zone_file(zone_id), args.output_file)
    if command == "import-zone-file":
        content = ZoneFileParser(args.zone_file).read()
        return dns_manager.import_zone_file(content, zone_id)
    if command == "detect":
        return dns_manager.detect(args.domain)
    if command == "replicate":
        return dns_manager.replicate(args.source_domain, zone_id)
    if command == "start-migration":
        records = load_records_file(args.records_file) if args.records_file else None
        return dns_manager.start_migration(args.domain, records, args.zone_type)
    if command == "migrate":
        return dns_manager.migrate_with_detection(args.domain, args.zone_type)
    if command == "check-propagation":
        propagated = dns_manager.check_propagation(args.domain, args.nameservers)
        return {"domain": args.domain, "propagated": propagated}
    if command == "validate-zone":
        return dns_manager.validate_zone_setup(args.validate_zone_id)

    raise ValueError(f"Unknown command: {command}")


def _write_output(text: str, output_file) -> str:
    if not output_file:
        return text
    with open(output_file, "w") as f:
        f.write(text)
    return f"Written to {output_file}"


def _succeeded(result) -> bool:
    if isinstance(result, dict) and "propagated" in result:
        return result["propagated"]
    if hasattr(result, "valid"):
        return result.valid
    errors = getattr(result, "errors", None)
    return not errors


def _to_data(result):
    if isinstance(result, list):
        return [_to_data(item) for item in result]
    if hasattr(result, "to_dict"):
        return result.to_dict()
    return result


def render(result, args):
    """Render a command result on the console."""
    if args.json:
        console.print_json(json.dumps(_to_data(result)))
        return

    if isinstance(result, str):
        console.print(result, markup=False)
        return

    data = _to_data(result)

    if isinstance(data, list):
        _print_items_table(data, title=args.command)
        return

    if isinstance(data, dict) and "propagated" in data:
        if data["propagated"]:
            console.print(f"[green]Nameserver propagation complete for {data['domain']}[/green]")
        else:
            console.print(f"[yellow]Nameservers for {data['domain']} have not propagated yet[/yellow]")
        return

    if isinstance(data, dict) and "valid" in data:
        if data["valid"]:
            console.print("[green]Zone setup is valid[/green]")
        for issue in data["issues"]:
            console.print(f"[red]- {escape(issue)}[/red]")
        return

    if isinstance(data, dict) and "next_steps" in data:
        _print_zone(data["zone"])
        _print_items_table(data["detected"], title="Detected records")
        _print_items_table(data["replicated"], title="Replicated records")
        _print_errors(data["errors"])
        console.print("\n[bold]Next steps:[/bold]")
        for step in data["next_steps"]:
            console.print(f"  {step}", markup=False)
        return

    if isinstance(data, dict) and "replicated" in data:
        _print_items_table(data["detected"], title="Detected records")
        _print_items_table(data["replicated"], title="Replicated records")
        _print_errors(data["errors"])
        return

    if isinstance(data, dict) and "imported" in data:
        _print_items_table(data["imported"], title="Imported records")
        _print_errors(data["errors"])
        return

    if isinstance(data, dict) and "name_servers" in data:
        _print_zone(data)
        return

    _print_items_table([data], title=args.command)


def _print_zone(zone: Dict):
    if not zone.get("id"):
        return
    console.print(f"[green]Zone {zone['name']}[/green] ({zone['id']}) status: {zone['status']}")
    console.print(f"Nameservers: {', '.join(zone.get('name_servers', []))}")


def _print_items_table(items: List[Dict], title: str):
    if not items:
        console.print(f"[yellow]{title}: none[/yellow]")
        return

    columns = [c for c in ("id", "type", "name", "content", "ttl", "priority", "proxied", "status")
               if any(c in item for item in items)]
    table = Table(title=title)
    for column in columns:
        table.add_column(column.capitalize(), style="cyan" if column == "name" else None)
    for item in items:
        table.add_row(*[escape(str(item.get(column, ""))) for column in columns])
    console.print(table)


def _print_errors(errors: List[str]):
    if not errors:
        return
    console.print(f"[red]{len(errors)} error(s):[/red]")
    for error in errors:
        console.print(f"  [red]- {escape(error)}[/red]")


if __name__ == "__main__":
    main()
