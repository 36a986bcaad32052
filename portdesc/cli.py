"""
Command line interface for portdesc.

Usage:
    portdesc 22 80 443
    portdesc 53 -p udp -f description
    portdesc 443 --all-protocols --json
    portdesc -s ssh
    portdesc --export services.json --format json
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .config import ConfigParser
from .description import PortDescription
from .errors import PortDescError, PortNotFoundError
from .exporters import export_csv, export_json, export_jsonlines
from .models import PortDescEntry

logger = logging.getLogger('portdesc')

FIELDS = ('name', 'description', 'info')
EXPORTERS = {
    'csv': export_csv,
    'json': export_json,
    'jsonl': export_jsonlines,
}


def get_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Get and validate command line arguments
    """
    ap = argparse.ArgumentParser(
        prog='portdesc',
        description='Look up IANA registered service names by port and transport protocol')

    ap.add_argument("ports", nargs='*', metavar="PORT",
                    help="port numbers to look up")

    ap.add_argument("-p", "--protocol", default='tcp',
                    help="transport protocol: tcp, udp, sctp or dccp; defaults to tcp")

    ap.add_argument("-f", "--field", choices=FIELDS, default='name',
                    help="what to print for each port; defaults to name")

    ap.add_argument("-a", "--all-protocols", action='store_true',
                    help="show every loaded protocol registered for each port")

    ap.add_argument("-s", "--service", metavar="NAME",
                    help="reverse lookup: list ports registered for a service name")

    ap.add_argument("-d", "--data-file",
                    help="registry CSV to load instead of the bundled copy")

    ap.add_argument("-c", "--config",
                    help="YAML or JSON configuration file")

    ap.add_argument("-j", "--json", action='store_true',
                    help="print results as JSON")

    ap.add_argument("--export", metavar="FILE",
                    help="write all loaded entries to FILE")

    ap.add_argument("--format", choices=sorted(EXPORTERS), default='csv',
                    help="export format; defaults to csv")

    ap.add_argument("-v", "--verbose", action='count', default=0,
                    help="increase log output (-v info, -vv debug)")

    ap.add_argument("--version", action='version', version=f"%(prog)s {__version__}")

    args = ap.parse_args(argv)

    if not args.ports and not args.service and not args.export:
        ap.error("nothing to do: give PORT, --service or --export")

    return args


def setup_logging(verbose: int, config_level: Optional[int] = None):
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    elif config_level is not None:
        level = config_level
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format='%(levelname)s %(name)s: %(message)s')
    logger.setLevel(level)


def load_description(args: argparse.Namespace) -> PortDescription:
    """
    Build the lookup table from --config / --data-file or the bundled registry.
    """
    if args.config:
        config = ConfigParser.load(args.config)
        setup_logging(args.verbose, config.logging.level_number)
        if args.data_file:
            config.registry.data_file = args.data_file
        return PortDescription.from_config(config)

    setup_logging(args.verbose)
    if args.data_file:
        return PortDescription.from_csv_file(args.data_file)
    return PortDescription.default()


def format_entry(entry: PortDescEntry, field: str) -> str:
    port = '-' if entry.port_number is None else entry.port_number
    label = f"{port}/{entry.transport_protocol or '-'}"

    if field == 'name':
        return f"{label}\t{entry.service_name}"
    if field == 'description':
        return f"{label}\t{entry.description}"

    text = f"{label}\t{entry.service_name or '<unnamed>'}\t{entry.description}"
    if entry.reference:
        text += f"\t{entry.reference}"
    return text


def lookup_ports(description: PortDescription, args: argparse.Namespace) -> int:
    """
    Print results for each requested port.

    Returns:
        0 if every port resolved, 1 otherwise
    """
    found = []
    missing = []

    for port in args.ports:
        if args.all_protocols:
            by_protocol = description.get_port_protocols(port)
            if not by_protocol:
                missing.append(f"{port}/*")
            found.extend(by_protocol.values())
            continue

        try:
            found.append(description.lookup(port, args.protocol))
        except PortNotFoundError as e:
            logger.info("%s", e)
            missing.append(f"{e.port}/{e.protocol}")

    if args.json:
        print(json.dumps({
            'found': [entry.to_dict() for entry in found],
            'missing': missing,
        }, indent=2))
    else:
        for entry in found:
            print(format_entry(entry, args.field))
        for item in missing:
            print(f"{item}\tnot found", file=sys.stderr)

    return 1 if missing else 0


def lookup_service(description: PortDescription, args: argparse.Namespace) -> int:
    entries = description.find_service(args.service)

    if args.json:
        print(json.dumps([entry.to_dict() for entry in entries], indent=2))
    else:
        for entry in entries:
            print(format_entry(entry, 'info'))

    if not entries:
        print(f"{args.service}\tnot found", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = get_args(argv)

    try:
        description = load_description(args)

        status = 0
        if args.export:
            count = EXPORTERS[args.format](description.entries(), args.export)
            logger.info("Exported %d entries to %s", count, args.export)
            print(f"Exported {count} entries to {args.export}")

        if args.service:
            status = max(status, lookup_service(description, args))

        if args.ports:
            status = max(status, lookup_ports(description, args))

        return status

    except (FileNotFoundError, PortDescError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
