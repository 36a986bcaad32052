#!/usr/bin/env python3
"""
Configuration example - local service names on top of the IANA registry.

Run from the examples/ directory:
    python config_usage.py
"""

import logging

from portdesc import ConfigParser, PortDescription


def main():
    config_path = "configs/example_config.yaml"
    print(f"Loading configuration from {config_path}...")

    config = ConfigParser.load(config_path)
    logging.basicConfig(level=config.logging.level_number)

    ports = PortDescription.from_config(config)
    stats = ports.get_stats()
    print(f"Protocols: {', '.join(ports.protocols)}")
    print(f"Indexed entries: {stats['total_indexed']}")
    print()

    for port_num in (80, 8080, 5432):
        print(f"TCP Port {port_num}: {ports.get_port_service_name(port_num, 'tcp')}")


if __name__ == "__main__":
    main()
