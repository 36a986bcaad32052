#!/usr/bin/env python3
"""
Basic usage example for portdesc.

This example demonstrates:
- Loading the bundled IANA registry
- Looking up service name, description and full entry for a port
- Handling ports that are not registered
"""

from portdesc import PortDescription, PortNotFoundError, TransportProtocol


def main():
    ports = PortDescription.default()
    print(f"Loaded {len(ports)} port entries from {ports.source}")
    print()

    port_num = 80
    name = ports.get_port_service_name(port_num, TransportProtocol.TCP)
    print(f"TCP Port {port_num} service name: {name}")

    description = ports.get_port_description(port_num, TransportProtocol.TCP)
    print(f"TCP Port {port_num} description: {description}")

    entry = ports.get_port_info(port_num, TransportProtocol.TCP)
    print(f"TCP Port {port_num} entry: {entry}")

    # All names registered for the same port
    aliases = ports.get_port_aliases(port_num, TransportProtocol.TCP)
    print(f"TCP Port {port_num} aliases: {', '.join(e.service_name for e in aliases)}")
    print()

    # Strict lookup raises for unregistered pairs
    for port_num in (22, 6000):
        try:
            entry = ports.lookup(port_num, TransportProtocol.TCP)
            print(f"TCP Port {port_num}: {entry.service_name} ({entry.description})")
        except PortNotFoundError as e:
            print(f"TCP Port {port_num}: {e}")


if __name__ == "__main__":
    main()
