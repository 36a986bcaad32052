"""
portdesc - IANA service names by port number and transport protocol

This package bundles the IANA "Service Name and Transport Protocol Port
Number Registry" and answers which service is registered for a port over
TCP, UDP, SCTP or DCCP.
"""

__version__ = "1.0.0"

from .config import ConfigParser, PortDescConfig
from .description import PortDescription, get_default, get_service_name, get_description
from .errors import (
    PortDescError,
    RegistryFileError,
    RegistryParseError,
    PortNotFoundError,
    UnknownProtocolError,
    InvalidPortError,
    ConfigError,
)
from .exporters import export_csv, export_json, export_jsonlines, RegistryExporter
from .models import PortDescEntry
from .protocols import TransportProtocol, parse_protocol, port_range

# Public API
__all__ = [
    "PortDescription",
    "PortDescEntry",
    "TransportProtocol",
    "ConfigParser",
    "PortDescConfig",
    "get_default",
    "get_service_name",
    "get_description",
    "parse_protocol",
    "port_range",
    "export_csv",
    "export_json",
    "export_jsonlines",
    "RegistryExporter",
    "PortDescError",
    "RegistryFileError",
    "RegistryParseError",
    "PortNotFoundError",
    "UnknownProtocolError",
    "InvalidPortError",
    "ConfigError",
]


def print_info():
    """Print portdesc library information"""
    stats = get_default().get_stats()
    print(f"portdesc v{__version__}")
    print(f"Registry: {stats['source']}")
    print(f"Rows: {stats['records']}")
    for protocol, count in stats['indexed'].items():
        print(f"  {protocol.upper()}: {count} ports")
