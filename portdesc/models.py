"""
Registry entry data model.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .protocols import PORT_MAX, PORT_MIN, TransportProtocol


# Column names used by the IANA registry CSV
COLUMN_SERVICE_NAME = 'Service Name'
COLUMN_PORT_NUMBER = 'Port Number'
COLUMN_TRANSPORT_PROTOCOL = 'Transport Protocol'
COLUMN_DESCRIPTION = 'Description'
COLUMN_REFERENCE = 'Reference'


@dataclass
class PortDescEntry:
    """
    One row of the IANA service name and port number registry.

    Attributes:
        service_name: Registered service name (empty for reserved/unassigned ports)
        port_number: Port number (0-65535), None for ranges or name-only rows
        transport_protocol: 'tcp', 'udp', 'sctp', 'dccp' or None
        description: Free text description
        reference: Defining document(s), e.g. '[RFC4251]'
    """
    service_name: str
    port_number: Optional[int]
    transport_protocol: Optional[str]
    description: str
    reference: str = ''

    def __post_init__(self):
        """Validate field values"""
        if self.port_number is not None and not (PORT_MIN <= self.port_number <= PORT_MAX):
            raise ValueError(f"Invalid port_number: {self.port_number}")

        if (self.transport_protocol is not None and
                self.transport_protocol not in TransportProtocol.ALL):
            raise ValueError(f"Invalid transport_protocol: {self.transport_protocol}")

    @property
    def is_indexable(self) -> bool:
        """True if the entry names both a single port and a protocol"""
        return self.port_number is not None and self.transport_protocol is not None

    def to_dict(self) -> Dict:
        """
        Convert entry to dictionary.

        Returns:
            Dictionary representation of the entry
        """
        return {
            'service_name': self.service_name,
            'port': self.port_number,
            'protocol': self.transport_protocol,
            'description': self.description,
            'reference': self.reference,
        }

    def to_csv_row(self) -> List[str]:
        """
        Convert entry to a CSV row matching csv_header().
        """
        return [
            self.service_name,
            '' if self.port_number is None else str(self.port_number),
            self.transport_protocol or '',
            self.description,
            self.reference,
        ]

    @staticmethod
    def csv_header() -> List[str]:
        return [
            COLUMN_SERVICE_NAME,
            COLUMN_PORT_NUMBER,
            COLUMN_TRANSPORT_PROTOCOL,
            COLUMN_DESCRIPTION,
            COLUMN_REFERENCE,
        ]

    def __repr__(self) -> str:
        """String representation of entry"""
        port = '-' if self.port_number is None else self.port_number
        protocol = self.transport_protocol or '-'
        return (f"PortDescEntry({self.service_name or '<unnamed>'} "
                f"{port}/{protocol}, {self.description!r})")
