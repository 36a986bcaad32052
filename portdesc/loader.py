"""
Parser for the IANA service name and port number registry CSV.

The registry is published at
https://www.iana.org/assignments/service-names-port-numbers/service-names-port-numbers.xhtml
and a copy is bundled in portdesc/data/.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from .errors import RegistryFileError, RegistryParseError
from .models import (
    PortDescEntry,
    COLUMN_SERVICE_NAME,
    COLUMN_PORT_NUMBER,
    COLUMN_TRANSPORT_PROTOCOL,
    COLUMN_DESCRIPTION,
    COLUMN_REFERENCE,
)
from .protocols import PORT_MAX, TransportProtocol, parse_protocol

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = (
    COLUMN_SERVICE_NAME,
    COLUMN_PORT_NUMBER,
    COLUMN_TRANSPORT_PROTOCOL,
    COLUMN_DESCRIPTION,
)

DUPLICATE_POLICIES = ('last', 'first')

REGISTRY_URL = ('https://www.iana.org/assignments/service-names-port-numbers/'
                'service-names-port-numbers.xhtml')


@dataclass
class ParsedRegistry:
    """
    Parsed registry contents.

    Attributes:
        records: Every row in file order
        indexes: protocol -> {port: entry} for the requested protocols
        aliases: (port, protocol) -> all rows for that pair, file order
    """
    records: List[PortDescEntry] = field(default_factory=list)
    indexes: Dict[str, Dict[int, PortDescEntry]] = field(default_factory=dict)
    aliases: Dict[Tuple[int, str], List[PortDescEntry]] = field(default_factory=dict)


class RegistryParser:
    """Parse registry CSV text or files"""

    @staticmethod
    def load(csv_file: Union[str, Path],
             protocols: Iterable[str] = TransportProtocol.ALL,
             duplicate_policy: str = 'last') -> ParsedRegistry:
        """
        Load registry from a CSV file.

        Args:
            csv_file: Path to registry CSV
            protocols: Protocols to build lookup indexes for
            duplicate_policy: 'last' or 'first' row wins for repeated port/protocol pairs

        Returns:
            ParsedRegistry

        Raises:
            RegistryFileError: If the file cannot be read
            RegistryParseError: If the content is not a valid registry
        """
        path = Path(csv_file)
        try:
            with open(path, 'r', encoding='utf-8', newline='') as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise RegistryFileError(str(path), str(e)) from e

        logger.debug("Read registry file %s", path)
        return RegistryParser.loads(text, protocols, duplicate_policy)

    @staticmethod
    def loads(csv_text: str,
              protocols: Iterable[str] = TransportProtocol.ALL,
              duplicate_policy: str = 'last') -> ParsedRegistry:
        """
        Parse registry CSV text.

        Raises:
            RegistryParseError: If the content is not a valid registry
        """
        if duplicate_policy not in DUPLICATE_POLICIES:
            raise ValueError(f"duplicate_policy must be 'last' or 'first', got '{duplicate_policy}'")

        wanted = [parse_protocol(p) for p in protocols]
        records = RegistryParser._parse_rows(csv_text.lstrip('\ufeff'))

        registry = ParsedRegistry(records=records)
        registry.indexes = {protocol: {} for protocol in wanted}

        for entry in records:
            if not entry.is_indexable:
                continue

            key = (entry.port_number, entry.transport_protocol)
            registry.aliases.setdefault(key, []).append(entry)

            index = registry.indexes.get(entry.transport_protocol)
            if index is None:
                continue
            if duplicate_policy == 'first' and entry.port_number in index:
                continue
            index[entry.port_number] = entry

        logger.debug("Parsed %d registry rows, indexed %s",
                     len(records),
                     ', '.join(f"{p}={len(i)}" for p, i in registry.indexes.items()))
        return registry

    @staticmethod
    def _parse_rows(csv_text: str) -> List[PortDescEntry]:
        """
        Convert CSV rows into entries.

        Raises:
            RegistryParseError: On malformed CSV, missing columns or unknown protocols
        """
        reader = csv.DictReader(io.StringIO(csv_text), strict=True)

        try:
            fieldnames = reader.fieldnames
        except csv.Error as e:
            raise RegistryParseError(f"CSV header cannot be parsed: {e}", 1) from e

        if not fieldnames:
            raise RegistryParseError(
                f"Registry is empty. Download a new copy from {REGISTRY_URL}")

        missing = [c for c in REQUIRED_COLUMNS if c not in fieldnames]
        if missing:
            raise RegistryParseError(f"Missing registry columns: {', '.join(missing)}", 1)

        records = []
        try:
            for row in reader:
                records.append(RegistryParser._parse_row(row, reader.line_num))
        except csv.Error as e:
            raise RegistryParseError(f"CSV cannot be parsed: {e}", reader.line_num) from e

        return records

    @staticmethod
    def _parse_row(row: Dict[str, Optional[str]], line: int) -> PortDescEntry:
        """Convert one CSV row into an entry"""
        protocol_text = (row.get(COLUMN_TRANSPORT_PROTOCOL) or '').strip()
        protocol = None
        if protocol_text:
            if protocol_text.lower() not in TransportProtocol.ALL:
                raise RegistryParseError(
                    f"Unknown transport protocol '{protocol_text}', "
                    f"expected one of: {', '.join(TransportProtocol.ALL)}", line)
            protocol = protocol_text.lower()

        return PortDescEntry(
            service_name=(row.get(COLUMN_SERVICE_NAME) or '').strip(),
            port_number=parse_port_number(row.get(COLUMN_PORT_NUMBER)),
            transport_protocol=protocol,
            description=(row.get(COLUMN_DESCRIPTION) or '').strip(),
            reference=(row.get(COLUMN_REFERENCE) or '').strip(),
        )


def parse_port_number(value: Optional[str]) -> Optional[int]:
    """
    Parse the 'Port Number' column.

    Returns:
        Port as int, or None for empty values, ranges such as '6000-6063'
        and anything outside 0-65535
    """
    if value is None:
        return None
    text = value.strip()
    if not (text.isascii() and text.isdigit()):
        return None
    number = int(text)
    if number > PORT_MAX:
        return None
    return number
