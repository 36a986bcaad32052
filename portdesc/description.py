"""
Port number to service name lookups.
"""

import logging
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union

from .config import ConfigParser, PortDescConfig
from .errors import InvalidPortError, PortNotFoundError, UnknownProtocolError
from .loader import ParsedRegistry, RegistryParser
from .models import PortDescEntry
from .protocols import TransportProtocol, parse_protocol, validate_port

logger = logging.getLogger(__name__)

DATA_PACKAGE = 'portdesc'
DATA_FILE = 'data/service-names-port-numbers.csv'


class PortDescription:
    """
    Lookup table of IANA registered services keyed by port and transport protocol.

    Example:
        >>> ports = PortDescription.default()
        >>> ports.get_port_service_name(22, 'tcp')
        'ssh'
        >>> ports.lookup(53, 'udp').description
        'Domain Name Server'
    """

    def __init__(self, registry: ParsedRegistry, source: str = '<memory>'):
        self._registry = registry
        self._source = source
        self._read_only = False

    @classmethod
    def default(cls, protocols: Iterable[str] = TransportProtocol.ALL,
                duplicate_policy: str = 'last') -> 'PortDescription':
        """
        Load the registry bundled with the package.

        Raises:
            RegistryParseError: If the bundled file is corrupt
        """
        csv_text = resources.files(DATA_PACKAGE).joinpath(DATA_FILE).read_text(encoding='utf-8')
        registry = RegistryParser.loads(csv_text, protocols, duplicate_policy)
        logger.debug("Loaded bundled registry %s", DATA_FILE)
        return cls(registry, source=f"<bundled:{DATA_FILE}>")

    @classmethod
    def from_csv_file(cls, csv_file: Union[str, Path],
                      protocols: Iterable[str] = TransportProtocol.ALL,
                      duplicate_policy: str = 'last') -> 'PortDescription':
        """
        Load a registry CSV downloaded from IANA.

        Args:
            csv_file: Path to service-names-port-numbers.csv

        Raises:
            RegistryFileError: If the file cannot be opened
            RegistryParseError: If the file cannot be parsed
        """
        registry = RegistryParser.load(csv_file, protocols, duplicate_policy)
        logger.info("Loaded registry from %s (%d rows)", csv_file, len(registry.records))
        return cls(registry, source=str(csv_file))

    @classmethod
    def from_csv_text(cls, csv_text: str,
                      protocols: Iterable[str] = TransportProtocol.ALL,
                      duplicate_policy: str = 'last') -> 'PortDescription':
        """Parse registry CSV held in memory"""
        return cls(RegistryParser.loads(csv_text, protocols, duplicate_policy))

    @classmethod
    def from_config(cls, config: Union[PortDescConfig, str, Path]) -> 'PortDescription':
        """
        Build a lookup table from a configuration object or file.

        The registry section selects the data file, protocols and duplicate
        policy; overrides are applied on top of the loaded data.
        """
        if not isinstance(config, PortDescConfig):
            config = ConfigParser.load(config)

        reg = config.registry
        if reg.data_file is None:
            description = cls.default(reg.protocols, reg.duplicate_policy)
        else:
            description = cls.from_csv_file(reg.data_file, reg.protocols, reg.duplicate_policy)

        if config.overrides:
            description.apply_overrides(
                PortDescEntry(
                    service_name=o.service_name,
                    port_number=validate_port(o.port),
                    transport_protocol=parse_protocol(o.protocol),
                    description=o.description,
                )
                for o in config.overrides
            )
        return description

    def get_port_info(self, port_number: Union[int, str],
                      transport_protocol: Union[str, int]) -> Optional[PortDescEntry]:
        """
        Get the registry entry for a port.

        Returns:
            PortDescEntry, or None if nothing is registered
        """
        port, protocol = self._normalize(port_number, transport_protocol)
        index = self._registry.indexes.get(protocol)
        if index is None:
            return None
        return index.get(port)

    def get_port_service_name(self, port_number: Union[int, str],
                              transport_protocol: Union[str, int]) -> str:
        """Service name for a port, or '' if nothing is registered"""
        entry = self.get_port_info(port_number, transport_protocol)
        return entry.service_name if entry is not None else ''

    def get_port_description(self, port_number: Union[int, str],
                             transport_protocol: Union[str, int]) -> str:
        """Description for a port, or '' if nothing is registered"""
        entry = self.get_port_info(port_number, transport_protocol)
        return entry.description if entry is not None else ''

    def lookup(self, port_number: Union[int, str],
               transport_protocol: Union[str, int]) -> PortDescEntry:
        """
        Get the registry entry for a port.

        Raises:
            PortNotFoundError: If nothing is registered for the pair
            InvalidPortError: If the port is not in 0-65535
            UnknownProtocolError: If the protocol is not tcp, udp, sctp or dccp
        """
        entry = self.get_port_info(port_number, transport_protocol)
        if entry is None:
            port, protocol = self._normalize(port_number, transport_protocol)
            raise PortNotFoundError(port, protocol)
        return entry

    def get_port_aliases(self, port_number: Union[int, str],
                         transport_protocol: Union[str, int]) -> List[PortDescEntry]:
        """
        All registry rows for a port, in file order.

        Port 80/tcp for example is registered as 'http', 'www' and 'www-http'.
        """
        key = self._normalize(port_number, transport_protocol)
        if key[1] not in self._registry.indexes:
            return []
        return list(self._registry.aliases.get(key, []))

    def get_port_protocols(self, port_number: Union[int, str]) -> Dict[str, PortDescEntry]:
        """Entries for a port across all loaded protocols"""
        port = validate_port(port_number)
        return {
            protocol: index[port]
            for protocol, index in self._registry.indexes.items()
            if port in index
        }

    def find_service(self, service_name: str) -> List[PortDescEntry]:
        """
        Reverse lookup by service name (case-insensitive).

        Returns:
            Matching rows in file order, including rows without a port
        """
        name = service_name.strip().lower()
        if not name:
            return []
        return [e for e in self._registry.records if e.service_name.lower() == name]

    def apply_overrides(self, overrides: Iterable[PortDescEntry]) -> int:
        """
        Install entries that replace the registry data for their port/protocol.

        Overrides for protocols that were not loaded are skipped.

        Returns:
            Number of overrides applied

        Raises:
            RuntimeError: On the shared instance returned by get_default()
        """
        if self._read_only:
            raise RuntimeError("The shared default registry is read-only. "
                               "Apply overrides to PortDescription.default() instead.")

        applied = 0
        for entry in overrides:
            if not entry.is_indexable:
                raise ValueError(f"Override needs a port and protocol: {entry!r}")

            index = self._registry.indexes.get(entry.transport_protocol)
            if index is None:
                logger.warning("Skipping override %r, protocol %s not loaded",
                               entry, entry.transport_protocol)
                continue

            previous = index.get(entry.port_number)
            if previous is not None:
                logger.debug("Override %r replaces %r", entry, previous)
            index[entry.port_number] = entry
            self._registry.records.append(entry)
            key = (entry.port_number, entry.transport_protocol)
            self._registry.aliases.setdefault(key, []).append(entry)
            applied += 1

        logger.info("Applied %d service overrides", applied)
        return applied

    def entries(self, transport_protocol: Optional[Union[str, int]] = None) -> Iterator[PortDescEntry]:
        """
        Iterate over indexed entries ordered by protocol then port.

        Args:
            transport_protocol: Restrict to one protocol
        """
        if transport_protocol is not None:
            protocols = [parse_protocol(transport_protocol)]
        else:
            protocols = [p for p in TransportProtocol.ALL if p in self._registry.indexes]

        for protocol in protocols:
            index = self._registry.indexes.get(protocol, {})
            for port in sorted(index):
                yield index[port]

    @property
    def protocols(self) -> Tuple[str, ...]:
        """Protocols with a lookup index"""
        return tuple(p for p in TransportProtocol.ALL if p in self._registry.indexes)

    @property
    def source(self) -> str:
        """Where the registry data was loaded from"""
        return self._source

    def get_stats(self) -> dict:
        """
        Get registry statistics.

        Returns:
            Dictionary with row and index counts
        """
        return {
            'source': self._source,
            'records': len(self._registry.records),
            'indexed': {p: len(self._registry.indexes[p]) for p in self.protocols},
            'total_indexed': len(self),
        }

    def _normalize(self, port_number: Union[int, str],
                   transport_protocol: Union[str, int]) -> Tuple[int, str]:
        return validate_port(port_number), parse_protocol(transport_protocol)

    def __getitem__(self, key: Tuple[Union[int, str], Union[str, int]]) -> PortDescEntry:
        port_number, transport_protocol = key
        return self.lookup(port_number, transport_protocol)

    def __contains__(self, key) -> bool:
        try:
            port_number, transport_protocol = key
            return self.get_port_info(port_number, transport_protocol) is not None
        except (TypeError, ValueError, InvalidPortError, UnknownProtocolError):
            return False

    def __iter__(self) -> Iterator[PortDescEntry]:
        return self.entries()

    def __len__(self) -> int:
        return sum(len(index) for index in self._registry.indexes.values())

    def __repr__(self) -> str:
        return f"PortDescription(source={self._source!r}, entries={len(self)})"


@lru_cache(maxsize=None)
def get_default() -> PortDescription:
    """
    Shared PortDescription built from the bundled registry.

    The instance is shared by get_service_name() and get_description() and
    rejects apply_overrides(); build a separate PortDescription.default()
    to customize entries.
    """
    description = PortDescription.default()
    description._read_only = True
    return description


def get_service_name(port: Union[int, str], protocol: Union[str, int] = 'tcp') -> str:
    """
    Get service name from the bundled registry.

    Returns:
        Service name or '' if not registered

    Examples:
        >>> get_service_name(22)
        'ssh'
        >>> get_service_name(53, 'udp')
        'domain'
    """
    return get_default().get_port_service_name(port, protocol)


def get_description(port: Union[int, str], protocol: Union[str, int] = 'tcp') -> str:
    """Get port description from the bundled registry, '' if not registered"""
    return get_default().get_port_description(port, protocol)
