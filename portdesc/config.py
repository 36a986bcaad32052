"""
Configuration file parser and validator for portdesc.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Dict, Optional, Any, Tuple, Union

import yaml

from .errors import ConfigError, InvalidPortError, UnknownProtocolError
from .loader import DUPLICATE_POLICIES
from .protocols import TransportProtocol, parse_protocol, validate_port

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


@dataclass
class RegistryConfig:
    """Registry data source configuration"""
    data_file: Optional[str] = None
    protocols: List[str] = field(default_factory=lambda: list(TransportProtocol.ALL))
    duplicate_policy: str = 'last'

    def validate(self) -> Tuple[bool, Optional[str]]:
        """Validate registry configuration"""
        if not self.protocols:
            return False, "protocols cannot be empty"

        for protocol in self.protocols:
            try:
                parse_protocol(protocol)
            except UnknownProtocolError as e:
                return False, str(e)

        if self.duplicate_policy not in DUPLICATE_POLICIES:
            return False, f"duplicate_policy must be 'last' or 'first', got '{self.duplicate_policy}'"

        if self.data_file is not None and not Path(self.data_file).is_file():
            return False, f"data_file not found: {self.data_file}"

        return True, None


@dataclass
class OverrideConfig:
    """Local service name for a port/protocol pair"""
    port: int
    protocol: str
    service_name: str
    description: str = ''

    def validate(self) -> Tuple[bool, Optional[str]]:
        """Validate override entry"""
        try:
            validate_port(self.port)
            parse_protocol(self.protocol)
        except (InvalidPortError, UnknownProtocolError) as e:
            return False, str(e)

        if not isinstance(self.service_name, str):
            return False, f"service_name must be a string, got {self.service_name!r}"

        if not self.service_name:
            return False, f"service_name cannot be empty for port {self.port}/{self.protocol}"

        if not isinstance(self.description, str):
            return False, f"description must be a string, got {self.description!r}"

        return True, None


@dataclass
class LoggingConfig:
    """Logging configuration"""
    level: str = 'WARNING'

    def validate(self) -> Tuple[bool, Optional[str]]:
        if str(self.level).upper() not in LOG_LEVELS:
            return False, f"level must be one of {', '.join(LOG_LEVELS)}, got '{self.level}'"
        return True, None

    @property
    def level_number(self) -> int:
        return logging.getLevelName(str(self.level).upper())


@dataclass
class PortDescConfig:
    """Complete portdesc configuration"""
    registry: RegistryConfig = field(default_factory=RegistryConfig)
    overrides: List[OverrideConfig] = field(default_factory=list)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> Tuple[bool, Optional[str]]:
        """
        Validate complete configuration.

        Returns:
            (is_valid, error_message)
        """
        reg_valid, reg_error = self.registry.validate()
        if not reg_valid:
            return False, f"Registry config error: {reg_error}"

        for override in self.overrides:
            ovr_valid, ovr_error = override.validate()
            if not ovr_valid:
                return False, f"Override error: {ovr_error}"

        log_valid, log_error = self.logging.validate()
        if not log_valid:
            return False, f"Logging config error: {log_error}"

        return True, None


class ConfigParser:
    """Parse and load configuration files"""

    @staticmethod
    def load(config_path: Union[str, Path]) -> PortDescConfig:
        """
        Load configuration from file.

        Supports: .yaml, .yml, .json

        Args:
            config_path: Path to configuration file

        Returns:
            Parsed PortDescConfig object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigError: If file format unsupported or config invalid
        """
        path = Path(config_path)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        suffix = path.suffix.lower()

        if suffix in ['.yaml', '.yml']:
            return ConfigParser._load_yaml(path)
        elif suffix == '.json':
            return ConfigParser._load_json(path)
        else:
            raise ConfigError(f"Unsupported config format: {suffix}. Use .yaml, .yml, or .json")

    @staticmethod
    def _load_yaml(path: Path) -> PortDescConfig:
        """Load YAML configuration"""
        with open(path, 'r') as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {path}: {e}") from e
        return ConfigParser.from_dict(data or {}, base_dir=path.parent)

    @staticmethod
    def _load_json(path: Path) -> PortDescConfig:
        """Load JSON configuration"""
        with open(path, 'r') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigError(f"Invalid JSON in {path}: {e}") from e
        return ConfigParser.from_dict(data or {}, base_dir=path.parent)

    @staticmethod
    def from_dict(data: Dict[str, Any], base_dir: Optional[Path] = None) -> PortDescConfig:
        """
        Parse dictionary into PortDescConfig object.

        Args:
            data: Configuration dictionary
            base_dir: Directory that a relative registry.data_file is resolved against

        Returns:
            PortDescConfig object

        Raises:
            ConfigError: If configuration is invalid
        """
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration must be a mapping, got {type(data).__name__}")

        reg_data = ConfigParser._section(data, 'registry')
        data_file = reg_data.get('data_file')
        if data_file is not None and not isinstance(data_file, str):
            raise ConfigError(f"Invalid configuration: registry.data_file must be a path, "
                              f"got {type(data_file).__name__}")
        if data_file is not None and base_dir is not None and not Path(data_file).is_absolute():
            data_file = str(Path(base_dir) / data_file)

        protocols = reg_data.get('protocols', TransportProtocol.ALL)
        if isinstance(protocols, str):
            protocols = [protocols]
        elif not isinstance(protocols, (list, tuple)):
            raise ConfigError(f"Invalid configuration: registry.protocols must be a list, "
                              f"got {type(protocols).__name__}")

        registry_config = RegistryConfig(
            data_file=data_file,
            protocols=list(protocols),
            duplicate_policy=reg_data.get('duplicate_policy', 'last')
        )

        overrides_data = data.get('overrides') or []
        if not isinstance(overrides_data, list):
            raise ConfigError(f"Invalid configuration: overrides must be a list, "
                              f"got {type(overrides_data).__name__}")

        overrides = []
        for o in overrides_data:
            if not isinstance(o, dict):
                raise ConfigError(f"Invalid configuration: override must be a mapping, got {o!r}")
            if 'port' not in o or 'protocol' not in o:
                raise ConfigError("Invalid configuration: overrides need 'port' and 'protocol'")
            overrides.append(OverrideConfig(
                port=o['port'],
                protocol=o['protocol'],
                service_name=o.get('service_name', ''),
                description=o.get('description') or ''
            ))

        log_data = ConfigParser._section(data, 'logging')
        logging_config = LoggingConfig(level=log_data.get('level', 'WARNING'))

        config = PortDescConfig(
            registry=registry_config,
            overrides=overrides,
            logging=logging_config
        )

        # Validate configuration
        is_valid, error_msg = config.validate()
        if not is_valid:
            raise ConfigError(f"Invalid configuration: {error_msg}")

        return config

    @staticmethod
    def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
        """Get a top level section, which must be a mapping when present"""
        section = data.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigError(f"Invalid configuration: '{name}' must be a mapping, "
                              f"got {type(section).__name__}")
        return section
