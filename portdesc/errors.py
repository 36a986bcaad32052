"""
Exceptions raised by portdesc.
"""

from typing import Any, Optional


class PortDescError(Exception):
    """Base class for all portdesc errors"""


class RegistryFileError(PortDescError):
    """Registry file cannot be opened or read"""

    def __init__(self, path: str, reason: str = ''):
        self.path = path
        message = f"Registry file cannot be opened: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class RegistryParseError(PortDescError):
    """Registry CSV content cannot be parsed"""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class PortNotFoundError(PortDescError, KeyError):
    """No registry entry for a port/protocol pair"""

    def __init__(self, port: int, protocol: str):
        self.port = port
        self.protocol = protocol
        super().__init__(port, protocol)

    def __str__(self) -> str:
        return f"No service registered for {self.protocol.upper()} port {self.port}"


class UnknownProtocolError(PortDescError, ValueError):
    """Value is not a known transport protocol"""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Unknown transport protocol: {value!r}")


class InvalidPortError(PortDescError, ValueError):
    """Value is not a port number in 0-65535"""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid port number: {value!r}")


class ConfigError(PortDescError, ValueError):
    """Configuration file is unsupported or invalid"""
