"""
Transport protocol constants and port number ranges.
"""

from typing import Dict, Union

from .errors import InvalidPortError, UnknownProtocolError


# Transport protocols listed in the IANA port registry
class TransportProtocol:
    """Transport protocol name constants"""
    TCP = 'tcp'
    UDP = 'udp'
    SCTP = 'sctp'
    DCCP = 'dccp'

    ALL = (TCP, UDP, SCTP, DCCP)


# Protocol name to IP protocol number mapping
PROTOCOL_NUMBERS: Dict[str, int] = {
    TransportProtocol.TCP: 6,
    TransportProtocol.UDP: 17,
    TransportProtocol.DCCP: 33,
    TransportProtocol.SCTP: 132,
}


# Port ranges
PORT_MIN = 0
PORT_MAX = 65535
PORT_RANGE_WELL_KNOWN = (0, 1023)
PORT_RANGE_REGISTERED = (1024, 49151)
PORT_RANGE_DYNAMIC = (49152, 65535)


def parse_protocol(value: Union[str, int]) -> str:
    """
    Normalize a transport protocol to its canonical name.

    Args:
        value: Protocol name in any case (e.g., 'TCP', ' udp ') or
               IP protocol number (e.g., 6, 17)

    Returns:
        Lowercase protocol name

    Raises:
        UnknownProtocolError: If the value is not a known transport protocol
    """
    if isinstance(value, bool):
        raise UnknownProtocolError(value)

    if isinstance(value, int):
        return get_protocol_name(value)

    if isinstance(value, str):
        name = value.strip().lower()
        if name in TransportProtocol.ALL:
            return name

    raise UnknownProtocolError(value)


def get_protocol_number(protocol_name: str) -> int:
    """
    Get IP protocol number from protocol name.

    Args:
        protocol_name: Protocol name (e.g., 'tcp', 'udp')

    Returns:
        Protocol number

    Raises:
        UnknownProtocolError: If protocol name is not found
    """
    return PROTOCOL_NUMBERS[parse_protocol(protocol_name)]


def get_protocol_name(protocol_number: int) -> str:
    """
    Get protocol name from IP protocol number.

    Raises:
        UnknownProtocolError: If the number is not a known transport protocol
    """
    for name, num in PROTOCOL_NUMBERS.items():
        if num == protocol_number:
            return name
    raise UnknownProtocolError(protocol_number)


def validate_port(port: Union[int, str]) -> int:
    """
    Validate a port number.

    Args:
        port: Port as int or decimal string

    Returns:
        Port number as int

    Raises:
        InvalidPortError: If port is not an integer in 0-65535
    """
    if isinstance(port, bool):
        raise InvalidPortError(port)

    if isinstance(port, str):
        text = port.strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidPortError(port)
        number = int(text)
    elif isinstance(port, int):
        number = port
    else:
        raise InvalidPortError(port)

    if not (PORT_MIN <= number <= PORT_MAX):
        raise InvalidPortError(port)
    return number


def port_range(port: Union[int, str]) -> str:
    """
    Classify a port into its IANA range.

    Returns:
        'well_known', 'registered' or 'dynamic'
    """
    number = validate_port(port)
    if number <= PORT_RANGE_WELL_KNOWN[1]:
        return 'well_known'
    if number <= PORT_RANGE_REGISTERED[1]:
        return 'registered'
    return 'dynamic'
