"""Tests for portdesc.models module."""

import pytest

from portdesc.models import PortDescEntry


class TestPortDescEntry:
    """Tests for PortDescEntry."""

    def test_rejects_out_of_range_port(self) -> None:
        with pytest.raises(ValueError):
            PortDescEntry('bad', 70000, 'tcp', '')

    def test_rejects_unknown_protocol(self) -> None:
        with pytest.raises(ValueError):
            PortDescEntry('bad', 1, 'icmp', '')

    def test_is_indexable(self) -> None:
        assert PortDescEntry('ssh', 22, 'tcp', 'SSH').is_indexable
        assert not PortDescEntry('x11', None, 'tcp', 'X Window System').is_indexable
        assert not PortDescEntry('airplay', None, None, 'AirPlay').is_indexable

    def test_to_dict(self) -> None:
        entry = PortDescEntry('ssh', 22, 'tcp', 'The Secure Shell (SSH) Protocol', '[RFC4251]')
        assert entry.to_dict() == {
            'service_name': 'ssh',
            'port': 22,
            'protocol': 'tcp',
            'description': 'The Secure Shell (SSH) Protocol',
            'reference': '[RFC4251]',
        }

    def test_to_csv_row_matches_header(self) -> None:
        entry = PortDescEntry('airplay', None, None, 'AirPlay')
        row = entry.to_csv_row()
        assert len(row) == len(PortDescEntry.csv_header())
        assert row == ['airplay', '', '', 'AirPlay', '']

    def test_repr(self) -> None:
        assert repr(PortDescEntry('', 0, 'tcp', 'Reserved')) == "PortDescEntry(<unnamed> 0/tcp, 'Reserved')"
