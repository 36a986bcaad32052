"""Tests for the portdesc command line interface."""

import json

import pytest

from portdesc import __version__
from portdesc.cli import main


class TestPortLookup:
    """Tests for looking up ports."""

    def test_single_port(self, capsys) -> None:
        assert main(['22']) == 0
        assert capsys.readouterr().out == '22/tcp\tssh\n'

    def test_several_ports(self, sample_file, capsys) -> None:
        assert main(['22', '80', '--data-file', str(sample_file)]) == 0
        assert capsys.readouterr().out.splitlines() == ['22/tcp\tssh', '80/tcp\twww-http']

    def test_protocol_and_field(self, capsys) -> None:
        assert main(['53', '-p', 'udp', '-f', 'description']) == 0
        assert capsys.readouterr().out == '53/udp\tDomain Name Server\n'

    def test_info_field(self, sample_file, capsys) -> None:
        assert main(['53', '-p', 'UDP', '-f', 'info', '-d', str(sample_file)]) == 0
        assert capsys.readouterr().out == '53/udp\tdomain\tDomain Name Server\t[RFC1035]\n'

    def test_not_found(self, capsys) -> None:
        assert main(['22', '6000']) == 1
        captured = capsys.readouterr()
        assert captured.out == '22/tcp\tssh\n'
        assert '6000/tcp\tnot found' in captured.err

    def test_all_protocols(self, sample_file, capsys) -> None:
        assert main(['22', '--all-protocols', '-d', str(sample_file)]) == 0
        assert capsys.readouterr().out.splitlines() == ['22/tcp\tssh', '22/udp\tssh']

    def test_json(self, sample_file, capsys) -> None:
        assert main(['22', '8080', '--json', '-d', str(sample_file)]) == 1
        result = json.loads(capsys.readouterr().out)
        assert [e['service_name'] for e in result['found']] == ['ssh']
        assert result['missing'] == ['8080/tcp']

    def test_invalid_port(self, capsys) -> None:
        assert main(['http']) == 2
        assert 'Invalid port number' in capsys.readouterr().err

    def test_unknown_protocol(self, capsys) -> None:
        assert main(['22', '-p', 'icmp']) == 2
        assert 'Unknown transport protocol' in capsys.readouterr().err


class TestServiceLookup:
    """Tests for --service."""

    def test_service(self, sample_file, capsys) -> None:
        assert main(['-s', 'ssh', '-d', str(sample_file)]) == 0
        assert capsys.readouterr().out.splitlines() == [
            '22/tcp\tssh\tThe Secure Shell (SSH) Protocol\t[RFC4251]',
            '22/udp\tssh\tThe Secure Shell (SSH) Protocol\t[RFC4251]',
        ]

    def test_unknown_service(self, sample_file, capsys) -> None:
        assert main(['-s', 'gopher', '-d', str(sample_file)]) == 1
        assert 'gopher\tnot found' in capsys.readouterr().err


class TestDataSources:
    """Tests for --data-file, --config and --export."""

    def test_missing_data_file(self, tmp_path, capsys) -> None:
        assert main(['22', '-d', str(tmp_path / 'missing.csv')]) == 2
        assert 'Registry file cannot be opened' in capsys.readouterr().err

    def test_config(self, tmp_path, sample_file, capsys) -> None:
        config = tmp_path / 'portdesc.yaml'
        config.write_text(
            f"registry:\n"
            f"  data_file: {sample_file.name}\n"
            f"  duplicate_policy: first\n"
            f"overrides:\n"
            f"  - port: 8080\n"
            f"    protocol: tcp\n"
            f"    service_name: http-proxy\n"
        )
        assert main(['80', '8080', '-c', str(config)]) == 0
        assert capsys.readouterr().out.splitlines() == ['80/tcp\thttp', '8080/tcp\thttp-proxy']

    def test_invalid_config(self, tmp_path, capsys) -> None:
        config = tmp_path / 'portdesc.yaml'
        config.write_text("registry:\n  protocols: [icmp]\n")
        assert main(['22', '-c', str(config)]) == 2
        assert 'Invalid configuration' in capsys.readouterr().err

    @pytest.mark.parametrize('text', [
        "registry: [tcp]\n",
        "overrides:\n  - 8080\n",
        "registry:\n  protocols: 6\n",
    ])
    def test_malformed_config(self, tmp_path, capsys, text) -> None:
        config = tmp_path / 'portdesc.yaml'
        config.write_text(text)
        assert main(['22', '-c', str(config)]) == 2
        assert 'Invalid configuration' in capsys.readouterr().err

    def test_export(self, tmp_path, sample_file, capsys) -> None:
        out = tmp_path / 'out.json'
        assert main(['--export', str(out), '--format', 'json', '-d', str(sample_file)]) == 0
        assert 'Exported 8 entries' in capsys.readouterr().out
        assert len(json.loads(out.read_text())) == 8


class TestUsage:
    """Tests for argument handling."""

    def test_nothing_to_do(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 2

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(['--version'])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out
