"""Shared fixtures for portdesc tests."""

import pytest

from portdesc import PortDescription

SAMPLE_REGISTRY = """\
Service Name,Port Number,Transport Protocol,Description,Assignee,Contact,Registration Date,Modification Date,Reference,Service Code,Unauthorized Use Reported,Assignment Notes
,0,tcp,Reserved,[Jon_Postel],[Jon_Postel],,,,,,
ssh,22,tcp,The Secure Shell (SSH) Protocol,,,,,[RFC4251],,,
ssh,22,udp,The Secure Shell (SSH) Protocol,,,,,[RFC4251],,,
domain,53,udp,Domain Name Server,,,,,[RFC1035],,,
http,80,tcp,World Wide Web HTTP,,,,,[RFC9110],,,
www,80,tcp,World Wide Web HTTP,,,,,[RFC9110],,,
www-http,80,tcp,World Wide Web HTTP,,,,,[RFC9110],,,
https,443,sctp,HTTPS,,,,,[RFC9260],,,
shell,514,tcp,"cmd like exec, but automatic authentication is performed as for login server",,,,,,,,
x11,6000-6063,tcp,X Window System,,,,,,,,
syslog-tls,6514,DCCP,syslog over DTLS,,,,,[RFC6012],,,
airplay,,,Protocol for streaming of audio/video content,,,,,,,,
"""


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_REGISTRY


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / 'service-names-port-numbers.csv'
    path.write_text(SAMPLE_REGISTRY, encoding='utf-8')
    return path


@pytest.fixture
def sample() -> PortDescription:
    return PortDescription.from_csv_text(SAMPLE_REGISTRY)


@pytest.fixture(scope='session')
def bundled() -> PortDescription:
    return PortDescription.default()
