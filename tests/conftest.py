"""
Pytest configuration and fixtures.
"""
import pytest

from rules2ndjson.config import ConverterConfig
from rules2ndjson.parser import RuleParser


SAMBA_RULE = (
    'alert tcp $EXTERNAL_NET any -> $HOME_NET [139,445] '
    '(msg:"SERVER-SAMBA attack"; flow:to_server,established; content:"|FF|SMB"; sid:17152; rev:10;)'
)

DNS_RULE = 'drop udp any any -> any 53 (msg:"DNS query blocked"; content:"malware.com"; sid:21164; rev:1;)'

CVE_RULE = (
    'alert tcp any any -> $HOME_NET 80 (msg:"WEB exploit"; reference:cve,2010-1635; '
    'classtype:attempted-admin; sid:1000001; rev:2;)'
)

SAMPLE_RULES_FILE = f"""# Sample rules
{SAMBA_RULE}

this is not a rule
{DNS_RULE}
  # indented comment
{CVE_RULE}
"""


@pytest.fixture
def parser():
    return RuleParser(ConverterConfig())


@pytest.fixture
def rules_file(tmp_path):
    """Fichier .rules de test : 3 règles valides, 1 invalide, commentaires et vides."""
    path = tmp_path / "sample.rules"
    path.write_text(SAMPLE_RULES_FILE, encoding="utf-8")
    return path
