import re
import math
from typing import Dict, List, Optional
from .config import ConverterConfig
from .errors import MalformedRuleError
from .models import RuleRecord, PortInfo, RuleMetadata, OptionValue
from .tokenizer import split_options

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
INT64_MAX_DIGITS = len(str(INT64_MAX))

INT_REGEX = re.compile(r"^[+-]?[0-9]+$")
FLOAT_REGEX = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$")
SPECIAL_FLOAT_REGEX = re.compile(r"^[+-]?(?:inf|infinity|nan)$", re.IGNORECASE)


def parse_int64(raw: str) -> Optional[int]:
    """
    Entier décimal signé sur 64 bits, sans espaces autour ; None sinon.
    Au-delà de 19 chiffres significatifs, int() n'est jamais appelé.
    """
    if not INT_REGEX.match(raw):
        return None
    if len(raw.lstrip('+-').lstrip('0')) > INT64_MAX_DIGITS:
        return None
    num = int(raw)
    if INT64_MIN <= num <= INT64_MAX:
        return num
    return None


def coerce_value(raw: str) -> OptionValue:
    """
    Typage d'une valeur d'option : entier, sinon flottant, sinon chaîne.
    Les entiers hors 64 bits retombent en flottant ; un flottant qui
    déborde (ex: 1e400) reste une chaîne.
    """
    num = parse_int64(raw)
    if num is not None:
        return num
    if SPECIAL_FLOAT_REGEX.match(raw):
        return float(raw)
    if FLOAT_REGEX.match(raw):
        num = float(raw)
        if not math.isinf(num):
            return num
    return raw


def _as_int(val: OptionValue) -> int:
    # bool hérite de int : un drapeau nu 'sid;' ne vaut pas 1
    if isinstance(val, bool):
        return 0
    if isinstance(val, int):
        return val
    if isinstance(val, str):
        num = parse_int64(val)
        if num is not None:
            return num
    return 0


class RuleParser:
    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

        # action proto src src_port dir dst dst_port (options)
        # '-?>' accepte aussi un '>' seul
        # Séparateurs : espace, \t, \n, \f, \r (pas \v)
        sep = r"[ \t\n\f\r]+"
        field = r"([^ \t\n\f\r]+)"
        self.HEADER_REGEX = re.compile(
            rf"^(\w+){sep}(\w+){sep}{field}{sep}{field}{sep}(-?>|<->|<-){sep}{field}{sep}{field}{sep}\((.+)\)$",
            re.ASCII,
        )

    def parse_line(self, line: str) -> RuleRecord:
        """
        Transforme une ligne de règle en RuleRecord.
        Lève MalformedRuleError si la ligne ne respecte pas la grammaire :
        aucune extraction partielle.
        """
        line = line.strip()
        match = self.HEADER_REGEX.fullmatch(line)
        if not match:
            raise MalformedRuleError("invalid rule format")

        action, proto, src, src_p, direction, dst, dst_p, opts_str = match.groups()

        options = self.parse_options(opts_str)

        return RuleRecord(
            action=action,
            protocol=proto,
            source_ip=src,
            source_port=src_p,
            direction=direction,
            dest_ip=dst,
            dest_port=dst_p,
            options=options,
            parsed_ports=self.parse_ports(src_p, dst_p),
            metadata=self.extract_metadata(options),
            raw_rule=line if self.config.include_raw else None,
        )

    def parse_options(self, opts_str: str) -> Dict[str, OptionValue]:
        options = {}
        for part in split_options(opts_str):
            if ':' not in part:
                # Drapeau nu (ex: nocase)
                options[part] = True
                continue

            key, val = part.split(':', 1)
            key = key.strip()
            val = val.strip()

            if len(val) >= 2 and val[0] == '"' and val[-1] == '"':
                val = val[1:-1]

            # Clé dupliquée : la dernière gagne
            options[key] = coerce_value(val)

        return options

    def parse_ports(self, src_p: str, dst_p: str) -> Optional[PortInfo]:
        info = PortInfo()
        if src_p != "any":
            info.source_ports = self._split_port_list(src_p)
        if dst_p != "any":
            info.destination_ports = self._split_port_list(dst_p)

        if info.is_empty():
            return None
        return info

    def _split_port_list(self, val_str: str) -> List[str]:
        """
        '[139,445]' -> ['139', '445'] ; '1024:' -> ['1024:']
        Aucune conversion numérique : plages et variables restent du texte.
        """
        if val_str.startswith('[') and val_str.endswith(']'):
            val_str = val_str[1:-1]
        return [p.strip() for p in val_str.split(',')]

    def extract_metadata(self, options: Dict[str, OptionValue]) -> Optional[RuleMetadata]:
        metadata = RuleMetadata()

        if "sid" in options:
            metadata.sid = _as_int(options["sid"])
        if "rev" in options:
            metadata.revision = _as_int(options["rev"])

        ref = options.get("reference")
        if isinstance(ref, str):
            if ref.startswith("cve,"):
                metadata.cves.append(ref[len("cve,"):])
            metadata.references.append(ref)

        classtype = options.get("classtype")
        if isinstance(classtype, str):
            metadata.severity = classtype

        if metadata.is_empty():
            return None
        return metadata
