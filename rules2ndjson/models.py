from dataclasses import dataclass, field
from typing import List, Dict, Optional, Union, Any

# Valeur d'option : drapeau nu (True), entier, flottant ou chaîne
OptionValue = Union[bool, int, float, str]


@dataclass
class PortInfo:
    source_ports: List[str] = field(default_factory=list)
    destination_ports: List[str] = field(default_factory=list)

    def is_empty(self):
        return not self.source_ports and not self.destination_ports

    def to_dict(self) -> Dict[str, Any]:
        # Une liste vide n'est pas sérialisée
        out = {}
        if self.source_ports:
            out["source_ports"] = list(self.source_ports)
        if self.destination_ports:
            out["destination_ports"] = list(self.destination_ports)
        return out


@dataclass
class RuleMetadata:
    cves: List[str] = field(default_factory=list)
    references: List[str] = field(default_factory=list)
    sid: int = 0
    revision: int = 0
    severity: str = ""

    def is_empty(self):
        """
        Vrai si aucun champ ne porte d'information.
        Un SID ou une révision à 0 compte comme absent.
        """
        return (
            self.sid == 0 and
            self.revision == 0 and
            not self.cves and
            not self.references and
            self.severity == ""
        )

    def to_dict(self) -> Dict[str, Any]:
        out = {}
        if self.cves:
            out["cves"] = list(self.cves)
        if self.references:
            out["references"] = list(self.references)
        if self.sid:
            out["sid"] = self.sid
        if self.revision:
            out["revision"] = self.revision
        if self.severity:
            out["severity"] = self.severity
        return out


@dataclass
class RuleRecord:
    # 1. En-tête (copié tel quel)
    action: str
    protocol: str
    source_ip: str
    source_port: str
    direction: str
    dest_ip: str
    dest_port: str

    # 2. Bloc d'options typé
    options: Dict[str, OptionValue] = field(default_factory=dict)

    # 3. Enrichissements dérivés (None = absent de la sortie)
    parsed_ports: Optional[PortInfo] = None
    metadata: Optional[RuleMetadata] = None

    # 4. Texte d'origine (None si --no-raw)
    raw_rule: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Représentation JSON de l'enregistrement.
        Les champs optionnels absents disparaissent de la sortie :
        jamais de `null`, jamais d'objet vide.
        """
        out = {
            "action": self.action,
            "protocol": self.protocol,
            "source_ip": self.source_ip,
            "source_port": self.source_port,
            "direction": self.direction,
            "dest_ip": self.dest_ip,
            "dest_port": self.dest_port,
            "options": dict(self.options),
        }
        if self.parsed_ports is not None and not self.parsed_ports.is_empty():
            out["parsed_ports"] = self.parsed_ports.to_dict()
        if self.metadata is not None and not self.metadata.is_empty():
            out["metadata"] = self.metadata.to_dict()
        if self.raw_rule is not None:
            out["raw_rule"] = self.raw_rule
        return out
