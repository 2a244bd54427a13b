from dataclasses import dataclass


@dataclass(frozen=True)
class ConverterConfig:
    """
    Options de conversion, lues (jamais modifiées) par le parser et le convertisseur.
    """
    pretty: bool = False       # JSON indenté
    include_raw: bool = True   # Recopie la ligne d'origine dans raw_rule
    sid_filter: str = ""       # Si non vide : ne garder que ce SID

    def keeps_sid(self, sid: int) -> bool:
        if not self.sid_filter:
            return True
        return str(sid) == self.sid_filter
