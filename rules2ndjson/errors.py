class ConverterError(Exception):
    """Erreur de base du convertisseur."""


class MalformedRuleError(ConverterError):
    """La ligne ne respecte pas la grammaire d'une règle Snort/Suricata."""


class SerializationError(ConverterError):
    """L'enregistrement n'a pas pu être encodé en JSON."""
