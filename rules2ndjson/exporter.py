import json
from .errors import SerializationError
from .models import RuleRecord


def generate_output_filename(input_filename: str) -> str:
    """
    'rules/emerging.rules' -> 'rules/emerging.ndjson'
    'rules.d/local'        -> 'rules.d/local.ndjson'
    Seul un point situé après le dernier '/' marque une extension.
    """
    last_dot = input_filename.rfind('.')
    if last_dot != -1:
        last_slash = input_filename.rfind('/')
        if last_slash == -1 or last_dot > last_slash:
            return input_filename[:last_dot] + ".ndjson"
    return input_filename + ".ndjson"


class NdjsonExporter:
    """
    Encode un RuleRecord en un document JSON (une ligne en mode compact).
    Les deux modes ne diffèrent que par les espaces.
    """

    def __init__(self, pretty: bool = False):
        self.pretty = pretty

    def serialize(self, rule: RuleRecord) -> str:
        try:
            if self.pretty:
                return json.dumps(rule.to_dict(), indent=2, ensure_ascii=False, allow_nan=False)
            return json.dumps(rule.to_dict(), separators=(',', ':'), ensure_ascii=False, allow_nan=False)
        except (TypeError, ValueError) as e:
            # Cas typique : une option 'nan' ou 'inf' typée en flottant
            raise SerializationError(str(e)) from e
