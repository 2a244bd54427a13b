from typing import List


def split_options(opts_str: str) -> List[str]:
    """
    Découpe le bloc d'options (sans les parenthèses) sur les ';' hors guillemets.

    Ex: 'msg:"a ; b"; sid:1;' -> ['msg:"a ; b"', 'sid:1']

    Chaque '"' inverse l'état "entre guillemets" : pas de gestion de l'échappement,
    un \\" dans une valeur ferme donc la chaîne. Des guillemets non équilibrés
    laissent l'état inversé jusqu'à la fin, sans lever d'erreur.
    Les fragments sont nettoyés des espaces ; les fragments vides sont écartés.
    """
    parts = []
    current = []
    in_quotes = False

    for char in opts_str:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == ';' and not in_quotes:
            _flush(parts, current)
            current = []
        else:
            current.append(char)

    # Dernier fragment (bloc sans ';' final)
    _flush(parts, current)

    return parts


def _flush(parts: List[str], current: List[str]):
    fragment = ''.join(current).strip()
    if fragment:
        parts.append(fragment)
