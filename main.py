import os
import sys
import argparse
from rules2ndjson.config import ConverterConfig
from rules2ndjson.converter import RuleConverter
from rules2ndjson.exporter import generate_output_filename


def build_arg_parser():
    parser = argparse.ArgumentParser(description="Convertisseur de règles Snort/Suricata vers NDJSON")
    parser.add_argument('rules', type=str, help="Fichier de règles à convertir")
    parser.add_argument('-o', '--output', type=str, default=None,
                        help="Fichier de sortie (défaut : même nom, extension .ndjson)")
    parser.add_argument('--pretty', action='store_true', help="JSON indenté")
    parser.add_argument('--raw', action=argparse.BooleanOptionalAction, default=True,
                        help="Inclure la règle d'origine (raw_rule)")
    parser.add_argument('--sid', type=str, default="", help="Ne garder que la règle portant ce SID")
    parser.add_argument('--no-progress', action='store_true', help="Désactiver la barre de progression")
    return parser


def main(argv=None):
    args = build_arg_parser().parse_args(argv)

    input_file = args.rules
    output_file = args.output or generate_output_filename(input_file)

    # 1. Vérification
    if not os.path.isfile(input_file):
        print(f"[ERREUR] Fichier introuvable : {input_file}")
        return 1

    config = ConverterConfig(
        pretty=args.pretty,
        include_raw=args.raw,
        sid_filter=args.sid,
    )

    # 2. Conversion
    converter = RuleConverter(config, show_progress=not args.no_progress)
    try:
        converter.process_file(input_file, output_file)
    except OSError as e:
        print(f"[ERREUR] {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
