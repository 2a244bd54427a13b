from typing import Iterable, Iterator
from tqdm import tqdm
from .config import ConverterConfig
from .errors import MalformedRuleError, SerializationError
from .exporter import NdjsonExporter
from .parser import RuleParser


class RuleConverter:
    def __init__(self, config: ConverterConfig = None, show_progress: bool = True):
        self.config = config or ConverterConfig()
        self.show_progress = show_progress
        self.parser = RuleParser(self.config)
        self.exporter = NdjsonExporter(pretty=self.config.pretty)
        self.stats = self._new_stats()

    def _new_stats(self):
        return {
            "total": 0,
            "converted": 0,
            "errors": 0,
            "filtered": 0,
            "skipped": 0,
        }

    def convert_lines(self, lines: Iterable[str]) -> Iterator[str]:
        """
        Convertit une suite de lignes en documents JSON, dans l'ordre d'entrée.
        Vides et commentaires sont ignorés ; une ligne invalide est comptée
        comme erreur et la boucle continue.
        """
        for line_no, line in enumerate(lines, start=1):
            self.stats["total"] += 1
            line = line.strip()

            if not line or line.startswith('#'):
                self.stats["skipped"] += 1
                continue

            try:
                rule = self.parser.parse_line(line)
            except MalformedRuleError as e:
                print(f"[!] Ligne {line_no} ignorée : {e}")
                self.stats["errors"] += 1
                continue

            # Une règle sans métadonnées n'a pas de SID à comparer : elle passe
            if rule.metadata is not None and not self.config.keeps_sid(rule.metadata.sid):
                self.stats["filtered"] += 1
                continue

            try:
                doc = self.exporter.serialize(rule)
            except SerializationError as e:
                print(f"[!] Ligne {line_no} : échec de l'encodage JSON ({e})")
                self.stats["errors"] += 1
                continue

            self.stats["converted"] += 1
            yield doc

    def process_file(self, input_path, output_path):
        print(f"[*] Conversion {input_path} -> {output_path}")
        self.stats = self._new_stats()

        with open(input_path, 'r', encoding='utf-8', errors='replace') as f:
            lines = f.readlines()

        with open(output_path, 'w', encoding='utf-8') as f_out:
            progress = tqdm(lines, desc="Conversion des règles", unit="règle", disable=not self.show_progress)
            for doc in self.convert_lines(progress):
                f_out.write(doc + "\n")

        self._print_stats(output_path)
        return dict(self.stats)

    def _print_stats(self, output_path):
        print("\n" + "="*60)
        print("RAPPORT DE CONVERSION")
        print("="*60)
        print(f"Lignes lues       : {self.stats['total']}")
        print(f"Ignorées          : {self.stats['skipped']} (vides / commentaires)")
        if self.config.sid_filter:
            print(f"Filtrées (SID)    : {self.stats['filtered']} (--sid {self.config.sid_filter})")
        print(f"Erreurs           : {self.stats['errors']}")
        print("-" * 40)
        print(f"✅ CONVERTIES     : {self.stats['converted']} règles -> {output_path}")
        print("="*60)
