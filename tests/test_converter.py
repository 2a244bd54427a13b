"""
Tests for the conversion loop, SID filtering and the CLI entry point.
"""
import json

from main import main
from rules2ndjson.config import ConverterConfig
from rules2ndjson.converter import RuleConverter


def _rule(sid):
    return f'alert tcp any any -> any 80 (msg:"rule {sid}"; sid:{sid}; rev:1;)'


def test_order_is_preserved():
    converter = RuleConverter(show_progress=False)
    lines = [_rule(sid) for sid in (5, 3, 9, 1, 7)]

    docs = [json.loads(d) for d in converter.convert_lines(lines)]

    assert [d["metadata"]["sid"] for d in docs] == [5, 3, 9, 1, 7]
    assert converter.stats["converted"] == 5


def test_invalid_lines_are_counted_and_skipped(capsys):
    converter = RuleConverter(show_progress=False)
    lines = ["", "# comment", "this is not a rule", _rule(1)]

    docs = list(converter.convert_lines(lines))

    assert len(docs) == 1
    assert converter.stats["errors"] == 1
    assert converter.stats["skipped"] == 2
    assert "Ligne 3" in capsys.readouterr().out


def test_serialization_failure_is_counted():
    converter = RuleConverter(show_progress=False)
    docs = list(converter.convert_lines(['alert tcp any any -> any any (weight:inf; sid:1;)', _rule(2)]))

    assert len(docs) == 1
    assert converter.stats["errors"] == 1
    assert converter.stats["converted"] == 1


def test_sid_filter():
    converter = RuleConverter(ConverterConfig(sid_filter="2"), show_progress=False)
    no_metadata = 'alert tcp any any -> any any (msg:"no sid";)'

    docs = [json.loads(d) for d in converter.convert_lines([_rule(1), _rule(2), _rule(3), no_metadata])]

    # Sans métadonnées, la règle n'est pas filtrée
    assert [d["options"]["msg"] for d in docs] == ["rule 2", "no sid"]
    assert converter.stats["filtered"] == 2
    assert converter.stats["errors"] == 0


def test_process_file(rules_file, tmp_path):
    output = tmp_path / "out.ndjson"
    converter = RuleConverter(show_progress=False)

    stats = converter.process_file(str(rules_file), str(output))

    assert stats["converted"] == 3
    assert stats["errors"] == 1
    lines = output.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 3
    records = [json.loads(line) for line in lines]
    assert [r["action"] for r in records] == ["alert", "drop", "alert"]
    assert records[2]["metadata"]["cves"] == ["2010-1635"]


def test_process_file_without_raw(rules_file, tmp_path):
    output = tmp_path / "out.ndjson"
    converter = RuleConverter(ConverterConfig(include_raw=False), show_progress=False)

    converter.process_file(str(rules_file), str(output))

    for line in output.read_text(encoding="utf-8").splitlines():
        assert "raw_rule" not in json.loads(line)


def test_main_writes_default_output(rules_file):
    assert main([str(rules_file), "--no-progress"]) == 0

    output = rules_file.with_suffix(".ndjson")
    assert output.exists()
    assert len(output.read_text(encoding="utf-8").splitlines()) == 3


def test_main_pretty_and_sid(rules_file, tmp_path):
    output = tmp_path / "one.ndjson"

    assert main([str(rules_file), "-o", str(output), "--pretty", "--no-raw", "--sid", "21164", "--no-progress"]) == 0

    record = json.loads(output.read_text(encoding="utf-8"))
    assert record["metadata"]["sid"] == 21164
    assert "raw_rule" not in record


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "missing.rules"), "--no-progress"]) == 1
    assert "[ERREUR]" in capsys.readouterr().out


def test_huge_digit_value_does_not_stop_the_run():
    converter = RuleConverter(show_progress=False)
    huge = "9" * 5000
    lines = [f'alert tcp any any -> any any (dsize:{huge}; sid:1;)', _rule(2)]

    docs = [json.loads(d) for d in converter.convert_lines(lines)]

    assert [d["metadata"]["sid"] for d in docs] == [1, 2]
    assert converter.stats["errors"] == 0
