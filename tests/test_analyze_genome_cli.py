import json
import subprocess
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]

GENOME = (
    "# rsid\tchromosome\tposition\tgenotype\n"
    "rs762551\t15\t75041917\tCC\n"
    "rs4244285\t10\t94781859\tAG\n"
    "rs4680\t22\t19951271\tAG\n"
    "rs9923231\t16\t31107689\tTT\n"
)


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "scripts/analyze_genome.py", *args],
        cwd=REPO_ROOT,
        text=True,
        capture_output=True,
    )


def test_cli_json_report(tmp_path: Path) -> None:
    genome = tmp_path / "genome.txt"
    genome.write_text(GENOME)
    pharmgkb = tmp_path / "pharmgkb.json"
    pharmgkb.write_text(
        json.dumps({"rs4244285": [{"gene": "CYP2C19", "level": "1A", "drugs": "clopidogrel"}]})
    )

    result = _run(str(genome), "--json", "--pharmgkb", str(pharmgkb), "--retries", "0")

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["success"] is True
    assert payload["format"] == "23andMe"
    assert payload["total_markers_parsed"] == 4
    assert payload["findings"]
    assert payload["drug_interactions"][0]["drugs"] == ["clopidogrel"]
    assert payload["sources"]["pharmgkb"]["succeeded"] is True
    assert set(payload["summary"]["by_impact"]) == {"high", "moderate", "low", "info"}


def test_cli_category_and_magnitude_filters(tmp_path: Path) -> None:
    genome = tmp_path / "genome.txt"
    genome.write_text(GENOME)

    result = _run(str(genome), "--json", "--category", "pharma", "--min-magnitude", "3")

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["findings"]
    for finding in payload["findings"]:
        assert finding["category"] == "Drug Metabolism"
        assert finding["magnitude"] >= 3


def test_cli_text_report(tmp_path: Path) -> None:
    genome = tmp_path / "genome.txt"
    genome.write_text(GENOME)

    result = _run(str(genome))

    assert result.returncode == 0, result.stderr
    assert "DNA ANALYSIS RESULTS" in result.stdout
    assert "SUMMARY BY CATEGORY:" in result.stdout


def test_cli_missing_file(tmp_path: Path) -> None:
    result = _run(str(tmp_path / "missing.txt"), "--json")

    assert result.returncode == 1
    payload = json.loads(result.stdout)
    assert payload["success"] is False
    assert "File not found" in payload["error"]


def test_cli_parse_failure(tmp_path: Path) -> None:
    genome = tmp_path / "notes.txt"
    genome.write_text("shopping list\neggs\n")

    result = _run(str(genome), "--json")

    assert result.returncode == 1
    payload = json.loads(result.stdout)
    assert payload == {"success": False, "error": "Unrecognized file format"}
