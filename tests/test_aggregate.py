import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from genoscan.aggregate import ResultAggregator, summarize  # noqa: E402
from genoscan.models import DiseaseRisk, DrugInteraction, Finding, SourceStatus  # noqa: E402
from genoscan.parser import GenomeParser  # noqa: E402
from genoscan.report import build_report, filter_findings, render_text  # noqa: E402


def _finding(marker_id: str, category: str, magnitude: int) -> Finding:
    return Finding(
        marker_id=marker_id,
        gene="GENE",
        category=category,
        genotype="AG",
        status="status",
        description=f"{marker_id} description",
        magnitude=magnitude,
    )


FINDINGS = [
    _finding("RS1", "Nutrition", 1),
    _finding("RS2", "Drug Metabolism", 4),
    _finding("RS3", "Sleep/Circadian", 0),
    _finding("RS4", "Drug Metabolism", 2),
]

DRUGS = [
    DrugInteraction("RS5", "CYP2D6", ("codeine",), "2A", "Adjust dose"),
    DrugInteraction("RS2", "CYP2C19", ("clopidogrel",), "1A", "Avoid"),
    DrugInteraction("RS6", "CYP2C19", ("omeprazole",), "1A", "Duplicate level"),
]

RISKS = [
    DiseaseRisk("RS7", "APOB", "Hypercholesterolemia", "unknown", "Conflicting (0 stars review)"),
    DiseaseRisk("RS1", "MTHFR", "Homocystinuria", "Risk Factor", "risk_factor (1 star review)"),
]


def _aggregate():
    parsed = GenomeParser().parse("rs1\t1\t100\tAG\nrs2\t1\t200\tCC\n")
    return ResultAggregator().aggregate(
        parsed,
        FINDINGS,
        DRUGS,
        RISKS,
        {"clinvar": SourceStatus("clinvar", succeeded=True, record_count=2)},
    )


def test_aggregate_orders_and_deduplicates() -> None:
    result = _aggregate()

    assert [item.magnitude for item in result.findings] == [4, 2, 1, 0]
    assert [(item.gene, item.level) for item in result.drug_interactions] == [
        ("CYP2C19", "1A"),
        ("CYP2D6", "2A"),
    ]
    assert [item.significance for item in result.disease_risks] == ["Risk Factor", "unknown"]
    assert result.total_markers_parsed == 2
    # RS1..RS5 and RS7; RS6 was removed by dedup
    assert result.markers_with_findings == 6
    assert result.timestamp.tzinfo is not None


def test_summary_counts_every_tier() -> None:
    summary = summarize(FINDINGS, DRUGS[:1])

    assert summary.total_findings == 4
    assert summary.high_impact == 1
    assert summary.drug_interactions == 1
    assert summary.disease_risks == 0
    assert summary.by_category == {"Nutrition": 1, "Drug Metabolism": 2, "Sleep/Circadian": 1}
    assert summary.by_impact == {"high": 1, "moderate": 1, "low": 1, "info": 1}
    assert summarize([]).by_impact == {"high": 0, "moderate": 0, "low": 0, "info": 0}


def test_result_to_dict_is_json_ready() -> None:
    payload = _aggregate().to_dict()

    assert payload["format"] == "23andMe"
    assert payload["findings"][0]["impact"] == "high"
    assert payload["drug_interactions"][0]["drugs"] == ["clopidogrel"]
    assert payload["sources"]["clinvar"]["succeeded"] is True
    assert payload["summary"]["total_findings"] == 4


def test_filter_findings_by_alias_and_magnitude() -> None:
    assert [item.marker_id for item in filter_findings(FINDINGS, "pharma")] == ["RS2", "RS4"]
    assert [item.marker_id for item in filter_findings(FINDINGS, "sleep")] == ["RS3"]
    assert [item.marker_id for item in filter_findings(FINDINGS, "nutri")] == ["RS1"]
    assert [item.marker_id for item in filter_findings(FINDINGS, min_magnitude=2)] == [
        "RS2",
        "RS4",
    ]


def test_report_summary_covers_filtered_findings() -> None:
    result = _aggregate()
    shown = filter_findings(result.findings, "pharma", 3)

    payload = build_report(result, shown, file_path="/tmp/genome.txt")

    assert payload["success"] is True
    assert payload["file"] == "/tmp/genome.txt"
    assert [item["marker_id"] for item in payload["findings"]] == ["RS2"]
    assert [item["marker_id"] for item in payload["high_impact"]] == ["RS2"]
    assert payload["summary"]["total_findings"] == 1
    assert len(payload["drug_interactions"]) == 2


def test_render_text_lists_sections() -> None:
    text = render_text(_aggregate())

    assert "HIGH IMPACT FINDINGS:" in text
    assert "CYP2C19 [1A]: clopidogrel" in text
    assert "DISEASE RISKS:" in text
    assert "Drug Metabolism: 2" in text
    assert "UNAVAILABLE SOURCES:" not in text


def test_result_sources_are_read_only() -> None:
    result = _aggregate()

    with pytest.raises(TypeError):
        result.sources["pharmgkb"] = SourceStatus("pharmgkb", succeeded=True)  # type: ignore[index]
    assert list(result.sources) == ["clinvar"]
