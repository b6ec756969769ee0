import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from genoscan.significance import (  # noqa: E402
    SignificanceRule,
    classify_significance,
    significance_rank,
)


def test_default_rules() -> None:
    assert classify_significance("Pathogenic") == "Pathogenic"
    assert classify_significance("Pathogenic/Likely_pathogenic") == "Likely Pathogenic"
    assert classify_significance("Likely pathogenic") == "Likely Pathogenic"
    assert classify_significance("risk_factor") == "Risk Factor"
    assert classify_significance("drug_response") == "Drug Response"
    assert classify_significance("Protective") == "Protective"
    assert classify_significance("Benign") == "unknown"
    assert classify_significance(None) == "unknown"


def test_custom_rules_replace_defaults() -> None:
    rules = (SignificanceRule("Benign", any_of=("benign",)),)

    assert classify_significance("Likely benign", rules) == "Benign"
    assert classify_significance("Pathogenic", rules) == "unknown"


def test_unknown_ranks_after_listed_categories() -> None:
    ordered = sorted(
        ["unknown", "Protective", "Pathogenic", "Risk Factor"],
        key=significance_rank,
    )

    assert ordered == ["Pathogenic", "Risk Factor", "Protective", "unknown"]
