import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from genoscan.analyzers import CuratedAnalyzer  # noqa: E402
from genoscan.matching import candidate_genotypes, match_genotype  # noqa: E402
from genoscan.models import FormatTag, impact_tier  # noqa: E402
from genoscan.parser import GenomeParser  # noqa: E402
from genoscan.sources import load_curated_table, parse_curated_table  # noqa: E402


def test_candidates_for_two_allele_calls() -> None:
    assert candidate_genotypes("ag") == ("AG", "GA", "AA", "GG")
    assert candidate_genotypes("CC") == ("CC",)
    assert candidate_genotypes("A") == ("A",)


def test_reversed_genotype_matches() -> None:
    assert match_genotype({"AG": "het"}, "GA") == "het"


def test_exact_match_wins_over_reversed() -> None:
    assert match_genotype({"AG": "fwd", "GA": "rev"}, "GA") == "rev"


def test_homozygous_widening() -> None:
    assert match_genotype({"AA": "hom"}, "AG") == "hom"


def test_absent_genotype_yields_no_match() -> None:
    assert match_genotype({"CC": "x", "TT": "y"}, "AG") is None


def test_heterozygous_only_table_does_not_match_other_alleles() -> None:
    caffeine_fixture = {"AC": "intermediate", "CA": "intermediate"}

    assert match_genotype(caffeine_fixture, "AG") is None
    assert match_genotype({"AG": "carrier"}, "AG") == "carrier"


def test_curated_table_matching() -> None:
    table = load_curated_table()

    caffeine = table["rs762551"]
    assert match_genotype(caffeine.variants, "CA") is caffeine.variants["CA"]
    # AG is absent; widening falls back to the AA interpretation
    assert match_genotype(caffeine.variants, "AG") is caffeine.variants["AA"]
    assert match_genotype(caffeine.variants, "GT") is None


def test_impact_tiers() -> None:
    assert [impact_tier(value) for value in range(7)] == [
        "info",
        "low",
        "moderate",
        "high",
        "high",
        "high",
        "high",
    ]


def test_homozygous_query_does_not_widen_into_heterozygous_entry() -> None:
    assert match_genotype({"AG": "carrier"}, "AA") is None


def test_parsed_genotype_against_literal_tables() -> None:
    parsed = GenomeParser().parse("# rsid\tchromosome\tposition\tgenotype\nrs762551\t1\t12345\tAG")
    assert parsed.format_tag is FormatTag.TWENTY_THREE_AND_ME
    assert parsed.marker_count == 1

    def table(variants: dict) -> dict:
        return parse_curated_table(
            {"rs762551": {"gene": "CYP1A2", "category": "Drug Metabolism", "variants": variants}}
        )

    heterozygous_ac = table(
        {
            "AC": {"status": "intermediate", "desc": "AC", "magnitude": 2},
            "CA": {"status": "intermediate", "desc": "CA", "magnitude": 2},
        }
    )
    declares_ag = table({"AG": {"status": "carrier", "desc": "AG", "magnitude": 2}})

    assert CuratedAnalyzer(heterozygous_ac).analyze(parsed) == []
    findings = CuratedAnalyzer(declares_ag).analyze(parsed)
    assert [finding.status for finding in findings] == ["carrier"]
