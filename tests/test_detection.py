import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from genoscan.formats import FormatDetector  # noqa: E402
from genoscan.formats.detection import (  # noqa: E402
    has_rsid_header,
    has_rsid_rows,
    mentions_family_tree,
)
from genoscan.models import FormatTag  # noqa: E402


def test_vendor_names_are_checked_in_priority_order() -> None:
    detector = FormatDetector()

    # ancestry outranks everything that follows it
    assert detector.detect("#AncestryDNA raw data\n#myheritage\n") is FormatTag.ANCESTRY
    assert detector.detect("# MyHeritage DNA raw data.\nRSID,CHROMOSOME\n") is FormatTag.MYHERITAGE
    assert detector.detect("##fileformat=VCFv4.2\n##source=nebula\n") is FormatTag.VCF
    assert detector.detect("# Nebula Genomics export\n# rsid\tchromosome\n") is FormatTag.NEBULA


def test_family_tree_abbreviation() -> None:
    assert mentions_family_tree("rsid,chromosome,position,result from ftdna")
    assert FormatDetector().detect("FamilyTreeDNA autosomal\n") is FormatTag.FAMILY_TREE_DNA


def test_23andme_header_forms() -> None:
    assert has_rsid_header("# rsid\tchromosome\tposition\tgenotype")
    assert has_rsid_header("#rsid")
    assert has_rsid_header("rsid chromosome position")
    assert not has_rsid_header("rsid only")


def test_row_shape_fallback_identifies_headerless_files() -> None:
    content = "rs123\t1\t1000\tAG\nrs456\t2\t2000\tCC\n"

    assert has_rsid_rows(content)
    assert FormatDetector().detect(content) is FormatTag.TWENTY_THREE_AND_ME


def test_row_shape_fallback_only_scans_first_lines() -> None:
    filler = "".join(f"line {index}\tx\n" for index in range(25))
    content = filler + "rs123\t1\t1000\tAG\n"

    assert not has_rsid_rows(content)
    assert FormatDetector().detect(content) is FormatTag.UNKNOWN


def test_detection_only_reads_header_window() -> None:
    content = "x" * 2100 + "ancestrydna"

    assert FormatDetector().detect(content) is FormatTag.UNKNOWN
