from bs4 import BeautifulSoup

from miperize.workflows.layout import apply_layout, compute_layout, parse_dimension


def _tag(html: str):
    return BeautifulSoup(html, "html.parser").find()


def test_parse_dimension_accepts_plain_numbers():
    assert parse_dimension("50") == 50.0
    assert parse_dimension(" 299.5 ") == 299.5
    assert parse_dimension(None) is None


def test_parse_dimension_rejects_malformed_values():
    for value in ("auto", "50px", "", "-10", "nan"):
        assert parse_dimension(value) is None


def test_compute_layout_threshold():
    assert compute_layout("299", "responsive") == "fixed"
    assert compute_layout("300", "responsive") == "responsive"
    assert compute_layout("auto", "responsive") == "responsive"
    assert compute_layout(None, "fill") == "fill"
    assert compute_layout(None, None) == "responsive"


def test_apply_layout_never_overrides_explicit_layout():
    tag = _tag('<mip-img width="50" layout="container">')
    apply_layout(tag, "responsive")
    assert tag["layout"] == "container"


def test_apply_layout_sets_fixed_for_small_width():
    tag = _tag('<mip-img width="120">')
    apply_layout(tag, "responsive")
    assert tag["layout"] == "fixed"
