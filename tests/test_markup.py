import pytest

from miperize.workflows import markup


@pytest.mark.parametrize("name", ["img", "source", "track", "br"])
def test_void_elements_have_no_close_tag(name):
    soup = markup.parse_markup(f"<{name}>")
    tag = soup.find(name)

    assert name in markup.VOID_ELEMENTS
    assert markup.render_close(tag) == ""


def test_renamed_void_element_gets_close_tag():
    soup = markup.parse_markup('<img src="a.jpg">')
    tag = soup.find("img")
    tag.name = "mip-img"

    assert markup.render_close(tag) == "</mip-img>"


def test_container_elements_are_closed():
    soup = markup.parse_markup("<audio><source src='a.mp3'></audio>")

    assert markup.render_close(soup.find("audio")) == "</audio>"
    assert markup.render_close(soup.find("source")) == ""
