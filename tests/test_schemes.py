from bs4 import BeautifulSoup

from miperize.workflows.schemes import secure_url, use_secure_scheme


def test_secure_url_keeps_https():
    assert secure_url("https://example.com/a.jpg") == "https://example.com/a.jpg"
    assert secure_url("HTTPS://example.com/a.jpg") == "HTTPS://example.com/a.jpg"


def test_secure_url_upgrades_http_and_preserves_suffix():
    src = "http://host/path/a%20b.jpg?x=1&y=http://other#frag"
    assert secure_url(src) == "https://host/path/a%20b.jpg?x=1&y=http://other#frag"


def test_secure_url_prefixes_protocol_relative():
    assert secure_url("//giphy.com/embed/X") == "https://giphy.com/embed/X"


def test_secure_url_leaves_other_forms_alone():
    for src in ("/content/a.jpg", "a.jpg", "data:image/png;base64,AAAA", "ftp://host/file", ""):
        assert secure_url(src) == src


def test_use_secure_scheme_only_touches_src():
    tag = BeautifulSoup('<source src="//foo.wav" type="audio/wav">', "html.parser").source
    use_secure_scheme(tag)
    assert tag["src"] == "https://foo.wav"
    assert tag["type"] == "audio/wav"

    anchor = BeautifulSoup('<a href="http://example.com">x</a>', "html.parser").a
    use_secure_scheme(anchor)
    assert anchor.attrs == {"href": "http://example.com"}
