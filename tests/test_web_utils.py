from __future__ import annotations

from ideascout.tools import web_utils


def test_normalize_url_adds_scheme_to_protocol_relative_links():
    assert web_utils.normalize_url("//duckduckgo.com/l/?uddg=x") == "https://duckduckgo.com/l/?uddg=x"


def test_normalize_url_adds_https_to_bare_hosts():
    assert web_utils.normalize_url("example.com/page") == "https://example.com/page"


def test_normalize_url_keeps_qualified_urls():
    assert web_utils.normalize_url("http://example.com") == "http://example.com"
    assert web_utils.normalize_url(" https://example.com/a ") == "https://example.com/a"


def test_clean_content_collapses_whitespace_and_truncates():
    text = "alpha \n\n beta\t\tgamma " + "x" * 100

    cleaned = web_utils.clean_content(text, max_length=20)

    assert cleaned == "alpha beta gamma xxx"
    assert len(cleaned) == 20


def test_is_valid_url():
    assert web_utils.is_valid_url("https://example.com")
    assert not web_utils.is_valid_url("ftp://example.com")
    assert not web_utils.is_valid_url("not a url")
