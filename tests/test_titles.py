import pytest

from wikibot import CanonicalTitle, TitleCanonicalizer, NamespaceRegistry

@pytest.mark.parametrize("raw, expected", [
    ("foo_bar", "Foo bar"),
    ("  Foo__ _bar  ", "Foo bar"),
    ("Foo%20bar%C5%BC", "Foo barż"),
    ("C++", "C++"),
    ("category:foo", "Kategoria:Foo"),
    ("Image: X.png", "Plik:X.png"),
    ("Smith: A Biography", "Smith: A Biography"),
    ("Foo#Section.2C_one", "Foo#Section, one"),
    ("Foo\u200ebar", "Foobar"),
    ("Foo\u00a0\u2003bar", "Foo bar"),
    ("Category:", "Kategoria:"),
    (":Talk:Foo", "Dyskusja:Foo"),
    ("100%2541", "100A"),
    ("Foo#a.2541", "Foo#aA"),
])
def test_cleanup_title(wiki, raw, expected):
    assert wiki.cleanup_title(raw) == expected

def test_no_api_calls(wiki, transport):
    wiki.cleanup_title("Category:Foo")
    assert transport.calls == 0

def test_anchor_and_namespace_split(wiki):
    title = wiki.canonicalize(":Category:Foo_bar#See also", preserve_colon=True)
    assert title == CanonicalTitle(True, "Kategoria", "Foo bar", "See also")
    assert title.render() == ":Kategoria:Foo bar#See also"

def test_leading_colon_dropped_by_default(wiki):
    title = wiki.canonicalize(":Category:Foo_bar#See also")
    assert not title.leading_colon
    assert str(title) == "Kategoria:Foo bar#See also"

def test_empty_title(wiki):
    assert wiki.canonicalize(" \u3000 _ ").render() == ""
    assert wiki.canonicalize("   ") == CanonicalTitle()
    assert not wiki.canonicalize("\u00a0")

def test_preserve_case(wiki):
    assert wiki.cleanup_title("foo bar", preserve_case=True) == "foo bar"
    assert wiki.cleanup_title("foo bar") == "Foo bar"

def test_case_sensitive_wiki(siteinfo):
    canonicalizer = TitleCanonicalizer(NamespaceRegistry.build(siteinfo), first_letter=False)
    assert canonicalizer.cleanup("foo") == "foo"
    assert canonicalizer.cleanup("category:foo") == "Kategoria:foo"

def test_only_first_letter_is_upper_cased(wiki):
    assert wiki.cleanup_title("iPhone X") == "IPhone X"
    assert wiki.cleanup_title("ébène") == "Ébène"

@pytest.mark.parametrize("raw", [
    "foo_bar",
    "category:foo%20bar#A.2Cb",
    "Image:X__y.png",
    "Smith: A Biography",
    "  talk : some_page ",
    "Foo#",
    "100%2541",
    "Foo#a.2541",
])
def test_idempotent(wiki, raw):
    once = wiki.cleanup_title(raw)
    assert wiki.cleanup_title(once) == once
