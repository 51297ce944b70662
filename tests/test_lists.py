import pytest

from wikibot import make_list

def members(*titles, token=None, field="categorymembers", param="cmcontinue"):
    response = {"query": {field: [{"ns": 0, "title": title} for title in titles]}}
    if token is not None:
        response["query-continue"] = {field: {param: token}}
    return response

def test_category_follows_continuation(wiki, transport):
    transport.queue(members("A", "B", token="page|C"), members("C"))
    assert make_list(wiki, "Category", "Kategoria:X") == ["A", "B", "C"]
    first, second = transport.requests
    assert first["cmtitle"] == "Kategoria:X"
    assert first["cmlimit"] == "max"
    assert second["cmcontinue"] == "page|C"

def test_kind_names_are_normalized(wiki, transport):
    transport.queue(members("A", field="backlinks"))
    assert make_list(wiki, "What links here", "Foo") == ["A"]
    assert transport.requests[0]["list"] == "backlinks"
    assert transport.requests[0]["bltitle"] == "Foo"

def test_pages(wiki, transport):
    assert make_list(wiki, "pages", "A", "B") == ["A", "B"]
    assert transport.calls == 0

def test_unknown_kind(wiki):
    with pytest.raises(ValueError):
        make_list(wiki, "google", "kot")

def test_categories_on_page(wiki, transport):
    transport.queue(
        {
            "query": {"pages": {"1": {"title": "Foo", "categories": [{"title": "Kategoria:A"}]}}},
            "query-continue": {"categories": {"clcontinue": "1|B"}},
        },
        {"query": {"pages": {"1": {"title": "Foo", "categories": [{"title": "Kategoria:B"}]}}}},
    )
    assert make_list(wiki, "categorieson", "Foo") == ["Kategoria:A", "Kategoria:B"]
    assert transport.requests[1]["clcontinue"] == "1|B"

def test_search_all_namespaces(wiki, transport):
    transport.queue(members("A", field="search"))
    assert make_list(wiki, "search", "kot", "allns") == ["A"]
    request = transport.requests[0]
    assert request["srwhat"] == "text"
    assert request["srnamespace"].startswith("0|1|2")

def test_category_recursive(wiki, transport):
    transport.queue(
        members("A", "Kategoria:Y"),
        members("B", "Kategoria:X", "A"),
    )
    assert make_list(wiki, "categoryr", "Kategoria:X") == ["A", "Kategoria:Y", "B", "Kategoria:X"]
    assert [request["cmtitle"] for request in transport.requests] == ["Kategoria:X", "Kategoria:Y"]

def test_search_follows_offset(wiki, transport):
    transport.queue(
        members("A", token=1, field="search", param="sroffset"),
        members("B", field="search"),
    )
    assert make_list(wiki, "search", "kot") == ["A", "B"]
    assert transport.requests[1]["sroffset"] == 1

def test_linksearch_follows_offset(wiki, transport):
    transport.queue(
        members("A", token=500, field="exturlusage", param="euoffset"),
        members("B", field="exturlusage"),
    )
    assert make_list(wiki, "linksearch", "*.example.org") == ["A", "B"]
    assert transport.requests[1]["euoffset"] == 500
