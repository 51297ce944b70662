import copy

import pytest

from wikibot import Wiki

SITEINFO = {
    "general": {"case": "first-letter", "sitename": "Wikipedia"},
    "namespaces": {
        "-2": {"id": -2, "case": "first-letter", "canonical": "Media", "*": "Media"},
        "-1": {"id": -1, "case": "first-letter", "canonical": "Special", "*": "Specjalna"},
        "0": {"id": 0, "case": "first-letter", "content": "", "*": ""},
        "1": {"id": 1, "case": "first-letter", "canonical": "Talk", "*": "Dyskusja"},
        "2": {"id": 2, "case": "first-letter", "canonical": "User", "*": "Wikipedysta"},
        "6": {"id": 6, "case": "first-letter", "canonical": "File", "*": "Plik"},
        "14": {"id": 14, "case": "first-letter", "canonical": "Category", "*": "Kategoria"},
    },
    "namespacealiases": [
        {"id": 6, "*": "Image"},
        {"id": 6, "*": "Grafika"},
        {"id": 2, "*": "Wikipedystka"},
    ],
}

class FakeTransport:
    """Stands in for the HTTP round trip: records requests, replays responses."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def queue(self, *responses):
        self.responses.extend(responses)

    def __call__(self, request):
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request}")
        return copy.deepcopy(self.responses.pop(0))

    @property
    def calls(self):
        return len(self.requests)

@pytest.fixture(autouse=True)
def clean_sessions():
    Wiki.sessions.clear()
    Wiki._sites.clear()
    yield
    Wiki.sessions.clear()
    Wiki._sites.clear()

@pytest.fixture
def siteinfo():
    return copy.deepcopy(SITEINFO)

@pytest.fixture
def transport():
    return FakeTransport({"query": copy.deepcopy(SITEINFO)})

@pytest.fixture
def wiki(transport):
    wiki = Wiki("pl.wikipedia.org", api_endpoint="https://pl.wikipedia.org/w/api.php", summary="bot edit", transport=transport)
    transport.requests.clear()
    return wiki
