import re
import logging
import threading
from urllib.parse import urlparse, urlunparse

import requests

from . import __version__
from .errors import (
    WikiError,
    ApiError,
    AuthenticationFailed,
    MalformedSiteInfo,
    NotLoggedIn,
    TransportFailure,
)
from .namespaces import NamespaceRegistry
from .titles import TitleCanonicalizer, has_invalid_chars
from .query import run_continued
from .users import User, Rank, ANONYMOUS

USER_AGENT = f"wikibot/{__version__}"

SIPROP = "|".join([
    "general",
    "namespaces",
    "namespacealiases",
    "specialpagealiases",
    "magicwords",
    "interwikimap",
    "dbrepllag",
    "statistics",
    "usergroups",
    "extensions",
    "fileextensions",
    "rightsinfo",
    "languages",
    "skins",
    "extensiontags",
    "functionhooks",
    "showhooks",
    "variables",
])

WIKIMEDIA_HOSTS = {
    "w": "{}.wikipedia.org",
    "b": "{}.wikibooks.org",
    "n": "{}.wikinews.org",
    "q": "{}.wikiquote.org",
    "s": "{}.wikisource.org",
    "v": "{}.wikiversity.org",
    "wikt": "{}.wiktionary.org",
    "species": "{}.wikispecies.org",
    "commons": "commons.wikimedia.org",
    "meta": "meta.wikimedia.org",
}

RSD_LINK_RE = re.compile(r'<link rel="EditURI" type="application/rsd\+xml" href="([^"]+)\?action=rsd"')

NOT_LOGGED_IN_CODES = {"readapidenied", "notloggedin", "wrnotloggedin"}

def resolve_wikimedia_id(wiki_id):
    """"b:pl" -> "pl.wikibooks.org"; type defaults to "w", language to "en"."""
    keys = [key for key in wiki_id.split(":") if key]
    if len(keys) > 2:
        raise ValueError(f"Invalid wiki id: {wiki_id}")
    types = [key for key in keys if key in WIKIMEDIA_HOSTS]
    langs = [key for key in keys if key not in WIKIMEDIA_HOSTS]
    host = WIKIMEDIA_HOSTS[types[0] if types else "w"]
    return host.format(langs[0] if langs else "en")

def normalize_wiki_url(url):
    return url if "." in url else resolve_wikimedia_id(url)

def check_response(response):
    error = response.get("error")
    if error is None:
        return response
    code = error.get("code", "unknown")
    info = error.get("info", "")
    if code in NOT_LOGGED_IN_CODES:
        raise NotLoggedIn(f"{code}: {info}")
    raise ApiError(code, info)

class Wiki:
    sessions = {}
    _sites = {}
    _sites_lock = threading.Lock()

    def __init__(self, url, api_endpoint=None, summary=None, user_agent=USER_AGENT, transport=None):
        self.logger = logging.getLogger(__name__)
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": user_agent})
        self.transport = transport or self.post
        self.summary = summary
        self.user = ANONYMOUS

        if "." in url:
            self.url = url
            if api_endpoint is None:
                api_endpoint = self.discover_endpoint()
        else:
            self.url = resolve_wikimedia_id(url)
            if api_endpoint is None:
                api_endpoint = f"http://{self.url}/w/api.php"
        parts = urlparse(api_endpoint)
        if not parts.scheme:
            parts = parts._replace(scheme=urlparse(self.url).scheme or "http")
        self.api_endpoint = urlunparse(parts)

        self.siteinfo, self.namespaces = self.load_site()
        first_letter = self.siteinfo.get("general", {}).get("case") == "first-letter"
        self.canonicalizer = TitleCanonicalizer(self.namespaces, first_letter)
        Wiki.sessions[self.url] = self

    def __repr__(self):
        bot = " [bot]" if self.is_bot else ""
        return f"<Wiki {self.user}@{self.url}{bot}>"

    @classmethod
    def lookup(cls, url=None):
        if url is None:
            if not cls.sessions:
                raise WikiError("No wiki sessions present.")
            if len(cls.sessions) > 1:
                raise WikiError("A wiki URL is required when using several sessions at once.")
            return next(iter(cls.sessions.values()))
        url = normalize_wiki_url(url)
        try:
            return cls.sessions[url]
        except KeyError:
            raise WikiError(f"No wiki session for {url}.") from None

    def discover_endpoint(self):
        url = self.url if "://" in self.url else f"http://{self.url}"
        try:
            response = self.session.get(url)
            response.raise_for_status()
        except requests.RequestException as e:
            raise TransportFailure(f"Cannot reach {url}: {e}") from e
        match = RSD_LINK_RE.search(response.text)
        if match is None:
            raise WikiError(f"Cannot find the API endpoint of {url}.")
        return match.group(1)

    def fetch_site(self):
        self.logger.debug(f"Fetching siteinfo from {self.api_endpoint}")
        response = self.api_continued({
            "action": "query",
            "meta": "siteinfo",
            "siprop": SIPROP,
        }, "siteinfo", "sicontinue")
        siteinfo = response.get("query")
        if not isinstance(siteinfo, dict):
            error = response.get("error") or {}
            raise MalformedSiteInfo(f"No siteinfo from {self.api_endpoint}: {error.get('code', 'no query')}")
        if not isinstance(siteinfo.get("general", {}), dict):
            raise MalformedSiteInfo(f"Bad general siteinfo from {self.api_endpoint}.")
        return siteinfo, NamespaceRegistry.build(siteinfo)

    def load_site(self):
        with Wiki._sites_lock:
            site = Wiki._sites.get(self.api_endpoint)
        if site is None:
            site = self.fetch_site()
            with Wiki._sites_lock:
                site = Wiki._sites.setdefault(self.api_endpoint, site)
        return site

    def post(self, request):
        try:
            response = self.session.post(self.api_endpoint, data=request, headers={
                "Content-Type": "application/x-www-form-urlencoded",
            } if isinstance(request, str) else None)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            raise TransportFailure(f"API request to {self.api_endpoint} failed: {e}") from e

    def api(self, request):
        if isinstance(request, str):
            request += "&format=json"
        else:
            request = {**request, "format": "json"}
        self.logger.debug(f"API call: {request}")
        return self.transport(request)

    def api_continued(self, request, merge_on, continue_param, limit=None):
        return run_continued(self.api, request, merge_on, continue_param, limit)

    @property
    def logged_in(self):
        return not self.user.anonymous

    @property
    def username(self):
        return self.user.name

    @property
    def is_bot(self):
        return self.user.bot

    def login(self, username, password):
        if has_invalid_chars(username):
            raise AuthenticationFailed(f"Bad username: {username}")
        self.logger.info(f"Logging in as {username}...")
        data = {
            "action": "login",
            "lgname": username,
            "lgpassword": password,
        }
        response = self.api(data)["login"]
        if response["result"] == "NeedToken":
            response = self.api({**data, "lgtoken": response.get("lgtoken") or response["token"]})["login"]
        if response["result"] != "Success":
            raise AuthenticationFailed(f'Log in failed: {response["result"]}')

        response = self.api({"action": "query", "list": "watchlistraw"})
        if response.get("error", {}).get("code") == "wrnotloggedin":
            raise AuthenticationFailed("Log in failed: session was not kept.")

        response = self.api({
            "action": "query",
            "list": "allusers",
            "aulimit": 1,
            "augroup": "bot",
            "aufrom": username,
        })
        self.user = User(username, Rank.from_allusers(username, response["query"]["allusers"]))
        if not self.user.bot:
            self.logger.warning(f"{username} does not have bot rights.")
        self.logger.info(f"Logged in as {self.user}.")
        return self

    def logout(self):
        if not self.logged_in:
            raise NotLoggedIn("Cannot log out of an anonymous session.")
        self.api({"action": "logout"})
        self.logger.info(f"Logged out {self.user}.")
        self.user = ANONYMOUS
        self.session.cookies.clear()

    def canonicalize(self, title, preserve_case=False, preserve_colon=False):
        return self.canonicalizer.canonicalize(title, preserve_case, preserve_colon)

    def cleanup_title(self, title, preserve_case=False, preserve_colon=False):
        return self.canonicalize(title, preserve_case, preserve_colon).render()

    def resolve_ns(self, ns):
        if isinstance(ns, str):
            return self.namespaces.resolve(self.cleanup_title(ns).lower())
        return self.namespaces.resolve(ns)

    def ns_local_for(self, ns):
        return self.namespaces.local_name(self.resolve_ns(ns))

    def ns_canon_for(self, ns):
        return self.namespaces.canonical_name(self.resolve_ns(ns))

    def ns_regex_for(self, ns):
        return self.namespaces.match_pattern(self.resolve_ns(ns))

    def page(self, title):
        from .page import Page
        return Page(title, self)
