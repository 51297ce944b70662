import re
import logging

from .client import Wiki, check_response
from .errors import ApiError, InvalidTitle, EmptySummary
from .titles import has_invalid_chars

logger = logging.getLogger(__name__)

ATTRIBUTE_NAMES = {
    "pageid": "page_id",
    "ns": "ns",
    "title": "real_title",
    "touched": "touched",
    "lastrevid": "last_rev_id",
    "counter": "counter",
    "length": "length",
    "starttimestamp": "start_timestamp",
    "edittoken": "edit_token",
    "protection": "protection",
}

def first_page(response):
    check_response(response)
    try:
        return next(iter(response["query"]["pages"].values()))
    except (KeyError, TypeError, AttributeError, StopIteration):
        raise ApiError("badresponse", "no page in the query result") from None

class Page:
    def __init__(self, title, wiki=None):
        if has_invalid_chars(title):
            raise InvalidTitle(f"Invalid title: {title}")
        if not isinstance(wiki, Wiki):
            wiki = Wiki.lookup(wiki or None)
        self.wiki = wiki
        self.title = wiki.cleanup_title(title)
        self.text_loaded = False
        self.attrs_loaded = False
        self._text = None
        self._orig_text = None
        self._attrs = {}

    @classmethod
    def get(cls, title, wiki=None):
        return cls(title, wiki)

    load = get

    def __repr__(self):
        return f"<Page {self.title!r} on {self.wiki.url}>"

    def load_text(self):
        if not self.title:
            text = ""
        else:
            page = first_page(self.wiki.api({
                "action": "query",
                "prop": "revisions",
                "rvprop": "content",
                "titles": self.title,
            }))
            if "missing" in page:
                text = ""
            elif "invalid" in page:
                raise InvalidTitle(f"Invalid title: {self.title}")
            else:
                text = page["revisions"][0]["*"]
        self._text = text
        self._orig_text = text
        self.text_loaded = True

    def load_attrs(self):
        page = first_page(self.wiki.api({
            "action": "query",
            "prop": "info",
            "inprop": "protection",
            "intoken": "edit",
            "titles": self.title,
        }))
        self._attrs = {ATTRIBUTE_NAMES.get(key, key): value for key, value in page.items()}
        self.attrs_loaded = True

    @property
    def text(self):
        if not self.text_loaded:
            self.load_text()
        return self._text

    @text.setter
    def text(self, text):
        if not self.text_loaded:
            self.load_text()
        self._text = text

    @property
    def orig_text(self):
        if not self.text_loaded:
            self.load_text()
        return self._orig_text

    @property
    def dirty(self):
        return self.text_loaded and self._text != self._orig_text

    def attr(self, name):
        if not self.attrs_loaded:
            self.load_attrs()
        return self._attrs.get(name)

    page_id = property(lambda self: self.attr("page_id"))
    ns = property(lambda self: self.attr("ns"))
    real_title = property(lambda self: self.attr("real_title"))
    touched = property(lambda self: self.attr("touched"))
    last_rev_id = property(lambda self: self.attr("last_rev_id"))
    counter = property(lambda self: self.attr("counter"))
    length = property(lambda self: self.attr("length"))
    start_timestamp = property(lambda self: self.attr("start_timestamp"))
    edit_token = property(lambda self: self.attr("edit_token"))
    protection = property(lambda self: self.attr("protection"))

    def dump_to(self, file):
        if hasattr(file, "write"):
            file.write(self.text)
        else:
            with open(file, "w", encoding="utf-8") as dump_file:
                dump_file.write(self.text)

    def dump(self):
        path = re.sub(r"[^a-zA-Z0-9\-]", "_", self.title) + ".txt"
        self.dump_to(path)
        return path

    def save(self, title=None, summary=None):
        """Returns None when nothing changed and no call was made."""
        title = self.title if title is None else title
        summary = self.wiki.summary if summary is None else summary
        if has_invalid_chars(title):
            raise InvalidTitle(f"Invalid title: {title}")
        if not summary:
            raise EmptySummary(f"No summary given for {title}.")

        if self._orig_text == self._text and title == self.title:
            logger.info(f"Page {title} not saved - no changes.")
            return None

        if not self.attrs_loaded:
            self.load_attrs()

        return self.wiki.api({
            "action": "edit",
            "bot": 1,
            "title": title,
            "text": self.text,
            "summary": summary,
            "token": self.edit_token,
        })

    put = save
