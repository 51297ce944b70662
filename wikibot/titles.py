import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote

INVALID_CHARS = "#<>[]|{}"
INVALID_CHARS_RE = re.compile(f"[{re.escape(INVALID_CHARS)}]")

BIDI_MARKS_RE = re.compile("[\u200e\u200f\u202a-\u202e]")
UNICODE_SPACES_RE = re.compile("[\u00a0\u1680\u180e\u2000-\u200a\u2028\u2029\u202f\u205f\u3000]+")
ANCHOR_ESCAPE_RE = re.compile(r"\.([0-9a-fA-F]{2})")
PERCENT_RUN_RE = re.compile(r"(?:%[0-9a-fA-F]{2})+")
SPACES_RE = re.compile(r"[ _]+")
LEADING_COLON_RE = re.compile(r"^:\s*")

def has_invalid_chars(title):
    return INVALID_CHARS_RE.search(title) is not None

def percent_decode(text):
    # only %XX runs; a literal "+" stays as it is
    return PERCENT_RUN_RE.sub(lambda m: unquote(m.group()), text)

def decode_fully(text, anchor=False):
    # until stable, so a decoded title decodes to itself
    while True:
        decoded = percent_decode(ANCHOR_ESCAPE_RE.sub(r"%\1", text) if anchor else text)
        if decoded == text:
            return decoded
        text = decoded

def fold_spaces(text):
    return SPACES_RE.sub(" ", text).strip()

@dataclass(frozen=True)
class CanonicalTitle:
    leading_colon: bool = False
    namespace: Optional[str] = None
    name: str = ""
    anchor: Optional[str] = None

    def render(self):
        parts = []
        if self.leading_colon:
            parts.append(":")
        if self.namespace is not None:
            parts.append(f"{self.namespace}:")
        parts.append(self.name)
        if self.anchor is not None:
            parts.append(f"#{self.anchor}")
        return "".join(parts)

    def __str__(self):
        return self.render()

    def __bool__(self):
        return bool(self.render())

class TitleCanonicalizer:
    def __init__(self, registry, first_letter=True):
        self.registry = registry
        self.first_letter = first_letter

    def canonicalize(self, title, preserve_case=False, preserve_colon=False):
        title = BIDI_MARKS_RE.sub("", title)
        title = UNICODE_SPACES_RE.sub(" ", title)
        if not title.strip():
            return CanonicalTitle()

        name, sep, anchor = title.partition("#")
        name = fold_spaces(decode_fully(name))
        if sep:
            anchor = fold_spaces(decode_fully(anchor, anchor=True))
        else:
            anchor = None

        leading_colon = name.startswith(":")
        if leading_colon:
            name = LEADING_COLON_RE.sub("", name)
        if not preserve_colon:
            leading_colon = False

        namespace = None
        if ":" in name:
            prefix, rest = name.split(":", 1)
            ns_id = self.registry.resolve(prefix.strip())
            if ns_id is not None:
                namespace = self.registry.local_name(ns_id)
                name = rest.strip()

        if name and not preserve_case and self.first_letter:
            name = name[0].upper() + name[1:]

        return CanonicalTitle(leading_colon, namespace, name, anchor)

    def cleanup(self, title, preserve_case=False, preserve_colon=False):
        return self.canonicalize(title, preserve_case, preserve_colon).render()
