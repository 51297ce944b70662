import re

CATEGORY_NS = 14
ALL_NAMESPACES = "|".join(str(ns) for ns in [*range(16), 100, 101, 102, 103])

def titles(entries):
    return [entry["title"] for entry in entries]

def page_prop(wiki, prop, limit_param, title):
    response = wiki.api_continued({
        "action": "query",
        "prop": prop,
        limit_param: "max",
        "titles": title,
    }, prop, f"{limit_param[:2]}continue")
    page = next(iter(response["query"]["pages"].values()))
    return titles(page.get(prop, []))

def list_query(wiki, name, prefix, continue_param=None, **params):
    response = wiki.api_continued({
        "action": "query",
        "list": name,
        f"{prefix}limit": "max",
        **{f"{prefix}{key}": value for key, value in params.items()},
    }, name, continue_param or f"{prefix}continue")
    return titles(response["query"].get(name, []))

def search(wiki, phrase, what, namespaces=None):
    return list_query(
        wiki, "search", "sr",
        continue_param="sroffset",
        what=what,
        namespace=ALL_NAMESPACES if namespaces == "allns" else "0",
        search=phrase,
    )

def category_recursive(wiki, category):
    pattern = wiki.ns_regex_for(CATEGORY_NS)
    members = []
    processed = []
    queue = [category]
    while queue:
        current = queue.pop(0)
        processed.append(current)
        found = list_query(wiki, "categorymembers", "cm", prop="title", title=current)
        for title in found:
            prefix, sep, _ = title.partition(":")
            if sep and pattern is not None and pattern.fullmatch(prefix) and title not in processed and title not in queue:
                queue.append(title)
        members += found
    return list(dict.fromkeys(members))

MAKERS = {
    "pages": lambda wiki, *names: list(names),
    "categorieson": lambda wiki, title: page_prop(wiki, "categories", "cllimit", title),
    "category": lambda wiki, title: list_query(wiki, "categorymembers", "cm", prop="title", title=title),
    "categoryrecursive": category_recursive,
    "linkson": lambda wiki, title: page_prop(wiki, "links", "pllimit", title),
    "templateson": lambda wiki, title: page_prop(wiki, "templates", "tllimit", title),
    "contribs": lambda wiki, user: list_query(wiki, "usercontribs", "uc", prop="title", user=user),
    "whatlinkshere": lambda wiki, title: list_query(wiki, "backlinks", "bl", title=title),
    "whatembeds": lambda wiki, title: list_query(wiki, "embeddedin", "ei", title=title),
    "imageusage": lambda wiki, title: list_query(wiki, "imageusage", "iu", title=title),
    "search": lambda wiki, phrase, ns=None: search(wiki, phrase, "text", ns),
    "searchtitles": lambda wiki, phrase, ns=None: search(wiki, phrase, "title", ns),
    "random": lambda wiki, count: titles(wiki.api({
        "action": "query",
        "list": "random",
        "rnnamespace": 0,
        "rnlimit": count,
    })["query"]["random"]),
    "linksearch": lambda wiki, query: list_query(wiki, "exturlusage", "eu", continue_param="euoffset", prop="title", query=query),
}

ALIASES = {
    "page": "pages",
    "categoryr": "categoryrecursive",
    "transclusionson": "templateson",
    "usercontribs": "contribs",
    "whatlinksto": "whatlinkshere",
    "whattranscludes": "whatembeds",
    "image": "imageusage",
    "external": "linksearch",
}

def make_list(wiki, kind, *params):
    """make_list(wiki, "category", "Category:Foo") -> member titles."""
    kind = re.sub(r"[^a-z]", "", kind.lower())
    kind = ALIASES.get(kind, kind)
    try:
        maker = MAKERS[kind]
    except KeyError:
        raise ValueError(f"Unknown list kind: {kind}") from None
    return maker(wiki, *params)
