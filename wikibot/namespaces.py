import re

from .errors import MalformedSiteInfo

class NamespaceRegistry:
    def __init__(self, namespaces, aliases):
        self.name_to_id = {}
        self.id_to_canonical = {}
        self.id_to_local = {}
        try:
            for info in namespaces.values():
                if "content" in info:
                    continue
                ns_id = int(info["id"])
                self.id_to_canonical[ns_id] = info["canonical"]
                self.id_to_local[ns_id] = info["*"]
                self.name_to_id[info["canonical"].lower()] = ns_id
                self.name_to_id[info["*"].lower()] = ns_id
            for alias in aliases:
                self.name_to_id[alias["*"].lower()] = int(alias["id"])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedSiteInfo(f"Bad namespace data: {e!r}") from e

    @classmethod
    def build(cls, siteinfo):
        try:
            namespaces = siteinfo["namespaces"]
            aliases = siteinfo["namespacealiases"]
        except (KeyError, TypeError) as e:
            raise MalformedSiteInfo(f"Siteinfo lacks {e}") from e
        return cls(namespaces, aliases)

    def resolve(self, ns):
        if ns is None:
            return None
        if isinstance(ns, int):
            return ns if ns in self.id_to_canonical else None
        return self.name_to_id.get(ns.lower())

    def local_name(self, ns):
        return self.id_to_local.get(self.resolve(ns))

    def canonical_name(self, ns):
        return self.id_to_canonical.get(self.resolve(ns))

    def names_for(self, ns):
        ns_id = self.resolve(ns)
        if ns_id is None:
            return []
        return [name for name, i in self.name_to_id.items() if i == ns_id]

    def match_pattern(self, ns):
        names = self.names_for(ns)
        if not names:
            return None
        return re.compile("|".join(re.escape(name) for name in names), re.IGNORECASE)

    def __contains__(self, ns):
        return self.resolve(ns) is not None

    def __len__(self):
        return len(self.id_to_canonical)

    def __iter__(self):
        return iter(sorted(self.id_to_canonical))
