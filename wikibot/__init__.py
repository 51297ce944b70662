__version__ = "0.6.0"

from .errors import (
    WikiError,
    InvalidTitle,
    MalformedSiteInfo,
    EmptySummary,
    NotLoggedIn,
    AuthenticationFailed,
    TransportFailure,
    ApiError,
)
from .namespaces import NamespaceRegistry
from .titles import CanonicalTitle, TitleCanonicalizer
from .query import run_continued, recursive_merge
from .users import User, Rank
from .client import Wiki, resolve_wikimedia_id
from .page import Page
from .lists import make_list
