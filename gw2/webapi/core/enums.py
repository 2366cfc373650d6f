"""Core enumerations shared by the request runtime and endpoint clients.

Key Types:
    - Locale: Languages the web API can localize responses into
    - Capability: Access patterns an endpoint may support
"""

from enum import Enum


class Locale(str, Enum):
    """Response language, sent as the ``lang`` query parameter."""

    ENGLISH = "en"
    SPANISH = "es"
    GERMAN = "de"
    FRENCH = "fr"
    CHINESE = "zh"

    @classmethod
    def from_string(cls, value: str) -> "Locale":
        """Resolve a locale from its code (case-insensitive).

        Raises:
            ValueError: If the code is not a supported locale
        """
        try:
            return cls(value.strip().lower())
        except ValueError:
            supported = ", ".join(locale.value for locale in cls)
            raise ValueError(f"Unsupported locale '{value}'. Supported: {supported}") from None


class Capability(str, Enum):
    """Reusable access patterns an endpoint client can be composed from.

    A concrete endpoint client implements exactly the set of capabilities
    the live API offers for its path.
    """

    SINGLE = "single"  # GET path -> one object
    BLOB = "blob"  # GET path -> collection, no id
    BY_ID = "by_id"  # GET path/<id> -> one object
    BY_IDS = "by_ids"  # GET path?ids=... -> collection (+ id listing)
    ALL = "all"  # every item, via ids=all or chunked by-ids
    PAGINATED = "paginated"  # GET path?page=&page_size=
    AUTHENTICATED = "authenticated"  # requires an access token
