"""DIP Port – SchemaSource.

Turn an opaque locator into schema text. Where schemas live is the adapter's business.
"""


class SchemaSource:
    """ISP: one call. Implementations raise SchemaLoadError on any failure."""

    def load(self, locator: str) -> str:  # pragma: no cover - interface only
        raise NotImplementedError
