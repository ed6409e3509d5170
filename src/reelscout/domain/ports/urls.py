"""Port for site URL normalisation and alternate URL forms."""

from __future__ import annotations

from typing import Protocol


class UrlNormalizerPort(Protocol):
    @property
    def origin(self) -> str: ...

    def absolute(self, href: str) -> str: ...

    def category_alternate(self, url: str) -> str | None: ...

    def movie_variants(self, url: str) -> list[str]: ...

    def category_url_from_slug(self, slug: str) -> str: ...

    def movie_url_from_slug(self, slug: str) -> str: ...
