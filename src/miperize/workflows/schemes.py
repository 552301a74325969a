"""Upgrade resource URLs to https so the framework validator accepts them."""

from __future__ import annotations

from bs4.element import Tag

from ..core.keys import K_SRC

_HTTPS = "https://"
_HTTP = "http://"


def secure_url(src: str) -> str:
    """Return ``src`` with an http or protocol-relative scheme upgraded to https.

    Relative paths, data URIs and anything unrecognised come back unchanged;
    the validator may still reject those.
    """

    if src[: len(_HTTPS)].lower() == _HTTPS:
        return src
    if src[: len(_HTTP)].lower() == _HTTP:
        return _HTTPS + src[len(_HTTP):]
    if src.startswith("//"):
        # Giphy embeds ship protocol-relative iframes.
        return "https:" + src
    return src


def use_secure_scheme(tag: Tag) -> None:
    src = tag.get(K_SRC)
    if src:
        tag[K_SRC] = secure_url(src)


__all__ = ["secure_url", "use_secure_scheme"]
