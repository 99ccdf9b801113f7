"""Open Graph and Twitter meta tags for shared proposal links."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from radical_api.services.share_image import CARD_HEIGHT, CARD_WIDTH, escape_markup

logger = logging.getLogger(__name__)

TITLE_PREFIX = "RADICAL Petition: "
TITLE_CHARS = 60
DESCRIPTION_CHARS = 150

_OG_IMAGE_TAG = re.compile(
    r"""<meta\s+property\s*=\s*["']og:image(?::[^"']*)?["'][^>]*>""",
    re.IGNORECASE,
)
_TWITTER_IMAGE_TAG = re.compile(
    r"""<meta\s+name\s*=\s*["']twitter:image(?::[^"']*)?["'][^>]*>""",
    re.IGNORECASE,
)
_HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)


@dataclass(frozen=True)
class ShareMeta:
    """Values injected into a page for one shared proposal."""

    title: str
    description: str
    image_url: str
    page_url: str

    @classmethod
    def from_proposal(cls, text: str, image_url: str, page_url: str) -> ShareMeta:
        return cls(
            title=TITLE_PREFIX + text[:TITLE_CHARS],
            description=text[:DESCRIPTION_CHARS],
            image_url=image_url,
            page_url=page_url,
        )


def strip_image_tags(html: str) -> str:
    """Remove every og:image* and twitter:image* meta tag."""
    html = _OG_IMAGE_TAG.sub("", html)
    return _TWITTER_IMAGE_TAG.sub("", html)


def build_meta_block(meta: ShareMeta) -> str:
    title = escape_markup(meta.title)
    description = escape_markup(meta.description)
    image = escape_markup(meta.image_url)
    url = escape_markup(meta.page_url)
    return f"""
    <!-- RADICAL social sharing -->
    <meta name="title" content="{title}">
    <meta name="description" content="{description}">
    <meta property="og:type" content="website">
    <meta property="og:url" content="{url}">
    <meta property="og:title" content="{title}">
    <meta property="og:description" content="{description}">
    <meta property="og:image" content="{image}">
    <meta property="og:image:width" content="{CARD_WIDTH}">
    <meta property="og:image:height" content="{CARD_HEIGHT}">
    <meta property="og:image:alt" content="{title}">
    <meta name="twitter:card" content="summary_large_image">
    <meta name="twitter:url" content="{url}">
    <meta name="twitter:title" content="{title}">
    <meta name="twitter:description" content="{description}">
    <meta name="twitter:image" content="{image}">
    <meta name="twitter:image:alt" content="{title}">
"""


def inject_meta_tags(html: str, meta: ShareMeta) -> str:
    """Replace a page's image tags with the share block for ``meta``.

    Documents without a closing head tag come back stripped but otherwise
    untouched.
    """
    stripped = strip_image_tags(html)
    match = _HEAD_CLOSE.search(stripped)
    if match is None:
        logger.warning("No </head> tag found; serving page without share meta tags")
        return stripped
    index = match.start()
    return stripped[:index] + build_meta_block(meta) + stripped[index:]
