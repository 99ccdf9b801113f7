"""Share-card rendering for social previews.

Cards are 1200x630 SVG documents built from a fixed template. Rendering is
pure: the same card always produces byte-identical markup, so responses can
be cached and stored copies compared.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from urllib.parse import quote

from radical_api.core.settings import settings
from radical_api.services.media import BlobStore, BlobStoreError

logger = logging.getLogger(__name__)

CARD_WIDTH = 1200
CARD_HEIGHT = 630

# Text wrapping uses an average glyph width instead of font metrics.
TEXT_WRAP_WIDTH = 960
AVG_CHAR_WIDTH = 22
MAX_TEXT_LINES = 6
ELLIPSIS = "..."

TEXT_X = 120
TEXT_Y = 220
LINE_HEIGHT = 46

POSITIVE_COLOR = "#11cc77"
NEGATIVE_COLOR = "#ff0099"
NEUTRAL_COLOR = "#ffffff"
ACCENT_COLOR = "#ff0099"

FONT = "'Roboto Mono', monospace"
SVG_MEDIA_TYPE = "image/svg+xml"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

_MARKUP_ESCAPES = str.maketrans(
    {
        "&": "&amp;",
        "<": "&lt;",
        ">": "&gt;",
        '"': "&quot;",
        "'": "&#039;",
    }
)


@dataclass(frozen=True)
class ShareCard:
    """Everything a share card displays."""

    proposal_id: str
    text: str
    author_name: str
    timestamp: int
    upvotes: int = 0
    downvotes: int = 0

    @property
    def net_votes(self) -> int:
        return self.upvotes - self.downvotes


def escape_markup(value: object) -> str:
    """Escape the five markup-significant characters."""
    return str(value).translate(_MARKUP_ESCAPES)


def chars_per_line(width: int = TEXT_WRAP_WIDTH, char_width: int = AVG_CHAR_WIDTH) -> int:
    return width // char_width


def wrap_text(
    text: str,
    *,
    width: int = TEXT_WRAP_WIDTH,
    char_width: int = AVG_CHAR_WIDTH,
    max_lines: int = MAX_TEXT_LINES,
) -> list[str]:
    """Greedy word wrap against a fixed per-line character budget.

    Words longer than the budget are broken across lines. When more than
    ``max_lines`` lines result, the last kept line is shortened to make room
    for an ellipsis.
    """
    budget = chars_per_line(width, char_width)
    lines: list[str] = []
    current = ""
    for word in text.split():
        while len(word) > budget:
            if current:
                lines.append(current)
                current = ""
            lines.append(word[:budget])
            word = word[budget:]
        candidate = f"{current} {word}" if current else word
        if len(candidate) <= budget:
            current = candidate
        else:
            lines.append(current)
            current = word
    if current:
        lines.append(current)

    if len(lines) <= max_lines:
        return lines
    kept = lines[:max_lines]
    kept[-1] = kept[-1][: budget - len(ELLIPSIS)].rstrip() + ELLIPSIS
    return kept


def net_vote_color(net: int) -> str:
    if net > 0:
        return POSITIVE_COLOR
    if net < 0:
        return NEGATIVE_COLOR
    return NEUTRAL_COLOR


def format_net(net: int) -> str:
    return f"+{net}" if net > 0 else str(net)


def format_date(timestamp_ms: int) -> str:
    """Format epoch milliseconds as ``Mon D, YYYY`` in UTC."""
    moment = datetime.fromtimestamp(timestamp_ms / 1000, tz=UTC)
    return f"{_MONTHS[moment.month - 1]} {moment.day}, {moment.year}"


def _text_lines(lines: list[str]) -> str:
    return "\n".join(
        f'  <text x="{TEXT_X}" y="{TEXT_Y + index * LINE_HEIGHT}" font-family="{FONT}" '
        f'font-size="36" fill="#ffffff">{escape_markup(line)}</text>'
        for index, line in enumerate(lines)
    )


def render_share_svg(card: ShareCard) -> str:
    """Render ``card`` as a complete SVG document."""
    text = card.text or "Unknown petition"
    author = escape_markup(card.author_name or "Anonymous")
    proposal_id = escape_markup(card.proposal_id or "unknown")
    short_id = escape_markup((card.proposal_id or "unknown")[-6:])
    net = card.net_votes
    site = escape_markup(settings.public_base.split("://", 1)[-1].upper())

    return f"""<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {CARD_WIDTH} {CARD_HEIGHT}" width="{CARD_WIDTH}" height="{CARD_HEIGHT}">
  <rect width="{CARD_WIDTH}" height="{CARD_HEIGHT}" fill="#000000" />
  <rect x="10" y="10" width="1180" height="610" fill="none" stroke="{ACCENT_COLOR}" stroke-width="4" />
  <rect x="20" y="20" width="1160" height="590" fill="#0a0a0a" stroke="{ACCENT_COLOR}" stroke-width="1" />
  <text x="600" y="90" font-family="{FONT}" font-size="72" font-weight="700" text-anchor="middle" fill="{ACCENT_COLOR}">RADICAL</text>
  <rect x="450" y="110" width="300" height="36" fill="{ACCENT_COLOR}" />
  <text x="600" y="135" font-family="{FONT}" font-size="20" font-weight="600" text-anchor="middle" fill="#000000">VIBE, VOTE, VETO</text>
  <rect x="100" y="180" width="1000" height="280" fill="#111111" stroke="#333333" stroke-width="1" />
{_text_lines(wrap_text(text))}
  <g transform="translate(200, 510)">
    <text x="0" y="0" font-family="{FONT}" font-size="24" fill="{ACCENT_COLOR}">UP:</text>
    <text x="50" y="0" font-family="{FONT}" font-size="24" fill="#ffffff">{card.upvotes}</text>
    <text x="140" y="0" font-family="{FONT}" font-size="24" fill="{ACCENT_COLOR}">DOWN:</text>
    <text x="220" y="0" font-family="{FONT}" font-size="24" fill="#ffffff">{card.downvotes}</text>
    <text x="310" y="0" font-family="{FONT}" font-size="24" fill="{ACCENT_COLOR}">NET:</text>
    <text x="370" y="0" font-family="{FONT}" font-size="24" fill="{net_vote_color(net)}">{format_net(net)}</text>
  </g>
  <text x="600" y="560" font-family="{FONT}" font-size="18" fill="#aaaaaa" text-anchor="middle">Petition ID: {proposal_id} | by {author} | Created: {format_date(card.timestamp)}</text>
  <g transform="translate(940, 460)">
    <rect x="0" y="0" width="120" height="120" fill="#111111" stroke="{ACCENT_COLOR}" stroke-width="2" />
    <text x="60" y="50" font-family="{FONT}" font-size="16" fill="#ffffff" text-anchor="middle">RADICAL</text>
    <text x="60" y="75" font-family="{FONT}" font-size="14" fill="{ACCENT_COLOR}" text-anchor="middle">PETITION</text>
    <text x="60" y="100" font-family="{FONT}" font-size="12" fill="#aaaaaa" text-anchor="middle">#{short_id}</text>
  </g>
  <text x="600" y="600" font-family="{FONT}" font-size="20" fill="{ACCENT_COLOR}" text-anchor="middle">{site}</text>
</svg>
"""


def share_image_url_for(proposal_id: str) -> str:
    """Public URL of the dynamic share card for a proposal."""
    return f"{settings.public_base}/api/petition-svg?id={quote(proposal_id, safe='')}"


def share_image_key(proposal_id: str) -> str:
    return f"share_{proposal_id}.svg"


def publish_share_image(store: BlobStore, card: ShareCard) -> None:
    """Render ``card`` and store a copy in the memes bucket.

    Runs after the response has been sent; failures are logged only.
    """
    key = share_image_key(card.proposal_id)
    try:
        store.put(key, render_share_svg(card).encode("utf-8"), SVG_MEDIA_TYPE)
    except BlobStoreError:
        logger.warning("Failed to store share image %s", key, exc_info=True)
        return
    logger.info("Stored share image %s", key)
