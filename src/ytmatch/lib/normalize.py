"""Text normalization for track titles, artists and albums.

Exported playlists and catalog search results spell the same track in many
ways: "Beyoncé" vs "Beyonce", "Song (Official Video)" vs "Song", full-width
punctuation from Japanese exports, artists joined with "feat." or "&". The
functions here reduce both sides to a canonical form so the scorer compares
like with like.

Everything in this module is pure and deterministic; ``normalize`` is
idempotent.
"""

import re
import unicodedata
from dataclasses import dataclass

# Vocabulary of title tokens that mark a non-original rendition
KNOWN_MODIFIERS = frozenset(
    {
        "remix",
        "edit",
        "mix",
        "live",
        "cover",
        "instrumental",
        "karaoke",
        "acoustic",
        "unplugged",
        "reverb",
        "slowed",
        "sped up",
        "chopped",
        "screwed",
        "deluxe",
        "version",
        "edition",
        "ultra",
    }
)

# Words that carry no identity in a title or search query
_NOISE_WORDS_PATTERN = re.compile(
    r"\b(?:official|lyrics|audio|video|feat|ft|remix|live|hd|mv)\b"
)

# Paired bracket segments: (...), [...] and the CJK 【...】 used for "【MV】" tags
_BRACKETS_PATTERN = re.compile(r"\([^()]*\)|\[[^\[\]]*\]|【[^【】]*】")
_BRACKET_CONTENT_PATTERN = re.compile(r"\(([^()]*)\)|\[([^\[\]]*)\]|【([^【】]*)】")

# "Title - Live at Wembley" style suffixes (spaced hyphen or dash)
_DASH_SUFFIX_PATTERN = re.compile(r"\s+[-–—]\s+(.*)$")

_ARTIST_SEPARATOR_PATTERN = re.compile(r",|&|\bfeat\b\.?|\bft\b\.?|\bwith\b")

_WHITESPACE_PATTERN = re.compile(r"\s+")

_MODIFIER_PATTERNS = {
    modifier: re.compile(rf"\b{re.escape(modifier)}(?:ed|es|s)?\b")
    for modifier in KNOWN_MODIFIERS
}

# Code point ranges counted as CJK / Kana / Hangul
_NON_LATIN_RANGES = (
    (0x1100, 0x11FF),  # Hangul Jamo
    (0x3040, 0x309F),  # Hiragana
    (0x30A0, 0x30FF),  # Katakana
    (0x3130, 0x318F),  # Hangul Compatibility Jamo
    (0x3400, 0x4DBF),  # CJK Extension A
    (0x4E00, 0x9FFF),  # CJK Unified Ideographs
    (0xAC00, 0xD7AF),  # Hangul Syllables
    (0xF900, 0xFAFF),  # CJK Compatibility Ideographs
    (0xFF66, 0xFF9F),  # Half-width Katakana
)


@dataclass(frozen=True)
class NormalizedInfo:
    """Canonical view of one track's metadata.

    Attributes:
        title: Fully normalized title (used for exact comparison).
        base_title: Normalized title without bracketed or dash suffixes.
        primary_artist: First artist of ``all_artists`` (empty if none).
        all_artists: Folded artist names in credit order.
        modifiers: Rendition markers found in the title (remix, live, ...).
        album: Folded album name, if any.
    """

    title: str
    base_title: str
    primary_artist: str
    all_artists: tuple[str, ...]
    modifiers: frozenset[str]
    album: str | None


def _is_latin(ch: str) -> bool:
    code = ord(ch)
    return code < 0x0250 or 0x1E00 <= code <= 0x1EFF


def _is_non_latin_script(ch: str) -> bool:
    code = ord(ch)
    return any(start <= code <= end for start, end in _NON_LATIN_RANGES)


def fold(text: str) -> str:
    """Fold case, compatibility forms and Latin diacritics.

    Combining marks are dropped only when they follow a Latin base
    character, so "Beyoncé" becomes "beyonce" while Japanese voiced kana
    and Hangul keep their marks.

    Args:
        text: Any text.

    Returns:
        Folded, lower-cased text (punctuation untouched).
    """
    if not text:
        return ""
    kept: list[str] = []
    base_is_latin = False
    for ch in unicodedata.normalize("NFKD", text):
        if unicodedata.combining(ch):
            if base_is_latin:
                continue
        else:
            base_is_latin = _is_latin(ch)
        kept.append(ch)
    return unicodedata.normalize("NFKC", "".join(kept)).lower()


def _strip_punctuation(text: str) -> str:
    return "".join(
        " " if unicodedata.category(ch)[0] in ("P", "S") else ch for ch in text
    )


def _strip_orphan_marks(text: str) -> str:
    """Drop combining marks left without a base by bracket/punctuation removal."""
    kept: list[str] = []
    attached = False
    for ch in text:
        if unicodedata.combining(ch):
            if attached:
                kept.append(ch)
            continue
        attached = not ch.isspace()
        kept.append(ch)
    return "".join(kept)


def _normalize(text: str, *, strip_noise: bool) -> str:
    result = _BRACKETS_PATTERN.sub(" ", fold(text))
    result = _strip_punctuation(result)
    if strip_noise:
        result = _NOISE_WORDS_PATTERN.sub(" ", result)
    result = _strip_orphan_marks(result)
    return _WHITESPACE_PATTERN.sub(" ", result).strip()


def normalize(text: str) -> str:
    """Canonicalize free text for matching and search.

    Folds case and Latin diacritics, removes bracketed segments,
    punctuation and noise words (official, lyrics, video, feat, ...), and
    collapses whitespace.

    Args:
        text: Raw title or query text.

    Returns:
        Normalized text. ``normalize(normalize(x)) == normalize(x)``.

    Example:
        >>> normalize("Café del Mar (Official Video) [HD]")
        'cafe del mar'
    """
    return _normalize(text, strip_noise=True)


def normalize_non_latin(text: str) -> str:
    """Normalize without noise-word stripping.

    English noise words mean nothing inside CJK or Hangul titles, and
    removing them can cut Latin fragments that are part of the name.
    """
    return _normalize(text, strip_noise=False)


def is_mostly_non_latin(text: str) -> bool:
    """Check whether more than a third of the characters are CJK/Kana/Hangul.

    Whitespace is ignored. Only used as a query-generation hint.
    """
    chars = [ch for ch in text if not ch.isspace()]
    if not chars:
        return False
    non_latin = sum(1 for ch in chars if _is_non_latin_script(ch))
    return non_latin * 3 > len(chars)


def extract_base_title(title: str) -> str:
    """Extract the normalized title without version suffixes.

    Removes bracketed segments and spaced-dash suffixes, so
    "Yesterday - Remastered 2009" and "Yesterday (Live)" both become
    "yesterday".
    """
    without_brackets = _BRACKETS_PATTERN.sub(" ", fold(title))
    return normalize(_DASH_SUFFIX_PATTERN.sub("", without_brackets))


def extract_modifiers(title: str) -> frozenset[str]:
    """Find rendition modifiers in a title.

    Only bracketed segments and spaced-dash suffixes are inspected, so a
    song actually named "Live Forever" carries no modifier while
    "Forever (Live)" does.

    Args:
        title: Raw or folded title.

    Returns:
        Modifiers from the fixed vocabulary that appear in the title.
    """
    folded = fold(title)
    segments = [
        next(group for group in match.groups() if group is not None)
        for match in _BRACKET_CONTENT_PATTERN.finditer(folded)
    ]
    if dash := _DASH_SUFFIX_PATTERN.search(_BRACKETS_PATTERN.sub(" ", folded)):
        segments.append(dash.group(1))

    found: set[str] = set()
    for segment in segments:
        for modifier, pattern in _MODIFIER_PATTERNS.items():
            if pattern.search(segment):
                found.add(modifier)
    return frozenset(found)


def split_artists(text: str) -> list[str]:
    """Split an artist credit into individual folded names.

    Separators are ",", "&", "feat.", "ft." and "with".

    Example:
        >>> split_artists("Daft Punk feat. Pharrell Williams & Nile Rodgers")
        ['daft punk', 'pharrell williams', 'nile rodgers']
    """
    if not text:
        return []
    parts = _ARTIST_SEPARATOR_PATTERN.split(fold(text))
    return [name for part in parts if (name := part.strip())]


def parse_song_info(title: str, artists: str, album: str | None) -> NormalizedInfo:
    """Build the normalized view of one track.

    Title-derived fields come only from ``title`` and artist fields only
    from ``artists``.
    """
    all_artists = tuple(split_artists(artists))
    folded_album = fold(album).strip() if album else ""
    return NormalizedInfo(
        title=normalize(title),
        base_title=extract_base_title(title),
        primary_artist=all_artists[0] if all_artists else "",
        all_artists=all_artists,
        modifiers=extract_modifiers(title),
        album=folded_album or None,
    )
