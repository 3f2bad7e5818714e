"""
Text normalization for manifest names.

Slugs are used as the identity of directory nodes, titles as their display
names, and the collation key orders siblings the way a Spanish reader expects.
"""

import re
import string
import unicodedata

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_SEPARATORS_RE = re.compile(r"[_-]+")
_WHITESPACE_RE = re.compile(r"\s+")

# Letters only; Python's \b is Unicode-aware so accented words count as words.
_WORD_RE = re.compile(r"\b([^\W\d_])([^\W\d_]*)")
_DIGIT_WORD_RE = re.compile(r"\b(\d+)([^\W\d_]+)")
_WORD_CHAR_RE = re.compile(r"\w")
_ROMAN_RE = re.compile(
    r"M{0,4}(CM|CD|D?C{0,3})(XC|XL|L?X{0,3})(IX|IV|V?I{0,3})",
    re.IGNORECASE,
)

# Sorts "ñ" after every other "n..." prefix.
_ENYE_KEY = "n\uffff"
_COMBINING_TILDE = "\u0303"

# ASCII space and punctuation sort before digits, keeping their relative order.
_PUNCTUATION_KEYS = str.maketrans({
    ch: chr(index + 1) for index, ch in enumerate(sorted(" " + string.punctuation))
})


def _strip_diacritics(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def slugify(text: str) -> str:
    """
    Reduce text to a comparable slug.

    Diacritics are removed, the text is lowercased and everything outside
    [a-z0-9] is dropped, so "Añó 2024" and "ano-2024" share the slug "ano2024".
    """
    return _NON_ALNUM_RE.sub("", _strip_diacritics(text).lower())


def is_roman_numeral(token: str) -> bool:
    """True for a non-empty, well-formed Roman numeral (any case)."""
    return bool(token) and _ROMAN_RE.fullmatch(token) is not None


def titleize(text: str) -> str:
    """
    Turn a filename segment into a display title.

    Args:
        text: Raw segment, e.g. "primer_trimestre" or "tomo-IV".

    Returns:
        Title-cased text: "Primer Trimestre", "Tomo IV". Roman numerals are
        kept only when written in capitals ("tomo-iv" gives "Tomo Iv").
        Letters glued to a leading number stay lowercase ("2a"), letters
        followed by a number are capitalized ("Q1").
    """
    cleaned = _SEPARATORS_RE.sub(" ", text)
    cleaned = _WHITESPACE_RE.sub(" ", cleaned).strip()
    cleaned = _WORD_RE.sub(_capitalize_word, cleaned)
    return _DIGIT_WORD_RE.sub(lambda m: m.group(1) + m.group(2).lower(), cleaned)


def _capitalize_word(match: re.Match) -> str:
    word = match.group(0)
    # Numerals already written in capitals ("IV") keep them; "mi" still becomes "Mi".
    whole_token = _WORD_CHAR_RE.match(match.string, match.end()) is None
    if whole_token and word.isupper() and is_roman_numeral(word):
        return word
    return word[:1].upper() + word[1:].lower()


def sentence_case(text: str) -> str:
    """Uppercase the first character, leave the rest untouched."""
    return text[:1].upper() + text[1:]


def collation_key(text: str) -> str:
    """
    Sort key for Spanish base-level comparison.

    Case and accents are ignored, except that "ñ" is its own letter placed
    after "n". ASCII space and punctuation come before digits, digits before
    letters. Other symbols fall back to code point order, so the order among
    punctuation marks is not the full locale ordering.
    """
    folded = unicodedata.normalize("NFD", text.casefold())
    chars: list[str] = []
    for ch in folded:
        if unicodedata.combining(ch):
            if ch == _COMBINING_TILDE and chars and chars[-1] == "n":
                chars[-1] = _ENYE_KEY
            continue
        chars.append(ch)
    return "".join(chars).translate(_PUNCTUATION_KEYS)
