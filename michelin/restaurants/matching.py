from __future__ import annotations

import re
from typing import Sequence, Union

from .errors import InvalidQueryError

_WORD_RE = re.compile(r"[^\W_]+")
_SPLIT_RE = re.compile(r"[,\s]+")

FieldValue = Union[str, Sequence[str]]


def _tokens(text: str) -> list[str]:
    return _WORD_RE.findall(text.lower())


def parse_terms(raw: str | None) -> list[str]:
    """Split a comma- or space-separated query into lower-cased search terms.

    Fragments with no word characters (a stray ``-`` or ``&``) are dropped.
    Raises ``InvalidQueryError`` when nothing usable is left.
    """
    if raw is None:
        raise InvalidQueryError("Empty search query")
    terms = [t.strip().lower() for t in _SPLIT_RE.split(raw)]
    terms = [t for t in terms if t and _tokens(t)]
    if not terms:
        raise InvalidQueryError("Empty search query")
    return terms


def _contains_run(haystack: list[str], needle: list[str]) -> bool:
    n = len(needle)
    return any(haystack[i:i + n] == needle for i in range(len(haystack) - n + 1))


def matches(field_value: FieldValue, terms: Sequence[str]) -> bool:
    """Return True when every term occurs as a whole word somewhere in ``field_value``.

    ``field_value`` is a single string or a list of tags. Different terms may be
    satisfied by different tags, but each term has to sit inside one tag.
    Matching is case-insensitive and never falls back to substrings, so
    ``"i"`` does not match ``"Italian"``.
    """
    if not terms:
        return False

    values = [field_value] if isinstance(field_value, str) else list(field_value)
    tokenized = [_tokens(v) for v in values if isinstance(v, str)]
    vocabulary = {tok for toks in tokenized for tok in toks}

    for term in terms:
        term_tokens = _tokens(term)
        if not term_tokens:
            return False
        if len(term_tokens) == 1:
            if term_tokens[0] not in vocabulary:
                return False
        elif not any(_contains_run(toks, term_tokens) for toks in tokenized):
            return False
    return True
