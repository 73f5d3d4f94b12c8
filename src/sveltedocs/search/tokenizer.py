"""Query and document tokenization.

Queries and indexed sections go through the same term rules so that a term
typed by the user can be found in the index:

- sigil tokens (``$state``, ``$on``) are kept whole, whatever their length
- every other token is split on non-word characters and kept when longer
  than two characters
"""

import re
from collections import Counter
from dataclasses import dataclass, field

SIGIL = "$"
MIN_TERM_LENGTH = 3

PHRASE_PATTERN = re.compile(r'"([^"]+)"')
SIGIL_PATTERN = re.compile(r"\$[a-z][a-z0-9_]*")
NON_WORD_PATTERN = re.compile(r"\W+")


@dataclass(frozen=True)
class ParsedQuery:
    """A query split into exact phrases and loose terms."""

    phrases: tuple[str, ...] = ()
    terms: tuple[str, ...] = ()
    unique_terms: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "unique_terms", tuple(dict.fromkeys(self.terms)))

    @property
    def phrase_only(self) -> bool:
        return bool(self.phrases) and not self.terms

    @property
    def is_empty(self) -> bool:
        return not self.phrases and not self.terms

    def suggestion_seeds(self) -> list[str]:
        """Terms fed to the suggestion engine.

        Phrase-only queries have no terms, so the words of their phrases
        stand in for them.
        """
        if self.phrase_only:
            return [word for phrase in self.phrases for word in phrase.split()]
        return list(self.terms)


def parse_query(text: str) -> ParsedQuery:
    """Split raw query text into lower-cased phrases and terms.

    Args:
        text: Free-text query, possibly containing "quoted phrases"

    Returns:
        ParsedQuery with phrases in order of appearance and terms in order,
        duplicates included
    """
    phrases = tuple(match.lower() for match in PHRASE_PATTERN.findall(text))
    remainder = PHRASE_PATTERN.sub(" ", text).lower()

    terms: list[str] = []
    for chunk in remainder.split():
        sigils = SIGIL_PATTERN.findall(chunk)
        terms.extend(sigils)
        plain = SIGIL_PATTERN.sub(" ", chunk)
        terms.extend(_plain_tokens(plain))

    return ParsedQuery(phrases=phrases, terms=tuple(terms))


def extract_term_frequencies(text: str) -> dict[str, int]:
    """Count index terms in a section of documentation.

    General tokens are counted first; sigil token counts then overwrite any
    entry with the same key.
    """
    lowered = text.lower()
    frequencies = dict(Counter(_plain_tokens(lowered)))
    frequencies.update(Counter(SIGIL_PATTERN.findall(lowered)))
    return frequencies


def _plain_tokens(text: str) -> list[str]:
    return [t for t in NON_WORD_PATTERN.split(text) if len(t) >= MIN_TERM_LENGTH]
