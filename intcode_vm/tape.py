"""
Intcode VM: Tape (program text parser)

Program text is a comma-separated list of optionally signed decimal
integers with optional surrounding whitespace:

    1,9,10,3,2,3,11,0,99,30,40,50

A Tape is the immutable parsed form. It is copied into Memory on load
and never written afterwards, so one Tape can seed any number of runs.
"""

import re
from pathlib import Path
from typing import Iterable, Iterator, Tuple, Union

from .config import WORD_MIN, WORD_MAX, DEFAULT_PROGRAM
from .errors import TapeError

# Optionally signed, ASCII digits only
_TOKEN_RE = re.compile(r"[+-]?[0-9]+")


class Tape:
    """Immutable sequence of program words."""

    __slots__ = ('_words',)

    def __init__(self, words: Iterable[int] = ()):
        words = tuple(words)
        for i, w in enumerate(words):
            if not isinstance(w, int) or isinstance(w, bool):
                raise TapeError(f"not an integer word: {w!r}", i + 1, repr(w))
            if not WORD_MIN <= w <= WORD_MAX:
                raise TapeError("value does not fit in a 64-bit word", i + 1, str(w))
        self._words: Tuple[int, ...] = words

    # --- Construction ---

    @classmethod
    def parse(cls, text: str) -> 'Tape':
        """Parse comma-separated program text.

        Whitespace around tokens is ignored, as is one trailing comma
        (common when a file ends with ",\\n"). Blank text is an empty tape.
        """
        body = text.strip()
        if not body:
            return cls()
        tokens = body.split(',')
        if len(tokens) > 1 and not tokens[-1].strip():
            tokens.pop()

        words = []
        for position, raw in enumerate(tokens, start=1):
            token = raw.strip()
            if not token:
                raise TapeError("empty token", position, raw)
            if not _TOKEN_RE.fullmatch(token):
                raise TapeError("not a decimal integer", position, token)
            value = int(token, 10)
            if not WORD_MIN <= value <= WORD_MAX:
                raise TapeError("value does not fit in a 64-bit word", position, token)
            words.append(value)
        return cls(words)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'Tape':
        return cls.parse(Path(path).read_text(encoding='utf-8'))

    @classmethod
    def default(cls) -> 'Tape':
        """The tape of a Computer built without a program: a lone HALT."""
        return cls(DEFAULT_PROGRAM)

    # --- Sequence protocol ---

    def __len__(self) -> int:
        return len(self._words)

    def __getitem__(self, index):
        return self._words[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._words)

    def __eq__(self, other) -> bool:
        if isinstance(other, Tape):
            return self._words == other._words
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._words)

    def __repr__(self) -> str:
        preview = self.to_text()
        if len(preview) > 40:
            preview = preview[:37] + '...'
        return f"Tape({len(self._words)} words: {preview})"

    @property
    def words(self) -> Tuple[int, ...]:
        return self._words

    def to_text(self) -> str:
        """Canonical program text (parses back to an equal Tape)."""
        return ','.join(str(w) for w in self._words)
