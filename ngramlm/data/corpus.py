"""Corpus reading and text normalization utilities."""

from pathlib import Path
from typing import Iterator, List, Union

from ngramlm.config import STRIPPED_PUNCTUATION


def normalize(text: str) -> str:
    """Strip the fixed punctuation set and lowercase the text."""
    for mark in STRIPPED_PUNCTUATION:
        text = text.replace(mark, '')
    return text.lower()


def iter_lines(text: str) -> Iterator[str]:
    """Yield the non-empty lines of ``text``.

    Lines are separated by ``\\n``; a trailing ``\\r`` is dropped from each
    line so CRLF files read the same as LF files.
    """
    for line in text.split('\n'):
        if line.endswith('\r'):
            line = line[:-1]
        if not line:
            continue
        yield line


def split_tokens(line: str) -> List[str]:
    """Split a line on single spaces.

    Runs of spaces give empty-string tokens, which the models count like
    any other token.
    """
    return line.split(' ')


def read_corpus(path: Union[str, Path]) -> str:
    """Read a whole corpus file as text."""
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()
