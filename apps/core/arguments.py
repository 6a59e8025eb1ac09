"""
Caption argument parsing.

The CLI takes free-form words, so flags are picked out by hand rather than by
the option parser: `-y` and `-f <value>` may appear anywhere among the words.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from packages.utils.config import DEFAULT_CAPTION

OVERWRITE_FLAG = "-y"
FILTER_FLAG = "-f"


@dataclass(frozen=True)
class CliArguments:
    caption_text: str
    overwrite: bool = False
    filter: str = ""


def normalize_caption(words: Sequence[str]) -> str:
    """Join words with single spaces; empty results fall back to the default caption."""
    text = " ".join(" ".join(words).split())
    return text or DEFAULT_CAPTION


def parse_cli_tokens(tokens: Sequence[str]) -> CliArguments:
    overwrite = False
    filter_text = ""
    words = []

    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token == OVERWRITE_FLAG:
            overwrite = True
        elif token == FILTER_FLAG:
            # A trailing -f has no value to consume
            if i + 1 < len(tokens):
                filter_text = tokens[i + 1]
                i += 1
        else:
            words.append(token)
        i += 1

    return CliArguments(caption_text=normalize_caption(words), overwrite=overwrite, filter=filter_text)


__all__ = ["CliArguments", "parse_cli_tokens", "normalize_caption", "OVERWRITE_FLAG", "FILTER_FLAG"]
