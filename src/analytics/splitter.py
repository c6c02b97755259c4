"""Delimited-field tokenizer."""

from collections.abc import Iterator

DEFAULT_DELIMITER = ","


def split_field(raw: str | None, delimiter: str = DEFAULT_DELIMITER) -> Iterator[str]:
    """Yield trimmed, non-empty tokens of a delimited field.

    Tokens are produced left to right. Empty tokens left by trailing
    or doubled delimiters are dropped, so ``",,,"`` yields nothing.

    Args:
        raw: Raw field value (may be None or empty).
        delimiter: Token separator.

    Yields:
        Each non-empty token, stripped of surrounding whitespace.
    """
    if not raw:
        return

    for token in raw.split(delimiter):
        token = token.strip()
        if token:
            yield token
