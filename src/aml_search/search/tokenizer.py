from __future__ import annotations

import logging

from ..models import Token

logger = logging.getLogger(__name__)

KEY_VALUE_SEPARATOR = ":"
QUOTE_OPEN = "'"
QUOTE_CLOSE = "'"
ESCAPE = "\\"
SPACE = " "

# Single left-to-right scanner for the search box syntax:
# - key:value            (value runs to the next space)
# - key:'quoted value'   (\' inside the quotes is a literal quote)
# - free text            (kept verbatim between qualifiers)
# A colon only separates a key when the key is non-empty and has no space in it.
# Quotes outside a value position are ordinary characters.


class _Scanner:
    """Scanner state for one input string. Use :func:`tokenize`."""

    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.tokens: list[Token] = []
        # start offset of the pending text run, None when nothing is buffered
        self.text_start: int | None = None
        # next_stop[i]: offset of the first colon, space or quote at or after i
        self.next_stop = _stop_table(text)

    def scan(self) -> list[Token]:
        text = self.text
        while self.pos < len(text):
            if text[self.pos] == SPACE:
                self.pos += 1
                continue

            if self._at_key_value():
                colon = self.next_stop[self.pos]
                self._flush_text()
                key = text[self.pos : colon].strip()
                self.pos = colon + 1
                while self.pos < len(text) and text[self.pos] == SPACE:
                    self.pos += 1

                if self.pos < len(text) and text[self.pos] == QUOTE_OPEN:
                    value = self._read_quoted()
                else:
                    start = self.pos
                    while self.pos < len(text) and text[self.pos] != SPACE:
                        self.pos += 1
                    value = text[start : self.pos]

                self.tokens.append(Token.key_value(key, KEY_VALUE_SEPARATOR, value))
                continue

            # plain word: stops at a space or where a qualifier starts
            if self.text_start is None:
                self.text_start = self.pos
            while self.pos < len(text) and text[self.pos] != SPACE and not self._at_key_value():
                self.pos += 1

            if self.pos < len(text) and self._at_key_value():
                self._flush_text()

        self._flush_text()
        return self.tokens

    def _flush_text(self) -> None:
        if self.text_start is None:
            return
        # slice so the spacing between words survives
        value = self.text[self.text_start : self.pos].strip()
        self.tokens.append(Token.text(value))
        self.text_start = None

    def _read_quoted(self) -> str:
        text = self.text
        self.pos += 1  # opening quote
        chars: list[str] = []
        while self.pos < len(text):
            c = text[self.pos]
            if c == ESCAPE and self.pos + 1 < len(text) and text[self.pos + 1] == QUOTE_CLOSE:
                chars.append(QUOTE_CLOSE)
                self.pos += 2
                continue
            if c == QUOTE_CLOSE:
                self.pos += 1
                break
            chars.append(c)
            self.pos += 1
        return "".join(chars)

    def _at_key_value(self) -> bool:
        """Return True if a `key:` qualifier starts at the current offset."""
        stop = self.next_stop[self.pos]
        return stop < len(self.text) and self.text[stop] == KEY_VALUE_SEPARATOR and stop > self.pos


def _stop_table(text: str) -> list[int]:
    stops = [len(text)] * (len(text) + 1)
    for i in range(len(text) - 1, -1, -1):
        c = text[i]
        stops[i] = i if c in (KEY_VALUE_SEPARATOR, SPACE, QUOTE_OPEN) else stops[i + 1]
    return stops


def tokenize(text: str) -> list[Token]:
    """Split a raw search string into key-value and text tokens.

    Never raises: an unterminated quote runs to the end of the input and empty or
    blank input yields no tokens.

    Examples:
      "type:model owner:alice" -> [keyValue(type, :, model), keyValue(owner, :, alice)]
      "hello  world tag:'q1 report'" -> [text('hello  world'), keyValue(tag, :, q1 report)]
    """
    if not text or not text.strip():
        return []
    tokens = _Scanner(text).scan()
    logger.debug("tokenized %d chars into %d tokens", len(text), len(tokens))
    return tokens
