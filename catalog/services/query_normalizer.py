import re
import unicodedata
from typing import List

_WHITESPACE_RE = re.compile(r"\s+")


class QueryNormalizer:
    """
    Responsible for turning free text into comparable search tokens.
    Works on Unicode character classes rather than ASCII word boundaries,
    so Bangla and other non-Latin scripts tokenize the same way Latin text does.

    Word characters are Unicode letters (L*), numbers (N*) AND combining marks (M*).
    Marks must stay: Bangla vowel signs are marks, and dropping them would split
    every Bangla word into fragments.
    """

    @staticmethod
    def tokenize(text: str) -> List[str]:
        """
        Splits text into normalized tokens.

        Steps:
        1. Lowercasing.
        2. Every run of characters that is not a letter, number or whitespace
           becomes a single space. Combining marks stay attached to their letter.
        3. Split on whitespace and drop empty pieces.

        Args:
            text (str): Raw user input or a category segment.

        Returns:
            List[str]: Ordered tokens. Empty for empty or whitespace-only input.
        """
        if not text:
            return []

        cleaned = QueryNormalizer.strip_symbols(text.lower())
        return [token for token in _WHITESPACE_RE.split(cleaned) if token]

    @staticmethod
    def strip_symbols(text: str) -> str:
        chars = []
        in_symbol_run = False
        for ch in text:
            if QueryNormalizer._is_word_char(ch) or ch.isspace():
                chars.append(ch)
                in_symbol_run = False
            elif not in_symbol_run:
                chars.append(" ")
                in_symbol_run = True
        return "".join(chars)

    @staticmethod
    def _is_word_char(ch: str) -> bool:
        # L* letters, N* numbers, M* marks (vowel signs, diacritics)
        return unicodedata.category(ch)[0] in ("L", "N", "M")
