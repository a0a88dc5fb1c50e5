"""Query Tokenization Utilities.

This module turns free text (queries, operation names, descriptions) into
the token lists the search engine compares. The process:
1. Converts to lowercase
2. Replaces anything outside ``[a-z0-9 -]`` with a space
3. Splits on whitespace
4. Drops short tokens (2 characters or fewer) and stop words

Examples:
    "How do I verify a Paystack transaction?" → ["verify", "paystack", "transaction"]
    "Initialize-Transaction"                  → ["initialize-transaction"]
"""

import re
from typing import List


# Common English function words and generic API vocabulary
STOP_WORDS = frozenset({
    "the", "and", "for", "with", "that", "this", "from", "have", "been",
    "would", "could", "should", "will", "can", "may", "might", "must",
    "want", "need", "like", "how", "what", "when", "where", "which", "who",
    "please", "help", "using", "use", "make", "get", "set", "via", "api",
})

MIN_TOKEN_LENGTH = 3

_NON_TOKEN_CHARS = re.compile(r"[^a-z0-9\s-]")


def is_stop_word(word: str) -> bool:
    """Check if a (lowercase) word is a stop word."""
    return word in STOP_WORDS


def tokenize(text: str) -> List[str]:
    """Tokenize text into searchable tokens.

    Duplicates are kept; the overlap ratios count every query token.

    Args:
        text: Raw text (query, name or description)

    Returns:
        List of lowercase tokens in their original order

    Examples:
        >>> tokenize("Verify transaction on Paystack")
        ['verify', 'transaction', 'paystack']
        >>> tokenize("get the api")
        []
    """
    if not text:
        return []

    cleaned = _NON_TOKEN_CHARS.sub(" ", text.lower())

    return [
        token for token in cleaned.split()
        if len(token) >= MIN_TOKEN_LENGTH and not is_stop_word(token)
    ]
