# utilities.py
from __future__ import annotations

import re
from typing import List

_ws_re = re.compile(r"\s+")


# ────────────────────────────────────────────────────────────────────────
#  Text preprocessing & output formatting
# ────────────────────────────────────────────────────────────────────────


def preprocess_message(msg: str) -> str:
    """Upper‑case and drop whitespace; other characters are kept so the
    machine can pass them through."""
    return _ws_re.sub("", msg.upper())


def group_blocks(text: str, block: int = 5) -> str:
    """Split `text` into space separated groups of `block` characters;
    the last group may be shorter."""
    if block <= 0:
        raise ValueError("block size must be positive")
    blocks: List[str] = [text[i : i + block] for i in range(0, len(text), block)]
    return " ".join(blocks)
