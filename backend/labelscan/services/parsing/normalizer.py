import re

_PARENS = re.compile(r"[()]")
_WHITESPACE = re.compile(r"\s+")


def normalize_ingredient_name(raw: str) -> str:
    """
    Turn a raw label fragment into a reference-store lookup key.
    "BHT (Preservative), E321" -> "bht preservative". Never raises; may return "".
    """
    text = _PARENS.sub("", (raw or "").lower())
    text = text.split(",", 1)[0]
    return _WHITESPACE.sub(" ", text).strip()
