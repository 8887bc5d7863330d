from __future__ import annotations

from typing import Iterable, List, Optional
from urllib.parse import unquote


JsonPointer = str


def escape_token(token: str) -> str:
    # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
    return token.replace("~", "~0").replace("/", "~1")


def unescape_token(token: str) -> str:
    # Order matters: "~01" must decode to "~1", not "/".
    return token.replace("~1", "/").replace("~0", "~")


def join_pointer(tokens: Iterable[object]) -> JsonPointer:
    """Build a JSON pointer ("/a/b/0") from path tokens, root first."""
    return "".join(f"/{escape_token(str(token))}" for token in tokens)


def split_fragment(ref: str) -> Optional[List[str]]:
    """Split a local reference ("#/components/schemas/Pet") into decoded tokens.

    Returns None when ``ref`` is not a local (fragment-only) reference.
    The bare fragment "#" refers to the whole document and yields no tokens.
    """
    if not ref.startswith("#"):
        return None

    fragment = unquote(ref[1:])
    if not fragment:
        return []
    if not fragment.startswith("/"):
        return None
    return [unescape_token(token) for token in fragment[1:].split("/")]
