from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

logger = logging.getLogger(__name__)

_SPECIAL = {
    "\\": "\\\\",
    "\t": "\\t",
    "\n": "\\n",
    "\r": "\\r",
    "\f": "\\f",
    "=": "\\=",
    ":": "\\:",
    "#": "\\#",
    "!": "\\!",
}


def _unicode_escape(ch: str) -> str:
    # \uXXXX holds one UTF-16 code unit, so astral characters become a surrogate pair
    units = ch.encode("utf-16-be", "surrogatepass")
    return "".join(f"\\u{int.from_bytes(units[i:i + 2], 'big'):04X}" for i in range(0, len(units), 2))


def _escape(text: str, *, is_key: bool) -> str:
    out: list[str] = []
    for i, ch in enumerate(text):
        if ch == " ":
            out.append("\\ " if (is_key or i == 0) else " ")
        elif ch in _SPECIAL:
            out.append(_SPECIAL[ch])
        elif ord(ch) < 0x20 or ord(ch) > 0x7E:
            out.append(_unicode_escape(ch))
        else:
            out.append(ch)
    return "".join(out)


def render_props(props: Mapping[str, object]) -> str:
    """Render a mapping in Java ``.properties`` syntax.

    Keys are sorted and no timestamp header is written, so equal mappings
    always produce identical bytes.
    """

    lines = [
        f"{_escape(str(k), is_key=True)}={_escape(str(v), is_key=False)}"
        for k, v in sorted(props.items(), key=lambda kv: str(kv[0]))
    ]
    return "".join(ln + "\n" for ln in lines)


def write_props(path: Path, props: Mapping[str, object], *, dry_run: bool = False) -> None:
    path = Path(path)
    if dry_run:
        logger.info("Would write %s (%d keys)", path, len(props))
        return
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_props(props), encoding="latin-1")
    logger.info("Wrote %s (%d keys)", path, len(props))
