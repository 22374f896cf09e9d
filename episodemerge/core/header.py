"""Provenance comment placed at the top of every merged episode file."""

from pathlib import Path
from typing import Sequence

from . import clock

BANNER = "This file was automatically created by episodemerge - do NOT edit."


def render_timestamp(dt) -> str:
    stamp = dt.isoformat()
    zone = dt.tzname()
    return f"{stamp} [{zone}]" if zone else stamp


def build_header(matches: Sequence[Path]) -> str:
    lines = [BANNER, "This file was made up of:"]
    for path in matches:
        lines.append(f"  {path}")
    lines.append("")
    lines.append(f"This file was written at {render_timestamp(clock.now_local())}")
    return "\n".join(lines)


def as_comment_text(text: str) -> str:
    # "--" must not appear inside an XML comment
    while "--" in text:
        text = text.replace("--", "- -")
    if text.endswith("-"):
        text += " "
    return text
