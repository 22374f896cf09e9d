import datetime
from pathlib import Path
from typing import Callable, Optional, Sequence

import pytest

from episodemerge.core import clock
from episodemerge.core.binding import LEGACY_NAMESPACE

FROZEN_AT = datetime.datetime(2024, 5, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)

DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'


def episode_text(body: Sequence[str], namespace: str = LEGACY_NAMESPACE, version: str = "2.1",
                 root_extra: str = "") -> str:
    """An episode file in the conventional layout: declaration, root start tag, body, root end tag."""
    lines = [DECLARATION, f'<bindings version="{version}" xmlns="{namespace}"{root_extra} if-exists="true">']
    lines.extend(body)
    lines.append("</bindings>")
    return "\n".join(lines) + "\n"


def module_body(name: str) -> list:
    return [
        f'  <bindings xmlns:tns="urn:{name}" if-exists="true" scd="x-schema::tns">',
        '    <schemaBindings map="false">',
        f'      <package name="com.example.{name}"/>',
        "    </schemaBindings>",
        "  </bindings>",
    ]


@pytest.fixture
def frozen_clock():
    with clock.frozen(FROZEN_AT):
        yield FROZEN_AT


@pytest.fixture
def write_episode(tmp_path: Path) -> Callable[..., Path]:
    def _write(rel: str, body: Optional[Sequence[str]] = None, text: Optional[str] = None, **kwargs) -> Path:
        path = tmp_path / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if text is None:
            text = episode_text(body if body is not None else module_body(path.parent.parent.name), **kwargs)
        path.write_text(text, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def build_dir(tmp_path: Path) -> Path:
    target = tmp_path / "target"
    target.mkdir()
    return target
