"""Shared fixtures: small content trees written to a temporary directory."""

import textwrap
from pathlib import Path
from typing import Callable, Dict, Union

import pytest

FileContent = Union[str, bytes]

OBJECT_PAGE = """
type: Object
description: Base of everything in the world.
functions:
  - name: Destroy
    description: Removes the object.
properties:
  - name: Position
    type: Number3
    description: Position in world space.
  - name: Name
    type: string
"""

SHAPE_PAGE = """
type: Shape
extends: Object
constructors:
  - description: Creates a shape.
functions:
  - name: Paint
properties:
  - name: Scale
    type: Number3
"""

PLAYER_PAGE = """
title: The Player
type: Player
extends: Shape
functions:
  - name: Jump
    return:
      - type: boolean
    samples:
      - code: player.Jump()
        media: jump.gif
      - code: player.Jump(10)
properties:
  - name: Name
    type: string
    description: The player's username.
    read-only: true
"""

SAMPLE_TREE: Dict[str, FileContent] = {
    "index.yml": "title: Welcome\ndescription: Start here.\n",
    "404.yml": "title: Not found\n",
    "Guides/Foo.yml": "title: Foo guide\nkeywords: [Guide, guide, Foo]\n",
    "reference/object.yml": OBJECT_PAGE,
    "reference/shape.yml": SHAPE_PAGE,
    "reference/player.yml": PLAYER_PAGE,
    "modules/net.json": '{"description": "Networking.", "functions": [{"name": "send"}]}',
    "modules/ui/index.json": '{"name": "ignored", "description": "User interface."}',
    "images/logo.png": b"\x89PNG\r\n",
    "templates/page.tmpl": "{{ .Title }}",
}


def _write(root: Path, files: Dict[str, FileContent]) -> None:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(textwrap.dedent(content), encoding="utf-8")


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[Dict[str, FileContent]], str]:
    """Return a helper that writes files under ``tmp_path/www`` and returns that root."""
    root = tmp_path / "www"
    root.mkdir()

    def _make(files: Dict[str, FileContent]) -> str:
        _write(root, files)
        return str(root)

    return _make


@pytest.fixture
def sample_tree(make_tree) -> str:
    return make_tree(SAMPLE_TREE)
