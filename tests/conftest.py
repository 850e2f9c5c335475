from __future__ import annotations

from typing import Iterable

import pytest

from rawed.config import EditorConfig
from rawed.editor import Editor
from tests.helpers import FakeTerminal


@pytest.fixture
def terminal():
    return FakeTerminal()


@pytest.fixture
def make_editor():
    def _make(lines: Iterable[bytes] = (), size=(24, 80), config=None, filename=None):
        editor = Editor(FakeTerminal(size=size), config or EditorConfig())
        editor.store.load(list(lines))
        editor.store.filename = filename
        return editor
    return _make
