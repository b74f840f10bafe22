"""Service test fixtures: settings, a memory store and an xlsx builder."""

from __future__ import annotations

import io

import pytest
from openpyxl import Workbook

from totem.core.config import AppSettings
from tests.fakes import MemoryStore


@pytest.fixture
def settings():
    return AppSettings()


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def location(store):
    return store.create_location("Main Street", "01234")


@pytest.fixture
def make_xlsx():
    def _make(rows: list[list[object]]) -> bytes:
        wb = Workbook()
        ws = wb.active
        for row in rows:
            ws.append(row)
        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()

    return _make
