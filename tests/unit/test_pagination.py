"""Tests for sort parsing, page metadata and generated set ids."""

import pytest

from src.pipeline_api.models import Message
from src.pipeline_api.repositories.message import MessageRepository
from src.pipeline_api.schemas.pagination import PageResponse, SortSpec, parse_sort
from src.pipeline_api.services.release_service import generate_set_id

pytestmark = pytest.mark.unit


class TestParseSort:
    def test_default_is_newest_first(self):
        assert parse_sort(None) == SortSpec(field="created_at", descending=True)
        assert parse_sort("   ") == SortSpec(field="created_at", descending=True)

    def test_field_only_sorts_ascending(self):
        assert parse_sort("sender") == SortSpec(field="sender", descending=False)

    @pytest.mark.parametrize(
        ("raw", "descending"),
        [("content,asc", False), ("content,DESC", True), (" content , desc ", True)],
    )
    def test_explicit_direction(self, raw, descending):
        assert parse_sort(raw) == SortSpec(field="content", descending=descending)

    def test_unknown_direction_rejected(self):
        with pytest.raises(ValueError, match="Unsupported sort direction"):
            parse_sort("created_at,sideways")


class TestOrderClauses:
    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError, match="Unsupported sort field"):
            MessageRepository.order_clauses("password", descending=False)

    def test_id_breaks_ties(self):
        clauses = MessageRepository.order_clauses("sender", descending=True)
        assert len(clauses) == 2
        assert "DESC" in str(clauses[0])
        assert clauses[1] is Message.id


class TestPageResponse:
    @pytest.mark.parametrize(
        ("total", "size", "expected_pages"),
        [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (100, 7, 15)],
    )
    def test_total_pages(self, total, size, expected_pages):
        page = PageResponse[int].build([], page=0, size=size, total=total)
        assert page.total_pages == expected_pages
        assert page.total == total


class TestGenerateSetId:
    def test_uses_epoch_millis(self):
        assert generate_set_id([], now_ms=1700000000000) == "SET-1700000000000"

    def test_suffixes_on_collision(self):
        existing = ["SET-1700000000000", "SET-1700000000000-1"]
        assert generate_set_id(existing, now_ms=1700000000000) == "SET-1700000000000-2"

    def test_unrelated_ids_ignored(self):
        assert generate_set_id(["S1", "SET-1"], now_ms=5) == "SET-5"

    def test_defaults_to_current_time(self):
        set_id = generate_set_id([])
        assert set_id.startswith("SET-")
        assert set_id.removeprefix("SET-").isdigit()
