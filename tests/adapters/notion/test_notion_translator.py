from __future__ import annotations

from datetime import UTC, datetime

import pytest

from daylink.adapters.notion import Page, build_filter, canonical_id, to_stored_record
from daylink.adapters.notion.translator import relation_patch, truncated_relations
from daylink.domain.ports.store import AllOf, CreatedAfter, DateEquals, ReferencesEmpty
from tests.support.notion import RELATION_PROPERTY_ID, notion_id, page_payload


def test_canonical_id_adds_dashes_and_lowercases() -> None:
    dashed = "1429989f-e8ac-4eff-bc8f-57f56486db54"

    assert canonical_id("1429989FE8AC4EFFBC8F57F56486DB54") == dashed
    assert canonical_id(dashed) == dashed
    assert canonical_id(" not-a-uuid ") == "not-a-uuid"


def test_to_stored_record_collects_dates_and_relations() -> None:
    page = Page.model_validate(
        page_payload(
            notion_id(1),
            date_field="记账日期",
            date="2025-06-04",
            relation=[notion_id(2).replace("-", "")],
        )
    )

    record = to_stored_record(page)

    assert record.id == notion_id(1)
    assert record.created_at == datetime(2025, 6, 4, 9, tzinfo=UTC)
    assert record.date("记账日期") == "2025-06-04"
    assert record.references_for("关联") == (notion_id(2),)
    assert "名称" not in record.dates


def test_to_stored_record_handles_empty_values() -> None:
    page = Page.model_validate(page_payload(notion_id(1), date_field="记账日期", date=None))

    record = to_stored_record(page)

    assert record.date("记账日期") is None
    assert record.references_for("关联") == ()


def test_truncated_relation_is_replaced_by_complete_list() -> None:
    page = Page.model_validate(
        page_payload(
            notion_id(1),
            date_field="日期",
            date="2025-06-04",
            relation=[notion_id(2)],
            has_more=True,
        )
    )

    assert truncated_relations(page) == {"关联": RELATION_PROPERTY_ID}
    record = to_stored_record(page, complete_relations={"关联": [notion_id(2), notion_id(3)]})
    assert record.references_for("关联") == (notion_id(2), notion_id(3))


def test_build_filter_translates_each_clause() -> None:
    created_after = datetime(2025, 6, 3, 12, tzinfo=UTC)

    assert build_filter(DateEquals("日期", "2025-06-04")) == {
        "property": "日期",
        "date": {"equals": "2025-06-04"},
    }
    assert build_filter(
        AllOf((ReferencesEmpty("关联"), CreatedAfter(created_after)))
    ) == {
        "and": [
            {"property": "关联", "relation": {"is_empty": True}},
            {
                "timestamp": "created_time",
                "created_time": {"after": "2025-06-03T12:00:00+00:00"},
            },
        ]
    }


def test_build_filter_unwraps_single_clause() -> None:
    assert build_filter(AllOf((ReferencesEmpty("关联"),))) == {
        "property": "关联",
        "relation": {"is_empty": True},
    }


def test_build_filter_rejects_unknown_filters() -> None:
    with pytest.raises(TypeError):
        build_filter("not a filter")  # type: ignore[arg-type]


def test_relation_patch_shape() -> None:
    assert relation_patch("关联", ["a", "b"]) == {
        "关联": {"relation": [{"id": "a"}, {"id": "b"}]}
    }
