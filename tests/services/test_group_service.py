"""Tests for GroupService.

Covers list filtering and paging, member resolution, editing and
confirmed deletion.
"""
import pytest

from app.core.exceptions import (
    ConfirmationRequiredError,
    ConflictError,
    NotFoundError,
    ValidationError,
)


def test_filter_by_member_id_fragment(group_service):
    page = group_service.list_groups(product_id="2002")

    assert [g.id for g in page.groups] == ["2001"]
    assert page.total == 1


def test_filter_by_name_fragment(group_service):
    page = group_service.list_groups(name="Amoxicillin")

    assert [g.id for g in page.groups] == ["2001", "2005", "2099"]


def test_filters_combine(group_service):
    page = group_service.list_groups(product_id="2005", name="Amoxicillin")

    assert [g.id for g in page.groups] == ["2005"]


def test_paging_reports_total_before_slicing(group_service):
    page = group_service.list_groups(limit=5, offset=5)

    assert [g.id for g in page.groups] == ["1414", "2001", "2005", "2099"]
    assert page.total == 9
    assert page.limit == 5


def test_default_page_size(group_service):
    page = group_service.list_groups()

    assert page.limit == 10
    assert len(page.groups) == 9


def test_missing_members_render_as_unknown_products(group_service):
    detail = group_service.get_group("251")

    assert [m.id for m in detail.members] == ["251", "3654826"]
    assert all(m.is_unknown for m in detail.members)
    assert detail.members[0].name == "Unknown product"


def test_known_members_are_resolved(group_service):
    detail = group_service.get_group("2001")

    assert [m.brand for m in detail.members] == ["United Labs", "NCPC"]
    assert detail.is_main("2001")
    assert not detail.is_main("2002")


def test_get_unknown_group(group_service):
    with pytest.raises(NotFoundError):
        group_service.get_group("nope")


def test_get_product(group_service):
    assert group_service.get_product("1008").brand == "By-health"
    with pytest.raises(NotFoundError):
        group_service.get_product("9999")


def test_delete_requires_confirmation(group_service, store):
    with pytest.raises(ConfirmationRequiredError):
        group_service.delete_group("2001")

    assert any(g.id == "2001" for g in store.groups)


def test_confirmed_delete_removes_group(group_service, store):
    group_service.delete_group("2001", confirm=True)

    assert all(g.id != "2001" for g in store.groups)
    assert len(store.groups) == 8


def test_update_changes_members_and_main_id(group_service):
    group = group_service.update_group(
        "2001", name="Amoxicillin 0.25g", product_ids="2001, 2002, 4001", main_id="4001"
    )

    assert group.id == "4001"
    assert group.name == "Amoxicillin 0.25g"
    assert group.product_ids == ["2001", "2002", "4001"]


def test_update_keeps_main_id_when_still_a_member(group_service):
    group = group_service.update_group("1414", product_ids=["3443006", "1414"])

    assert group.id == "1414"


def test_update_picks_smallest_member_when_main_dropped(group_service):
    group = group_service.update_group("1414", product_ids=["3443006", "449286"])

    assert group.id == "449286"


def test_update_rejects_single_member(group_service):
    with pytest.raises(ValidationError):
        group_service.update_group("2001", product_ids=["2001"])


def test_update_rejects_main_id_of_another_group(group_service):
    with pytest.raises(ConflictError):
        group_service.update_group("2001", product_ids="2001,2002,2005", main_id="2005")
