"""Tests for ApprovalService.

Covers strategy detection, similar-group ranking, orphan detection and the
commit rules of the approval decision engine.
"""
import pytest

from app.core.exceptions import (
    ConflictError,
    InvalidStateTransitionError,
    NotFoundError,
    ValidationError,
)
from app.models import (
    Application,
    ApplicationStatus,
    ApplicationType,
    MatchType,
    MergeStrategy,
)
from app.services.approval_service import ApprovalDecision, merge_ids


def queue_application(store, app_id, app_type, *ids):
    """Put an application straight into the store, bypassing submission rules."""
    application = Application(
        id=app_id,
        type=app_type,
        subject="test",
        applicant="tester",
        product_ids=list(ids),
        reason="test",
    )
    store.applications.insert(0, application)
    return application


def snapshot(store):
    return [(g.id, list(g.product_ids)) for g in store.groups]


# ----------------------------------------------------------------------
# Analysis
# ----------------------------------------------------------------------

def test_unmatched_link_proposes_new_group_with_smallest_main_id(approval_service):
    """Vitamin C products 1008/1009 have no group: NEW with main ID 1008."""
    analysis = approval_service.analyze("sub-1")

    assert analysis.strategy == MergeStrategy.NEW
    assert analysis.forced is False
    assert analysis.target_group is None
    assert analysis.seed_ids == ["1008", "1009"]
    assert analysis.default_main_id == "1008"
    assert analysis.group_name == "Vitamin C Tablets"
    assert analysis.candidates == []
    assert analysis.orphans == []


def test_similar_groups_are_ranked_by_score(approval_service):
    analysis = approval_service.analyze("sub-2")

    assert analysis.strategy == MergeStrategy.NEW
    assert [c.group.id for c in analysis.candidates] == ["2001", "2005", "2099"]
    assert [c.match_type for c in analysis.candidates] == [
        MatchType.EXACT,
        MatchType.EXACT,
        MatchType.FUZZY,
    ]
    assert [c.score for c in analysis.candidates] == [100, 100, 50]


def test_name_only_match_when_rx_type_differs(approval_service, store):
    store.groups[0].name = "Vitamin C Tablets"  # group 251 has no catalog products

    analysis = approval_service.analyze("sub-1")

    assert len(analysis.candidates) == 1
    assert analysis.candidates[0].group.id == "251"
    assert analysis.candidates[0].match_type == MatchType.NAME_ONLY
    assert analysis.candidates[0].score == 80


def test_orphans_are_ungrouped_untargeted_products_of_same_variety(approval_service):
    analysis = approval_service.analyze("sub-2")

    assert [p.id for p in analysis.orphans] == ["1001", "1002", "1003", "4001", "4002"]


def test_candidate_seed_merges_group_members(approval_service, store):
    analysis = approval_service.analyze("sub-2")
    group_2005 = analysis.candidate("2005").group

    assert analysis.seed_for(group_2005) == ["2005", "3001", "3002"]
    assert analysis.seed_for(None) == ["3001", "3002"]


def test_direct_membership_forces_merge(approval_service, store):
    queue_application(store, "sub-9", ApplicationType.LINK, "1010", "2002")

    analysis = approval_service.analyze("sub-9")

    assert analysis.strategy == MergeStrategy.MERGE
    assert analysis.forced is True
    assert analysis.target_group.id == "2001"
    assert analysis.seed_ids == ["1010", "2001", "2002"]
    assert analysis.default_main_id == "1010"
    assert analysis.candidates == []


def test_unbind_leaving_one_member_dissolves(approval_service, store):
    queue_application(store, "sub-9", ApplicationType.UNBIND, "2002")

    analysis = approval_service.analyze("sub-9")

    assert analysis.strategy == MergeStrategy.DISSOLVE
    assert analysis.target_group.id == "2001"
    assert analysis.seed_ids == ["2001"]


def test_unbind_from_larger_group_merges_remaining_members(approval_service, store):
    queue_application(store, "sub-9", ApplicationType.UNBIND, "449286")

    analysis = approval_service.analyze("sub-9")

    assert analysis.strategy == MergeStrategy.MERGE
    assert analysis.seed_ids == ["1414", "3443006"]
    assert analysis.default_main_id == "1414"


def test_analyze_unknown_application(approval_service):
    with pytest.raises(NotFoundError):
        approval_service.analyze("sub-404")


# ----------------------------------------------------------------------
# Commit
# ----------------------------------------------------------------------

def test_approve_new_creates_exactly_one_group(approval_service, store):
    before = snapshot(store)

    outcome = approval_service.approve("sub-1", ApprovalDecision(comment="ok"))

    assert outcome.strategy == MergeStrategy.NEW
    assert outcome.group.id == "1008"
    assert outcome.group.name == "Vitamin C Tablets"
    assert outcome.group.product_ids == ["1008", "1009"]
    assert store.groups[0] is outcome.group
    assert snapshot(store)[1:] == before
    assert outcome.application.status == ApplicationStatus.APPROVED
    assert outcome.application.review_comment == "ok"


def test_approve_new_uses_edited_list_and_custom_main_id(approval_service, store):
    outcome = approval_service.approve(
        "sub-1",
        ApprovalDecision(final_ids="1009，1008\n1010 1009", main_id="1010"),
    )

    assert outcome.group.id == "1010"
    assert outcome.group.product_ids == ["1009", "1008", "1010"]
    assert outcome.group.name == "Vitamin C Chewable Tablets"


def test_approve_merge_into_chosen_candidate_only_touches_that_group(approval_service, store):
    before = dict(snapshot(store))

    outcome = approval_service.approve("sub-2", ApprovalDecision(target_group_id="2005"))

    assert outcome.strategy == MergeStrategy.MERGE
    assert outcome.group.id == "2005"
    assert outcome.group.product_ids == ["2005", "3001", "3002"]
    after = dict(snapshot(store))
    assert after.pop("2005") == ["2005", "3001", "3002"]
    before.pop("2005")
    assert after == before


def test_approve_merge_can_replace_main_id(approval_service, store):
    outcome = approval_service.approve(
        "sub-2",
        ApprovalDecision(
            target_group_id="2001",
            final_ids=["2001", "2002", "3001", "3002", "4001"],
            main_id="3001",
        ),
    )

    assert outcome.group.id == "3001"
    assert outcome.group.product_ids == ["2001", "2002", "3001", "3002", "4001"]
    assert store.groups[6] is outcome.group
    assert all(g.id != "2001" for g in store.groups)


def test_forced_merge_applies_to_matched_group(approval_service, store):
    queue_application(store, "sub-9", ApplicationType.LINK, "1010", "2002")

    outcome = approval_service.approve("sub-9", ApprovalDecision())

    assert outcome.strategy == MergeStrategy.MERGE
    assert outcome.group.id == "1010"
    assert outcome.group.product_ids == ["1010", "2001", "2002"]


def test_forced_merge_rejects_other_target(approval_service, store):
    queue_application(store, "sub-9", ApplicationType.LINK, "1010", "2002")

    with pytest.raises(ValidationError, match="must be merged"):
        approval_service.approve("sub-9", ApprovalDecision(target_group_id="2005"))


def test_target_must_be_a_similar_group(approval_service):
    with pytest.raises(ValidationError, match="not a similar group"):
        approval_service.approve("sub-2", ApprovalDecision(target_group_id="251"))


def test_target_must_exist(approval_service):
    with pytest.raises(NotFoundError):
        approval_service.approve("sub-2", ApprovalDecision(target_group_id="8888"))


def test_commit_rejects_single_member(approval_service, store):
    before = snapshot(store)

    with pytest.raises(ValidationError, match="at least 2"):
        approval_service.approve("sub-1", ApprovalDecision(final_ids="1008"))

    assert store.applications[0].status == ApplicationStatus.PENDING
    assert snapshot(store) == before


def test_commit_rejects_main_id_outside_list(approval_service):
    with pytest.raises(ValidationError, match="Main ID"):
        approval_service.approve(
            "sub-1", ApprovalDecision(final_ids="1008,1009", main_id="1010")
        )


def test_commit_rejects_main_id_owned_by_other_group(approval_service):
    with pytest.raises(ConflictError):
        approval_service.approve(
            "sub-1", ApprovalDecision(final_ids="1008,1009,2005", main_id="2005")
        )


def test_unbind_dissolves_group(approval_service, store):
    queue_application(store, "sub-9", ApplicationType.UNBIND, "2002")

    outcome = approval_service.approve("sub-9", ApprovalDecision())

    assert outcome.strategy == MergeStrategy.DISSOLVE
    assert outcome.group is None
    assert outcome.removed_group_ids == ["2001"]
    assert all(g.id != "2001" for g in store.groups)


def test_unbind_removes_member_from_group(approval_service, store):
    queue_application(store, "sub-9", ApplicationType.UNBIND, "449286")

    outcome = approval_service.approve("sub-9", ApprovalDecision())

    assert outcome.group.id == "1414"
    assert outcome.group.product_ids == ["1414", "3443006"]


def test_reject_requires_reason(approval_service):
    with pytest.raises(ValidationError):
        approval_service.reject("sub-1", "  ")


def test_reject_checks_application_before_reason(approval_service, store):
    with pytest.raises(NotFoundError):
        approval_service.reject("sub-404", "")

    store.applications[0].approve()
    with pytest.raises(InvalidStateTransitionError):
        approval_service.reject("sub-1", "  ")


def test_reject_never_touches_groups(approval_service, store):
    before = snapshot(store)

    application = approval_service.reject("sub-1", "Different active ingredients")

    assert application.status == ApplicationStatus.REJECTED
    assert application.review_comment == "Different active ingredients"
    assert snapshot(store) == before


@pytest.mark.parametrize("close", ["approve", "reject"])
def test_closed_application_cannot_be_reviewed_again(approval_service, close):
    if close == "approve":
        approval_service.approve("sub-1", ApprovalDecision())
    else:
        approval_service.reject("sub-1", "no")

    with pytest.raises(InvalidStateTransitionError):
        approval_service.approve("sub-1", ApprovalDecision())
    with pytest.raises(InvalidStateTransitionError):
        approval_service.reject("sub-1", "again")


def test_queue_lists_pending_with_product_details(approval_service):
    queue = approval_service.queue()

    assert [entry.application.id for entry in queue] == ["sub-1", "sub-2"]
    assert [p.brand for p in queue[0].products] == ["By-health", "Yangshengtang"]


def test_merge_ids_is_numeric_union():
    assert merge_ids(["3001", "201"], ["201", "1000"]) == ["201", "1000", "3001"]
