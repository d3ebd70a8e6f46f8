"""Tests for the Application status lifecycle."""
import pytest

from app.core.exceptions import InvalidStateTransitionError
from app.models import Application, ApplicationStatus, ApplicationType


@pytest.fixture
def application():
    return Application(
        id="sub-1",
        type=ApplicationType.LINK,
        subject="Vitamin C",
        applicant="Zhang San",
        product_ids=["1009", "1008"],
        reason="Same variety",
    )


def test_new_application_is_pending(application):
    assert application.status == ApplicationStatus.PENDING
    assert application.reviewed_at is None


def test_approve_records_comment(application):
    application.approve("fine")

    assert application.status == ApplicationStatus.APPROVED
    assert application.review_comment == "fine"
    assert application.reviewed_at is not None


def test_blank_comment_is_stored_as_none(application):
    application.approve("")

    assert application.review_comment is None


def test_terminal_status_is_never_left(application):
    application.reject("different")

    with pytest.raises(InvalidStateTransitionError):
        application.approve()
    with pytest.raises(InvalidStateTransitionError):
        application.reject("again")
    assert application.status == ApplicationStatus.REJECTED


def test_signature_ignores_id_order(application):
    assert application.signature == ("LINK", ("1008", "1009"))
