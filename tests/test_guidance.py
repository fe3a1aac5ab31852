from fred.constants.purchase_order import POStatus
from fred.workflow import get_workflow_info, get_allowed_next_statuses


def test_new_po_guidance():
    info = get_workflow_info(None)

    assert info.allowed_transitions == ["Draft", "Open"]
    assert not info.is_terminal
    assert info.next_steps == [
        "Create as Draft to continue editing",
        "Create as Open to submit for approval",
    ]


def test_draft_and_open_suggest_cancellation():
    draft = get_workflow_info(POStatus.DRAFT)
    opened = get_workflow_info("Open")

    assert draft.allowed_transitions == ["Open", "Cancelled"]
    assert draft.next_steps[0] == "Set to Open when ready for approval"
    assert opened.next_steps[0] == "Set to Active once approved and vendor is ready"
    for info in (draft, opened):
        assert "Set to Cancelled if PO needs to be terminated" in info.next_steps
        assert not info.is_terminal


def test_active_guidance():
    info = get_workflow_info(POStatus.ACTIVE)

    assert info.allowed_transitions == ["Closed", "Cancelled"]
    assert info.next_steps == [
        "Set to Closed when all work is complete",
        "Set to Cancelled if PO needs to be terminated",
    ]


def test_terminal_and_unknown_statuses_have_no_steps():
    for status in (POStatus.CLOSED, POStatus.CANCELLED, "Legacy"):
        info = get_workflow_info(status)
        assert info.is_terminal
        assert info.allowed_transitions == []
        assert info.next_steps == []


def test_allowed_next_statuses_for_new_po():
    assert get_allowed_next_statuses(None, None) == ["Draft", "Open"]
    assert get_allowed_next_statuses(12, None) == ["Draft", "Open"]


def test_allowed_next_statuses_keeps_current_first():
    assert get_allowed_next_statuses(12, "Active") == ["Active", "Closed", "Cancelled"]
    assert get_allowed_next_statuses(12, POStatus.DRAFT) == ["Draft", "Open", "Cancelled"]


def test_allowed_next_statuses_for_terminal_po():
    assert get_allowed_next_statuses(12, POStatus.CLOSED) == ["Closed"]
