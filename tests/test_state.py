import pytest

from triadchat.models import (
    AiStatus,
    ChatMessage,
    MessageKind,
    PeerInfo,
    ProgressState,
    SystemMessageType,
    peer_fingerprint,
)
from triadchat.state import State
from triadchat.viewport import ScrollMovement


def type_text(state, text):
    for ch in text:
        state.input.write(ch)


def test_defaults():
    s = State()
    assert s.ui_language == "ja"
    assert s.user_avatar == "human_default"
    assert s.ai_avatar == "ai_default"
    assert s.ai_state.status is AiStatus.IDLE


def test_reset_input_pushes_to_history():
    s = State()
    type_text(s, "hello")
    assert s.input.reset() == "hello"
    assert s.input.history == ["hello"]


def test_history_restores_draft():
    s = State()
    type_text(s, "submitted")
    s.input.reset()
    type_text(s, "my draft")
    s.input.history_prev()
    assert s.input.text() == "submitted"
    s.input.history_next()
    assert s.input.text() == "my draft"
    assert not s.input.in_history_mode()


def test_connected_user_adds_connection_message_once():
    s = State()
    s.connected_user("e1", "bob")
    s.connected_user("e1", "bob")
    assert [m.rendered_text() for m in s.messages] == ["bob connected"]
    assert s.peers.users_id == {"bob": 0}


def test_connect_ignored_when_ready_elsewhere():
    s = State()
    s.record_peer("e1", PeerInfo("bob", server_port=5000, node_version="1.0"))
    s.connected_user("e2", "bob")
    assert s.messages == []
    assert s.peers.user_name("e2") is None


def test_disconnected_user_announces():
    s = State()
    s.connected_user("e1", "bob")
    s.disconnected_user("e1")
    s.disconnected_user("e1")
    assert [m.rendered_text() for m in s.messages] == ["bob connected", "bob disconnected"]
    assert s.peers.peers == {}


def test_all_user_endpoints_filters_by_room():
    s = State(local_user_name="alice")
    s.connected_user("e1", "bob")
    s.connected_user("e2", "carol")
    assert sorted(s.all_user_endpoints()) == ["e1", "e2"]
    s.active_room_members = frozenset({"alice", "bob"})
    assert s.all_user_endpoints() == ["e1"]


def test_transcript_and_recent_human_messages():
    s = State()
    s.add_message(ChatMessage("alice", MessageKind.TEXT, "one"))
    s.add_system_info_message("note")
    s.add_ai_message("reply", None)
    s.add_message(ChatMessage("bob", MessageKind.TEXT, "two"))
    assert s.transcript(10) == "alice: one\nops-ai: reply\nbob: two"
    assert s.transcript(2) == "ops-ai: reply\nbob: two"
    assert s.recent_human_messages(1) == ["two"]
    assert s.recent_human_messages(5) == ["one", "two"]


def test_add_ai_message_keeps_structured_output():
    s = State()
    s.add_ai_message("hi", {"todos": []})
    assert s.last_structured_output == {"todos": []}
    assert s.messages[-1].user == "ops-ai"
    assert s.messages[-1].kind is MessageKind.AI_TEXT


def test_system_messages_have_types():
    s = State()
    s.add_system_warn_message("w")
    s.add_system_error_message("e")
    assert [m.system_type for m in s.messages] == [
        SystemMessageType.WARNING,
        SystemMessageType.ERROR,
    ]
    assert s.messages[0].user == "triadchat: "


def test_report_error_variants():
    s = State()
    s.report_error(ValueError("boom"))
    s.report_error([])
    s.report_error([("1.2.3.4:5", "refused"), ("5.6.7.8:9", "reset")])
    assert [m.text for m in s.messages] == [
        "boom",
        "Failed to connect to 1.2.3.4:5, error: refused\n"
        "Failed to connect to 5.6.7.8:9, error: reset",
    ]


def test_progress_updates_to_completion():
    s = State()
    index = s.add_progress_message("a.txt", 10)
    assert s.messages[index].user == "Sending 'a.txt'"
    s.progress_message_update(index, 4)
    assert s.messages[index].progress == ProgressState(10, 4)
    s.progress_message_update(index, 6)
    assert s.messages[index].progress == ProgressState(10, 10, completed=True)
    s.progress_message_update(99, 1)
    assert len(s.messages) == 1


def test_set_ai_disabled():
    s = State(ai_thinking=True, abort_handle=object())
    s.set_ai_disabled()
    assert s.ai_state.status is AiStatus.DISABLED
    assert s.ai_thinking is False
    assert s.abort_handle is None


def test_trusted_fingerprints_sorted():
    s = State()
    s.set_trusted_peer_fingerprints(["b", "a"])
    s.trust_peer_fingerprint("c")
    s.untrust_peer_fingerprint("b")
    assert s.trusted_peer_fingerprints() == ["a", "c"]
    assert s.is_trusted_peer("a")
    assert not s.is_trusted_peer("b")


def test_pending_confirmation_take():
    s = State()
    s.queue_skill_confirmation("job")
    assert s.take_pending_confirmation() == "job"
    assert s.take_pending_confirmation() is None


def test_skill_proposals_numbering_and_trust():
    s = State()
    fp = peer_fingerprint(PeerInfo("bob", 1, "1.0"))
    s.set_skill_proposals(["x", "y"], "bob", False, fp)
    assert [(p.id, p.skill_name) for p in s.skill_proposals] == [(1, "x"), (2, "y")]
    s.set_skill_proposal_trust("bob", True)
    assert all(p.trusted for p in s.skill_proposals)
    s.set_skill_proposal_trust_by_fingerprint(fp, False)
    assert not any(p.trusted for p in s.skill_proposals)
    assert s.find_skill_proposal(2).skill_name == "y"
    assert s.find_skill_proposal(3) is None
    s.clear_skill_proposals()
    assert s.skill_proposals == []


def test_room_list_scroll():
    s = State()
    s.scroll_room_list(ScrollMovement.UP)
    assert s.room_list_scroll == 0
    s.scroll_room_list(ScrollMovement.DOWN)
    s.scroll_room_list(ScrollMovement.DOWN)
    s.scroll_room_list(ScrollMovement.END)
    assert s.room_list_scroll == 2
    s.reset_room_list_scroll()
    assert s.room_list_scroll == 0


def test_viewport_auto_scroll_follows_messages():
    s = State()
    s.update_chat_viewport(40, 5)
    for name in "abcde":
        s.connected_user(name, name)
    assert s.viewport.total_lines == 5
    assert s.viewport.offset == 2
    s.messages_scroll(ScrollMovement.UP)
    s.connected_user("f", "f")
    assert s.viewport.offset == 1
    s.messages_scroll(ScrollMovement.END)
    assert s.viewport.offset == 3


@pytest.mark.parametrize("count", [0, 3])
def test_recent_human_messages_limit_zero(count):
    s = State()
    for i in range(count):
        s.add_message(ChatMessage("a", MessageKind.TEXT, str(i)))
    assert s.recent_human_messages(0) == []
    assert s.transcript(0) == ""