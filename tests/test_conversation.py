"""Unit tests for the conversation module."""
from datetime import datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st
from pydantic import ValidationError

from amimitra.conversation import (
    ConversationState,
    ConversationStore,
    Message,
    OpaquePayload,
    Sender,
    StructuredPayload,
    TextPayload,
    canonicalize,
    parse_payload,
)

blank_text = st.text(alphabet=st.sampled_from(" \t\n\r"), max_size=20)
non_blank_text = st.text(min_size=1).filter(lambda s: s.strip())


class TestAppendUserMessage:
    """Tests for ConversationStore.append_user_message."""

    def test_appends_user_message(self, store):
        """A non-empty message is appended with sender=user."""
        message = store.append_user_message("Hello")

        state = store.snapshot()
        assert len(state.log) == 1
        assert state.log[0] is message
        assert message.sender == Sender.USER
        assert message.text == "Hello"

    def test_keeps_literal_text(self, store):
        """Surrounding whitespace is preserved in the stored text."""
        message = store.append_user_message("  spaced  ")
        assert message.text == "  spaced  "

    def test_sets_typing(self, store):
        """Appending a user message marks a reply as outstanding."""
        store.append_user_message("Hello")
        assert store.snapshot().typing is True

    @given(text=blank_text)
    def test_blank_input_rejected(self, text: str):
        """Property test: whitespace-only input leaves the log unchanged."""
        store = ConversationStore()
        assert store.append_user_message(text) is None
        assert store.snapshot() == ConversationState()

    @given(text=non_blank_text)
    def test_non_blank_input_grows_log_by_one(self, text: str):
        """Property test: any non-blank input appends exactly one user message."""
        store = ConversationStore()
        store.append_bot_message("earlier")
        before = len(store)

        store.append_user_message(text)

        state = store.snapshot()
        assert len(state.log) == before + 1
        assert state.log[-1].sender == Sender.USER


class TestAppendBotMessage:
    """Tests for ConversationStore.append_bot_message."""

    def test_clears_typing(self, store):
        """A bot reply clears the typing flag."""
        store.append_user_message("Hello")
        store.append_bot_message("Hi")

        state = store.snapshot()
        assert state.typing is False
        assert state.log[-1].sender == Sender.BOT

    def test_unwraps_response_field(self, store):
        """Structured payloads contribute their response field."""
        message = store.append_bot_message({"response": "Hi **there**"})
        assert message.text == "Hi **there**"

    def test_coerces_other_shapes(self, store):
        """Unexpected shapes are serialized rather than rejected."""
        message = store.append_bot_message({"answer": 42})
        assert message.text == '{"answer": 42}'

    def test_appends_even_without_outstanding_request(self, store):
        """An unsolicited reply is still recorded."""
        store.append_bot_message("push")
        assert len(store) == 1
        assert store.typing is False

    @given(
        ops=st.lists(
            st.one_of(
                st.tuples(st.just("user"), non_blank_text),
                st.tuples(st.just("bot"), st.text()),
            ),
            min_size=1,
            max_size=20,
        )
    )
    def test_typing_tracks_last_append(self, ops):
        """Property test: typing reflects the sender of the most recent append."""
        store = ConversationStore()
        for sender, text in ops:
            if sender == "user":
                store.append_user_message(text)
            else:
                store.append_bot_message(text)
            assert store.typing is (sender == "user")


class TestOrderingAndIdentity:
    """Tests for log order, ids and timestamps."""

    def test_log_reflects_call_order(self, store):
        """Messages appear in the order they were appended."""
        store.append_user_message("one")
        store.append_bot_message("two")
        store.append_user_message("three")

        assert [m.text for m in store.snapshot().log] == ["one", "two", "three"]

    def test_ids_strictly_increase_with_frozen_clock(self):
        """Messages created in the same millisecond still get distinct ids."""
        frozen = datetime(2024, 1, 1, 9, 0, 0)
        store = ConversationStore(clock=lambda: frozen)

        for i in range(5):
            store.append_user_message(f"msg {i}")

        ids = [m.id for m in store.snapshot().log]
        assert ids == sorted(set(ids))
        assert ids[0] == int(frozen.timestamp() * 1000)

    def test_timestamp_is_twelve_hour_clock(self, store):
        """Timestamps use a two-digit 12-hour clock."""
        message = store.append_user_message("Hello")
        assert message.timestamp == "03:07 PM"

    def test_custom_timestamp_format(self, clock):
        """The timestamp format is configurable."""
        store = ConversationStore(clock=clock, timestamp_format="%H:%M")
        assert store.append_user_message("Hello").timestamp == "15:07"

    def test_message_is_immutable(self, store):
        """Messages cannot be modified after creation."""
        message = store.append_user_message("Hello")
        with pytest.raises(ValidationError):
            message.text = "changed"

    def test_snapshot_is_detached(self, store):
        """Snapshots do not change when the store does."""
        store.append_user_message("Hello")
        snapshot = store.snapshot()
        store.append_bot_message("Hi")

        assert len(snapshot.log) == 1
        assert snapshot.typing is True


class TestListeners:
    """Tests for state change notifications."""

    def test_listener_receives_snapshots(self, store):
        """Listeners see every transition in order."""
        seen: list[ConversationState] = []
        store.add_listener(seen.append)

        store.append_user_message("Hello")
        store.append_bot_message("Hi")

        assert [(len(s.log), s.typing) for s in seen] == [(1, True), (2, False)]

    def test_rejected_input_does_not_notify(self, store):
        """Blank input changes nothing and notifies nobody."""
        seen: list[ConversationState] = []
        store.add_listener(seen.append)

        store.append_user_message("   ")

        assert seen == []

    def test_remove_listener(self, store):
        """The returned function unregisters the listener."""
        seen: list[ConversationState] = []
        remove = store.add_listener(seen.append)
        remove()

        store.append_user_message("Hello")

        assert seen == []

    def test_clear_typing(self, store):
        """clear_typing drops the flag without appending."""
        store.append_user_message("Hello")
        store.clear_typing()

        state = store.snapshot()
        assert state.typing is False
        assert len(state.log) == 1

    def test_debug_callback_warns_on_opaque_payload(self, store, debug_log):
        """Coerced payloads are reported at warning level."""
        store.set_debug_callback(debug_log)
        store.append_bot_message(["a", "b"])

        assert any(level == "warning" and comp == "Store" for level, comp, _ in debug_log.entries)


class TestConversationState:
    """Tests for the snapshot model."""

    def test_empty_state(self):
        """A fresh state is empty and idle."""
        state = ConversationState()
        assert state.is_empty
        assert state.typing is False
        assert state.last_bot_message() is None

    def test_last_bot_message(self):
        """last_bot_message skips trailing user messages."""
        bot = Message(id=1, text="hi", sender=Sender.BOT, timestamp="09:00 AM")
        user = Message(id=2, text="yo", sender=Sender.USER, timestamp="09:01 AM")
        state = ConversationState(log=(bot, user), typing=True)

        assert state.last_bot_message() == bot
        assert user.is_user


class TestPayload:
    """Tests for inbound payload normalization."""

    def test_plain_string(self):
        """Strings are text payloads."""
        payload = parse_payload("hello")
        assert isinstance(payload, TextPayload)
        assert payload.canonical_text() == "hello"

    def test_structured(self):
        """Mappings with a response field are structured payloads."""
        payload = parse_payload({"response": "hi", "extra": 1})
        assert isinstance(payload, StructuredPayload)
        assert payload.canonical_text() == "hi"

    def test_structured_non_string_response(self):
        """A non-string response field is serialized."""
        assert canonicalize({"response": {"a": 1}}) == '{"a": 1}'

    def test_attribute_response(self):
        """Objects exposing a response attribute count as structured."""
        class Reply:
            response = "from attr"

        assert canonicalize(Reply()) == "from attr"

    def test_bytes_decoded(self):
        """Binary payloads are decoded as UTF-8."""
        assert canonicalize("héllo".encode()) == "héllo"

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, ""),
            (42, "42"),
            (True, "true"),
            ([1, "two"], '[1, "two"]'),
            ({"other": "x"}, '{"other": "x"}'),
        ],
    )
    def test_opaque_values(self, raw, expected):
        """Anything else is coerced to its serialized form."""
        payload = parse_payload(raw)
        assert isinstance(payload, OpaquePayload)
        assert payload.canonical_text() == expected

    def test_unserializable_falls_back_to_str(self):
        """Values json cannot encode still produce text."""
        assert canonicalize({1, 2}) in ("{1, 2}", "{2, 1}")

    @given(st.text())
    def test_strings_pass_through(self, raw: str):
        """Property test: string payloads are stored verbatim."""
        assert canonicalize(raw) == raw
