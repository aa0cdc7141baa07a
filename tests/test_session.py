"""Tests for the session controller.

Drives full user-to-bot round trips through a loopback channel.
"""
import asyncio

import pytest

from amimitra.channel import ChannelConnectionError, LoopbackChannel, SocketIOChannel
from amimitra.conversation import ConversationState, Sender
from amimitra.rendering import Emphasis, Paragraph, PlainText, format_text
from amimitra.session import SessionController


@pytest.fixture
def session(loopback, store):
    """Session over a responder-less loopback channel."""
    return SessionController(loopback, store=store)


class TestRoundTrip:
    """End-to-end flows through the session."""

    @pytest.mark.asyncio
    async def test_submit_then_reply(self, session, loopback):
        """A submitted message and its reply land in order with typing toggled."""
        await session.start()

        session.submit("Hello")
        state = session.snapshot()
        assert [(m.sender, m.text) for m in state.log] == [(Sender.USER, "Hello")]
        assert state.typing is True
        assert loopback.sent == ["Hello"]

        loopback.deliver({"response": "Hi **there**"})
        state = session.snapshot()
        assert len(state.log) == 2
        assert state.typing is False
        assert state.log[1].sender is Sender.BOT
        assert state.log[1].text == "Hi **there**"
        assert format_text(state.log[1].text) == [
            Paragraph(spans=(PlainText(text="Hi "), Emphasis(text="there"))),
        ]

        await session.close()

    @pytest.mark.asyncio
    async def test_responder_reply_arrives(self, store):
        """Replies pushed by the channel on a later loop turn are recorded."""
        channel = LoopbackChannel(responder=lambda text: {"response": f"echo {text}"})
        async with SessionController(channel, store=store) as session:
            session.submit("ping")
            await asyncio.sleep(0)
            state = session.snapshot()

        assert [m.text for m in state.log] == ["ping", "echo ping"]
        assert not state.typing

    @pytest.mark.asyncio
    async def test_user_text_is_sent_verbatim(self, session, loopback):
        """Surrounding whitespace is preserved on the wire and in the log."""
        await session.start()
        session.submit("  spaced out  ")

        assert loopback.sent == ["  spaced out  "]
        assert session.snapshot().log[0].text == "  spaced out  "

    @pytest.mark.asyncio
    async def test_blank_input_is_ignored(self, session, loopback):
        """Blank input neither appends nor sends."""
        await session.start()

        assert session.submit("   ") is None
        assert session.submit("") is None
        assert loopback.sent == []
        assert session.snapshot().is_empty
        assert not session.snapshot().typing

    @pytest.mark.asyncio
    async def test_store_updated_before_send(self, store):
        """Listeners see the user message before the channel sends it."""
        order: list[str] = []

        class RecordingChannel(LoopbackChannel):
            def send(self, payload):
                order.append("send")
                super().send(payload)

        session = SessionController(RecordingChannel(), store=store)
        session.add_listener(lambda state: order.append("store"))
        await session.start()

        session.submit("Hello")

        assert order == ["store", "send"]

    @pytest.mark.asyncio
    async def test_submit_while_disconnected_still_logs(self, session, loopback):
        """The message is recorded even though the channel drops it."""
        session.submit("offline")

        assert loopback.sent == []
        assert session.snapshot().log[0].text == "offline"

    @pytest.mark.asyncio
    async def test_unsolicited_reply_is_appended(self, session, loopback):
        """A reply with no pending question is still recorded."""
        await session.start()
        loopback.deliver("surprise")

        state = session.snapshot()
        assert [m.sender for m in state.log] == [Sender.BOT]
        assert not state.typing

    @pytest.mark.asyncio
    async def test_other_events_ignored(self, session, loopback):
        """Only the configured inbound event produces bot messages."""
        await session.start()
        loopback.deliver("noise", name="something-else")

        assert session.snapshot().is_empty

    @pytest.mark.asyncio
    async def test_inbound_event_follows_channel(self, fake_client, store):
        """A session built with defaults listens on the channel's inbound event."""
        channel = SocketIOChannel("http://chat.test", inbound_event="reply", client=fake_client)
        session = SessionController(channel, store=store)
        await session.start()

        session.submit("Hello")
        await fake_client.trigger("reply", "Hi")

        state = session.snapshot()
        assert session.inbound_event == "reply"
        assert [m.text for m in state.log] == ["Hello", "Hi"]
        assert not state.typing
        await session.close()

    def test_explicit_inbound_event_overrides_channel(self, loopback):
        """An explicit event name wins over the channel's."""
        session = SessionController(loopback, inbound_event="custom")
        assert session.inbound_event == "custom"

    @pytest.mark.asyncio
    async def test_receive_directly(self, session):
        """receive() accepts raw payloads without a channel event."""
        message = session.receive({"response": "* one\n* two"})
        assert message.sender is Sender.BOT
        assert len(session.store) == 1


class TestTypingTimeout:
    """Tests for the optional typing timer."""

    @pytest.mark.asyncio
    async def test_typing_cleared_after_timeout(self, loopback, store):
        """Without a reply, typing drops after the timeout."""
        session = SessionController(loopback, store=store, typing_timeout=0.01)
        await session.start()

        session.submit("Hello")
        assert session.snapshot().typing
        await asyncio.sleep(0.05)

        state = session.snapshot()
        assert not state.typing
        assert len(state.log) == 1
        await session.close()

    @pytest.mark.asyncio
    async def test_reply_cancels_timer(self, loopback, store):
        """A reply before the deadline leaves nothing to clear later."""
        states: list[ConversationState] = []
        session = SessionController(loopback, store=store, typing_timeout=0.01)
        await session.start()
        session.submit("Hello")
        loopback.deliver("Hi")
        session.add_listener(states.append)

        await asyncio.sleep(0.05)

        assert states == []
        await session.close()

    @pytest.mark.asyncio
    async def test_no_timeout_by_default(self, session, loopback):
        """Typing stays on indefinitely when no timeout is configured."""
        await session.start()
        session.submit("Hello")
        await asyncio.sleep(0.02)

        assert session.snapshot().typing


class TestLifecycle:
    """Tests for start/close and subscription handling."""

    @pytest.mark.asyncio
    async def test_close_unsubscribes(self, session, loopback):
        """Events after close are not recorded."""
        await session.start()
        await session.close()
        loopback.deliver("late")

        assert session.snapshot().is_empty
        assert not session.is_started
        assert not loopback.is_connected

    @pytest.mark.asyncio
    async def test_failed_start_releases_subscription(self, fake_client, store):
        """A connection failure leaves no handler behind."""
        from socketio.exceptions import ConnectionError as SocketIOConnectionError

        fake_client._fail_connect = SocketIOConnectionError("refused")
        channel = SocketIOChannel("http://chat.test", client=fake_client)
        session = SessionController(channel, store=store)

        with pytest.raises(ChannelConnectionError):
            await session.start()

        assert not session.is_started
        assert channel._handlers == []

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_subscription(self, session, loopback):
        """Restarting does not double-deliver replies."""
        await session.start()
        await session.start()
        loopback.deliver("once")

        assert len(session.snapshot().log) == 1

    @pytest.mark.asyncio
    async def test_debug_callback_propagates(self, session, loopback, debug_log):
        """Channel, store and session all report through one callback."""
        session.set_debug_callback(debug_log)
        await session.start()
        session.submit("Hello")
        loopback.deliver("Hi")
        await session.close()

        components = {component for _, component, _ in debug_log.entries}
        assert {"Channel", "Store", "Session"} <= components

    @pytest.mark.asyncio
    async def test_default_store_created(self, loopback):
        """A store is created when none is passed."""
        session = SessionController(loopback)
        assert len(session.store) == 0
