"""Unit tests for session reconstruction and bounce rate."""

import pytest

from trafficlens.domain.services.session_reconstructor import (
    SessionReconstructor,
    bounce_rate_of,
)


class TestSessionReconstructor:
    """Test suite for SessionReconstructor."""

    def test_groups_events_by_session_id(self, make_event):
        """Events sharing a session id end up in the same session."""
        events = [
            make_event(session_id="s1"),
            make_event(session_id="s2"),
            make_event(session_id="s1", page_url="/about"),
        ]

        index = SessionReconstructor.reconstruct(events)

        assert len(index) == 2
        assert index.view_count("s1") == 2
        assert index.view_count("s2") == 1
        assert [s.session_id for s in index] == ["s1", "s2"]

    def test_events_without_session_are_ignored(self, make_event):
        """Missing or empty session ids never form a session."""
        events = [make_event(session_id=None), make_event(session_id="")]

        index = SessionReconstructor.reconstruct(events)

        assert len(index) == 0
        assert "" not in index

    def test_unknown_session_has_zero_views(self, make_event):
        """view_count of an unknown session is 0."""
        index = SessionReconstructor.reconstruct([make_event(session_id="s1")])

        assert index.view_count("missing") == 0
        assert index.get("missing") is None

    def test_two_page_session_does_not_bounce(self, make_event):
        """Same session, two pages → bounce rate 0%."""
        events = [
            make_event(visitor_id="v1", session_id="s1", page_url="/"),
            make_event(visitor_id="v1", session_id="s1", page_url="/about"),
        ]

        index = SessionReconstructor.reconstruct(events)

        assert index.get("s1").bounced is False
        assert index.bounce_rate() == 0.0

    def test_single_event_session_bounces(self, make_event):
        """Single-event session → bounce rate 100%."""
        index = SessionReconstructor.reconstruct([make_event(session_id="s1")])

        assert index.get("s1").bounced is True
        assert index.bounce_rate() == 100.0

    def test_mixed_sessions_bounce_rate(self, make_event):
        """One of four sessions bounces → 25%."""
        events = [make_event(session_id="lonely")]
        for sid in ("a", "b", "c"):
            events += [make_event(session_id=sid), make_event(session_id=sid)]

        index = SessionReconstructor.reconstruct(events)

        assert index.bounced_count == 1
        assert index.bounce_rate() == 25.0

    def test_empty_input_bounce_rate_is_zero(self):
        """No sessions → exactly 0.0, never NaN."""
        index = SessionReconstructor.reconstruct([])

        assert index.bounce_rate() == 0.0


class TestBounceRateOf:
    """Test suite for the guarded bounce-rate division."""

    @pytest.mark.parametrize(
        "bounced,total,expected",
        [(0, 0, 0.0), (0, 4, 0.0), (1, 4, 25.0), (4, 4, 100.0)],
    )
    def test_values_stay_in_range(self, bounced, total, expected):
        """Bounce rate is within [0, 100]."""
        rate = bounce_rate_of(bounced, total)

        assert rate == expected
        assert 0.0 <= rate <= 100.0
