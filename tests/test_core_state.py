"""Tests for the client cache, the action dispatcher and the request sequencer."""
import pytest

from core.actions import ActionDispatcher, ClientAction, actions_for
from core.client_cache import ClientCache
from core.sequencer import RequestSequencer
from models.client import Client


def client(cid, first="Ana", last="López"):
    return Client(id=cid, first_name=first, last_name=last, email=f"c{cid}@gym.com")


class TestClientCache:

    def test_replace_swaps_the_whole_list(self):
        cache = ClientCache([client(1), client(2)])
        cache.replace([client(3)])
        assert [c.id for c in cache] == [3]
        assert cache.get(1) is None

    def test_display_name(self):
        cache = ClientCache([client(1, "Luis", "Paz")])
        assert cache.display_name(1) == "Luis Paz"
        assert cache.display_name(8) == "#8"
        assert cache.display_name(None) == "-"

    def test_iteration_is_a_snapshot(self):
        cache = ClientCache([client(1), client(2)])
        seen = []
        for c in cache:
            seen.append(c.id)
            cache.replace([])
        assert seen == [1, 2]
        assert len(cache) == 0


class TestActionDispatcher:

    def test_routes_to_registered_handler(self):
        calls = []
        d = ActionDispatcher()
        d.register(ClientAction.PAUSE, lambda cid: calls.append(("pause", cid)))
        d.register(ClientAction.EDIT, lambda cid: calls.append(("edit", cid)))

        d.dispatch(ClientAction.PAUSE, 4)
        d.dispatch("edit", 5)

        assert calls == [("pause", 4), ("edit", 5)]

    def test_unregistered_action(self):
        d = ActionDispatcher()
        d.register(ClientAction.PAUSE, lambda cid: None)
        with pytest.raises(KeyError):
            d.dispatch(ClientAction.RESUME, 1)

    def test_unknown_action_name(self):
        with pytest.raises(ValueError):
            ActionDispatcher().dispatch("delete", 1)

    def test_row_buttons(self):
        assert actions_for(True) == (ClientAction.EDIT, ClientAction.DEACTIVATE,
                                     ClientAction.PAUSE, ClientAction.RESUME)
        assert ClientAction.ACTIVATE in actions_for(False)
        assert ClientAction.DEACTIVATE not in actions_for(False)


class TestRequestSequencer:

    def test_older_request_is_stale_once_a_newer_one_is_issued(self):
        seq = RequestSequencer()
        first = seq.next()
        assert seq.is_current(first)

        second = seq.next()
        assert second > first
        assert not seq.is_current(first)
        assert seq.is_current(second)

    def test_sequencers_are_independent(self):
        a, b = RequestSequencer(), RequestSequencer()
        ra = a.next()
        b.next()
        b.next()
        assert a.is_current(ra)
