"""Tests for the connectivity mode holder."""

from __future__ import annotations

import pytest

from fieldsync.mode import ConnectivityMode, ModeProvider, ModeState


@pytest.mark.parametrize(
    "status, expected",
    [
        (0, ConnectivityMode.ONLINE),
        (1, ConnectivityMode.OFFLINE),
        (2, ConnectivityMode.UNKNOWN),
        (None, ConnectivityMode.UNKNOWN),
    ],
)
def test_from_user_status(status, expected):
    assert ConnectivityMode.from_user_status(status) is expected


def test_parse_is_lenient():
    assert ConnectivityMode.parse(" OFFLINE ") is ConnectivityMode.OFFLINE
    assert ConnectivityMode.parse("online") is ConnectivityMode.ONLINE
    assert ConnectivityMode.parse("flaky") is ConnectivityMode.UNKNOWN
    assert ConnectivityMode.parse("") is ConnectivityMode.UNKNOWN


def test_mode_state_defaults_to_unknown():
    state = ModeState()
    assert state.current_mode() is ConnectivityMode.UNKNOWN
    assert not state.is_online
    assert not state.is_offline


def test_set_mode_is_visible_to_next_read():
    state = ModeState(ConnectivityMode.OFFLINE)
    assert state.is_offline
    state.set_mode(ConnectivityMode.ONLINE)
    assert state.current_mode() is ConnectivityMode.ONLINE
    assert state.is_online


def test_mode_state_satisfies_provider_protocol():
    assert isinstance(ModeState(), ModeProvider)


def test_from_settings(monkeypatch):
    from fieldsync.config import settings

    monkeypatch.setattr(settings, "mode", "offline")
    assert ModeState.from_settings().current_mode() is ConnectivityMode.OFFLINE
