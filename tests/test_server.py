import math
import socket
import threading

import pytest

from aviatorgame.messages import AviatorMsg, recv_message, send_message
from aviatorgame.server import (
    PLAYER_MAX,
    AviatorServer,
    GameState,
    is_valid_message,
    main,
    max_multiplier,
)


def _free_port():
    with socket.socket() as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


def test_max_multiplier_with_nothing_at_stake():
    assert max_multiplier(0, 0) == 1.0


@pytest.mark.parametrize("n,v", [(1, 0), (3, 100), (10, 2500.5)])
def test_max_multiplier_squares_back(n, v):
    assert math.isclose(max_multiplier(n, v) ** 2, 1 + n + 0.01 * v)


def test_max_multiplier_grows_with_players_and_bets():
    assert max_multiplier(2, 50) < max_multiplier(3, 50)
    assert max_multiplier(2, 50) < max_multiplier(2, 60)


@pytest.mark.parametrize("code", [0, 1, 2, 3, 4])
def test_known_message_codes_are_valid(code):
    assert is_valid_message(code) is True


@pytest.mark.parametrize("code", [-1, 5, 100])
def test_unknown_message_codes_are_invalid(code):
    assert is_valid_message(code) is False


def test_add_player_numbers_players_in_order():
    state = GameState()
    a, b = socket.socketpair()
    with a, b:
        assert state.add_player(a) == 1
        assert state.add_player(b) == 2
        assert state.active_connections() == [a, b]


def test_add_player_rejects_more_than_max():
    state = GameState()
    for _ in range(PLAYER_MAX):
        state.add_player(object())
    with pytest.raises(RuntimeError):
        state.add_player(object())


def test_clock_closes_after_default_betting_time():
    state = GameState()
    start = state.seconds_left()
    results = [state.tick() for _ in range(start)]
    assert results[:-1] == [False] * (start - 1)
    assert results[-1] is True
    assert state.tick() is True
    assert state.seconds_left() == 0


def test_place_bet_accumulates():
    state = GameState()
    state.add_player(object())
    assert state.place_bet(AviatorMsg(player_id=1, value=10.0, type="bet")) == 10.0
    assert state.place_bet(AviatorMsg(player_id=1, value=2.5, type="bet")) == 12.5
    assert state.total_bet == 12.5


def test_place_bet_from_quitting_player_reduces_count():
    state = GameState()
    for _ in range(3):
        state.add_player(object())
    state.place_bet(AviatorMsg(player_id=-1, type="bet"))
    assert state.player_count == 1


def test_full_round_with_one_player():
    port = _free_port()
    server = AviatorServer("v4", str(port))
    server.tick_seconds = 60
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        with socket.create_connection(("127.0.0.1", port), timeout=5) as conn:
            start = recv_message(conn)
            assert start.type == "start"
            assert start.player_id == 1
            assert start.value == 10.0
            send_message(conn, AviatorMsg(player_id=1, value=25.0, type="bet"))
            send_message(conn, AviatorMsg(player_id=1, value=1.5, type="cashout"))
            assert conn.recv(1) == b""
        assert server.state.total_bet == 25.0
        assert server.state.player_count == 1
    finally:
        server.close()


def test_timer_broadcasts_closed(capsys):
    state = GameState(time_left=2)
    a, b = socket.socketpair()
    with a, b:
        state.add_player(a)
        with AviatorServer("v4", str(_free_port()), state) as server:
            server.tick_seconds = 0.01
            server.run_timer()
        msg = recv_message(b)
    assert msg.type == "closed"
    assert msg.value == 0.0
    assert state.seconds_left() == 0
    assert "event=closed | id=* | N=1 | V=0" in capsys.readouterr().out


def test_main_without_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert "usage:" in capsys.readouterr().out


def test_main_with_unknown_protocol(capsys):
    assert main(["v5", "5000"]) == 1
    assert "<server port>" in capsys.readouterr().out