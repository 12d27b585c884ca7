"""Multi-threaded game server: accepts players, runs the betting clock."""

from __future__ import annotations

import os
import socket
import sys
import threading
import time

from .addressing import AddressError, address_to_string, server_address
from .messages import AviatorMsg, recv_message, send_message

PLAYER_MAX = 10
BETTING_SECONDS = 10
_GAMMA = 0.5


def max_multiplier(n: int, v: float) -> float:
    """Largest multiplier of a round with n players and v in total bets."""
    return (1 + n + 0.01 * v) ** _GAMMA


def is_valid_message(message: int) -> bool:
    """Whether a message code is one of the known codes 0 to 4."""
    return message in (0, 1, 2, 3, 4)


def _event_line(msg_type: str, player: str, n: int, v: float) -> str:
    return f"\nevent={msg_type} | id={player} | N={n} | V={v:.0f}  \n"


class GameState:
    """Shared state of a round: players, total bet and the betting clock."""

    def __init__(self, time_left: int = BETTING_SECONDS) -> None:
        self.player_count = 0
        self.total_bet = 0.0
        self.time_left = time_left
        self.connections: list[socket.socket] = []
        self._players_lock = threading.Lock()
        self._clock_lock = threading.Lock()

    def add_player(self, conn: socket.socket) -> int:
        """Register a connection and return the new player's id."""
        with self._players_lock:
            if len(self.connections) >= PLAYER_MAX:
                raise RuntimeError(f"game is full ({PLAYER_MAX} players)")
            self.connections.append(conn)
            self.player_count += 1
            return self.player_count

    def active_connections(self) -> list[socket.socket]:
        """A snapshot of the registered connections."""
        with self._players_lock:
            return list(self.connections)

    def seconds_left(self) -> int:
        """Seconds left before betting closes."""
        with self._clock_lock:
            return self.time_left

    def tick(self) -> bool:
        """Advance the clock by one second; True once betting is closed."""
        with self._clock_lock:
            if self.time_left > 0:
                self.time_left -= 1
            return self.time_left == 0

    def place_bet(self, msg: AviatorMsg) -> float:
        """Add a bet to the round and return the new total."""
        with self._players_lock:
            if msg.player_id == -1:
                self.player_count -= 2
            self.total_bet += msg.value
            return self.total_bet


class AviatorServer:
    """Listens for players and runs one thread per player plus a clock."""

    tick_seconds = 1.0

    def __init__(self, proto: str, portstr: str, state: GameState | None = None) -> None:
        self.address = server_address(proto, portstr)
        self.state = state if state is not None else GameState()
        self._closed = False
        self._sock = socket.socket(self.address.family, socket.SOCK_STREAM)
        try:
            self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            self._sock.bind(self.address.sockaddr)
            self._sock.listen(PLAYER_MAX)
        except OSError:
            self._sock.close()
            raise
        self.description = address_to_string(self.address)

    def __enter__(self) -> AviatorServer:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        """Stop accepting players."""
        self._closed = True
        try:
            self._sock.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass
        self._sock.close()

    def serve_forever(self) -> None:
        """Accept players until the server is closed."""
        while True:
            try:
                conn, _ = self._sock.accept()
            except OSError:
                if self._closed:
                    return
                raise
            try:
                player_id = self.state.add_player(conn)
            except RuntimeError:
                conn.close()
                continue
            if player_id == 1:
                threading.Thread(target=self.run_timer, daemon=True).start()
            threading.Thread(
                target=self.handle_client, args=(conn, player_id), daemon=True
            ).start()

    def handle_client(self, conn: socket.socket, player_id: int) -> None:
        """Play one round with a player: start, bet, cash-out."""
        state = self.state
        with conn:
            if state.player_count == 1:
                print(f"\nevent=start | id=* | N={state.player_count} ")
            try:
                start = AviatorMsg(
                    player_id=player_id,
                    value=float(state.seconds_left()),
                    type="start",
                )
                send_message(conn, start)

                bet = recv_message(conn)
                total = state.place_bet(bet)
                print(_event_line(bet.type, str(bet.player_id), state.player_count, total), end="")

                cash = recv_message(conn)
                print(
                    _event_line(cash.type, str(cash.player_id), state.player_count, state.total_bet),
                    end="",
                )
            except OSError:
                return

    def run_timer(self) -> None:
        """Count down the betting time, then tell every player it closed."""
        while True:
            time.sleep(self.tick_seconds)
            if self.state.tick():
                break
        closed = AviatorMsg(type="closed", value=0.0)
        for conn in self.state.active_connections():
            try:
                send_message(conn, closed)
            except OSError:
                pass
        print(
            _event_line(closed.type, "*", self.state.player_count, self.state.total_bet),
            end="",
        )


def _usage() -> int:
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "server"
    print(f"usage: {prog} <server IP> <server port>")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the game server: main(['v4', '51511'])."""
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) < 2:
        return _usage()
    try:
        server = AviatorServer(args[0], args[1])
    except AddressError:
        return _usage()
    except OSError as exc:
        print(f"bind: {exc}", file=sys.stderr)
        return 1
    with server:
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            return 0
        except OSError as exc:
            print(f"accept: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())