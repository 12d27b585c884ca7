"""Fixed-size game messages exchanged between the server and its players."""

from __future__ import annotations

import socket
import struct
from dataclasses import dataclass

STR_LEN = 11

# int32 player_id, float value, char type[11], one pad byte, float, float.
_LAYOUT = struct.Struct(f"<if{STR_LEN}sxff")
MESSAGE_SIZE = _LAYOUT.size


@dataclass
class AviatorMsg:
    """A single game message: a bet, a cash-out request or a round event."""

    player_id: int = 0
    value: float = 0.0
    type: str = ""
    player_profit: float = 0.0
    house_profit: float = 0.0

    def pack(self) -> bytes:
        """Encode the message into its fixed-size wire form."""
        encoded_type = self.type.encode("utf-8")
        if len(encoded_type) >= STR_LEN:
            raise ValueError(
                f"message type {self.type!r} is longer than {STR_LEN - 1} bytes"
            )
        try:
            return _LAYOUT.pack(
                self.player_id,
                self.value,
                encoded_type,
                self.player_profit,
                self.house_profit,
            )
        except struct.error as exc:
            raise ValueError(str(exc)) from exc

    @classmethod
    def unpack(cls, data: bytes) -> AviatorMsg:
        """Decode a message from exactly MESSAGE_SIZE bytes."""
        if len(data) != MESSAGE_SIZE:
            raise ValueError(
                f"expected {MESSAGE_SIZE} bytes, got {len(data)}"
            )
        player_id, value, raw_type, player_profit, house_profit = _LAYOUT.unpack(
            data
        )
        msg_type = raw_type.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        return cls(player_id, value, msg_type, player_profit, house_profit)


def send_message(sock: socket.socket, msg: AviatorMsg) -> None:
    """Send one message over a connected stream socket."""
    sock.sendall(msg.pack())


def recv_message(sock: socket.socket) -> AviatorMsg:
    """Receive one whole message; raise ConnectionError if the peer hangs up."""
    buf = bytearray()
    while len(buf) < MESSAGE_SIZE:
        chunk = sock.recv(MESSAGE_SIZE - len(buf))
        if not chunk:
            raise ConnectionError("connection closed before a full message arrived")
        buf += chunk
    return AviatorMsg.unpack(bytes(buf))