"""Player client: joins a round, places a bet and asks to cash out."""

from __future__ import annotations

import os
import re
import socket
import sys
from typing import TextIO

from .addressing import AddressError, parse_address
from .messages import AviatorMsg, recv_message, send_message

NICK_MAX = 13

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _strtof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def check_arguments(argv: list[str]) -> str | None:
    """Return the problem with '<ip> <port> -nick <name>', or None if fine."""
    if len(argv) != 4:
        return "Error: Invalid number of arguments"
    if argv[2] != "-nick":
        return "Expected '-nick' argument"
    if len(argv[3]) > NICK_MAX:
        return f"Error: Nickname too long (max {NICK_MAX})"
    return None


def play_round(sock: socket.socket, stdin: TextIO, stdout: TextIO) -> None:
    """Play one round over a connected socket, reading commands from stdin."""
    start = recv_message(sock)
    stdout.write(
        "\nRodada aberta! Digite o valor da aposta ou digite [Q] para sair "
        f"({start.value:.0f} segundos restantes): "
    )
    stdout.flush()

    line = stdin.readline()
    command = line.rstrip("\n")
    bet = AviatorMsg(type="bet")

    if command == "Q":
        stdout.write(
            "Aposte com responsabilidade. A plataforma é nova e tá com horário "
            "bugado. Volte logo, Flop.\n"
        )
        send_message(sock, bet)
        return
    if command == "C":
        stdin.readline()
    else:
        amount = _strtof(line)
        if amount <= 0:
            stdout.write("Error: Invalid bet value\n")
            return
        if not (amount > 0 and start.value > 0):
            stdout.write("Error: Invalid command\n")
            return
        bet.value = amount
        bet.player_id = start.player_id
        send_message(sock, bet)
        stdout.write(f"Aposta recebida: R$ {bet.value:.0f}\n")

    recv_message(sock)
    stdout.write(
        "\nApostas encerradas! Não é mais possível apostar nesta rodada. "
        "Digite [C] para sacar.\n"
    )
    stdout.flush()

    cash = AviatorMsg(
        player_id=start.player_id,
        value=_strtof(stdin.readline()),
        type="cashout",
    )
    send_message(sock, cash)


def _usage() -> int:
    prog = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "client"
    print(f"usage: {prog} <server IP> <server port>")
    return 1


def main(argv: list[str] | None = None) -> int:
    """Run the client: main(['127.0.0.1', '51511', '-nick', 'name'])."""
    args = sys.argv[1:] if argv is None else list(argv)
    problem = check_arguments(args)
    if problem is not None:
        print(problem)
    if len(args) < 2:
        return _usage()
    try:
        address = parse_address(args[0], args[1])
    except AddressError:
        return _usage()

    try:
        sock = socket.socket(address.family, socket.SOCK_STREAM)
    except OSError as exc:
        print(f"socket: {exc}", file=sys.stderr)
        return 1
    with sock:
        try:
            sock.connect(address.sockaddr)
        except OSError as exc:
            print(f"connect: {exc}", file=sys.stderr)
            return 1
        try:
            play_round(sock, sys.stdin, sys.stdout)
        except ConnectionError as exc:
            print(f"recv: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())