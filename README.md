# aviatorgame

This is a small networked betting game in the style of "Aviator". A server runs
a betting round over TCP. A terminal client joins the round, places a bet and
asks to cash out.

## Installation

```
pip install .
```

## Running the server

```
aviator-server v4 51511
```

The first argument is the address family, `v4` or `v6`. The second argument is
the TCP port. The server listens on every interface, through the wildcard
address. It accepts at most 10 players and closes any further connection at
once. If an argument is missing or invalid, the server prints a usage line and
exits with status 1.

The betting clock starts when the first player connects. After 10 seconds the
server sends a `closed` message to every player. Each player gets a `start`
message that holds their player id and the seconds left. The server then reads
one bet and one cash-out request from the player.

Each event is printed to standard output as a log line:

```
event=start | id=* | N=1
event=bet | id=1 | N=1 | V=50
event=closed | id=* | N=1 | V=50
event=cashout | id=1 | N=1 | V=50
```

`N` is the number of players. `V` is the total amount bet in the round.

## Running the client

```
aviator-client 127.0.0.1 51511 -nick flop
```

The client takes four arguments:

- the server's numeric IPv4 or IPv6 address,
- the port,
- the `-nick` flag,
- a nickname of at most 13 characters.

`check_arguments` reports a malformed command line as a message. The client
still goes on as long as it has an address and a port. The nickname is checked
but never sent to the server.

Once the client is connected, it shows the seconds left in the round and reads
one line:

- A positive number is sent as the bet.
- `Q` leaves the game.
- `C` reads one more line and ignores it. It then waits for the close without
  placing a bet.
- Any other input, such as zero, a negative number or text, prints an error and
  ends the session.

When the bets close, type an amount. The client sends it as the cash-out
request and exits.

## What the package does not do

The server plays a single round. It never raises the multiplier during a
flight. It never decides when the plane crashes, never pays out and never
computes profits. The `player_profit` and `house_profit` fields exist in the
message but are never filled in. `max_multiplier` is available as a function,
but the server does not use it.

## Wire format

Each message is a fixed-size record of 28 bytes, `aviatorgame.messages.AviatorMsg`.
It is encoded little-endian and holds these fields in order:

| Field           | Encoding                                  |
|-----------------|-------------------------------------------|
| `player_id`     | 32-bit integer                            |
| `value`         | float                                     |
| `type`          | 11-byte NUL-padded string, then one pad byte |
| `player_profit` | float                                     |
| `house_profit`  | float                                     |

The `type` string is at most 10 bytes of UTF-8. The types used are `start`,
`bet`, `closed` and `cashout`.

The message functions behave as follows:

- `AviatorMsg.pack()` encodes a message. It raises `ValueError` if the type is
  too long.
- `AviatorMsg.unpack(data)` decodes exactly 28 bytes. The size is available as
  `MESSAGE_SIZE`.
- `send_message(sock, msg)` writes one record to a socket.
- `recv_message(sock)` reads one whole record. It raises `ConnectionError` if
  the peer hangs up first.

## Library use

```python
from aviatorgame.addressing import parse_address, address_to_string, server_address
from aviatorgame.server import max_multiplier, GameState

addr = parse_address("127.0.0.1", "51511")
print(address_to_string(addr))            # IPv 4 127.0.0.1 51511
print(server_address("v6", "51511").host)  # ::
print(max_multiplier(1, 0.0))             # about 1.414

state = GameState(time_left=2)
state.tick()                              # False
state.tick()                              # True: betting is closed
```

- `parse_address` and `server_address` raise `AddressError` on a bad address,
  a bad port or a bad protocol.
- `max_multiplier(n, v)` returns `(1 + n + 0.01 * v) ** 0.5`.
- `AviatorServer(proto, portstr)` binds a listening socket. It is a context
  manager, and `serve_forever()` accepts players until `close()` is called.
- `play_round(sock, stdin, stdout)` in `aviatorgame.client` plays one round on
  a socket that is already connected.

## Tests

```
pip install ".[test]"
pytest
```