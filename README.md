# atombar

A small set of networked services built around a bank of atoms:
carbon, oxygen and hydrogen.

- **Suppliers** add atoms to the bank over TCP.
- **Requesters** ask for molecules over UDP; the atoms they are made of
  are taken out of the bank.
- An operator at the server's console can ask how many drinks the bank
  could currently make.

Everything uses only the Python standard library. The servers wait on
their sockets and on standard input together, so they are meant for
POSIX systems.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Commands

### `atom-warehouse`

A TCP server that accepts `ADD` commands on one port.

```
atom-warehouse 3333
```

### `molecule-supplier`

The warehouse plus a UDP port for molecule requests.

```
molecule-supplier 1111 2222
```

### `drinks-bar`

The full server: TCP for atoms, UDP for molecules, console commands on
standard input, initial stock and an optional idle timeout.

```
drinks-bar -T 1111 -U 2222 -t 60 -o 100 -h 100 -c 100
```

| Option | Long form | Meaning |
|--------|-----------|---------|
| `-T` | `--tcp-port` | TCP port (required, 1–65535) |
| `-U` | `--udp-port` | UDP port (required, 1–65535, different from the TCP port) |
| `-t` | `--timeout` | Seconds without activity before the server exits; `0` means no limit |
| `-o` | `--oxygen` | Initial oxygen |
| `-h` | `--hydrogen` | Initial hydrogen |
| `-c` | `--carbon` | Initial carbon |

Given no options, two bare arguments are taken as the TCP and UDP ports
(`drinks-bar 1111 2222`). Values are read like C's `atoi`: a leading
integer, or `0` when there is none. When the timeout runs out the server
prints `Server timed out. Exiting...` and exits with status 1.

### `atom-supplier`

An interactive TCP client. Each line typed is sent to the server and the
reply is printed. Type `exit` (or end the input) to quit.

```
atom-supplier -h 127.0.0.1 -p 1111
```

`atom-supplier 127.0.0.1 1111` works as well.

### `molecule-requester`

An interactive UDP client. It works like `atom-supplier`.

```
molecule-requester -h 127.0.0.1 -p 2222
```

## Protocol

### TCP: adding atoms

```
ADD <CARBON|OXYGEN|HYDROGEN> <quantity>
```

The server replies `Added` on success. A stock may not go above
10^18 atoms; an addition that would pass that is refused with
`Error: get over of maximum capacity.` A negative or malformed quantity,
or an unknown command or atom, gets an `Error: ...` reply.

A server takes at most 25 TCP clients at once; when one more connects,
it is closed and the server stops.

### UDP: requesting molecules

```
DELIVER <molecule> <quantity>
```

The molecule is one of `WATER`, `CARBON DIOXIDE`, `ALCOHOL` or
`GLUCOSE`. If the bank has enough atoms, the server takes them out of
the bank and replies `Delivered <quantity> <molecule>`. If it does not
have enough, the reply is an error and the bank stays as it was.

| Molecule | Carbon | Hydrogen | Oxygen |
|----------|--------|----------|--------|
| WATER (H2O) | 0 | 2 | 1 |
| CARBON DIOXIDE (CO2) | 1 | 0 | 2 |
| ALCOHOL (C2H6O) | 2 | 6 | 1 |
| GLUCOSE (C6H12O6) | 6 | 12 | 6 |

### Console: drink estimates

At the `drinks-bar` console, type one of:

```
GEN SOFT DRINK
GEN VODKA
GEN CHAMPAGNE
```

The server prints how many of that drink the current stock could make,
for example `You can generate 4 VODKA(s).` Anything else prints
`Unknown command: ...`.

## Using the library

The bank can be used without any networking:

```python
from atombar.bank import AtomBank, CapacityError

bank = AtomBank(carbon=10, oxygen=10, hydrogen=16)
bank.add("HYDROGEN", 4)
print(bank.drink_amount("VODKA"))
bank.make("WATER", 2)
print(bank.as_dict())
```

`AtomBank.add` raises `UnknownAtomError` or `CapacityError`,
`AtomBank.make` raises `BankError` when stock is short, and
`AtomBank.drink_amount` raises `UnknownDrinkError`.

`atombar.protocol` turns request text into replies for a bank:
`handle_add`, `handle_deliver` and `handle_console`, with `parse_add`
and `parse_deliver` raising `ProtocolError` for bad input.

`atombar.server.AtomServer` runs the TCP/UDP server and can be used as a
context manager. `serve_forever()` runs it; `poll(wait)` handles one
round of activity, which is handy in tests. Pass port `0` to let the
system choose, and read the ports back with `tcp_address()` and
`udp_address()`.

`atombar.clients` provides `run_tcp_session` and `run_udp_session`,
which the client commands use; both take the lines to send and an
output stream, and return the replies received.

## What it does not do

The bank lives in memory only: stock is not saved anywhere, and a
restarted server starts again from its initial amounts. There is no
authentication, and the UDP client waits for each reply without a time
limit.