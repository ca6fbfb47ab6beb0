"""Command-line entry points for the atom servers and their clients."""

from __future__ import annotations

import getopt
import os
import re
import sys
from dataclasses import dataclass
from typing import Optional, Sequence

from atombar.bank import AtomBank
from atombar.clients import ClientError, run_tcp_session, run_udp_session
from atombar.server import AtomServer

BAR_USAGE = (
    "Usage: program_name -T <TCP port> -U <UDP port> -t <timeout(sec)>(optional) "
    "-o <oxygen amount>(optional) -h <hydrogen amount>(optional) "
    "-c <carbon amount>(optional)"
)
PORTS_REQUIRED = "Error: TCP and UDP ports are required. closing the server..."
PORTS_DIFFERENT = "Error: TCP and UDP ports must be different."
TIMED_OUT = "Server timed out. Exiting..."
BAR_CAPACITY_MESSAGE = "Error: get over of maximum capacity\n"

_BAR_SHORT = "T:U:t:o:h:c:"
_BAR_LONG = ["tcp-port=", "udp-port=", "timeout=", "oxygen=", "hydrogen=", "carbon="]

_BAR_FLAGS = {
    "-T": "tcp_port",
    "--tcp-port": "tcp_port",
    "-U": "udp_port",
    "--udp-port": "udp_port",
    "-t": "timeout",
    "--timeout": "timeout",
    "-o": "oxygen",
    "--oxygen": "oxygen",
    "-h": "hydrogen",
    "--hydrogen": "hydrogen",
    "-c": "carbon",
    "--carbon": "carbon",
}

_INVALID_VALUE = {
    "tcp_port": "Invalid TCP port number It should be between 1 and 65535",
    "udp_port": "Invalid UDP port number It should be between 1 and 65535",
    "timeout": "Invalid timeout value, it should be a non-negative integer",
    "oxygen": "Invalid oxygen amount, it should be a non-negative integer",
    "hydrogen": "Invalid hydrogen amount, it should be a non-negative integer",
    "carbon": "Invalid carbon amount It should be a non-negative integer",
}

_PORT_NAMES = ("tcp_port", "udp_port")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class UsageError(Exception):
    """The command line could not be used; the message says why."""


@dataclass(frozen=True)
class BarOptions:
    """Settings for the drinks bar server."""

    tcp_port: int
    udp_port: int
    timeout: Optional[int] = None
    oxygen: int = 0
    hydrogen: int = 0
    carbon: int = 0


def _program() -> str:
    return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else "program"


def _atoi(text: str) -> int:
    """Read a leading integer the way C's atoi does: 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _host_port_usage() -> str:
    return f"Usage: {_program()} -h <host_name_or_ip> -p <port>"


def parse_bar_options(argv: Sequence[str]) -> BarOptions:
    """Parse drinks bar options; two bare arguments are taken as TCP and UDP ports."""
    try:
        options, positional = getopt.gnu_getopt(list(argv), _BAR_SHORT, _BAR_LONG)
    except getopt.GetoptError as error:
        raise UsageError(BAR_USAGE) from error
    if not options and len(positional) == 2:
        options = [("-T", positional[0]), ("-U", positional[1])]

    values: dict[str, int] = {}
    for flag, text in options:
        name = _BAR_FLAGS[flag]
        number = _atoi(text)
        valid = 1 <= number <= 65535 if name in _PORT_NAMES else number >= 0
        if not valid:
            raise UsageError(_INVALID_VALUE[name])
        values[name] = number

    if "tcp_port" not in values or "udp_port" not in values:
        raise UsageError(PORTS_REQUIRED)
    if values["tcp_port"] == values["udp_port"]:
        raise UsageError(PORTS_DIFFERENT)
    return BarOptions(**values)


def parse_host_port(argv: Sequence[str]) -> tuple[str, str]:
    """Parse ``-h host -p port``, or two bare arguments ``host port``."""
    try:
        options, positional = getopt.gnu_getopt(list(argv), "h:p:")
    except getopt.GetoptError as error:
        raise UsageError(_host_port_usage()) from error
    if not options and len(positional) == 2:
        return positional[0], positional[1]
    host: Optional[str] = None
    port: Optional[str] = None
    for flag, value in options:
        if flag == "-h":
            host = value
        else:
            port = value
    if host is None or port is None:
        raise UsageError(_host_port_usage())
    return host, port


def _args(argv: Optional[Sequence[str]]) -> list[str]:
    return list(sys.argv[1:] if argv is None else argv)


def _run_server(server_factory) -> int:
    try:
        server = server_factory()
    except OSError as error:
        print(f"bind failed: {error}", file=sys.stderr)
        return 1
    with server:
        try:
            server.serve_forever()
        except TimeoutError:
            print(TIMED_OUT, file=sys.stderr)
            return 1
        except KeyboardInterrupt:
            return 0
    return 0


def warehouse_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the atom warehouse: ADD commands over TCP on one port."""
    args = _args(argv)
    if len(args) != 1:
        print(f"Usage: {_program()} <port>", file=sys.stderr)
        return 1
    port = _atoi(args[0])
    return _run_server(lambda: AtomServer(AtomBank(), port))


def molecule_supplier_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the molecule supplier: ADD over TCP and DELIVER over UDP."""
    args = _args(argv)
    if len(args) != 2:
        print(f"Usage: {_program()} <port> <UDP port>", file=sys.stderr)
        return 1
    tcp_port, udp_port = _atoi(args[0]), _atoi(args[1])
    return _run_server(lambda: AtomServer(AtomBank(), tcp_port, udp_port))


def drinks_bar_main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the drinks bar: ADD over TCP, DELIVER over UDP and GEN on standard input."""
    try:
        options = parse_bar_options(_args(argv))
    except UsageError as error:
        print(error, file=sys.stderr)
        return 1
    bank = AtomBank(carbon=options.carbon, oxygen=options.oxygen, hydrogen=options.hydrogen)
    # A zero timeout disables the idle limit, as an alarm of zero seconds does.
    timeout = options.timeout or None
    console = sys.stdin
    return _run_server(
        lambda: AtomServer(
            bank,
            options.tcp_port,
            options.udp_port,
            console=console,
            timeout=timeout,
            capacity_message=BAR_CAPACITY_MESSAGE,
        )
    )


def _run_client(argv: Optional[Sequence[str]], session) -> int:
    try:
        host, port = parse_host_port(_args(argv))
    except UsageError as error:
        print(error, file=sys.stderr)
        return 1
    try:
        session(host, port)
    except ClientError as error:
        print(error, file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0


def atom_supplier_main(argv: Optional[Sequence[str]] = None) -> int:
    """Send ADD commands typed on standard input to a server over TCP."""
    return _run_client(argv, run_tcp_session)


def molecule_requester_main(argv: Optional[Sequence[str]] = None) -> int:
    """Send DELIVER requests typed on standard input to a server over UDP."""
    return _run_client(argv, run_udp_session)