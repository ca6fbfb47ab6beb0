"""Interactive line clients for the atom servers: ADD over TCP, DELIVER over UDP."""

from __future__ import annotations

import socket
import sys
from typing import Iterable, Iterator, Optional, TextIO, Union

BUFFER_SIZE = 1024

TCP_PROMPT = "Enter command (or 'exit' to quit): "
UDP_PROMPT = "Enter command (such as: DELIVER WATER 3 or 'exit' to quit): "
EXIT_COMMAND = "exit"


class ClientError(Exception):
    """The server address could not be resolved or reached."""


def _resolve(host: str, port: Union[int, str], kind: int) -> tuple:
    try:
        infos = socket.getaddrinfo(host, str(port), socket.AF_INET, kind)
    except socket.gaierror as error:
        raise ClientError(f"getaddrinfo failed: {error}") from error
    if not infos:
        raise ClientError(f"getaddrinfo failed: no address for {host}")
    return infos[0]


def _commands(lines: Optional[Iterable[str]], out: TextIO, prompt: str) -> Iterator[str]:
    """Prompt for and yield commands until 'exit' or the input runs out."""
    source = sys.stdin if lines is None else lines
    iterator = iter(source)
    while True:
        out.write(prompt)
        out.flush()
        try:
            line = next(iterator)
        except StopIteration:
            return
        command = line.rstrip("\n")
        if command == EXIT_COMMAND:
            out.write("Exiting...\n")
            return
        yield command


def run_tcp_session(
    host: str,
    port: Union[int, str],
    lines: Optional[Iterable[str]] = None,
    out: Optional[TextIO] = None,
) -> list[str]:
    """Send each line to a TCP server and print its replies; return the replies."""
    out = sys.stdout if out is None else out
    family, kind, proto, _, address = _resolve(host, port, socket.SOCK_STREAM)
    responses: list[str] = []
    try:
        connection = socket.socket(family, kind, proto)
    except OSError as error:
        raise ClientError(f"socket: {error}") from error
    with connection:
        try:
            connection.connect(address)
        except OSError as error:
            raise ClientError(f"connect: {error}") from error
        out.write(f"Connected to server at {host} on port {port}\n")
        for command in _commands(lines, out, TCP_PROMPT):
            try:
                connection.sendall(command.encode())
                data = connection.recv(BUFFER_SIZE)
            except OSError as error:
                print(f"Read error: {error}", file=sys.stderr)
                break
            reply = data.decode("utf-8", errors="replace")
            responses.append(reply)
            out.write(f"Server response: {reply}\n")
    out.write("Connection closed.\n")
    out.flush()
    return responses


def run_udp_session(
    host: str,
    port: Union[int, str],
    lines: Optional[Iterable[str]] = None,
    out: Optional[TextIO] = None,
) -> list[str]:
    """Send each line as a datagram and print the server's replies; return the replies."""
    out = sys.stdout if out is None else out
    family, kind, proto, _, address = _resolve(host, port, socket.SOCK_DGRAM)
    responses: list[str] = []
    try:
        sock = socket.socket(family, kind, proto)
    except OSError as error:
        raise ClientError(f"socket: {error}") from error
    with sock:
        out.write(f"Connected to server at {host} on port {port} (UDP)\n")
        for command in _commands(lines, out, UDP_PROMPT):
            try:
                sock.sendto(command.encode(), address)
            except OSError as error:
                print(f"sendto: {error}", file=sys.stderr)
                break
            try:
                data, _ = sock.recvfrom(BUFFER_SIZE - 1)
            except OSError as error:
                print(f"recvfrom: {error}", file=sys.stderr)
                break
            reply = data.decode("utf-8", errors="replace")
            responses.append(reply)
            out.write(f"Server response: {reply}\n")
    out.write("Connection closed.\n")
    out.flush()
    return responses