"""Select-driven server that keeps an atom bank behind TCP, UDP and a console."""

from __future__ import annotations

import selectors
import socket
import sys
import time
from typing import Optional, TextIO

from atombar.bank import AtomBank
from atombar.protocol import (
    ADDED,
    CAPACITY_MESSAGE,
    NOT_ENOUGH_ATOMS,
    handle_add,
    handle_console,
    handle_deliver,
)

BACKLOG = 5
BUFFER_SIZE = 1024
MAX_CLIENTS = 25

_LISTENER = "listener"
_UDP = "udp"
_CONSOLE = "console"
_CLIENT = "client"


def _log(message: str) -> None:
    print(message, flush=True)


def _warn(message: str) -> None:
    print(message, file=sys.stderr, flush=True)


class AtomServer:
    """Serve ADD commands over TCP, DELIVER requests over UDP and GEN queries on a console.

    Without a UDP port only TCP is served; without a console no GEN commands are read.
    With a timeout, ``serve_forever`` raises ``TimeoutError`` after that many seconds
    without any activity.
    """

    def __init__(
        self,
        bank: AtomBank,
        tcp_port: int,
        udp_port: Optional[int] = None,
        console: Optional[TextIO] = None,
        timeout: Optional[float] = None,
        host: str = "",
        capacity_message: str = CAPACITY_MESSAGE,
    ) -> None:
        self.bank = bank
        self.timeout = timeout
        self.capacity_message = capacity_message
        self._selector = selectors.DefaultSelector()
        self._clients: list[socket.socket] = []
        self._console = console
        self._stopped = False
        self._udp: Optional[socket.socket] = None

        self._listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            self._listener.bind((host, tcp_port))
            self._listener.listen(BACKLOG)
        except OSError:
            self._listener.close()
            raise
        self._selector.register(self._listener, selectors.EVENT_READ, _LISTENER)
        _log(f"atom_Warehouse server is listening on port {self.tcp_address()[1]}...")

        if udp_port is not None:
            self._udp = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                self._udp.bind((host, udp_port))
            except OSError:
                self.close()
                raise
            self._selector.register(self._udp, selectors.EVENT_READ, _UDP)
            _log(f"UDP server is listening on port {self._udp.getsockname()[1]}...")

        if console is not None:
            self._selector.register(console, selectors.EVENT_READ, _CONSOLE)

        self._last_activity = time.monotonic()

    def tcp_address(self) -> tuple[str, int]:
        """Return the address the TCP listener is bound to."""
        return self._listener.getsockname()

    def udp_address(self) -> Optional[tuple[str, int]]:
        """Return the address of the UDP socket, or None when UDP is not served."""
        return None if self._udp is None else self._udp.getsockname()

    def poll(self, wait: Optional[float] = None) -> int:
        """Wait up to ``wait`` seconds for activity, handle it and return the number of events."""
        events = self._selector.select(wait)
        for key, _ in events:
            if self._stopped:
                break
            kind = key.data
            if kind == _LISTENER:
                self._accept()
            elif kind == _UDP:
                self._serve_datagram()
            elif kind == _CONSOLE:
                self._serve_console()
            else:
                self._serve_client(key.fileobj)
        if events:
            self._last_activity = time.monotonic()
        return len(events)

    def serve_forever(self) -> None:
        """Handle activity until the server stops; raise TimeoutError when idle too long."""
        while not self._stopped:
            if self.timeout is None:
                self.poll(None)
                continue
            remaining = self._last_activity + self.timeout - time.monotonic()
            if remaining <= 0:
                raise TimeoutError("Server timed out")
            self.poll(remaining)

    def close(self) -> None:
        """Close every socket the server owns; the console is left open."""
        self._stopped = True
        for client in self._clients:
            client.close()
        self._clients.clear()
        if self._udp is not None:
            self._udp.close()
        self._listener.close()
        self._selector.close()

    def __enter__(self) -> "AtomServer":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def _print_status(self, heading: str) -> None:
        _log(heading)
        for line in self.bank.status_lines():
            _log(line)

    def _accept(self) -> None:
        try:
            connection, _ = self._listener.accept()
        except OSError as error:
            _warn(f"accept: {error}")
            return
        _log(f"New client connected to socket: {connection.fileno()}")
        if len(self._clients) >= MAX_CLIENTS:
            _warn("Maximum number of clients reached. Cannot accept new client.")
            connection.close()
            self._stopped = True
            return
        self._clients.append(connection)
        self._selector.register(connection, selectors.EVENT_READ, _CLIENT)
        _log("Client added to the list of sockets.")

    def _drop_client(self, client: socket.socket) -> None:
        _log(f"Client disconnected from socket: {client.fileno()}")
        self._selector.unregister(client)
        self._clients.remove(client)
        client.close()

    def _serve_client(self, client: socket.socket) -> None:
        try:
            data = client.recv(BUFFER_SIZE)
        except ConnectionError:
            data = b""
        if not data:
            self._drop_client(client)
            return
        text = data.decode("utf-8", errors="replace")
        _log(f"Received from client: {text}")
        reply = handle_add(self.bank, text, self.capacity_message)
        try:
            client.sendall(reply.encode())
        except OSError as error:
            _warn(f"send: {error}")
        if reply in (ADDED, self.capacity_message):
            self._print_status("Current bank status:")
        else:
            _warn(f"Received invalid command from client: {text}")

    def _serve_datagram(self) -> None:
        assert self._udp is not None
        try:
            data, sender = self._udp.recvfrom(BUFFER_SIZE)
        except OSError as error:
            _warn(f"recvfrom: {error}")
            return
        text = data.decode("utf-8", errors="replace")
        _log(f"Received UDP message: {text}")
        reply = handle_deliver(self.bank, text)
        try:
            self._udp.sendto(reply.encode(), sender)
        except OSError as error:
            _warn(f"sendto: {error}")
        if reply == NOT_ENOUGH_ATOMS:
            _log("Not enough atoms to create molecule.")
        if reply == NOT_ENOUGH_ATOMS or reply.startswith("Delivered "):
            self._print_status("Current bank status after UDP delivery:")
        else:
            _warn(f"Invalid request from UDP client: {text}")

    def _serve_console(self) -> None:
        assert self._console is not None
        line = self._console.readline()
        if not line:
            self._selector.unregister(self._console)
            self._console = None
            return
        _log(handle_console(self.bank, line))