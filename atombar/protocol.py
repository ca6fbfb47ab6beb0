"""Text commands understood by the atom servers, and the replies they get."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from atombar.bank import ATOMS, AtomBank, BankError, CapacityError, UnknownAtomError

ADDED = "Added\n"
INVALID_QUANTITY = "Error: invalid quantity.\n"
INVALID_ADD = (
    "Error: invalid command or atom type, Usage: ADD <atom_type_(capital)> <quantity>\n"
)
CAPACITY_MESSAGE = "Error: get over of maximum capacity.\n"
INVALID_DELIVER = "Error: invalid command - Usage: DELIVER <molecule_name> <quantity>\n"
INVALID_DELIVER_ARGS = (
    "Error: invalid molecule name or quantity - Usage: DELIVER <molecule_name> <quantity>\n"
)
INVALID_MOLECULE = (
    "Error: invalid molecule name. Valid names are: WATER, CARBON DIOXIDE, ALCOHOL, GLUCOSE.\n"
)
NOT_ENOUGH_ATOMS = "Error: not enough atoms to deliver \n"

DELIVERY_NAMES: Mapping[str, str] = MappingProxyType(
    {
        "WATER": "H2O",
        "CARBON DIOXIDE": "CO2",
        "ALCOHOL": "C2H6O",
        "GLUCOSE": "C6H12O6",
    }
)

CONSOLE_DRINKS: Mapping[str, str] = MappingProxyType(
    {
        "GEN SOFT DRINK": "SOFT DRINK",
        "GEN VODKA": "VODKA",
        "GEN CHAMPAGNE": "CHAMPAGNE",
    }
)

_INT64_MAX = 2**63 - 1
_UINT64_MAX = 2**64 - 1

_ADD_PATTERN = re.compile(r"\s*(\S+)\s+(\S+)\s*([+-]?\d+)")
_NUMBER_PREFIX = re.compile(r"\s*\+?(\d+)")


class ProtocolError(Exception):
    """A command could not be understood; ``response`` is the reply to send."""

    def __init__(self, response: str) -> None:
        super().__init__(response.rstrip("\n"))
        self.response = response


@dataclass(frozen=True)
class AddCommand:
    """A parsed ``<command> <atom> <quantity>`` line from a TCP client."""

    command: str
    atom: str
    quantity: int

    @property
    def is_valid(self) -> bool:
        """Tell whether this is an ADD of an atom type the bank stores."""
        return self.command == "ADD" and self.atom in ATOMS


@dataclass(frozen=True)
class DeliverCommand:
    """A parsed ``DELIVER <molecule name> <quantity>`` datagram."""

    item: str
    formula: str
    quantity: int


def parse_add(text: str) -> AddCommand:
    """Split a TCP line into command, atom and a non-negative quantity."""
    match = _ADD_PATTERN.match(text)
    if match is None:
        raise ProtocolError(INVALID_QUANTITY)
    command, atom, number = match.groups()
    quantity = int(number)
    if quantity < 0 or quantity > _INT64_MAX:
        raise ProtocolError(INVALID_QUANTITY)
    return AddCommand(command, atom, quantity)


def parse_deliver(text: str) -> DeliverCommand:
    """Parse a DELIVER request whose molecule name may span several words."""
    tokens = text.split()
    if not tokens or tokens[0] != "DELIVER":
        raise ProtocolError(INVALID_DELIVER)
    rest = tokens[1:]
    if len(rest) < 2:
        raise ProtocolError(INVALID_DELIVER_ARGS)
    *name_parts, quantity_text = rest
    match = _NUMBER_PREFIX.match(quantity_text)
    if match is None:
        raise ProtocolError(INVALID_QUANTITY)
    quantity = int(match.group(1))
    if quantity > _UINT64_MAX:
        raise ProtocolError(INVALID_QUANTITY)
    item = " ".join(name_parts)
    try:
        formula = DELIVERY_NAMES[item]
    except KeyError:
        raise ProtocolError(INVALID_MOLECULE) from None
    return DeliverCommand(item, formula, quantity)


def handle_add(bank: AtomBank, text: str, capacity_message: str = CAPACITY_MESSAGE) -> str:
    """Apply an ADD line to the bank and return the reply for the client."""
    try:
        command = parse_add(text)
    except ProtocolError as error:
        return error.response
    if command.command != "ADD":
        return INVALID_ADD
    try:
        bank.add(command.atom, command.quantity)
    except UnknownAtomError:
        return INVALID_ADD
    except CapacityError:
        return capacity_message
    return ADDED


def handle_deliver(bank: AtomBank, text: str) -> str:
    """Apply a DELIVER request to the bank and return the reply for the client."""
    try:
        command = parse_deliver(text)
    except ProtocolError as error:
        return error.response
    try:
        bank.make(command.formula, command.quantity)
    except BankError:
        return NOT_ENOUGH_ATOMS
    return f"Delivered {command.quantity} {command.item}\n"


def handle_console(bank: AtomBank, line: str) -> str:
    """Answer a console GEN command with how many drinks the stock allows."""
    command = line.rstrip(" \n\r\t")
    drink = CONSOLE_DRINKS.get(command)
    if drink is None:
        return f"Unknown command: {command}"
    return f"You can generate {bank.drink_amount(drink)} {drink}(s)."