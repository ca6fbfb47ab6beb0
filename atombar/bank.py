"""Atom inventory shared by the warehouse, molecule supplier and drinks bar."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

MAX_CAPACITY = 1_000_000_000_000_000_000

ATOMS = ("CARBON", "HYDROGEN", "OXYGEN")

MOLECULES: Mapping[str, Mapping[str, int]] = MappingProxyType(
    {
        "H2O": MappingProxyType({"HYDROGEN": 2, "OXYGEN": 1}),
        "CO2": MappingProxyType({"CARBON": 1, "OXYGEN": 2}),
        "C6H12O6": MappingProxyType({"CARBON": 6, "HYDROGEN": 12, "OXYGEN": 6}),
        "C2H6O": MappingProxyType({"CARBON": 2, "HYDROGEN": 6, "OXYGEN": 1}),
    }
)

ALIASES: Mapping[str, str] = MappingProxyType(
    {
        "WATER": "H2O",
        "GLUCOSE": "C6H12O6",
        "ETHANOL": "C2H6O",
        "CARBON DIOXIDE": "CO2",
    }
)

DRINKS: Mapping[str, Mapping[str, int]] = MappingProxyType(
    {
        "SOFT DRINK": MappingProxyType({"CARBON": 7, "OXYGEN": 9, "HYDROGEN": 14}),
        "VODKA": MappingProxyType({"CARBON": 2, "OXYGEN": 2, "HYDROGEN": 8}),
        "CHAMPAGNE": MappingProxyType({"CARBON": 3, "OXYGEN": 4, "HYDROGEN": 8}),
    }
)


class BankError(Exception):
    """Base error for atom bank operations."""


class CapacityError(BankError):
    """Adding atoms would push a stock above the maximum capacity."""


class UnknownAtomError(BankError):
    """The atom type is not one the bank stores."""


class UnknownMoleculeError(BankError):
    """The molecule name or formula is not known."""


class UnknownDrinkError(BankError):
    """The drink name is not known."""


def formula_for(name: str) -> str:
    """Return the chemical formula for a molecule name or formula."""
    formula = ALIASES.get(name, name)
    if formula not in MOLECULES:
        raise UnknownMoleculeError(f"Unknown molecule: {formula}")
    return formula


def _check_quantity(quantity: int) -> None:
    if quantity < 0:
        raise ValueError(f"quantity must be non-negative, got {quantity}")


class AtomBank:
    """Stock of carbon, oxygen and hydrogen atoms."""

    def __init__(self, carbon: int = 0, oxygen: int = 0, hydrogen: int = 0) -> None:
        for quantity in (carbon, oxygen, hydrogen):
            _check_quantity(quantity)
        self._stock = {"CARBON": carbon, "OXYGEN": oxygen, "HYDROGEN": hydrogen}

    def add(self, atom: str, quantity: int) -> int:
        """Add atoms of one type and return the new stock of that type."""
        if atom not in self._stock:
            raise UnknownAtomError(f"Unknown atom type: {atom}")
        _check_quantity(quantity)
        total = self._stock[atom] + quantity
        if total > MAX_CAPACITY:
            raise CapacityError("get over of maximum capacity")
        self._stock[atom] = total
        return total

    def can_make(self, molecule: str, quantity: int) -> bool:
        """Tell whether enough atoms are in stock for the molecules."""
        _check_quantity(quantity)
        recipe = MOLECULES[formula_for(molecule)]
        return all(self._stock[atom] >= count * quantity for atom, count in recipe.items())

    def make(self, molecule: str, quantity: int) -> None:
        """Take the atoms for the molecules out of stock, or raise BankError."""
        if not self.can_make(molecule, quantity):
            raise BankError(f"not enough atoms to create molecule {formula_for(molecule)}")
        for atom, count in MOLECULES[formula_for(molecule)].items():
            self._stock[atom] -= count * quantity

    def drink_amount(self, drink: str) -> int:
        """Return how many of a drink the current stock would allow."""
        try:
            recipe = DRINKS[drink]
        except KeyError:
            raise UnknownDrinkError(f"Unknown drink: {drink}") from None
        return min(self._stock[atom] // count for atom, count in recipe.items())

    def as_dict(self) -> dict[str, int]:
        """Return the stock, keyed by atom name in sorted order."""
        return {atom: self._stock[atom] for atom in ATOMS}

    def status_lines(self) -> list[str]:
        """Return one "ATOM: count" line per atom, in sorted order."""
        return [f"{atom}: {count}" for atom, count in self.as_dict().items()]

    def __repr__(self) -> str:
        return f"AtomBank({self.as_dict()!r})"