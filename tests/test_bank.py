import pytest

from atombar.bank import (
    MAX_CAPACITY,
    AtomBank,
    BankError,
    CapacityError,
    UnknownAtomError,
    UnknownDrinkError,
    UnknownMoleculeError,
    formula_for,
)


def test_new_bank_is_empty():
    assert AtomBank().as_dict() == {"CARBON": 0, "HYDROGEN": 0, "OXYGEN": 0}


def test_initial_values_are_kept():
    bank = AtomBank(carbon=3, oxygen=4, hydrogen=5)
    assert bank.as_dict() == {"CARBON": 3, "HYDROGEN": 5, "OXYGEN": 4}


def test_negative_initial_value_rejected():
    with pytest.raises(ValueError):
        AtomBank(carbon=-1)


def test_add_returns_new_total_and_updates_stock():
    bank = AtomBank()
    assert bank.add("CARBON", 10) == 10
    assert bank.add("CARBON", 5) == 15
    assert bank.as_dict()["CARBON"] == 15


def test_add_unknown_atom():
    bank = AtomBank()
    with pytest.raises(UnknownAtomError):
        bank.add("NITROGEN", 1)


def test_add_lowercase_atom_is_unknown():
    with pytest.raises(UnknownAtomError):
        AtomBank().add("carbon", 1)


def test_add_negative_quantity():
    with pytest.raises(ValueError):
        AtomBank().add("OXYGEN", -3)


def test_add_up_to_capacity_is_allowed():
    bank = AtomBank()
    assert bank.add("OXYGEN", MAX_CAPACITY) == MAX_CAPACITY


def test_add_over_capacity_leaves_stock_unchanged():
    bank = AtomBank(hydrogen=MAX_CAPACITY)
    with pytest.raises(CapacityError):
        bank.add("HYDROGEN", 1)
    assert bank.as_dict()["HYDROGEN"] == MAX_CAPACITY


def test_capacity_error_is_caught_as_bank_error():
    bank = AtomBank(carbon=MAX_CAPACITY)
    with pytest.raises(BankError):
        bank.add("CARBON", 1)
    assert bank.as_dict()["CARBON"] == MAX_CAPACITY


def test_unknown_molecule_is_caught_as_bank_error():
    with pytest.raises(BankError):
        AtomBank().make("SALT", 1)


def test_capacity_is_ten_to_the_eighteenth():
    bank = AtomBank()
    assert bank.add("OXYGEN", 1000000000000000000) == 1000000000000000000
    with pytest.raises(CapacityError):
        bank.add("OXYGEN", 1)
    other = AtomBank()
    with pytest.raises(CapacityError):
        other.add("CARBON", 1000000000000000001)


@pytest.mark.parametrize(
    "name, formula",
    [
        ("WATER", "H2O"),
        ("GLUCOSE", "C6H12O6"),
        ("ETHANOL", "C2H6O"),
        ("CARBON DIOXIDE", "CO2"),
        ("H2O", "H2O"),
        ("C2H6O", "C2H6O"),
    ],
)
def test_formula_for(name, formula):
    assert formula_for(name) == formula


def test_formula_for_unknown():
    with pytest.raises(UnknownMoleculeError):
        formula_for("ALCOHOL")


def test_make_water_deducts_atoms():
    bank = AtomBank(oxygen=10, hydrogen=10)
    bank.make("WATER", 3)
    assert bank.as_dict() == {"CARBON": 0, "HYDROGEN": 10 - 2 * 3, "OXYGEN": 10 - 3}


def test_make_glucose_exact_stock_empties_bank():
    n = 4
    bank = AtomBank(carbon=6 * n, oxygen=6 * n, hydrogen=12 * n)
    assert bank.can_make("C6H12O6", n)
    bank.make("C6H12O6", n)
    assert bank.as_dict() == {"CARBON": 0, "HYDROGEN": 0, "OXYGEN": 0}


def test_make_insufficient_leaves_stock_unchanged():
    bank = AtomBank(carbon=1, oxygen=1, hydrogen=100)
    before = bank.as_dict()
    assert not bank.can_make("CO2", 1)
    with pytest.raises(BankError):
        bank.make("CO2", 1)
    assert bank.as_dict() == before


def test_make_unknown_molecule():
    bank = AtomBank(carbon=100, oxygen=100, hydrogen=100)
    with pytest.raises(UnknownMoleculeError):
        bank.make("SALT", 1)
    with pytest.raises(UnknownMoleculeError):
        bank.can_make("SALT", 1)


def test_make_zero_is_always_possible():
    bank = AtomBank()
    assert bank.can_make("ETHANOL", 0)
    bank.make("ETHANOL", 0)
    assert bank.as_dict() == AtomBank().as_dict()


def test_can_make_does_not_change_stock():
    bank = AtomBank(carbon=50, oxygen=50, hydrogen=50)
    before = bank.as_dict()
    bank.can_make("C2H6O", 2)
    assert bank.as_dict() == before


@pytest.mark.parametrize(
    "drink, carbon, oxygen, hydrogen",
    [
        ("SOFT DRINK", 7, 9, 14),
        ("VODKA", 2, 2, 8),
        ("CHAMPAGNE", 3, 4, 8),
    ],
)
def test_drink_amount_is_limited_by_scarcest_atom(drink, carbon, oxygen, hydrogen):
    n = 5
    bank = AtomBank(carbon=carbon * n, oxygen=oxygen * n, hydrogen=hydrogen * n)
    assert bank.drink_amount(drink) == n
    bank.add("CARBON", carbon * n)
    assert bank.drink_amount(drink) == n
    short = AtomBank(carbon=carbon * n, oxygen=oxygen * n - 1, hydrogen=hydrogen * n)
    assert short.drink_amount(drink) == n - 1


def test_drink_amount_empty_bank_is_zero():
    assert AtomBank().drink_amount("VODKA") == 0


def test_drink_amount_unknown():
    with pytest.raises(UnknownDrinkError):
        AtomBank(carbon=10, oxygen=10, hydrogen=10).drink_amount("BEER")


def test_as_dict_is_a_copy():
    bank = AtomBank(carbon=2)
    snapshot = bank.as_dict()
    snapshot["CARBON"] = 99
    assert bank.as_dict()["CARBON"] == 2


def test_status_lines_sorted_by_atom():
    bank = AtomBank(carbon=1, oxygen=2, hydrogen=3)
    assert bank.status_lines() == ["CARBON: 1", "HYDROGEN: 3", "OXYGEN: 2"]