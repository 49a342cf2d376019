from functools import cmp_to_key

from tenv.reversecmp import reverser


def compare(a, b):
    return (a > b) - (a < b)


def test_reverser_false():
    reversed_cmp = reverser(compare, False)
    assert reversed_cmp(0, 5) == -1
    assert reversed_cmp(1, 1) == 0
    assert reversed_cmp(10, 5) == 1


def test_reverser_true():
    reversed_cmp = reverser(compare, True)
    assert reversed_cmp(0, 5) == 1
    assert reversed_cmp(1, 1) == 0
    assert reversed_cmp(10, 5) == -1


def test_reverser_sorting():
    values = [3, 1, 2]
    assert sorted(values, key=cmp_to_key(reverser(compare, True))) == sorted(values, reverse=True)