"""Tiny package used to show how verdict runs package tests.

    PYTHONPATH=examples verdict check calculator
"""


def add(a, b):
    return a + b


def divide(a, b):
    return a / b


def _round_half_up(value):
    return int(value + 0.5)
