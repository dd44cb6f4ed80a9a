"""Helpers for wall-clock search deadlines."""

import time


def deadline_after(seconds):
    return time.time() + seconds


def deadline_after_ms(milliseconds):
    return deadline_after(milliseconds / 1000.0)


def time_remaining(deadline):
    return deadline - time.time()


def expired(deadline):
    return deadline is not None and time.time() >= deadline
