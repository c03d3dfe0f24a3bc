"""Withdrawal validation.

Ordered, short-circuiting checks run before any cash leaves the terminal.
"""
