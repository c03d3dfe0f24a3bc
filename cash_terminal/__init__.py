"""Cash terminal session controller.

State machine, withdrawal validation and a thin HTTP surface, kept free of any
console I/O so front ends and tests drive the same code.
"""
