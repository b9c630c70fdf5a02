"""Functional Core — pure domain logic with no IO.

Invariants:
    - Nothing in core/ imports from api/, services/, models/ or infrastructure/
    - All functions are deterministic given their inputs
"""
