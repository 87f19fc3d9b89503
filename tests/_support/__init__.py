"""
Test support package for dbent tests.

Shared record declarations live in ``records.py``.
"""
