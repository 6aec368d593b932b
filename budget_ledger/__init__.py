"""
Budget Ledger - Source Package

A personal income/expense ledger that keeps running totals and tells you
what share of your income you are spending.

DESIGN PRINCIPLES:
1. The engine owns the state; nobody else mutates it
2. Validate at the boundary, fail loudly in the engine
3. Recompute from scratch after every change
4. "No income yet" is None, never 0
5. Every change is auditable
"""

__version__ = "1.0.0"
__author__ = "Budget Ledger Team"
