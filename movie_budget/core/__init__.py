"""
Core modules for Movie Budget AI.

This package contains the budget ledger, template catalog, budget
analysis, chat intent classification and the chat dispatcher.
"""
