# coinhours/__init__.py
# Deterministic coin hour allocation for spend transactions.

__version__ = "1.0.0"
