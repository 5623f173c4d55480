"""
Ledgerly - Accounting Brain

Turns a free-form description of a financial event ("Paid rent 5000")
into a classified transaction with balanced double-entry postings,
including GST handling.

DESIGN PRINCIPLES:
1. Deterministic: same text, same postings
2. Every transaction balances (debits == credits)
3. Unknown signals fall back to documented defaults
4. Missing amounts and configuration gaps fail loudly
5. Storage and transport belong to the caller
"""

__version__ = "1.0.0"
__author__ = "Ledgerly Team"
