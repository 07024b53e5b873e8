"""
Money Kernel - currency-aware monetary values

A pure, immutable monetary value engine with:
- Validated construction against injected currency metadata
- Exact same-currency arithmetic
- Two-phase rounding (fractional digits, then rounding increment)
- Value-preserving split
- Conversion against caller-supplied rate snapshots
"""

__version__ = "0.1.0"
