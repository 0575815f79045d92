"""finledger - personal finance ledger with spending insight.

The command-line entry point lives in ``finledger.cli.main``.
"""

__version__ = "0.1.0"
