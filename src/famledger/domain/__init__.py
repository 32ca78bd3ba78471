"""Domain layer for famledger.

Services are imported lazily so that the database layer can import domain
entities without pulling the services (and the database layer) back in.
"""

_SERVICES = {
    "AccountService": "famledger.domain.account",
    "TransactionService": "famledger.domain.transaction",
    "LedgerService": "famledger.domain.ledger",
    "UsageService": "famledger.domain.usage",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
