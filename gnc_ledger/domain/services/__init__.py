"""Domain services package.

Submodules are imported directly (``gnc_ledger.domain.services.queries``);
the models package depends on several of them, so nothing is re-exported
here.
"""
