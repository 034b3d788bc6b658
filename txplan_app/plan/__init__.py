"""
Plan draft module.

The plan draft aggregate: identity, scheduling fields, notes and the cost
ledger, finalized by save or cancel.
"""
