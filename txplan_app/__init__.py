"""
TxPlan App - Treatment Plan Builder Core

Client-side core for assembling a patient's treatment plan: a catalog of
billable treatment categories, a cost ledger that keeps plan totals
consistent with its line items, and a press-and-hold quantity stepper.
"""

__version__ = "0.1.0"
__author__ = "TxPlan Team"
