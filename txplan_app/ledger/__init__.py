"""
Cost ledger module.

Owns the ordered cost line items of a plan draft and keeps the derived plan
totals and the selected-category set consistent after every mutation.
"""
