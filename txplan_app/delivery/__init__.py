"""
Plan delivery module.

Adapters that hand a finalized plan draft, or a cancellation, to the
persistence boundary.
"""
