"""
Category selection module.

Searches the catalog for categories that can still be added to a draft and
limits how many are displayed at once.
"""
