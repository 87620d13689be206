"""
User creation and lookup.
"""
