"""
JSON views over the storage accessor.
"""
