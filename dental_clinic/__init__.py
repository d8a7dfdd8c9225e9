"""
Dental clinic backend: multi-tenant authentication and tenant-isolation core.
"""
__version__ = "1.0.0"
