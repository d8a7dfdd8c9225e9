"""
Cross-cutting security and tenancy infrastructure: token codec, request
context, request gate, role checks and tenant-scoped data access.
"""
