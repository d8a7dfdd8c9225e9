"""
Authentication module for the dental clinic system.

This module provides:
- Tenant and user models
- Email/password login issuing JWT access tokens
- Authentication-specific exceptions
"""
