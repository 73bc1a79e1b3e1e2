"""
Vitrine Modules
===============

Flask blueprint modules registered by the Vitrine extension.
"""

__all__ = ['auth', 'projects', 'categories', 'uploads', 'ops']
