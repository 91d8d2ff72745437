"""
Repository modules for auth-service database access.
"""
