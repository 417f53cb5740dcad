"""
Core infrastructure: configuration, logging, database access, security
helpers and the shared error taxonomy.
"""
