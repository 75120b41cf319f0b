"""
repositories/ - Data Access Layer
==================================
Each DAO encapsulates all SQL queries for a specific domain entity.
DAOs receive raw rows from the database and return domain model objects.
``EntityRepository`` covers the tables that differ only in how keys are assigned.
"""
