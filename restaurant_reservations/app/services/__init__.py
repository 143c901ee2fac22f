"""
Service layer.

The five collection services (users, restaurants, tables, customers,
reservations) share the load/filter/rewrite pattern of
``CollectionService``.  The workflow services on top of them (auth,
management, booking) validate input and chain several collection
writes.
"""
