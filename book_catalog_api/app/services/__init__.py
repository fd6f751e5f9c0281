"""
Service layer abstraction.

Each service encapsulates the persistence logic for a concern and
receives the MongoDB collection it works on from its caller.
"""
