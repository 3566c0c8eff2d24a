"""
Service layer abstraction.

Each service encapsulates the business rules for one resource and
works against a ``MemoryDataStore`` passed to its constructor.  Services
raise ``ServiceError`` subclasses; translating them into HTTP responses
is left to the endpoints.
"""
