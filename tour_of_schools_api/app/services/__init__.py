"""
Service layer abstraction.

Each service encapsulates the business logic for a resource.  The
schools service keeps its data in memory; API handlers only talk to
the service, so the storage can be swapped without touching them.
"""
