"""
Service layer.

Each service encapsulates business logic for a domain and receives
its collaborators (the database and the external clients) through its
constructor.  Instances are created per request by the dependencies
in ``api.dependencies``.
"""
