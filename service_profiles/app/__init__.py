"""
Profiles service package for the User Profile Access Layer.

- app.main: FastAPI application entrypoint wiring routes and lifecycle.
- app.auth: bearer token verification and lifecycle events.
- app.search: search criteria resolution and pagination.
- app.demo: deterministic demo profile provider used as the candidate pool.

Module import must not read the key file or perform other IO; the trust
policy is loaded when the service is constructed.
"""
