"""
Pydantic schema definitions for API payloads.

Each domain (catalog, auth, payments, bookings, audit) defines its own
Pydantic models for request and response bodies.  Field aliases keep
the camelCase names the booking front‑end already sends and reads.
"""
