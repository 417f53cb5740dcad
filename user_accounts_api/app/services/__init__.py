"""
Service layer abstraction.

Services hold the request‑handling logic: validate input, call the
repository, and raise typed errors.  They receive their repository from
the caller, so API handlers and tests can swap storage freely.
"""
