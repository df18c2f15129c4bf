"""Authentication / authorization.

- ``security``: password hashing and the session token issuer/verifier
- ``deps``: the per-request session chain, as FastAPI dependencies

Sessions are stateless JWTs carried in an httpOnly cookie set by
``POST /login`` and cleared by ``GET /logout``. The chain runs in a fixed
order within one request:

    attach_user    Anonymous -> Identified (never rejects)
    require_auth   Anonymous -> 401, else Identified
    require_admin  needs require_auth's user; Identified -> 403 unless Admin

``require_admin`` declares ``require_auth`` as its own dependency, so a
route only needs to name the strongest check it wants.
"""
