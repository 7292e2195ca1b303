"""Domain services of the session credential bounded context.

- Signing key provider: secret, algorithm, issuer, audience and lifetimes
- Access token issuer and validator: build, sign and verify bearer tokens
- Expired-token claims extractor: recover claims for the refresh flow only
- Token lifecycle service: register, login, refresh and revoke
- Password policy: strength rules enforced by the identity store
"""
