"""Authentication.

Users log in with email/password and receive a JWT session token,
carried either in an HTTP-only cookie or an Authorization: Bearer
header (one transport, chosen by configuration). The Access Gate
resolves that token to a CurrentIdentity before any workspace or
document authority is consulted.
"""
