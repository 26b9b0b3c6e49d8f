"""
Cross-cutting helpers shared by the resource packages: request logging,
pagination, password hashing and base schemas.
"""
