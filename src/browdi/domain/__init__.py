"""Domain layer — pure types and rules with no I/O.

Modules here must never import from services, infrastructure, commands,
output, or plugins (type-only imports excepted).
"""
