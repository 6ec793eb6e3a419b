"""
Acceso a la Admin API de Medusa.

Los clientes viven en ``medusa_seed.db.medusa_clients``; ``MedusaAdminClient``
es el punto de entrada que comparte una única sesión HTTP.
"""

from medusa_seed.db.medusa_clients import MedusaAdminClient

__all__ = ["MedusaAdminClient"]
