"""Seeder de datos de demostración para tiendas Medusa."""

__version__ = "0.1.0"
