#!/usr/bin/env python3
"""
Script para sembrar datos de demostración en una tienda Medusa nueva.

Uso:
    medusa-seed --backend-url http://localhost:9000
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.table import Table

from medusa_seed.core.config import Settings, validate_required_settings
from medusa_seed.core.logging_config import setup_logging
from medusa_seed.db.medusa_clients import MedusaAdminClient
from medusa_seed.services.demo_seeder import SeedResult, seed_demo_data
from medusa_seed.utils.error_handler import AppException, log_error

logger = logging.getLogger(__name__)
console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="medusa-seed",
        description="Sembrar datos de demostración (región, envíos, productos, inventario) en Medusa",
    )
    parser.add_argument(
        "--backend-url",
        help="URL del backend de Medusa (por defecto MEDUSA_BACKEND_URL)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Nivel de logging (por defecto LOG_LEVEL)",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Archivo .env con la configuración (default: .env)",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Carga la configuración del entorno aplicando los argumentos de la línea de comandos."""
    overrides = {}
    if args.backend_url:
        overrides["MEDUSA_BACKEND_URL"] = args.backend_url
    if args.log_level:
        overrides["LOG_LEVEL"] = args.log_level
    return Settings(_env_file=args.env_file, **overrides)


def print_summary(result: SeedResult) -> None:
    table = Table(title="🌱 Seeding completado")
    table.add_column("Recurso", style="cyan")
    table.add_column("Resultado", style="green")
    for resource, value in result.summary().items():
        table.add_row(resource, str(value))
    console.print(table)


async def run_seed(settings: Settings) -> None:
    """Abre el cliente admin, ejecuta el seeding y libera la sesión."""
    async with MedusaAdminClient(settings) as client:
        await seed_demo_data(client, on_complete=print_summary)


def main(argv: Optional[List[str]] = None) -> int:
    """Función principal del script."""
    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
        setup_logging(settings)
        validate_required_settings(settings)
        asyncio.run(run_seed(settings))
    except AppException as e:
        log_error(e, {"operation": "seed_demo_data"})
        console.print(f"[bold red]❌ Seeding fallido:[/bold red] {e}")
        return 1
    except Exception as e:
        log_error(e, {"operation": "seed_demo_data"})
        console.print(f"[bold red]❌ Error inesperado:[/bold red] {type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
