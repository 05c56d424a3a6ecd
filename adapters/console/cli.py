"""
POS Console Adapter - Command Line Entry Point
================================================
techstore-pos [--debug] [--log-file PATH]

Configures logging, builds the seeded catalog and runs the menu.
"""

from __future__ import annotations

import argparse
import copy
import logging
import logging.config
import sys
from typing import Callable, List, Optional

from adapters.console.validation import validate_int
from adapters.console.menu import ConsoleMenu
from config import settings
from engines.cart.services import Cart
from engines.catalog.seed import build_seeded_catalog
from engines.checkout.services import CheckoutService

logger = logging.getLogger("pos.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="techstore-pos",
        description="TechStore El Salvador point of sale (console).",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {settings.POS_VERSION}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log DEBUG events (catalog listings, queries) as well.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help=f"Event log file. Default: {settings.POS_LOG_FILE}",
    )
    return parser


def logging_config(debug: bool = False, log_file: Optional[str] = None) -> dict:
    """settings.LOGGING plus the event log file, adjusted for the flags."""
    config = copy.deepcopy(settings.LOGGING)
    config["handlers"]["file"] = {
        "class": "logging.FileHandler",
        "formatter": "pos",
        "filename": log_file or settings.POS_LOG_FILE,
        "encoding": "utf-8",
        "delay": True,
        "level": "INFO",
    }
    config["loggers"]["pos"]["handlers"].append("file")
    if debug:
        config["handlers"]["file"]["level"] = "DEBUG"
        config["loggers"]["pos"]["level"] = "DEBUG"
    return config


class StartupCheckError(RuntimeError):
    """A component failed the startup check."""


def verify_components(catalog, output_fn: Callable[[str], None]) -> None:
    """Check the collaborators the menu needs before it starts."""
    output_fn("VERIFICANDO COMPONENTES DEL SISTEMA...")
    logger.debug("Test de logging durante verificación de componentes")
    output_fn("   Sistema de logging... OK")

    if len(catalog) == 0:
        raise StartupCheckError("El inventario no tiene productos cargados")
    output_fn(f"   Servicio de inventario... OK ({len(catalog)} productos cargados)")

    if not validate_int("123", 1, 200).is_valid:
        raise StartupCheckError("El validador de entradas no responde")
    output_fn("   Validador de entradas... OK")

    logger.info(
        f"Verificación de componentes completada: {len(catalog)} productos"
    )


def main(
    argv: Optional[List[str]] = None,
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> int:
    args = build_parser().parse_args(argv)
    logging.config.dictConfig(logging_config(args.debug, args.log_file))

    logger.info("INICIO DEL SISTEMA DE CARRITO DE COMPRAS")
    try:
        catalog = build_seeded_catalog()
        verify_components(catalog, output_fn)
        menu = ConsoleMenu(
            catalog=catalog,
            cart=Cart(),
            checkout=CheckoutService(),
            input_fn=input_fn,
            output_fn=output_fn,
        )
        menu.run()
    except KeyboardInterrupt:
        output_fn("")
        logger.info("Sesión interrumpida por el usuario")
        return 130
    except Exception as exc:
        logger.critical(f"Error crítico en la aplicación principal: {exc}", exc_info=True)
        output_fn(f"ERROR CRÍTICO: {exc}")
        return 1
    logger.info("Sistema finalizado correctamente")
    return 0


if __name__ == "__main__":
    sys.exit(main())
