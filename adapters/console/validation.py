"""
POS Console Adapter - Input Validation
========================================
Parses raw console input into typed values.

Every validator returns a ValidationResult; none of them raise on bad
input. Messages are ready to show to the user as-is.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Sequence

logger = logging.getLogger("pos.console")

YES_TOKENS = frozenset({"s", "si", "sí", "y", "yes"})
NO_TOKENS = frozenset({"n", "no"})

SANITIZE_PATTERN = re.compile(r"[<>\"'&]")
SANITIZE_MAX_LENGTH = 100


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    value: Any = None
    error: str = ""

    @classmethod
    def ok(cls, value: Any) -> ValidationResult:
        return cls(is_valid=True, value=value)

    @classmethod
    def fail(cls, error: str) -> ValidationResult:
        return cls(is_valid=False, value=None, error=error)


def validate_text(raw: Optional[str], field_name: str = "Campo") -> ValidationResult:
    if raw is None or not raw.strip():
        logger.warning(f"Validación fallida: {field_name} está vacío")
        return ValidationResult.fail(f"{field_name} no puede estar vacío")
    return ValidationResult.ok(raw.strip())


def _check_bounds(number, minimum, maximum, field_name: str) -> ValidationResult:
    if minimum is not None and number < minimum:
        logger.warning(f"Validación fallida: {number} es menor que el mínimo ({minimum})")
        return ValidationResult.fail(f"{field_name} debe ser mayor o igual a {minimum}")
    if maximum is not None and number > maximum:
        logger.warning(f"Validación fallida: {number} es mayor que el máximo ({maximum})")
        return ValidationResult.fail(f"{field_name} debe ser menor o igual a {maximum}")
    return ValidationResult.ok(number)


def validate_int(
    raw: Optional[str],
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
    field_name: str = "Número",
) -> ValidationResult:
    if raw is None or not raw.strip():
        logger.warning(f"Validación fallida: {field_name} está vacío")
        return ValidationResult.fail(f"{field_name} no puede estar vacío")
    try:
        number = int(raw.strip())
    except ValueError:
        logger.warning(f"Validación fallida: '{raw}' no es un número válido")
        return ValidationResult.fail(f"'{raw}' no es un número válido")
    return _check_bounds(number, minimum, maximum, field_name)


def validate_decimal(
    raw: Optional[str],
    minimum: Optional[Decimal] = None,
    maximum: Optional[Decimal] = None,
    field_name: str = "Número decimal",
) -> ValidationResult:
    if raw is None or not raw.strip():
        logger.warning(f"Validación fallida: {field_name} está vacío")
        return ValidationResult.fail(f"{field_name} no puede estar vacío")
    try:
        number = Decimal(raw.strip())
    except InvalidOperation:
        number = None
    if number is None or not number.is_finite():
        logger.warning(f"Validación fallida: '{raw}' no es un decimal válido")
        return ValidationResult.fail(f"'{raw}' no es un número decimal válido")
    return _check_bounds(number, minimum, maximum, field_name)


def validate_menu_option(
    raw: Optional[str], options: Sequence[str],
) -> ValidationResult:
    """Case-insensitive match; the value is the option as declared."""
    if raw is None or not raw.strip():
        return ValidationResult.fail("Debe seleccionar una opción")
    cleaned = raw.strip().lower()
    for option in options:
        if option.lower() == cleaned:
            return ValidationResult.ok(option)
    logger.warning(f"Opción inválida seleccionada: '{raw}'")
    return ValidationResult.fail(
        f"Opción inválida. Opciones válidas: {', '.join(options)}"
    )


def validate_product_id(
    raw: Optional[str], valid_ids: Iterable[int],
) -> ValidationResult:
    result = validate_int(raw, field_name="ID del producto")
    if not result.is_valid:
        return result
    valid_ids = list(valid_ids)
    if result.value in valid_ids:
        return result
    logger.warning(f"ID de producto inválido: {result.value}")
    return ValidationResult.fail(
        "ID de producto no válido. IDs disponibles: "
        + ", ".join(str(pid) for pid in valid_ids)
    )


def validate_yes_no(raw: Optional[str]) -> ValidationResult:
    if raw is None or not raw.strip():
        return ValidationResult.fail("Debe responder sí o no")
    answer = raw.strip().lower()
    if answer in YES_TOKENS:
        return ValidationResult.ok(True)
    if answer in NO_TOKENS:
        return ValidationResult.ok(False)
    logger.warning(f"Respuesta Sí/No inválida: '{raw}'")
    return ValidationResult.fail("Responda con 's' para sí o 'n' para no")


def sanitize_text(raw: str) -> str:
    """Strip markup-ish characters and cap the length."""
    return SANITIZE_PATTERN.sub("", raw.strip())[:SANITIZE_MAX_LENGTH]


def parse_id_list(raw: Optional[str]) -> tuple:
    """
    "1, 3,x,3" -> ((1, 3), ["x"]): distinct positive ids in input order,
    plus the fragments that were skipped.
    """
    if raw is None or not raw.strip():
        return (), []
    ids = []
    skipped = []
    for part in raw.split(","):
        part = part.strip()
        try:
            pid = int(part)
        except ValueError:
            skipped.append(part)
            continue
        if pid <= 0:
            skipped.append(part)
        elif pid not in ids:
            ids.append(pid)
    return tuple(ids), skipped
