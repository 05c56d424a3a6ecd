"""
POS Console Adapter - Interactive Menu
========================================
The store's menu loop over injected input/output callables.

The menu owns no business rules. It parses input, calls Catalog, Cart
and CheckoutService, and renders their results. After a successful
checkout it clears the cart, which Checkout itself never does.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from core.commands.rejection import ReasonCode, RejectionReason
from core.documents.renderer.text_renderer import (
    format_money,
    render_cart,
    render_catalog,
    render_inventory_summary,
    render_invoice,
    render_product_row,
    render_search_results,
)
from adapters.console.validation import (
    parse_id_list,
    sanitize_text,
    validate_int,
    validate_product_id,
    validate_yes_no,
)

logger = logging.getLogger("pos.console")

MENU_OPTIONS = (
    ("1", "Ver catálogo de productos"),
    ("2", "Buscar productos"),
    ("3", "Agregar producto al carrito"),
    ("4", "Ver carrito de compras"),
    ("5", "Modificar carrito"),
    ("6", "Procesar compra"),
    ("7", "Ver estadísticas del inventario"),
    ("0", "Salir"),
)
EXIT_TOKENS = frozenset({"0", "salir"})


def describe_rejection(reason: RejectionReason) -> str:
    """User-facing text for a rejection."""
    details = reason.details
    if reason.code == ReasonCode.INSUFFICIENT_STOCK:
        return (
            f"Stock insuficiente. Disponible: {details.get('available')}, "
            f"solicitado: {details.get('requested')}"
        )
    if reason.code == ReasonCode.PRODUCT_NOT_FOUND:
        return "Producto no encontrado"
    if reason.code == ReasonCode.NOT_IN_CART:
        return "El producto no está en el carrito"
    if reason.code == ReasonCode.INVALID_QUANTITY:
        return "La cantidad debe ser mayor a 0"
    if reason.code == ReasonCode.INVALID_RANGE:
        return "Rango de precios inválido"
    if reason.code == ReasonCode.EMPTY_CART:
        return "No se puede procesar una compra con el carrito vacío"
    return "Error interno al procesar la operación"


class ConsoleMenu:
    """Interactive session: one cart, shared catalog."""

    def __init__(
        self,
        catalog,
        cart,
        checkout,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._catalog = catalog
        self._cart = cart
        self._checkout = checkout
        self._input = input_fn
        self._output = output_fn
        self._closed = False

    # ── I/O ───────────────────────────────────────────────────

    def _say(self, text: str = "") -> None:
        self._output(text)

    def _ask(self, prompt: str) -> Optional[str]:
        """None once input is exhausted; the session then ends."""
        if self._closed:
            return None
        try:
            raw = self._input(prompt)
        except EOFError:
            self._closed = True
            return None
        return raw.strip() if raw is not None else None

    # ── Loop ──────────────────────────────────────────────────

    def run(self) -> None:
        self._say(self.welcome_banner())
        logger.info("Usuario inició sesión en la aplicación")
        keep_going = True
        while keep_going:
            self._say(self.main_menu())
            option = self._ask("Selecciona una opción: ")
            if option is None:
                break
            keep_going = self.handle_option(option)
        self._say(self.farewell_banner())
        logger.info("Usuario cerró la aplicación")

    def handle_option(self, option: str) -> bool:
        """Run one menu action; False ends the session."""
        choice = option.strip().lower()
        if choice in EXIT_TOKENS:
            return False
        if choice == "1":
            self.show_catalog()
        elif choice == "2":
            self.search_products()
        elif choice == "3":
            self.add_to_cart()
        elif choice == "4":
            self.view_cart()
        elif choice == "5":
            self.modify_cart()
        elif choice == "6":
            if self.checkout():
                return self._ask_continue()
        elif choice == "7":
            self.show_statistics()
        else:
            self._say("Opción inválida. Por favor, intenta de nuevo.")
            logger.warning(f"Opción de menú inválida: {option}")
        return not self._closed

    # ── Screens ───────────────────────────────────────────────

    def welcome_banner(self) -> str:
        return "\n".join((
            "=" * 60,
            "    BIENVENIDO A TECHSTORE EL SALVADOR",
            "        Tu tienda de tecnología de confianza",
            "=" * 60,
        ))

    def farewell_banner(self) -> str:
        return "\n".join((
            "=" * 60,
            "    ¡GRACIAS POR USAR TECHSTORE EL SALVADOR!",
            "         ¡Esperamos verte pronto de nuevo!",
            "=" * 60,
        ))

    def main_menu(self) -> str:
        lines = ["MENÚ PRINCIPAL", "-" * 50]
        lines.extend(f"{key}. {label}" for key, label in MENU_OPTIONS)
        lines.append("-" * 50)
        lines.append(f"Carrito: {self._cart.summary()}")
        return "\n".join(lines)

    def show_catalog(self) -> None:
        self._say(render_catalog(self._catalog.list_available()))

    def search_products(self) -> None:
        raw = self._ask("Ingresa el término de búsqueda: ")
        term = sanitize_text(raw or "")
        result = self._catalog.search(term)
        if result.is_degenerate:
            self._say("Término de búsqueda vacío")
            return
        self._say(render_search_results(result.term, result))

    def add_to_cart(self) -> None:
        available = self._catalog.list_available()
        if not available:
            self._say("No hay productos disponibles en este momento")
            return
        self._say("Productos disponibles:")
        for product in available:
            self._say(render_product_row(product))
        self._say("Para varios productos separa los IDs con comas (ej: 1,3,5). 0 cancela.")

        raw = self._ask("Ingresa el/los ID(s) del/los producto(s): ")
        if raw is None or raw == "0":
            self._say("Operación cancelada")
            return
        ids, skipped = parse_id_list(raw)
        for fragment in skipped:
            self._say(f"'{fragment}' no es un ID válido, se omite")

        available_ids = set(self._catalog.available_ids())
        valid = [pid for pid in ids if pid in available_ids]
        invalid = [pid for pid in ids if pid not in available_ids]
        if invalid:
            self._say(
                "IDs no válidos (se omitirán): "
                + ", ".join(str(pid) for pid in invalid)
            )
        if not valid:
            self._say("Ningún ID válido encontrado")
            return

        added = 0
        for pid in valid:
            product = self._catalog.get(pid)
            self._say(
                f"{product.name} (ID: {pid}) | Precio: {format_money(product.unit_price)}"
                f" | Stock disponible: {product.available_stock}"
            )
            check = validate_int(
                self._ask("¿Cuántas unidades deseas? (0 para omitir): "),
                minimum=0, field_name="Cantidad",
            )
            if not check.is_valid:
                self._say(f"{check.error} - Se omite este producto")
                continue
            if check.value == 0:
                self._say("Producto omitido")
                continue
            outcome = self._cart.add_item(self._catalog, pid, check.value)
            if outcome.is_accepted:
                added += 1
                self._say(f"'{product.name}' agregado al carrito ({check.value} unidades)")
            else:
                self._say(describe_rejection(outcome.reason))

        self._say(f"Productos procesados: {len(valid)}")
        self._say(f"Productos agregados exitosamente: {added}")

    def view_cart(self) -> None:
        self._say(render_cart(self._cart))
        if self._cart.is_empty():
            return
        self._say("1. Modificar carrito\n2. Procesar compra\n3. Vaciar carrito\n4. Volver al menú")
        option = self._ask("Opción: ")
        if option == "1":
            self.modify_cart()
        elif option == "2":
            self.checkout()
        elif option == "3":
            confirm = validate_yes_no(
                self._ask("¿Estás seguro de vaciar el carrito? (s/n): ")
            )
            if confirm.is_valid and confirm.value:
                self._cart.clear()
                self._say("Carrito vaciado")

    def modify_cart(self) -> None:
        if self._cart.is_empty():
            self._say("El carrito está vacío")
            return
        self._say(render_cart(self._cart))
        self._say("1. Eliminar producto\n2. Cambiar cantidad\n3. Volver")
        option = self._ask("Opción: ")
        if option == "1":
            self._remove_from_cart()
        elif option == "2":
            self._change_quantity()
        elif option != "3":
            self._say("Opción inválida")

    def _pick_cart_product(self, prompt: str) -> Optional[int]:
        valid_ids = [item.product_id for item in self._cart.items()]
        check = validate_product_id(self._ask(prompt), valid_ids)
        if not check.is_valid:
            self._say(check.error)
            return None
        return check.value

    def _remove_from_cart(self) -> None:
        pid = self._pick_cart_product("ID del producto a eliminar: ")
        if pid is None:
            return
        outcome = self._cart.remove_item(pid)
        if outcome.is_accepted:
            self._say(f"'{outcome.value.name}' eliminado del carrito")
        else:
            self._say(describe_rejection(outcome.reason))

    def _change_quantity(self) -> None:
        pid = self._pick_cart_product("ID del producto a modificar: ")
        if pid is None:
            return
        self._say(f"Cantidad actual: {self._cart.quantity_of(pid)}")
        self._say("1. Aumentar cantidad\n2. Reducir cantidad")
        action = self._ask("Acción: ")
        check = validate_int(self._ask("Cantidad: "), minimum=1, field_name="Cantidad")
        if not check.is_valid:
            self._say(check.error)
            return
        if action == "1":
            outcome = self._cart.increase_quantity(self._catalog, pid, check.value)
        elif action == "2":
            outcome = self._cart.decrease_quantity(pid, check.value)
        else:
            self._say("Acción inválida")
            return
        if outcome.is_rejected:
            self._say(describe_rejection(outcome.reason))
        elif outcome.value is None:
            self._say("Producto eliminado del carrito")
        else:
            self._say(f"Cantidad actualizada: {outcome.value.quantity}")

    def checkout(self) -> bool:
        """True when an invoice was issued."""
        if self._cart.is_empty():
            self._say("No se puede procesar una compra con el carrito vacío")
            return False
        self._say(render_cart(self._cart))

        confirm = validate_yes_no(self._ask("¿Confirmas la compra? (s/n): "))
        if not confirm.is_valid:
            self._say(confirm.error)
            return False
        if not confirm.value:
            self._say("Compra cancelada")
            return False

        service = validate_yes_no(
            self._ask("¿Aplicar cargo por servicio (10%)? (s/n): ")
        )
        apply_service = service.is_valid and service.value is True

        outcome = self._checkout.process(self._cart, self._catalog, apply_service)
        if outcome.is_rejected:
            self._say(describe_rejection(outcome.reason))
            return False

        self._say(render_invoice(outcome.value))
        self._cart.clear()
        self._say("¡Compra procesada exitosamente!")
        return True

    def show_statistics(self) -> None:
        self._say(render_inventory_summary(self._catalog.statistics()))

    def _ask_continue(self) -> bool:
        answer = validate_yes_no(self._ask("¿Deseas realizar otra compra? (s/n): "))
        if answer.is_valid:
            return answer.value
        self._say("Se asume que no deseas continuar")
        return False
