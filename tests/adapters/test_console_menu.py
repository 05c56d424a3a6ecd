from datetime import datetime, timezone

from core.events import NullEventSink
from core.primitives import Product
from core.time import FixedClock
from adapters.console.menu import ConsoleMenu, describe_rejection
from core.commands.rejection import ReasonCode, RejectionReason, insufficient_stock
from engines.cart import Cart
from engines.catalog import Catalog
from engines.checkout import CheckoutService

NOW = datetime(2026, 2, 18, 16, 0, tzinfo=timezone.utc)


class Script:
    """input() replacement fed from a list; EOF once it runs out."""

    def __init__(self, answers):
        self.answers = list(answers)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)


def make_menu(answers):
    sink = NullEventSink()
    catalog = Catalog(
        [
            Product(id=1, name="Widget", unit_price="10.00", available_stock=5),
            Product(id=2, name="Gadget", unit_price="100.00", available_stock=2),
            Product(id=3, name="Agotado", unit_price="1.00", available_stock=0),
        ],
        event_sink=sink,
    )
    cart = Cart(event_sink=sink)
    checkout = CheckoutService(clock=FixedClock(NOW), event_sink=sink)
    output = []
    script = Script(answers)
    menu = ConsoleMenu(catalog, cart, checkout, input_fn=script, output_fn=output.append)
    return menu, catalog, cart, script, output


def text_of(output):
    return "\n".join(output)


def test_exit_immediately():
    menu, _, _, _, output = make_menu(["0"])
    menu.run()
    assert "BIENVENIDO A TECHSTORE EL SALVADOR" in output[0]
    assert "¡GRACIAS POR USAR TECHSTORE EL SALVADOR!" in output[-1]


def test_eof_ends_session():
    menu, _, _, _, output = make_menu([])
    menu.run()
    assert "GRACIAS POR USAR" in output[-1]


def test_invalid_option():
    menu, _, _, _, output = make_menu(["9", "0"])
    menu.run()
    assert "Opción inválida. Por favor, intenta de nuevo." in output


def test_catalog_hides_out_of_stock():
    menu, _, _, _, output = make_menu(["1", "0"])
    menu.run()
    text = text_of(output)
    assert "Widget" in text
    assert "Agotado" not in text


def test_search():
    menu, _, _, _, output = make_menu(["2", "gad", "2", "  ", "0"])
    menu.run()
    text = text_of(output)
    assert "Se encontraron 1 productos" in text
    assert "Término de búsqueda vacío" in text


def test_add_several_products_then_checkout():
    menu, catalog, cart, script, output = make_menu([
        "3", "1, 2, 3, 99", "2", "0",
        "6", "s", "n", "n",
    ])
    menu.run()
    text = text_of(output)

    assert "IDs no válidos (se omitirán): 3, 99" in text
    assert "Producto omitido" in text
    assert "Productos agregados exitosamente: 1" in text
    assert "FACTURA DE VENTA" in text
    assert "Factura No: FACT-20260218-1000" in text
    assert "$22.60" in text
    assert "¡Compra procesada exitosamente!" in output
    assert cart.is_empty()
    assert catalog.get(1).available_stock == 3
    assert script.prompts[-3:] == [
        "¿Confirmas la compra? (s/n): ",
        "¿Aplicar cargo por servicio (10%)? (s/n): ",
        "¿Deseas realizar otra compra? (s/n): ",
    ]


def test_checkout_with_service_charge_and_continue():
    menu, catalog, cart, _, output = make_menu([
        "3", "2", "1",
        "6", "si", "s", "s",
        "0",
    ])
    menu.run()
    text = text_of(output)
    assert "Servicio (10%)" in text
    assert "$123.00" in text
    assert catalog.get(2).available_stock == 1
    assert "GRACIAS POR USAR" in output[-1]


def test_cancelled_checkout_keeps_cart():
    menu, catalog, cart, _, output = make_menu(["3", "1", "2", "6", "n", "0"])
    menu.run()
    assert "Compra cancelada" in output
    assert cart.quantity_of(1) == 2
    assert catalog.get(1).available_stock == 5


def test_checkout_empty_cart():
    menu, _, _, _, output = make_menu(["6", "0"])
    menu.run()
    assert "No se puede procesar una compra con el carrito vacío" in output


def test_add_more_than_stock():
    menu, _, cart, _, output = make_menu(["3", "2", "5", "0"])
    menu.run()
    assert "Stock insuficiente. Disponible: 2, solicitado: 5" in output
    assert cart.is_empty()


def test_modify_cart_change_quantity_and_remove():
    menu, _, cart, _, output = make_menu([
        "3", "1", "4",
        "5", "2", "1", "2", "3",
        "5", "1", "1",
        "0",
    ])
    menu.run()
    assert "Cantidad actualizada: 1" in output
    assert "'Widget' eliminado del carrito" in output
    assert cart.is_empty()


def test_view_cart_and_clear():
    menu, _, cart, _, output = make_menu(["3", "1", "1", "4", "3", "s", "0"])
    menu.run()
    assert "Carrito vaciado" in output
    assert cart.is_empty()


def test_main_menu_shows_cart_summary():
    menu, catalog, cart, _, _ = make_menu([])
    cart.add_item(catalog, 1, 2)
    assert "Carrito: 1 productos (2 unidades) - 20.00" in menu.main_menu()


def test_describe_rejection():
    reason = insufficient_stock(1, "Widget", 2, 5, "cart.add_item")
    assert describe_rejection(reason) == "Stock insuficiente. Disponible: 2, solicitado: 5"
    empty = RejectionReason(
        code=ReasonCode.EMPTY_CART, message="empty", policy_name="checkout.process",
    )
    assert describe_rejection(empty) == (
        "No se puede procesar una compra con el carrito vacío"
    )
