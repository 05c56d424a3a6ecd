"""
POS Django adapter URL routing.
"""

from django.urls import path

from adapters.django_api import views


urlpatterns = [
    path("catalog/products", views.products_list_view),
    path("catalog/search", views.products_search_view),
    path("catalog/price-range", views.products_price_range_view),
    path("catalog/statistics", views.catalog_statistics_view),
    path("carts", views.carts_view),
    path("carts/<str:cart_id>", views.cart_detail_view),
    path("carts/<str:cart_id>/items", views.cart_items_view),
    path(
        "carts/<str:cart_id>/items/<int:product_id>/increase",
        views.cart_item_increase_view,
    ),
    path(
        "carts/<str:cart_id>/items/<int:product_id>/decrease",
        views.cart_item_decrease_view,
    ),
    path(
        "carts/<str:cart_id>/items/<int:product_id>/remove",
        views.cart_item_remove_view,
    ),
    path("carts/<str:cart_id>/clear", views.cart_clear_view),
    path("carts/<str:cart_id>/checkout", views.cart_checkout_view),
]
