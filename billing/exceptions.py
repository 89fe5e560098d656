from rest_framework.exceptions import ValidationError, NotFound


class EmptyCartError(ValidationError):
    default_detail = 'Cart is empty'
    default_code = 'empty_cart'


class CartLineNotFound(NotFound):
    default_detail = 'Item is not in the cart'
    default_code = 'cart_line_not_found'


class MenuItemUnavailable(ValidationError):
    default_detail = 'Menu item is not available for sale'
    default_code = 'menu_item_unavailable'


class BillNotFound(NotFound):
    default_detail = 'Bill not found'
    default_code = 'bill_not_found'
