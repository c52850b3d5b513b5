"""
Bledy domenowe koszyka i zamowien.
Kazdy dziedziczy tez po wbudowanym wyjatku (ValueError, LookupError, PermissionError,
RuntimeError), routery mapuja je na kody HTTP.
"""


class JoyvilleError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(JoyvilleError, ValueError):
    pass


class NotFound(JoyvilleError, LookupError):
    pass


class EmptyCart(JoyvilleError, ValueError):
    def __init__(self, message: str = "Your cart is empty"):
        super().__init__(message)


class ProductUnavailable(JoyvilleError, ValueError):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} is no longer available")
        self.product_id = product_id


class InvalidStatus(JoyvilleError, ValueError):
    def __init__(self, status: str):
        super().__init__(f"Invalid status: {status!r}")
        self.status = status


class InvalidTransition(JoyvilleError, ValueError):
    def __init__(self, current: str, target: str):
        super().__init__(f"Cannot change order status from {current!r} to {target!r}")
        self.current = current
        self.target = target


class Unauthorized(JoyvilleError, PermissionError):
    pass


class Forbidden(JoyvilleError, PermissionError):
    pass


class CartBusy(JoyvilleError, RuntimeError):
    def __init__(self, session_id: str):
        super().__init__("Cart is being modified by another request, try again")
        self.session_id = session_id
