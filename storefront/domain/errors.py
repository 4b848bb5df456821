# storefront/domain/errors.py


class StorefrontError(Exception):
    """Base class for errors a caller can recover from (retry or show a message)."""


class NotFound(StorefrontError, LookupError):
    pass


class Unauthenticated(StorefrontError):
    """No user in the session, or bad credentials."""


class Unauthorized(StorefrontError, PermissionError):
    """The session user lacks the role or ownership the operation needs."""


class ValidationFailed(StorefrontError, ValueError):
    pass


class EmptyCart(StorefrontError):
    """Checkout attempted with no lines; callers send the user back to the cart."""


class CheckoutFailed(StorefrontError):
    """Order persistence failed; nothing was committed and the cart is untouched."""


class InvalidStatusTransition(StorefrontError):
    pass


class CartBusy(StorefrontError):
    """Another request holds this session's cart lock."""


class LockUnavailable(CartBusy):
    """The lock store could not be reached, so the session cannot be locked."""
