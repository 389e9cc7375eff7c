import logging
from typing import Protocol

from cartform.schemas.add_to_cart import CartLine

logger = logging.getLogger(__name__)


class CartService(Protocol):
    def add(self, quantity: int, color: str) -> CartLine: ...


class LoggingCartService:
    """
    Stand-in cart: there is no cart storage, so an accepted line is only logged.
    """

    def add(self, quantity: int, color: str) -> CartLine:
        line = CartLine(quantity=quantity, color=color)
        logger.info("Cart line added: quantity=%s color=%s", line.quantity, line.color)
        return line


def get_cart_service() -> CartService:
    return LoggingCartService()
