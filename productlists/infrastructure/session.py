"""Customer session abstraction."""

from abc import ABC, abstractmethod


class SessionProvider(ABC):
    """Answers whether the current request has an authenticated customer."""

    @abstractmethod
    def is_logged_in(self) -> bool:
        """Whether a customer is logged in."""


class CustomerSession(SessionProvider):
    """Session identified by the customer id resolved for the request."""

    def __init__(self, customer_id: int | None = None) -> None:
        self.customer_id = customer_id

    def is_logged_in(self) -> bool:
        return self.customer_id is not None

    def __repr__(self) -> str:
        return f"<CustomerSession(customer_id={self.customer_id})>"
