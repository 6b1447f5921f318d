from .payment_repository import PaymentRepositoryProtocol

__all__ = ["PaymentRepositoryProtocol"]
