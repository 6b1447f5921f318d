from .payment import PAYMENT_STATUSES, Payment

__all__ = ["PAYMENT_STATUSES", "Payment"]
