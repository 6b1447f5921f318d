from .subscription import Subscription
from .user import User

__all__ = ["Subscription", "User"]
