from .badge_service import BadgeService, GamificationResult

__all__ = ["BadgeService", "GamificationResult"]
