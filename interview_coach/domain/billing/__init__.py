"""Billing bounded context: plans and UPI payments."""
