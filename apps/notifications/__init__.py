"""Notifications app package.

Guest-facing email messages sent after booking events. Delivery goes
through Django's mail API; failures are logged and never reach the caller.
"""
