"""
Shared kernel for the hostel booking apps.

Value objects, the aggregate/event base classes, the unit of work and the
API error handler used by both inventory and bookings.
"""
