"""Bookings app package.

Bed allocation over date ranges: overlap queries, availability reports,
pricing, booking codes and the booking status lifecycle. Double booking is
prevented by running allocation in a serializable transaction that
re-checks every requested bed before inserting.
"""
