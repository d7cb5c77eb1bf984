"""Inventory app package.

Rooms, the beds inside them, optional extra services and flat-priced
packs. Bookings reference this inventory but never modify it.
"""
