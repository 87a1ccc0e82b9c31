"""Vehicles app package.

This app holds the read-only vehicle catalog, the per-vehicle availability
windows maintained by staff and the overlap resolver that decides which
vehicles can be booked for a requested period.
"""
