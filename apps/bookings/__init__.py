"""Bookings app package.

This app holds customer booking requests for vehicles, the ledger that
records them and the lifecycle coordinator through which staff accept or
reject them. Status changes are persisted first and the customer is
notified afterwards on a best-effort basis.
"""
