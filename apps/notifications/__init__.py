"""Notifications app package.

Emails customers when staff accept or reject their booking requests,
either inline or through a Celery task.
"""
