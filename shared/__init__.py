"""
Shared Kernel

Base classes and utilities shared by the vehicle, booking and notification
apps: value objects, the domain error taxonomy and the REST API plumbing
(response envelope, capability gate, exception rendering).
"""
