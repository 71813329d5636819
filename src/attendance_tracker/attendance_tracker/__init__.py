"""Employee attendance tracker.

Feature modules (users, attendance, reports) each with a thin Flask controller
layer over service and repository layers.
"""
