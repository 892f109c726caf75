"""HR work-log package.

Feature modules (users, worklog, reports) each carry a thin Flask controller
on top of service/repository layers.
"""
