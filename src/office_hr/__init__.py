"""Office HR package.

Feature modules (attendance, leaves, payroll, tasks, ...) each carry a model,
a repository protocol with its MySQL implementation, a service holding the
business rules, and a thin Flask controller.
"""
