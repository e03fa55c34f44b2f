"""
Shared, cross-cutting code for the storefront.

`core/` holds the building blocks several features use (DB pool, settings,
templates, request logging, Stripe and SMTP clients). Feature SQL and
business rules live in their own packages (e.g. `catalog/`, `purchases/`).
"""
