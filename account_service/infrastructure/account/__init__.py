"""
Infrastructure adapters for the account bounded context.

Each adapter implements a domain port (ABC) and connects
to an external system: a database, an HTTP service, a webhook.
"""
