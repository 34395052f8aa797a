"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer. This is where the account store,
the rule and tone services, and notification channels live.
"""
