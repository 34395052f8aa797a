"""
Account bounded context: domain layer.

This module contains all domain logic for the account context:
- Account, feedback and loyalty change entities
- Commission and settlement rules
- Feedback reward policy
- Ports to the store, rule engine, tone analyzer and notifier
"""
