"""Business logic services.

Services contain all business logic and are called by routes.
Remote API clients and DB sessions are passed in explicitly.
"""
