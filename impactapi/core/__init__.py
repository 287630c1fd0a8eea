"""Core application components.

This module provides the foundational components for the Impact Tracker API:
- Database engine and session management via SQLAlchemy
- ORM models for organizations, accounts and impact resources
- Application settings and configuration
"""
