"""
SQLAlchemy models for the impact measurement store.

Every entity is keyed by its URI. Organizations form a hierarchy through
``parent_uri``; indicators, outcomes and impact models are owned by exactly
one organization and may be shared with others through ``resource_access``.
"""

from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Table, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class TimestampMixin:
    """Adds created_at and updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# Accounts with write access to an organization's resources
organization_editors = Table(
    "organization_editors",
    Base.metadata,
    Column(
        "organization_uri",
        String(255),
        ForeignKey("organizations.uri", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "account_uri",
        String(255),
        ForeignKey("accounts.uri", ondelete="CASCADE"),
        primary_key=True,
    ),
)

# Explicit hasAccess grants: resource_uri is visible to organization_uri
# regardless of hierarchy. resource_uri spans several resource tables.
resource_access = Table(
    "resource_access",
    Base.metadata,
    Column("resource_uri", String(255), primary_key=True),
    Column(
        "organization_uri",
        String(255),
        ForeignKey("organizations.uri", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Organization(Base, TimestampMixin):
    __tablename__ = "organizations"

    uri: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    parent_uri: Mapped[str | None] = mapped_column(
        String(255),
        ForeignKey("organizations.uri", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Organization(uri={self.uri!r}, name={self.name!r})>"


class Account(Base, TimestampMixin):
    __tablename__ = "accounts"

    uri: Mapped[str] = mapped_column(String(255), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    is_superuser: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    role: Mapped[str] = mapped_column(String(50), default="user", nullable=False)
    organization_uri: Mapped[str | None] = mapped_column(
        String(255),
        ForeignKey("organizations.uri", ondelete="SET NULL"),
        nullable=True,
    )


class Theme(Base, TimestampMixin):
    __tablename__ = "themes"

    uri: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)


class Indicator(Base, TimestampMixin):
    __tablename__ = "indicators"

    uri: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    identifier: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # definedBy
    organization_uri: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("organizations.uri", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class Outcome(Base, TimestampMixin):
    __tablename__ = "outcomes"

    uri: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    organization_uri: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("organizations.uri", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    theme_uri: Mapped[str | None] = mapped_column(
        String(255),
        ForeignKey("themes.uri", ondelete="SET NULL"),
        nullable=True,
    )


class ImpactModel(Base, TimestampMixin):
    __tablename__ = "impact_models"

    uri: Mapped[str] = mapped_column(String(255), primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    organization_uri: Mapped[str] = mapped_column(
        String(255),
        ForeignKey("organizations.uri", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
