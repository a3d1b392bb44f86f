"""Shared test fixtures for sqla-panel tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, create_engine, event
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    Session,
    mapped_column,
    relationship,
    sessionmaker,
)

from sqla_panel.actions import ActionPipeline, approve, delete_selected, export_csv
from sqla_panel.config._config import PanelConfig, _reset_global_config, configure
from sqla_panel.fields import Field
from sqla_panel.policy import PermissionPolicy
from sqla_panel.registry import ResourceRegistry
from sqla_panel.resolvers import resolver, static
from sqla_panel.resource import Resource
from sqla_panel.testing._actors import MockActor, make_context
from sqla_panel.testing._fixtures import (  # noqa: F401
    isolated_panel_state,
    panel_config,
    panel_pipeline,
    panel_registry,
)

# ---------------------------------------------------------------------------
# Test models
# ---------------------------------------------------------------------------


class Base(DeclarativeBase):
    pass


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    price: Mapped[float] = mapped_column(Float, default=0.0)
    status: Mapped[str] = mapped_column(String(20), default="draft")

    shipment_rows: Mapped[list[ShipmentRow]] = relationship(
        "ShipmentRow", back_populates="product"
    )


class ShipmentRow(Base):
    __tablename__ = "shipment_rows"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    product_id: Mapped[int] = mapped_column(ForeignKey("products.id"))
    quantity: Mapped[int] = mapped_column(Integer, default=1)

    product: Mapped[Product] = relationship("Product", back_populates="shipment_rows")


class Review(Base):
    """Model with a boolean approval flag instead of a status column."""

    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    body: Mapped[str] = mapped_column(String(500))
    approved: Mapped[bool] = mapped_column(Boolean, default=False)


class Tag(Base):
    """Model with neither a status column nor an approval flag."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(50))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine():
    """Create an in-memory SQLite engine with all tables.

    pysqlite's own transaction handling breaks SAVEPOINT; the listeners
    hand BEGIN over to SQLAlchemy so nested transactions work.
    """
    eng = create_engine("sqlite:///:memory:", echo=False)

    @event.listens_for(eng, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(eng, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(eng)
    return eng


@pytest.fixture()
def session_factory(engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine)


@pytest.fixture()
def session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Provide a transactional session that rolls back after each test."""
    sess = session_factory()
    try:
        yield sess
    finally:
        sess.rollback()
        sess.close()


@pytest.fixture()
def sample_data(session: Session) -> dict[str, list]:
    """Seed the database with sample data for testing."""
    products = [
        Product(id=1, name="Widget", price=9.5, status="draft"),
        Product(id=2, name="Gadget", price=20.0, status="draft"),
        Product(id=3, name="Gizmo", price=4.25, status="published"),
    ]
    session.add_all(products)

    rows = [
        ShipmentRow(id=1, product_id=1, quantity=5),
        ShipmentRow(id=2, product_id=2, quantity=1),
    ]
    session.add_all(rows)

    reviews = [
        Review(id=1, body="Great", approved=False),
        Review(id=2, body="Meh", approved=False),
    ]
    session.add_all(reviews)

    tags = [Tag(id=1, name="sale")]
    session.add_all(tags)

    session.flush()
    return {
        "products": products,
        "shipment_rows": rows,
        "reviews": reviews,
        "tags": tags,
    }


@pytest.fixture()
def admin() -> MockActor:
    return MockActor(id=1, role="admin")


@pytest.fixture()
def admin_context(admin: MockActor):
    return make_context(admin, "*")


@pytest.fixture()
def products_resource() -> Resource:
    """A products resource with permission-based policy and built-in actions."""

    @resolver
    def product_fields(ctx):
        fields = [Field("Name", required=True), Field("Price", type=(int, float))]
        if ctx is not None and ctx.has_permission("products.status"):
            fields.append(Field("Status"))
        return fields

    return Resource(
        "products",
        model=Product,
        title="Products",
        icon="package",
        group="Catalog",
        policy=PermissionPolicy("products"),
        fields=product_fields,
        actions=static([delete_selected(), export_csv("products.csv"), approve()]),
        record_title_key="name",
    )


@pytest.fixture()
def registry(products_resource: Resource) -> ResourceRegistry:
    reg = ResourceRegistry()
    reg.add(products_resource)
    return reg


@pytest.fixture()
def pipeline(registry: ResourceRegistry) -> ActionPipeline:
    return ActionPipeline(registry)


@pytest.fixture()
def export_dir(tmp_path: Path) -> Generator[Path, None, None]:
    """Point CSV exports at a temporary directory for one test."""
    target = tmp_path / "exports"
    configure(export_dir=str(target))
    try:
        yield target
    finally:
        _reset_global_config()


@pytest.fixture()
def reset_config() -> Generator[PanelConfig, None, None]:
    """Reset global config before and after the test."""
    _reset_global_config()
    try:
        yield PanelConfig()
    finally:
        _reset_global_config()
