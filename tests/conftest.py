import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import Base
import models  # noqa: F401  (registers Setting on Base.metadata)
from print_engine.document_tree import Column, DocumentData, PartyData, TotalsItem
from print_engine.theme_resolver import theme_from_settings


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def theme():
    return theme_from_settings()


@pytest.fixture
def invoice():
    """Two items, subtotal and highlighted total."""
    return {
        "document": DocumentData(title="Invoice", number="INV-0042", date="2026-03-01"),
        "columns": [
            Column(key="desc", header="Description"),
            Column(key="amount", header="Amount", format=lambda v: f"{v:,}"),
        ],
        "rows": [
            {"desc": "Item A", "amount": 1000},
            {"desc": "Item B", "amount": 2500},
        ],
        "totals": [
            TotalsItem(label="Subtotal", value=3500),
            TotalsItem(label="Total", value=3500, highlight=True),
        ],
    }


@pytest.fixture
def party():
    return PartyData(name="Acme Trading", company="Acme LLC", phone="555-0100")
