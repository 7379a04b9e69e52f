"""Pytest configuration and fixtures for FerreCloud tests.

Provides an in-memory database seeded with the ACME catalog.
"""

from __future__ import annotations

import os

# settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ferrecloud.v1_0.models import Base, Product, Supplier, SupplierImportTemplate
from ferrecloud.v1_0.repositories import (
    ImportTemplateRepository,
    PriceMovementRepository,
    PriceUpdateDetailRepository,
    PriceUpdateLogRepository,
    ProductRepository,
    SupplierRepository,
)
from ferrecloud.v1_0.services import (
    ImportTemplateService,
    PriceUpdateService,
    ProductService,
    SupplierService,
)


@pytest_asyncio.fixture()
async def db_session() -> AsyncSession:
    """Create in-memory database for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    SessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    session = SessionLocal()
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture()
async def acme(db_session: AsyncSession) -> dict:
    """Ids of the ACME supplier, its catalog and a default template.

    A1 is active with cost 90, B2 is discontinued with cost 40, C3 is active
    with no cost yet. OTHER belongs to another supplier.
    """
    supplier = Supplier(name="ACME", tax_id="30-11111111-1", city="Rosario")
    other = Supplier(name="Bulonera Sur", city="Córdoba")
    db_session.add_all([supplier, other])
    await db_session.flush()

    a1 = Product(sku="SKU-A1", name="Martillo 500g", supplier_id=supplier.id, supplier_code="A1",
                 cost_price=90.0, tax_percent=21.0, cost_with_tax=108.9, sale_price=150.0, is_active=True)
    b2 = Product(sku="SKU-B2", name="Pinza universal", supplier_id=supplier.id, supplier_code="B2",
                 cost_price=40.0, tax_percent=21.0, cost_with_tax=48.4, sale_price=70.0, is_active=False)
    c3 = Product(sku="SKU-C3", name="Destornillador", supplier_id=supplier.id, supplier_code="C3",
                 cost_price=0.0, tax_percent=21.0, cost_with_tax=0.0, sale_price=0.0, is_active=True)
    foreign = Product(sku="SKU-X-A1", name="Martillo otro proveedor", supplier_id=other.id, supplier_code="A1",
                      cost_price=10.0, tax_percent=21.0, cost_with_tax=12.1, sale_price=20.0, is_active=True)
    db_session.add_all([a1, b2, c3, foreign])

    template = SupplierImportTemplate(
        supplier_id=supplier.id,
        name="Lista mensual",
        column_mapping={"supplierCode": "A", "description": "B", "price": "C"},
        has_header_row=True,
        start_row=1,
    )
    other_template = SupplierImportTemplate(
        supplier_id=other.id,
        name="Lista Bulonera",
        column_mapping={"supplierCode": "A", "description": "B", "price": "C"},
    )
    db_session.add_all([template, other_template])
    await db_session.commit()

    # solo ids: un rollback en el servicio expira los objetos de la sesión
    return {
        "supplier_id": supplier.id,
        "other_id": other.id,
        "a1_id": a1.id,
        "b2_id": b2.id,
        "c3_id": c3.id,
        "foreign_id": foreign.id,
        "template_id": template.id,
        "other_template_id": other_template.id,
    }


@pytest.fixture
def supplier_service() -> SupplierService:
    return SupplierService(SupplierRepository())


@pytest.fixture
def product_service() -> ProductService:
    return ProductService(ProductRepository(), PriceMovementRepository())


@pytest.fixture
def template_service() -> ImportTemplateService:
    return ImportTemplateService(ImportTemplateRepository(), SupplierRepository())


@pytest.fixture
def price_update_service() -> PriceUpdateService:
    return PriceUpdateService(
        price_update_log_repository=PriceUpdateLogRepository(),
        price_update_detail_repository=PriceUpdateDetailRepository(),
        import_template_repository=ImportTemplateRepository(),
        supplier_repository=SupplierRepository(),
        product_repository=ProductRepository(),
        price_movement_repository=PriceMovementRepository(),
    )
