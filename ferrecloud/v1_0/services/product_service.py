from typing import List, Dict, Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.core.errors import NotFoundError
from ferrecloud.core.logger import logger
from ferrecloud.core.realtime import publish_safely
from ferrecloud.utils.tx import maybe_begin, unit_of_work
from ferrecloud.v1_0.helper.pricing import compute_variation
from ferrecloud.v1_0.models import Product, PriceMovement, MOVEMENT_MANUAL_EDIT
from ferrecloud.v1_0.repositories import ProductRepository, PriceMovementRepository
from ferrecloud.v1_0.entities import ProductDTO, PriceMovementDTO

def to_product_dto(p: Product) -> ProductDTO:
    return ProductDTO(
        id=p.id,
        sku=p.sku,
        name=p.name,
        description=p.description,
        supplier_id=p.supplier_id,
        supplier_code=p.supplier_code,
        cost_price=float(p.cost_price or 0.0),
        tax_percent=float(p.tax_percent or 0.0),
        cost_with_tax=float(p.cost_with_tax or 0.0),
        sale_price=float(p.sale_price or 0.0),
        stock_quantity=int(p.stock_quantity or 0),
        is_active=p.is_active,
        updated_at=p.updated_at,
    )

def to_movement_dto(m: PriceMovement) -> PriceMovementDTO:
    return PriceMovementDTO(
        id=m.id,
        product_id=m.product_id,
        log_id=m.log_id,
        movement_type=m.movement_type,
        previous_cost=float(m.previous_cost or 0.0),
        new_cost=float(m.new_cost or 0.0),
        variation=float(m.variation or 0.0),
        notes=m.notes,
        created_by=m.created_by,
        created_at=m.created_at,
    )

class ProductService:
    def __init__(
        self,
        product_repository: ProductRepository,
        price_movement_repository: PriceMovementRepository,
    ) -> None:
        self.product_repository = product_repository
        self.price_movement_repository = price_movement_repository

    async def _require(self, product_id: int, db: AsyncSession) -> Product:
        p = await self.product_repository.get_product_by_id(product_id, db)
        if not p:
            raise NotFoundError("Product", product_id)
        return p

    async def get(
        self,
        product_id: int,
        db: AsyncSession,
    ) -> ProductDTO:
        """
        Retrieve a single product by its identifier.

        Raises:
            NotFoundError: If the product does not exist.
        """
        logger.debug("[ProductService] Get product ID=%s", product_id)
        async with maybe_begin(db):
            p = await self._require(product_id, db)
            return to_product_dto(p)

    async def update_partial(
        self,
        product_id: int,
        data: Dict[str, Any],
        db: AsyncSession,
        changed_by: Optional[str] = None,
    ) -> ProductDTO:
        """
        Partially update a product (PATCH-style).

        Operations:
        - Apply only provided fields; cost_with_tax follows cost/tax changes.
        - When the cost changes, record a manual_edit price movement.
        - Emit a realtime "product.updated" event after commit.

        Args:
            product_id: Identifier of the product to update.
            data: Fields to update (snake_case keys).
            db: Active async database session.
            changed_by: Optional operator name stored on the movement.

        Returns:
            ProductDTO with the persisted values.

        Raises:
            NotFoundError: If the product does not exist.
            StorageError: If the database write fails.
        """
        logger.info("[ProductService] Update product ID=%s data=%s", product_id, data)

        async with unit_of_work(db, "update product"):
            current = await self._require(product_id, db)
            previous_cost = float(current.cost_price or 0.0)

            p = await self.product_repository.update_product(product_id, data, db)
            new_cost = float(p.cost_price or 0.0)

            if "cost_price" in data and round(new_cost - previous_cost, 2) != 0:
                await self.price_movement_repository.add_movements(
                    [
                        PriceMovement(
                            product_id=p.id,
                            log_id=None,
                            movement_type=MOVEMENT_MANUAL_EDIT,
                            previous_cost=previous_cost,
                            new_cost=new_cost,
                            variation=compute_variation(previous_cost, new_cost),
                            notes="Manual edit",
                            created_by=changed_by,
                        )
                    ],
                    db,
                )
            dto = to_product_dto(p)

        await publish_safely("product", "updated", {"id": dto.id})
        return dto

    async def list_price_movements(
        self,
        product_id: int,
        db: AsyncSession,
    ) -> List[PriceMovementDTO]:
        """
        Cost-change audit trail of a product, newest first.

        Raises:
            NotFoundError: If the product does not exist.
        """
        logger.debug("[ProductService] List price movements product ID=%s", product_id)
        async with maybe_begin(db):
            await self._require(product_id, db)
            rows = await self.price_movement_repository.list_by_product(product_id, db)
            return [to_movement_dto(m) for m in rows]
