from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from ferrecloud.core.errors import NotFoundError, ValidationError
from ferrecloud.core.logger import logger
from ferrecloud.utils.tx import maybe_begin, unit_of_work
from ferrecloud.v1_0.helper.io import validate_column_mapping
from ferrecloud.v1_0.models import SupplierImportTemplate
from ferrecloud.v1_0.repositories import ImportTemplateRepository, SupplierRepository
from ferrecloud.v1_0.schemas import ImportTemplateCreate, ImportTemplateUpdate
from ferrecloud.v1_0.entities import ImportTemplateDTO

def to_template_dto(t: SupplierImportTemplate) -> ImportTemplateDTO:
    return ImportTemplateDTO(
        id=t.id,
        supplier_id=t.supplier_id,
        name=t.name,
        column_mapping=dict(t.column_mapping or {}),
        has_header_row=t.has_header_row,
        start_row=t.start_row,
        sheet_name=t.sheet_name,
        is_active=t.is_active,
        created_at=t.created_at,
        updated_at=t.updated_at,
    )

def _clean_fields(payload: ImportTemplateCreate | ImportTemplateUpdate) -> Dict[str, Any]:
    """
    Validate and normalize the editable fields shared by create and replace.

    Raises:
        ValidationError: blank name, start_row < 1 or an invalid mapping.
    """
    errors: List[Dict[str, Any]] = []

    name = (payload.name or "").strip()
    if not name:
        errors.append({"field": "name", "code": "required", "message": "Name is required"})
    if payload.start_row < 1:
        errors.append({"field": "startRow", "code": "min", "message": "startRow must be >= 1"})
    if errors:
        raise ValidationError("Invalid import template", details={"errors": errors})

    mapping = validate_column_mapping(payload.column_mapping)
    sheet: Optional[str] = (payload.sheet_name or "").strip() or None

    return {
        "name": name,
        "column_mapping": mapping.to_dict(),
        "has_header_row": bool(payload.has_header_row),
        "start_row": int(payload.start_row),
        "sheet_name": sheet,
    }

class ImportTemplateService:
    def __init__(
        self,
        import_template_repository: ImportTemplateRepository,
        supplier_repository: SupplierRepository,
    ) -> None:
        self.import_template_repository = import_template_repository
        self.supplier_repository = supplier_repository

    async def require(
        self,
        template_id: int,
        db: AsyncSession,
    ) -> SupplierImportTemplate:
        t = await self.import_template_repository.get_template_by_id(template_id, db)
        if not t:
            raise NotFoundError("Import template", template_id)
        return t

    async def create(
        self,
        payload: ImportTemplateCreate,
        db: AsyncSession,
    ) -> ImportTemplateDTO:
        """
        Create an import template for a supplier.

        Operations:
        - Validate name, start row and column mapping (letters upper-cased).
        - Ensure the supplier exists.
        - Persist and map to ImportTemplateDTO.

        Args:
            payload: ImportTemplateCreate data.
            db: Active async database session.

        Returns:
            ImportTemplateDTO of the stored template.

        Raises:
            ValidationError: Invalid fields or mapping.
            NotFoundError: Unknown supplier.
            StorageError: Database failure.
        """
        logger.info("[ImportTemplateService] Creating template: %s", payload.model_dump())
        fields = _clean_fields(payload)

        async with unit_of_work(db, "create import template"):
            supplier = await self.supplier_repository.get_supplier_by_id(payload.supplier_id, db)
            if not supplier:
                raise NotFoundError("Supplier", payload.supplier_id)
            t = await self.import_template_repository.create_template(
                {"supplier_id": supplier.id, **fields},
                db,
            )
            dto = to_template_dto(t)

        logger.info("[ImportTemplateService] Template created ID=%s", dto.id)
        return dto

    async def get(
        self,
        template_id: int,
        db: AsyncSession,
    ) -> ImportTemplateDTO:
        logger.debug("[ImportTemplateService] Get template ID=%s", template_id)
        async with maybe_begin(db):
            t = await self.require(template_id, db)
            return to_template_dto(t)

    async def list_for_supplier(
        self,
        supplier_id: int,
        db: AsyncSession,
    ) -> List[ImportTemplateDTO]:
        """
        Templates of one supplier. An unknown supplier yields an empty list.
        """
        logger.debug("[ImportTemplateService] List templates supplier ID=%s", supplier_id)
        async with maybe_begin(db):
            rows = await self.import_template_repository.list_by_supplier(supplier_id, db)
            return [to_template_dto(t) for t in rows]

    async def update(
        self,
        template_id: int,
        payload: ImportTemplateUpdate,
        db: AsyncSession,
    ) -> ImportTemplateDTO:
        """
        Replace every editable field of a template (PUT semantics).

        Mapping keys absent from the payload are dropped from the stored
        mapping. The owning supplier never changes.

        Raises:
            ValidationError: Invalid fields or mapping.
            NotFoundError: Unknown template.
            StorageError: Database failure.
        """
        logger.info("[ImportTemplateService] Update template ID=%s data=%s", template_id, payload.model_dump())
        fields = _clean_fields(payload)

        async with unit_of_work(db, "update import template"):
            t = await self.import_template_repository.replace_template(template_id, fields, db)
            if not t:
                raise NotFoundError("Import template", template_id)
            dto = to_template_dto(t)

        return dto

    async def delete(
        self,
        template_id: int,
        db: AsyncSession,
    ) -> bool:
        """
        Hard-delete a template. Price update logs that used it keep their
        history with template_id set to NULL.

        Raises:
            NotFoundError: Unknown template.
        """
        logger.warning("[ImportTemplateService] Delete template ID=%s", template_id)
        async with unit_of_work(db, "delete import template"):
            ok = await self.import_template_repository.delete_template(template_id, db)
            if not ok:
                raise NotFoundError("Import template", template_id)
        return True
