"""Entity to response DTO conversion shared by use cases and routes."""

from foodworks.application.dto.responses import (
    BatchIngredientResponse,
    BatchRecordResponse,
    ComplianceDocumentResponse,
    DocumentVersionResponse,
    EquipmentResponse,
    InventoryItemResponse,
    InventoryMovementResponse,
    ProductResponse,
    RawMaterialResponse,
    RecipeItemResponse,
    RecipeResponse,
    SalesItemResponse,
    SalesOrderResponse,
    StockReceiptResponse,
    SupplierResponse,
    WastageResponse,
)
from foodworks.core.entities import (
    BatchManufacturingRecord,
    ComplianceDocument,
    DocumentVersion,
    Equipment,
    FinalProduct,
    InventoryItem,
    InventoryMovement,
    RawMaterial,
    Recipe,
    SalesOrder,
    StockReceipt,
    Supplier,
    Wastage,
)


def inventory_item_to_response(item: InventoryItem) -> InventoryItemResponse:
    return InventoryItemResponse(
        id=item.id,  # type: ignore[arg-type]
        product_name=item.product_name,
        sku=item.sku,
        category=item.category,
        unit=item.unit,
        stock_level=item.stock_level,
        unit_price=item.unit_price,
        reorder_point=item.reorder_point,
        supplier_id=item.supplier_id,
        is_recipe_based=item.is_recipe_based,
        is_final_product=item.is_final_product,
        version=item.version,
        stock_value=item.stock_value,
        needs_reorder=item.needs_reorder,
        last_updated=item.last_updated,
        created_at=item.created_at,
    )


def movement_to_response(movement: InventoryMovement) -> InventoryMovementResponse:
    return InventoryMovementResponse(
        id=movement.id,  # type: ignore[arg-type]
        inventory_id=movement.inventory_id,
        product_name=movement.product_name,
        movement_type=movement.movement_type.value,
        quantity=movement.quantity,
        reference_type=movement.reference_type.value if movement.reference_type else None,
        reference_id=movement.reference_id,
        notes=movement.notes,
        created_by=movement.created_by,
        created_at=movement.created_at,
    )


def receipt_to_response(receipt: StockReceipt) -> StockReceiptResponse:
    return StockReceiptResponse(
        id=receipt.id,  # type: ignore[arg-type]
        received_date=receipt.received_date,
        stock_type=receipt.stock_type,
        product_name=receipt.product_name,
        raw_material_id=receipt.raw_material_id,
        supplier_id=receipt.supplier_id,
        invoice_number=receipt.invoice_number,
        quantity=receipt.quantity,
        price_per_unit=receipt.price_per_unit,
        package_size=receipt.package_size,
        batch_number=receipt.batch_number,
        best_before_date=receipt.best_before_date,
        is_damaged=receipt.is_damaged,
        is_accepted=receipt.is_accepted,
        labelling_matches_specifications=receipt.labelling_matches_specifications,
        checked_by=receipt.checked_by,
        total_cost=receipt.total_cost,
        total_kg=receipt.total_kg,
        price_per_kg=receipt.price_per_kg,
        created_at=receipt.created_at,
    )


def wastage_to_response(wastage: Wastage) -> WastageResponse:
    return WastageResponse(
        id=wastage.id,  # type: ignore[arg-type]
        wastage_date=wastage.wastage_date,
        inventory_id=wastage.inventory_id,
        product_name=wastage.product_name,
        quantity=wastage.quantity,
        reason=wastage.reason,
        recorded_by=wastage.recorded_by,
        notes=wastage.notes,
        created_at=wastage.created_at,
    )


def raw_material_to_response(material: RawMaterial) -> RawMaterialResponse:
    return RawMaterialResponse(
        id=material.id,  # type: ignore[arg-type]
        name=material.name,
        category=material.category,
        unit=material.unit,
        unit_cost=material.unit_cost,
        supplier_id=material.supplier_id,
        is_active=material.is_active,
        created_at=material.created_at,
        updated_at=material.updated_at,
    )


def recipe_to_response(recipe: Recipe) -> RecipeResponse:
    return RecipeResponse(
        id=recipe.id,  # type: ignore[arg-type]
        name=recipe.name,
        description=recipe.description,
        is_active=recipe.is_active,
        total_price=recipe.total_price,
        current_cost=recipe.current_cost,
        is_stale=recipe.is_stale,
        items=[
            RecipeItemResponse(
                id=item.id,
                raw_material_id=item.raw_material_id,
                raw_material_name=item.raw_material_name,
                quantity=item.quantity,
                unit_cost=item.unit_cost,
                total_cost=item.total_cost,
                current_unit_cost=item.current_unit_cost,
            )
            for item in recipe.items
        ],
        created_at=recipe.created_at,
        updated_at=recipe.updated_at,
    )


def product_to_response(product: FinalProduct) -> ProductResponse:
    margins = product.margins
    return ProductResponse(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        sku=product.sku,
        category=product.category,
        recipe_id=product.recipe_id,
        unit_selling_price=product.unit_selling_price,
        is_active=product.is_active,
        recipe_cost=round(product.recipe_cost, 4),
        markup=margins.markup,
        profit_margin=margins.profit_margin,
        profit_per_item=margins.profit_per_item,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def batch_to_response(record: BatchManufacturingRecord) -> BatchRecordResponse:
    deviation = record.scale_deviation_percent()
    return BatchRecordResponse(
        id=record.id,  # type: ignore[arg-type]
        batch_date=record.batch_date,
        product_id=record.product_id,
        product_name=record.product_name,
        product_batch_number=record.product_batch_number,
        product_best_before_date=record.product_best_before_date,
        bags_count=record.bags_count,
        bag_size=record.bag_size,
        batch_size=record.batch_size,
        batch_started=record.batch_started,
        batch_finished=record.batch_finished,
        status=record.status.value,
        scale_id=record.scale_id,
        scale_target_weight=record.scale_target_weight,
        scale_actual_reading=record.scale_actual_reading,
        scale_deviation_percent=round(deviation, 2) if deviation is not None else None,
        checklist=record.checklist.model_dump(),
        checklist_complete=record.checklist.is_complete,
        outstanding_checks=record.checklist.outstanding_checks,
        manager_comments=record.manager_comments,
        remedial_actions=record.remedial_actions,
        work_undertaken=record.work_undertaken,
        ingredients=[
            BatchIngredientResponse(
                id=i.id,
                raw_material_id=i.raw_material_id,
                raw_material_name=i.raw_material_name,
                batch_number=i.batch_number,
                best_before_date=i.best_before_date,
                quantity=i.quantity,
            )
            for i in record.ingredients
        ],
        version=record.version,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def sales_order_to_response(order: SalesOrder) -> SalesOrderResponse:
    return SalesOrderResponse(
        id=order.id,  # type: ignore[arg-type]
        order_date=order.order_date,
        order_number=order.order_number,
        customer_name=order.customer_name,
        delivery_method=order.delivery_method,
        delivery_cost=order.delivery_cost,
        is_free_shipping=order.is_free_shipping,
        status=order.status.value,
        items_total=order.items_total,
        total_amount=order.total_amount,
        items=[
            SalesItemResponse(
                id=item.id,
                product_id=item.product_id,
                quantity=item.quantity,
                price_per_unit=item.price_per_unit,
                total_price=item.total_price,
                batch_number=item.batch_number,
                best_before_date=item.best_before_date,
                production_date=item.production_date,
                checked_by=item.checked_by,
                labelling_matches_specs=item.labelling_matches_specs,
                packaging_material_id=item.packaging_material_id,
                packaging_quantity=item.packaging_quantity,
            )
            for item in order.items
        ],
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def supplier_to_response(supplier: Supplier) -> SupplierResponse:
    return SupplierResponse(
        id=supplier.id,  # type: ignore[arg-type]
        name=supplier.name,
        contact_name=supplier.contact_name,
        email=supplier.email,
        phone=supplier.phone,
        address=supplier.address,
        products=supplier.products,
        is_approved=supplier.is_approved,
        created_at=supplier.created_at,
        updated_at=supplier.updated_at,
    )


def equipment_to_response(equipment: Equipment) -> EquipmentResponse:
    return EquipmentResponse(
        id=equipment.id,  # type: ignore[arg-type]
        serial_number=equipment.serial_number,
        description=equipment.description,
        model=equipment.model,
        manufacturer=equipment.manufacturer,
        value=equipment.value,
        purchase_date=equipment.purchase_date,
        last_service_date=equipment.last_service_date,
        next_service_date=equipment.next_service_date,
        service_interval_months=equipment.service_interval_months,
        location=equipment.location,
        status=equipment.status.value,
        condition=equipment.condition,
        notes=equipment.notes,
        service_due=equipment.is_service_due(),
        created_at=equipment.created_at,
        updated_at=equipment.updated_at,
    )


def compliance_document_to_response(document: ComplianceDocument) -> ComplianceDocumentResponse:
    return ComplianceDocumentResponse(
        id=document.id,  # type: ignore[arg-type]
        title=document.title,
        document_number=document.document_number,
        category=document.category,
        content=document.content,
        status=document.status.value,
        current_version=document.current_version,
        is_accreditation=document.is_accreditation,
        accreditation_type=document.accreditation_type,
        expiry_date=document.expiry_date,
        is_expired=document.is_expired,
        days_until_expiry=document.days_until_expiry(),
        created_by=document.created_by,
        created_at=document.created_at,
        updated_at=document.updated_at,
    )


def document_version_to_response(version: DocumentVersion) -> DocumentVersionResponse:
    return DocumentVersionResponse(
        id=version.id,
        document_id=version.document_id,
        version_number=version.version_number,
        content=version.content,
        changes=version.changes,
        created_by=version.created_by,
        previous_version=version.previous_version,
        created_at=version.created_at,
    )

