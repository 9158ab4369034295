"""Application use cases."""

from foodworks.application.use_cases.adjust_stock import AdjustStockResult, AdjustStockUseCase
from foodworks.application.use_cases.create_batch_record import (
    CreateBatchRecordUseCase,
    SaveBatchResult,
)
from foodworks.application.use_cases.create_inventory_item import CreateInventoryItemUseCase
from foodworks.application.use_cases.get_batch_traceability import (
    BatchTrace,
    GetBatchTraceabilityUseCase,
)
from foodworks.application.use_cases.recalculate_costs import RecalculateCostsUseCase
from foodworks.application.use_cases.receive_stock import ReceiveStockUseCase
from foodworks.application.use_cases.record_wastage import RecordWastageUseCase
from foodworks.application.use_cases.save_compliance_document import (
    SaveComplianceDocumentUseCase,
)
from foodworks.application.use_cases.save_sales_order import SaveSalesOrderUseCase
from foodworks.application.use_cases.update_batch_record import UpdateBatchRecordUseCase

__all__ = [
    "CreateInventoryItemUseCase",
    "AdjustStockUseCase",
    "AdjustStockResult",
    "ReceiveStockUseCase",
    "RecordWastageUseCase",
    "CreateBatchRecordUseCase",
    "UpdateBatchRecordUseCase",
    "SaveBatchResult",
    "GetBatchTraceabilityUseCase",
    "BatchTrace",
    "RecalculateCostsUseCase",
    "SaveSalesOrderUseCase",
    "SaveComplianceDocumentUseCase",
]
