"""Application service: Low Stock Alerts use case (query)."""

from __future__ import annotations

from candystore.application.dto import LowStockAlertDTO, LowStockReportDTO
from candystore.domain.exceptions import ValidationError
from candystore.domain.model.inventory import InventoryRecord
from candystore.domain.repository.unit_of_work import UnitOfWork

DEFAULT_THRESHOLD = 10


class LowStockAlertsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, threshold: int = DEFAULT_THRESHOLD) -> LowStockReportDTO:
        """Flavors with little physical stock or fully reserved stock.

        A flavor is reported when ``on_hand <= threshold`` or when
        ``reserved >= on_hand``, lowest on-hand first.
        """
        if threshold < 0:
            raise ValidationError("threshold must be a non-negative number")
        with self._uow as uow:
            records = [
                r
                for r in uow.inventory.list_all()
                if r.on_hand <= threshold or r.reserved >= r.on_hand
            ]
        records.sort(key=lambda r: r.on_hand)
        return LowStockReportDTO(
            threshold=threshold,
            alerts=[self._to_alert(r, threshold) for r in records],
        )

    @staticmethod
    def _to_alert(record: InventoryRecord, threshold: int) -> LowStockAlertDTO:
        sellable = record.available_after_safety
        if sellable <= 0:
            alert_type, severity = "out_of_stock", "critical"
        elif sellable <= threshold:
            alert_type, severity = "low_stock", "warning"
        else:
            alert_type, severity = "normal", "info"
        return LowStockAlertDTO(
            flavor_id=record.flavor_id,
            flavor_name=record.flavor_name,
            on_hand=record.on_hand,
            reserved=record.reserved,
            safety_stock=record.safety_stock,
            available=record.available,
            available_after_safety=sellable,
            alert_type=alert_type,
            severity=severity,
        )
