from __future__ import annotations

from dataclasses import dataclass

from framefit.domain.entities.device_audit import AuditSummary, DeviceAuditResult
from framefit.domain.services.device_auditor import DeviceAuditor, summarize
from framefit.infrastructure.catalog.device_repository import DeviceRepository


@dataclass
class AuditDevicesUseCase:
    """Audit catalog entries so bad device data is caught before planning."""

    devices: DeviceRepository
    auditor: DeviceAuditor

    def execute(self, category: str | None = None) -> tuple[AuditSummary, list[DeviceAuditResult]]:
        results = [self.auditor.audit(device) for device in self.devices.list(category)]
        return summarize(results), results

    def audit_one(self, device_id: str) -> DeviceAuditResult:
        return self.auditor.audit(self.devices.get(device_id))
