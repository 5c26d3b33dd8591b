"""Operation result models"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Any


class OperationStatus(Enum):
    """Operation status"""
    SUCCESS = "success"
    FAILED = "failed"
    IN_PROGRESS = "in_progress"


class PhaseState(Enum):
    """States of the rollout state machines"""
    IDLE = "idle"
    RESOLVING = "resolving"
    FETCHING = "fetching"
    MAINTENANCE_ON = "maintenance_on"
    MANIFEST = "manifest"
    DEPLOY = "deploy"
    RETENTION = "retention"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ErrorDetail:
    """Detailed error information"""

    code: str
    message: str
    context: Dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat()
        }


@dataclass
class Result:
    """Base result class"""

    status: OperationStatus = OperationStatus.IN_PROGRESS
    message: str = ""
    errors: List[ErrorDetail] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    start_time: datetime = field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def is_success(self) -> bool:
        """Check if operation was successful"""
        return self.status == OperationStatus.SUCCESS

    @property
    def is_failed(self) -> bool:
        """Check if operation failed"""
        return self.status == OperationStatus.FAILED

    @property
    def error(self) -> Optional[ErrorDetail]:
        """First recorded error"""
        return self.errors[0] if self.errors else None

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds"""
        if self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def add_error(self, code: str, message: str, **context) -> None:
        """Add an error"""
        self.errors.append(ErrorDetail(code=code, message=message, context=context))

    def add_warning(self, message: str) -> None:
        """Add a warning"""
        self.warnings.append(message)

    def complete(self, status: Optional[OperationStatus] = None) -> None:
        """Mark operation as complete"""
        self.end_time = datetime.now()
        if status:
            self.status = status

    def _base_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "message": self.message,
            "errors": [e.to_dict() for e in self.errors],
            "warnings": self.warnings,
            "duration": self.duration
        }


@dataclass
class FetchProgress:
    """Progress snapshot emitted after each downloaded asset"""

    current: int
    total: int
    name: str
    size: int
    downloaded_bytes: int
    total_bytes: int

    @property
    def percent(self) -> int:
        """Cumulative byte progress, 0-100"""
        if self.total_bytes == 0:
            return 100 if self.current >= self.total else 0
        return self.downloaded_bytes * 100 // self.total_bytes


@dataclass
class FetchResult(Result):
    """Result of fetching a release into the staging tree

    On failure, ``extracted_dirs`` still lists the directories extracted
    before the failing asset; they are left in place.
    """

    tag: Optional[str] = None
    environment: Optional[str] = None
    staging_dir: Optional[Path] = None
    total_assets: int = 0
    total_bytes: int = 0
    downloaded_bytes: int = 0
    completed_assets: List[str] = field(default_factory=list)
    extracted_dirs: List[Path] = field(default_factory=list)
    failed_asset: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self._base_dict()
        data.update({
            "tag": self.tag,
            "environment": self.environment,
            "staging_dir": str(self.staging_dir) if self.staging_dir else None,
            "total_assets": self.total_assets,
            "total_bytes": self.total_bytes,
            "downloaded_bytes": self.downloaded_bytes,
            "completed_assets": self.completed_assets,
            "extracted_dirs": [str(p) for p in self.extracted_dirs],
            "failed_asset": self.failed_asset
        })
        return data


@dataclass
class RetentionResult(Result):
    """Result of retiring old versions of a service"""

    service: Optional[str] = None
    kept: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        data = self._base_dict()
        data.update({
            "service": self.service,
            "kept": self.kept,
            "deleted": self.deleted
        })
        return data


@dataclass
class ServiceRollout:
    """Outcome of deploying one service"""

    service: str
    version_id: str
    status: OperationStatus = OperationStatus.IN_PROGRESS
    source_dir: Optional[Path] = None
    manifest_path: Optional[Path] = None
    retention: Optional[RetentionResult] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "service": self.service,
            "version_id": self.version_id,
            "status": self.status.value,
            "source_dir": str(self.source_dir) if self.source_dir else None,
            "manifest_path": str(self.manifest_path) if self.manifest_path else None,
            "retention": self.retention.to_dict() if self.retention else None
        }


@dataclass
class PhaseResult(Result):
    """Common fields of the three rollout phases"""

    phase: str = ""
    environment: Optional[str] = None
    tag: Optional[str] = None
    state: PhaseState = PhaseState.IDLE
    project_id: Optional[str] = None

    def fail(self, code: str, message: str, **context) -> None:
        """Record a fatal error and stop the phase"""
        self.add_error(code, message, **context)
        self.message = message
        self.state = PhaseState.FAILED
        self.complete(OperationStatus.FAILED)

    def succeed(self, message: str) -> None:
        self.message = message
        self.state = PhaseState.DONE
        self.complete(OperationStatus.SUCCESS)

    def _base_dict(self) -> Dict[str, Any]:
        data = super()._base_dict()
        data.update({
            "phase": self.phase,
            "environment": self.environment,
            "tag": self.tag,
            "state": self.state.value,
            "project_id": self.project_id
        })
        return data


@dataclass
class PrepareResult(PhaseResult):
    """Result of prepare-release"""

    phase: str = "prepare-release"
    services: List[str] = field(default_factory=list)
    fetch: Optional[FetchResult] = None
    maintenance_manifest: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self._base_dict()
        data.update({
            "services": self.services,
            "fetch": self.fetch.to_dict() if self.fetch else None,
            "maintenance_manifest": (
                str(self.maintenance_manifest) if self.maintenance_manifest else None
            )
        })
        return data


@dataclass
class DeployResult(PhaseResult):
    """Result of deploy-service

    ``rollouts`` holds every service that was attempted, in order;
    ``pending_services`` the ones never attempted after a failure.
    """

    phase: str = "deploy-service"
    version_id: Optional[str] = None
    rollouts: List[ServiceRollout] = field(default_factory=list)
    pending_services: List[str] = field(default_factory=list)

    @property
    def deployed_services(self) -> List[str]:
        return [r.service for r in self.rollouts if r.status == OperationStatus.SUCCESS]

    @property
    def failed_service(self) -> Optional[str]:
        for rollout in self.rollouts:
            if rollout.status == OperationStatus.FAILED:
                return rollout.service
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = self._base_dict()
        data.update({
            "version_id": self.version_id,
            "rollouts": [r.to_dict() for r in self.rollouts],
            "pending_services": self.pending_services
        })
        return data


@dataclass
class DispatchResult(PhaseResult):
    """Result of dispatch-service"""

    phase: str = "dispatch-service"
    manifest_path: Optional[Path] = None

    def to_dict(self) -> Dict[str, Any]:
        data = self._base_dict()
        data["manifest_path"] = str(self.manifest_path) if self.manifest_path else None
        return data
