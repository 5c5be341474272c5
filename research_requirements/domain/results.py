from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class FailureKind(str, Enum):
    INVALID_DEPARTMENT = "InvalidDepartment"
    NO_ACTIVE_SESSION = "NoActiveSession"
    NO_CLOSED_SESSIONS = "NoClosedSessions"
    NO_REQUIREMENT_FOUND = "NoRequirementFound"
    NO_HISTORICAL_REQUIREMENTS = "NoHistoricalRequirements"
    INVALID_REMARK_COUNT = "InvalidRemarkCount"
    OWNERSHIP_MISMATCH = "OwnershipMismatch"
    ARCHIVED_REQUIREMENT = "ArchivedRequirement"
    INVALID_GUIDE = "InvalidGuide"
    CAPACITY_EXCEEDED = "CapacityExceeded"


@dataclass(frozen=True)
class Failure:
    """
    Ожидаемый отказ движка. Не исключение: вызывающая сторона
    исправляет запрос и присылает его заново.
    """
    kind: FailureKind
    message: str
    field: Optional[str] = None  # InvalidGuide: имя направления исследований
    requested: Optional[int] = None  # CapacityExceeded
    approved: Optional[int] = None  # CapacityExceeded


@dataclass(frozen=True)
class OpResult(Generic[T]):
    success: bool
    message: str
    data: Optional[T] = None
    failure: Optional[Failure] = None

    @classmethod
    def ok(cls, data: T, message: str = "") -> "OpResult[T]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, kind: FailureKind, message: str, **details) -> "OpResult[T]":
        return cls(success=False, message=message, failure=Failure(kind=kind, message=message, **details))

    @property
    def kind(self) -> Optional[FailureKind]:
        return self.failure.kind if self.failure else None
