"""Result types for prescription extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from app.extraction.keywords import NO_MEDICINES_DETECTED


@dataclass(frozen=True)
class MedicineEntry:
    """One medicine parsed from one accepted OCR line."""
    name: str
    dosage: Optional[str] = None
    timing: Optional[str] = None
    duration: Optional[str] = None

    @classmethod
    def placeholder(cls) -> "MedicineEntry":
        """Entry returned when no line looked like a medicine."""
        return cls(name=NO_MEDICINES_DETECTED)

    @property
    def is_placeholder(self) -> bool:
        return (
            self.name == NO_MEDICINES_DETECTED
            and self.dosage is None
            and self.timing is None
            and self.duration is None
        )

    def to_dict(self) -> Dict[str, str]:
        """Serialize, leaving out fields that were never set."""
        data = {
            "name": self.name,
            "dosage": self.dosage,
            "timing": self.timing,
            "duration": self.duration,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class ExtractionResult:
    """Ordered medicines plus the prescribing doctor for one OCR text block."""
    medicines: Tuple[MedicineEntry, ...] = field(default_factory=tuple)
    doctor: str = ""

    @property
    def has_medicines(self) -> bool:
        return not (len(self.medicines) == 1 and self.medicines[0].is_placeholder)

    def to_dict(self) -> Dict[str, Any]:
        medicines: List[Dict[str, str]] = [m.to_dict() for m in self.medicines]
        return {"medicines": medicines, "doctor": self.doctor}
