from abc import ABC, abstractmethod
from collections import Counter
from dataclasses import dataclass, field

from app.records.models import Record, RecordUpdate


@dataclass(slots=True)
class PipelineContext:
    container_id: str
    records: list[Record] = field(default_factory=list)
    signatures: dict[str, str] = field(default_factory=dict)
    signature_counts: Counter[str] = field(default_factory=Counter)
    updates: list[RecordUpdate] = field(default_factory=list)


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
