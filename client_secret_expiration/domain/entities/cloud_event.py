"""CloudEvents 1.0 envelope used for outbound notifications."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Self


@dataclass(frozen=True, slots=True)
class CloudEvent:
    """A structured CloudEvent carrying type, source, subject, time and data."""

    id: str
    source: str
    type: str
    subject: str
    data: dict[str, Any] = field(default_factory=dict)
    time: datetime | None = None
    specversion: str = "1.0"
    datacontenttype: str = "application/json"

    def with_time(self, time: datetime) -> Self:
        """Return a copy stamped with the given event time."""
        return replace(self, time=time)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the CloudEvents structured JSON form."""
        payload: dict[str, Any] = {
            "specversion": self.specversion,
            "id": self.id,
            "source": self.source,
            "type": self.type,
            "subject": self.subject,
            "datacontenttype": self.datacontenttype,
            "data": self.data,
        }
        if self.time is not None:
            payload["time"] = self.time.isoformat()
        return payload
