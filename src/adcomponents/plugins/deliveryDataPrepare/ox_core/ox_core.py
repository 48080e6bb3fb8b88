"""Prepares delivery records before the delivery-log components run."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Union

from adcomponents.components.base import Component
from adcomponents.models import DeliveryData

OPERATION_INTERVAL_MINUTES = 60
INTERVAL_FORMAT = "%Y-%m-%d %H:%M:%S"


def interval_start_for(moment: datetime, interval_minutes: int = OPERATION_INTERVAL_MINUTES) -> str:
    """Return the start of the operation interval containing *moment*.

    Intervals are aligned to midnight, so *interval_minutes* should divide a
    day evenly.
    """
    minutes = moment.hour * 60 + moment.minute
    start = minutes - minutes % interval_minutes
    floored = moment.replace(hour=start // 60, minute=start % 60, second=0, microsecond=0)
    return floored.strftime(INTERVAL_FORMAT)


class Plugins_DeliveryDataPrepare_Ox_core_Ox_core(Component):
    """Fills ``interval_start`` from the record's ``timestamp``."""

    interval_minutes = OPERATION_INTERVAL_MINUTES

    def prepare(self, data: Union[DeliveryData, dict[str, Any]]) -> DeliveryData:
        record = data if isinstance(data, DeliveryData) else DeliveryData.model_validate(data)
        if record.interval_start:
            return record
        timestamp = (record.model_extra or {}).get("timestamp")
        if timestamp is None:
            moment = datetime.now(timezone.utc)
        elif isinstance(timestamp, datetime):
            moment = timestamp
        else:
            moment = datetime.fromtimestamp(float(timestamp), tz=timezone.utc)
        fields = record.model_dump(exclude_unset=True)
        fields["interval_start"] = interval_start_for(moment, self.interval_minutes)
        return DeliveryData.model_validate(fields)

    @classmethod
    def describe(cls) -> dict[str, Any]:
        return {"interval_minutes": cls.interval_minutes, "interval_format": INTERVAL_FORMAT}
