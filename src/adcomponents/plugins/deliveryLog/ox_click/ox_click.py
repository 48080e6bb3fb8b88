"""Click logging into the ``data_bucket_click`` bucket table."""

from __future__ import annotations

from adcomponents.delivery.base import DeliveryLogComponent, Record
from adcomponents.delivery.buckets import BucketStore


class Plugins_DeliveryLog_Ox_click_Ox_click(DeliveryLogComponent):
    """Counts clicks per operation interval, creative and zone."""

    dependencies = ("deliveryDataPrepare:ox_core:ox_core",)
    bucket_table = "data_bucket_click"
    bucket_fields = ("interval_start", "creative_id", "zone_id")

    def log_click(self, data: Record, buckets: BucketStore) -> bool:
        return self.log(data, buckets)
