"""Base class for delivery-log components.

Delivery-log components live in the ``deliveryLog`` extension. Each one
forwards a projection of the delivery record into a bucket table::

    class Plugins_DeliveryLog_Ox_click_Ox_click(DeliveryLogComponent):
        bucket_table = "data_bucket_click"
        bucket_fields = ("interval_start", "creative_id", "zone_id")
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, ClassVar, Union

from adcomponents.components.base import Component
from adcomponents.delivery.buckets import BucketStore
from adcomponents.models import DeliveryData

Record = Union[DeliveryData, Mapping[str, Any]]


class DeliveryLogComponent(Component):
    """A component that aggregates delivery records into a bucket table."""

    bucket_table: ClassVar[str] = ""
    bucket_fields: ClassVar[tuple[str, ...]] = ()

    def get_bucket_table(self) -> str:
        return self.bucket_table

    def build_query(self, data: Record) -> dict[str, Any]:
        """Project *data* onto :attr:`bucket_fields`, values unchanged.

        Raises:
            KeyError: If *data* lacks one of the fields.
        """
        if isinstance(data, DeliveryData):
            data = data.model_dump(exclude_unset=True)
        return {field: data[field] for field in self.bucket_fields}

    def log(self, data: Record, buckets: BucketStore) -> bool:
        """Upsert the projection of *data* into :attr:`bucket_table`."""
        return buckets.update_table(self.bucket_table, self.build_query(data))
