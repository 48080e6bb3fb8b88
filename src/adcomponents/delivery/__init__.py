"""Delivery logging support for components in the ``deliveryLog`` extension.

* :class:`DeliveryLogComponent` -- base class forwarding a delivery record
  into a bucket table.
* :class:`BucketStore` / :class:`MemoryBucketStore` -- the bucket-table
  upsert interface and its in-memory implementation.
"""

from adcomponents.delivery.base import DeliveryLogComponent
from adcomponents.delivery.buckets import BucketStore, MemoryBucketStore

__all__ = ["DeliveryLogComponent", "BucketStore", "MemoryBucketStore"]
