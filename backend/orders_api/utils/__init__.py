"""Utility functions and helpers."""

from orders_api.utils.datetime_utils import Clock, epoch_millis

__all__ = [
    "Clock",
    "epoch_millis",
]
