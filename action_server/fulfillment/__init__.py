"""
Fulfillment request handling.
"""
from .dispatcher import FulfillmentDispatcher, build_execute_results

__all__ = ["FulfillmentDispatcher", "build_execute_results"]
