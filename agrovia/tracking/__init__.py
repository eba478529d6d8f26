"""
Batch tracking from farmer intake through quality grading.

This module holds the in-memory batch ledger, the demo seed data and the
traceability timeline of a batch.
"""

from .ledger import BatchLedger
from .seed import build_demo_farmers, build_demo_batches, build_demo_batch
from .traceability import TraceEvent, trace_batch

__all__ = [
    'BatchLedger',
    'build_demo_farmers',
    'build_demo_batches',
    'build_demo_batch',
    'TraceEvent',
    'trace_batch',
]
