# ============================================================================
# ClassProfiler - Instrumentation Package
#
# Purpose: Member selection, method interception, and metric collection
# Inputs: None
# Outputs: Public API exports
# Dependencies: None
# Usage: from ClassProfiler.instrumentation import TimingCollector, select_members
#
# Changelog:
#   2026-09-02: Initial instrumentation package
#   2026-09-14: Exported AllocationCollector and AllocationRecord
# ============================================================================

from ClassProfiler.instrumentation.allocation import AllocationCollector
from ClassProfiler.instrumentation.interceptor import wrap, wrap_class_method, wrap_method, wrapped_methods
from ClassProfiler.instrumentation.selector import (
    RESERVED_CLASS_METHODS,
    RESERVED_INSTANCE_METHODS,
    MemberKind,
    Visibility,
    select_by_flags,
    select_class_methods,
    select_instance_methods,
    select_members,
)
from ClassProfiler.instrumentation.store import (
    AllocationRecord,
    MetricStore,
    TimingRecord,
    class_store,
    instance_store,
)
from ClassProfiler.instrumentation.timing import TimingCollector, TimingMode

__all__ = [
    "AllocationCollector",
    "AllocationRecord",
    "MemberKind",
    "MetricStore",
    "RESERVED_CLASS_METHODS",
    "RESERVED_INSTANCE_METHODS",
    "TimingCollector",
    "TimingMode",
    "TimingRecord",
    "Visibility",
    "class_store",
    "instance_store",
    "select_by_flags",
    "select_class_methods",
    "select_instance_methods",
    "select_members",
    "wrap",
    "wrap_class_method",
    "wrap_method",
    "wrapped_methods",
]
