"""Background jobs."""

from together.application.job.finalize_unbinds import SweepReport, UnbindFinalizer

__all__ = ["SweepReport", "UnbindFinalizer"]
